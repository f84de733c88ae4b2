# csvedit/routes.py
import logging
import re
from typing import Callable, List, Optional, Tuple
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import Response

from csvedit import codec, mutator
from csvedit.config import get_settings
from csvedit.errors import InvalidPayload
from csvedit.models import Row, Table
from csvedit.schemas import (
    AddRowRequest,
    MessageResponse,
    MoveColumnRequest,
    StructureRequest,
    TableResponse,
    UpdateRowRequest,
    UploadResponse,
)
from csvedit.store import FileStore

logger = logging.getLogger(__name__)

PLAIN_FILENAME = re.compile(r"[A-Za-z0-9._\- ]+")

router = APIRouter()


# ------------------------------
# Dependencies
# ------------------------------
def get_store() -> FileStore:
    settings = get_settings()
    return FileStore(settings.upload_dir, archive_dirname=settings.archive_dirname)


def resolve_separator(store: FileStore, filename: str, requested: Optional[str]) -> str:
    """Separator from the request, else the one remembered for the file, else the default."""
    sep = codec.normalize_separator(requested)
    if sep is not None:
        return sep
    remembered = store.get_separator(filename)
    if remembered:
        return remembered
    return codec.normalize_separator(get_settings().default_separator) or codec.OUTPUT_SEPARATOR


def load_table(store: FileStore, filename: str, separator: Optional[str]) -> Tuple[Table, str]:
    content = store.read(filename)
    sep = resolve_separator(store, filename, separator)
    table = codec.parse(content, sep)
    if separator is not None:
        store.set_separator(filename, sep)
    return table, sep


def rewrite(store: FileStore, filename: str, separator: Optional[str], operation: Callable[[Table], Table]) -> Table:
    """Read, apply one edit, write back comma-separated.

    The edit runs before anything is written, so a failing edit leaves the
    file untouched.
    """
    table, _ = load_table(store, filename, separator)
    updated = operation(table)
    store.write(filename, codec.serialize(updated))
    store.set_separator(filename, codec.OUTPUT_SEPARATOR)
    return updated


# ------------------------------
# Files
# ------------------------------
@router.get("/files", response_model=List[str])
def list_files(store: FileStore = Depends(get_store)):
    return store.list()


@router.post("/upload", response_model=UploadResponse)
def upload_file(
    csvFile: Optional[UploadFile] = File(None),
    separator: Optional[str] = Form(None),
    store: FileStore = Depends(get_store),
):
    if csvFile is None or not csvFile.filename:
        raise InvalidPayload("No file was uploaded")
    filename = csvFile.filename
    sep = codec.normalize_separator(separator)
    store.save_upload(filename, csvFile.file.read())
    if sep is not None:
        store.set_separator(filename, sep)
    return {"message": "File uploaded successfully", "filename": filename}


@router.get("/file/{filename}", response_model=List[Row])
def read_file(filename: str, separator: Optional[str] = None, store: FileStore = Depends(get_store)):
    table, _ = load_table(store, filename, separator)
    return table.normalized_rows()


@router.get("/file/{filename}/table", response_model=TableResponse)
def read_table(filename: str, separator: Optional[str] = None, store: FileStore = Depends(get_store)):
    table, sep = load_table(store, filename, separator)
    return {
        "filename": filename,
        "separator": sep,
        "headers": table.headers,
        "rows": table.normalized_rows(),
    }


@router.post("/file/{filename}/archive", response_model=MessageResponse)
def archive_file(filename: str, store: FileStore = Depends(get_store)):
    store.archive(filename)
    return {"message": "File archived successfully"}


@router.get("/download/{filename}")
def download_file(filename: str, store: FileStore = Depends(get_store)):
    data = store.read(filename)
    if PLAIN_FILENAME.fullmatch(filename):
        disposition = f'attachment; filename="{filename}"'
    else:
        disposition = f"attachment; filename*=utf-8''{quote(filename)}"
    return Response(content=data, media_type="text/csv", headers={"Content-Disposition": disposition})


# ------------------------------
# Rows
# ------------------------------
@router.post("/file/{filename}/row", response_model=MessageResponse)
def add_row(filename: str, req: AddRowRequest, store: FileStore = Depends(get_store)):
    rewrite(store, filename, req.separator, lambda t: mutator.add_row(t, req.newRow))
    logger.info("added row to %s", filename)
    return {"message": "Row added successfully"}


@router.put("/file/{filename}/row/{index}", response_model=MessageResponse)
def update_row(filename: str, index: int, req: UpdateRowRequest, store: FileStore = Depends(get_store)):
    rewrite(store, filename, req.separator, lambda t: mutator.update_row(t, index, req.updatedRow))
    logger.info("updated row %d of %s", index, filename)
    return {"message": "Row updated successfully"}


@router.delete("/file/{filename}/row/{index}", response_model=MessageResponse)
def delete_row(filename: str, index: int, separator: Optional[str] = None, store: FileStore = Depends(get_store)):
    rewrite(store, filename, separator, lambda t: mutator.delete_row(t, index))
    logger.info("deleted row %d of %s", index, filename)
    return {"message": "Row deleted successfully"}


# ------------------------------
# Structure
# ------------------------------
@router.put("/file/{filename}/structure", response_model=MessageResponse)
def replace_structure(filename: str, req: StructureRequest, store: FileStore = Depends(get_store)):
    if req.headers is not None:
        headers = req.headers
    elif req.newData:
        headers = list(req.newData[0])
    else:
        raise InvalidPayload("No data provided for the structure update")

    rewrite(store, filename, req.separator, lambda t: mutator.replace_structure(t, headers, req.newData))
    logger.info("replaced structure of %s: %s", filename, headers)
    return {"message": "File structure updated and normalized to comma separator"}


@router.post("/file/{filename}/column/{index}/move", response_model=MessageResponse)
def move_column(filename: str, index: int, req: MoveColumnRequest, store: FileStore = Depends(get_store)):
    rewrite(store, filename, req.separator, lambda t: mutator.move_column(t, index, req.direction))
    logger.info("moved column %d of %s %s", index, filename, req.direction)
    return {"message": "Column moved successfully"}


@router.delete("/file/{filename}/column/{index}", response_model=MessageResponse)
def delete_column(filename: str, index: int, separator: Optional[str] = None, store: FileStore = Depends(get_store)):
    rewrite(store, filename, separator, lambda t: mutator.delete_column(t, index))
    logger.info("deleted column %d of %s", index, filename)
    return {"message": "Column deleted successfully"}
