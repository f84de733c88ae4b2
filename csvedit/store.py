# csvedit/store.py
"""
Filesystem access for uploaded CSV files.

All files live flat inside one managed directory. Archiving moves a file into
a subdirectory of it. The separator each file should be read with is kept in
a small JSON sidecar next to the files, keyed by filename.

There is no locking: two requests rewriting the same file race and the last
write wins.
"""
import json
import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Union

from csvedit.errors import InvalidFilename, InvalidPayload, IOFailure, NotFound

logger = logging.getLogger(__name__)

CSV_EXTENSION = ".csv"
SIDECAR_NAME = ".separators.json"


class FileStore:
    def __init__(self, directory: Union[str, Path], archive_dirname: str = "archive"):
        self.directory = Path(directory)
        self.archive_dirname = archive_dirname
        self.directory.mkdir(parents=True, exist_ok=True)

    @property
    def archive_dir(self) -> Path:
        return self.directory / self.archive_dirname

    @property
    def sidecar_path(self) -> Path:
        return self.directory / SIDECAR_NAME

    def path_for(self, filename: str) -> Path:
        """Resolve a filename inside the managed directory, refusing traversal."""
        if not filename or filename in (".", "..") or any(c in filename for c in ("/", "\\", "\x00")):
            raise InvalidFilename("Invalid filename", details=repr(filename))
        # the sidecar shares the directory but is not a CSV file
        if filename.lower() == SIDECAR_NAME:
            raise InvalidFilename("Invalid filename", details=repr(filename))
        path = self.directory / filename
        if path.resolve().parent != self.directory.resolve():
            raise InvalidFilename("Invalid filename", details=repr(filename))
        return path

    def list(self) -> List[str]:
        try:
            entries = sorted(self.directory.iterdir())
        except OSError as e:
            raise IOFailure("Error reading upload directory", details=str(e))
        return [p.name for p in entries if p.is_file() and p.name.lower().endswith(CSV_EXTENSION)]

    def exists(self, filename: str) -> bool:
        return self.path_for(filename).is_file()

    def _existing(self, filename: str) -> Path:
        path = self.path_for(filename)
        if not path.is_file():
            raise NotFound("File not found", details=filename)
        return path

    def read(self, filename: str) -> bytes:
        path = self._existing(filename)
        try:
            return path.read_bytes()
        except OSError as e:
            raise IOFailure("Error reading file", details=str(e))

    def write(self, filename: str, data: bytes) -> None:
        path = self.path_for(filename)
        try:
            path.write_bytes(data)
        except OSError as e:
            raise IOFailure("Error writing file", details=str(e))

    def save_upload(self, filename: str, data: bytes) -> None:
        if not filename.lower().endswith(CSV_EXTENSION):
            raise InvalidPayload("Only .csv files can be uploaded", details=filename)
        self.write(filename, data)
        # a re-upload under the same name starts with no remembered separator
        self.forget_separator(filename)
        logger.info("stored upload %s (%d bytes)", filename, len(data))

    def archive(self, filename: str) -> Path:
        source = self._existing(filename)
        try:
            self.archive_dir.mkdir(exist_ok=True)
            destination = self.archive_dir / filename
            os.replace(source, destination)
        except OSError as e:
            raise IOFailure("Error archiving file", details=str(e))
        self.forget_separator(filename)
        logger.info("archived %s -> %s", filename, destination)
        return destination

    # ------------------------------
    # Separator sidecar
    # ------------------------------
    def _load_separators(self) -> Dict[str, str]:
        if not self.sidecar_path.is_file():
            return {}
        try:
            data = json.loads(self.sidecar_path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("ignoring unreadable separator sidecar %s", self.sidecar_path)
            return {}
        return data if isinstance(data, dict) else {}

    def _save_separators(self, data: Dict[str, str]) -> None:
        try:
            self.sidecar_path.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")
        except OSError as e:
            raise IOFailure("Error writing separator metadata", details=str(e))

    def get_separator(self, filename: str) -> Optional[str]:
        return self._load_separators().get(filename)

    def set_separator(self, filename: str, separator: str) -> None:
        data = self._load_separators()
        if data.get(filename) == separator:
            return
        data[filename] = separator
        self._save_separators(data)

    def forget_separator(self, filename: str) -> None:
        data = self._load_separators()
        if data.pop(filename, None) is not None:
            self._save_separators(data)
