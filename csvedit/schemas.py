from pydantic import BaseModel, Field, field_validator
from typing import Any, Dict, List, Optional

from csvedit.models import Row, coerce_row


class AddRowRequest(BaseModel):
    newRow: Dict[str, Any]
    separator: Optional[str] = None

    @field_validator("newRow")
    @classmethod
    def _stringify(cls, value: Dict[str, Any]) -> Row:
        return coerce_row(value)


class UpdateRowRequest(BaseModel):
    updatedRow: Dict[str, Any]
    separator: Optional[str] = None

    @field_validator("updatedRow")
    @classmethod
    def _stringify(cls, value: Dict[str, Any]) -> Row:
        return coerce_row(value)


class StructureRequest(BaseModel):
    newData: List[Dict[str, Any]] = Field(default_factory=list)
    headers: Optional[List[str]] = None  # explicit column order; defaults to keys of newData[0]
    separator: Optional[str] = None

    @field_validator("newData")
    @classmethod
    def _stringify(cls, value: List[Dict[str, Any]]) -> List[Row]:
        return [coerce_row(row) for row in value]


class MoveColumnRequest(BaseModel):
    direction: str
    separator: Optional[str] = None


class MessageResponse(BaseModel):
    message: str


class UploadResponse(BaseModel):
    message: str
    filename: str


class TableResponse(BaseModel):
    filename: str
    separator: str
    headers: List[str]
    rows: List[Row]
