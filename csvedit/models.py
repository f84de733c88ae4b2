# csvedit/models.py
from typing import Any, Dict, List, Mapping

from pydantic import BaseModel, ConfigDict, Field

Row = Dict[str, str]


def cell_to_str(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def coerce_row(row: Mapping[str, Any]) -> Row:
    """Copy a row with every value turned into a string (None -> "")."""
    return {str(key): cell_to_str(value) for key, value in row.items()}


class Table(BaseModel):
    """Rows parsed from one CSV file plus the header order they follow."""

    model_config = ConfigDict(frozen=True)

    headers: List[str] = Field(default_factory=list)
    rows: List[Row] = Field(default_factory=list)

    def normalized_rows(self) -> List[Row]:
        # missing keys -> "", keys outside the header are dropped
        return [{h: row.get(h, "") for h in self.headers} for row in self.rows]

    def __len__(self) -> int:
        return len(self.rows)
