# csvedit/mutator.py
"""
Row and column edits on a Table.

Every function takes the current table and returns a new one; nothing here
touches the filesystem. Persisting the result is the caller's job.
"""
from typing import List, Mapping, Sequence

from csvedit.errors import InvalidIndex, InvalidPayload
from csvedit.models import Row, Table, coerce_row

DIRECTIONS = ("up", "down")


def _check_row_index(table: Table, index: int) -> None:
    if not 0 <= index < len(table.rows):
        raise InvalidIndex("Invalid row index", details=f"{index} not in [0, {len(table.rows)})")


def _check_column_index(table: Table, index: int) -> None:
    if not 0 <= index < len(table.headers):
        raise InvalidIndex("Invalid column index", details=f"{index} not in [0, {len(table.headers)})")


def add_row(table: Table, new_row: Mapping[str, str]) -> Table:
    row = coerce_row(new_row)
    # an empty file has no header yet, the first row defines it
    headers = list(table.headers) or list(row)
    return Table(headers=headers, rows=[*table.rows, row])


def update_row(table: Table, index: int, updated_row: Mapping[str, str]) -> Table:
    _check_row_index(table, index)
    rows = list(table.rows)
    rows[index] = coerce_row(updated_row)
    return Table(headers=list(table.headers), rows=rows)


def delete_row(table: Table, index: int) -> Table:
    _check_row_index(table, index)
    rows = table.rows[:index] + table.rows[index + 1:]
    return Table(headers=list(table.headers), rows=rows)


def move_column(table: Table, index: int, direction: str) -> Table:
    """Swap the header at ``index`` with its neighbour.

    Moving the first column up or the last column down leaves the table as it is.
    """
    if direction not in DIRECTIONS:
        raise InvalidPayload("Invalid direction", details=f"expected one of {', '.join(DIRECTIONS)}")
    _check_column_index(table, index)

    target = index - 1 if direction == "up" else index + 1
    if not 0 <= target < len(table.headers):
        return table

    headers = list(table.headers)
    headers[index], headers[target] = headers[target], headers[index]
    return Table(headers=headers, rows=list(table.rows))


def delete_column(table: Table, index: int) -> Table:
    _check_column_index(table, index)
    name = table.headers[index]
    headers = [h for i, h in enumerate(table.headers) if i != index]
    rows = [{k: v for k, v in row.items() if k != name} for row in table.rows]
    return Table(headers=headers, rows=rows)


def replace_structure(table: Table, new_headers: Sequence[str], new_rows: Sequence[Mapping[str, str]]) -> Table:
    """Swap in a whole new header order and row set, normalizing every row to it."""
    headers: List[str] = [str(h) for h in new_headers]
    if not headers:
        raise InvalidPayload("No columns provided for the new structure")
    if len(set(headers)) != len(headers):
        raise InvalidPayload("Duplicate column names in the new structure")

    rows: List[Row] = []
    for row in new_rows:
        row = coerce_row(row)
        rows.append({h: row.get(h, "") for h in headers})
    return Table(headers=headers, rows=rows)
