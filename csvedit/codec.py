# csvedit/codec.py
"""
Parse delimited text into a Table and write it back out.

Reading honours whatever single-character separator the caller names; writing
always uses a comma. A file read as ``a;b`` comes back as ``a,b`` after any
edit, so callers must switch to "," for subsequent reads of that file.
"""
import csv
import io
from typing import List, Optional

from csvedit.errors import InvalidPayload, MalformedInput
from csvedit.models import Table

OUTPUT_SEPARATOR = ","

SEPARATOR_ALIASES = {
    "\\t": "\t",
    "tab": "\t",
}

_FORBIDDEN_SEPARATORS = {'"', "\r", "\n"}


def normalize_separator(value: Optional[str]) -> Optional[str]:
    """Map a user-supplied separator token to the delimiter character.

    Returns None when no separator was given so the caller can fall back to
    a remembered or default one.
    """
    if value is None or value == "":
        return None
    sep = SEPARATOR_ALIASES.get(value.lower() if len(value) > 1 else value, value)
    if len(sep) != 1 or sep in _FORBIDDEN_SEPARATORS:
        raise InvalidPayload("Invalid separator", details=f"expected a single character, got {value!r}")
    return sep


def _decode(content: bytes) -> str:
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise MalformedInput("File is not valid UTF-8 text", details=str(e))


def _fit_record(record: List[str], width: int, line_no: int) -> List[str]:
    if len(record) < width:
        return record + [""] * (width - len(record))
    if len(record) > width:
        surplus = record[width:]
        if any(cell != "" for cell in surplus):
            raise MalformedInput(
                "Row has more fields than the header",
                details=f"line {line_no}: expected {width} fields, got {len(record)}",
            )
        return record[:width]
    return record


def parse(content: bytes, separator: str = OUTPUT_SEPARATOR) -> Table:
    """Parse CSV bytes into a Table.

    The first non-blank record is the header. Blank lines are skipped, short
    rows are padded with empty strings and rows carrying extra non-empty
    fields are rejected.
    """
    text = _decode(content)
    reader = csv.reader(io.StringIO(text, newline=""), delimiter=separator)

    headers: List[str] = []
    rows = []
    try:
        for record in reader:
            if not record:
                continue
            if not headers:
                headers = record
                dupes = sorted({h for h in headers if headers.count(h) > 1})
                if dupes:
                    raise MalformedInput("Duplicate column names", details=", ".join(dupes))
                continue
            fields = _fit_record(record, len(headers), reader.line_num)
            rows.append(dict(zip(headers, fields)))
    except csv.Error as e:
        raise MalformedInput("Could not parse CSV content", details=f"line {reader.line_num}: {e}")

    return Table(headers=headers, rows=rows)


def serialize(table: Table) -> bytes:
    """Write the table comma-separated, header line first."""
    if not table.headers:
        return b""
    buf = io.StringIO()
    writer = csv.writer(buf, delimiter=OUTPUT_SEPARATOR, lineterminator="\n")
    writer.writerow(table.headers)
    for row in table.normalized_rows():
        writer.writerow([row[h] for h in table.headers])
    return buf.getvalue().encode("utf-8")
