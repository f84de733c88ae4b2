import pytest

from csvedit import codec
from csvedit.errors import InvalidPayload, MalformedInput
from csvedit.models import Table


def test_parse_semicolon_and_write_back_as_comma():
    table = codec.parse(b"a;b\n1;2\n", ";")
    assert table.headers == ["a", "b"]
    assert table.rows == [{"a": "1", "b": "2"}]
    assert codec.serialize(table) == b"a,b\n1,2\n"


def test_serialize_appended_row():
    table = Table(headers=["name", "age"], rows=[{"name": "A", "age": "1"}, {"name": "B", "age": "2"}])
    assert codec.serialize(table) == b"name,age\nA,1\nB,2\n"


def test_round_trip_with_output_separator():
    table = Table(
        headers=["id", "note"],
        rows=[{"id": "1", "note": "has, comma"}, {"id": "2", "note": 'say "hi"\nbye'}, {"id": "3", "note": ""}],
    )
    assert codec.parse(codec.serialize(table), codec.OUTPUT_SEPARATOR) == table


def test_empty_file():
    table = codec.parse(b"", ",")
    assert table.headers == []
    assert table.rows == []
    assert codec.serialize(table) == b""


def test_header_only_file_keeps_header_on_write():
    table = codec.parse(b"x,y\n", ",")
    assert table.headers == ["x", "y"]
    assert table.rows == []
    assert codec.serialize(table) == b"x,y\n"


def test_serialize_normalizes_rows_to_header():
    table = Table(headers=["a", "b"], rows=[{"a": "1", "extra": "z"}, {"b": "2", "a": "3"}])
    assert codec.serialize(table) == b"a,b\n1,\n3,2\n"


def test_short_rows_are_padded():
    table = codec.parse(b"a,b,c\n1\n", ",")
    assert table.rows == [{"a": "1", "b": "", "c": ""}]


def test_trailing_empty_fields_are_dropped():
    table = codec.parse(b"a;b\n1;2;;\n", ";")
    assert table.rows == [{"a": "1", "b": "2"}]


def test_extra_fields_rejected():
    with pytest.raises(MalformedInput) as exc:
        codec.parse(b"a,b\n1,2\n1,2,3\n", ",")
    assert "line 3" in exc.value.details


def test_duplicate_headers_rejected():
    with pytest.raises(MalformedInput):
        codec.parse(b"a,a\n1,2\n", ",")


def test_blank_lines_and_bom_ignored():
    table = codec.parse("\ufeffa,b\r\n\r\n1,2\r\n".encode("utf-8"), ",")
    assert table.headers == ["a", "b"]
    assert table.rows == [{"a": "1", "b": "2"}]


def test_non_utf8_rejected():
    with pytest.raises(MalformedInput):
        codec.parse("a,b\nñ,1\n".encode("latin-1"), ",")


def test_tab_separator():
    table = codec.parse(b"a\tb\n1\t2\n", "\t")
    assert table.rows == [{"a": "1", "b": "2"}]


@pytest.mark.parametrize("token,expected", [(",", ","), (";", ";"), ("\t", "\t"), ("\\t", "\t"), ("TAB", "\t"), ("|", "|")])
def test_normalize_separator(token, expected):
    assert codec.normalize_separator(token) == expected


def test_normalize_separator_missing():
    assert codec.normalize_separator(None) is None
    assert codec.normalize_separator("") is None


@pytest.mark.parametrize("token", ["::", '"', "\n"])
def test_normalize_separator_rejects(token):
    with pytest.raises(InvalidPayload):
        codec.normalize_separator(token)
