import pandas as pd
import pytest

from csvedit.client import ApiError, CsvApiClient, frame_to_rows, rows_to_frame


@pytest.fixture
def api(client):
    return CsvApiClient("http://testserver/api", session=client, timeout=None)


def test_upload_and_edit_flow(api, store):
    api.upload("shop.csv", b"item;qty\napple;3\n", separator=";")
    assert api.list_files() == ["shop.csv"]
    assert api.get_rows("shop.csv") == [{"item": "apple", "qty": "3"}]

    api.add_row("shop.csv", {"item": "pear", "qty": "1"})
    api.update_row("shop.csv", 0, {"item": "apple", "qty": "5"})
    api.move_column("shop.csv", 1, "up")
    table = api.get_table("shop.csv")
    assert table["separator"] == ","
    assert table["headers"] == ["qty", "item"]
    assert table["rows"] == [{"qty": "5", "item": "apple"}, {"qty": "1", "item": "pear"}]

    api.delete_row("shop.csv", 1)
    api.delete_column("shop.csv", 0)
    assert api.download("shop.csv") == b"item\napple\n"


def test_replace_structure(api, store, people):
    api.replace_structure(people, [{"age": "9", "name": "Z"}], headers=["name", "age"])
    assert store.read(people) == b"name,age\nZ,9\n"


def test_filename_is_quoted(api, store):
    store.write("my file#1.csv", b"a\n1\n")
    assert api.get_rows("my file#1.csv") == [{"a": "1"}]


def test_error_body_becomes_api_error(api, people):
    with pytest.raises(ApiError) as exc:
        api.delete_row(people, 10)
    assert exc.value.status_code == 400
    assert exc.value.message == "Invalid row index"

    with pytest.raises(ApiError) as exc:
        api.archive("missing.csv")
    assert exc.value.status_code == 404


def test_rows_to_frame_fills_missing_cells():
    df = rows_to_frame(["a", "b"], [{"a": "1"}, {"b": "2", "c": "x"}])
    assert list(df.columns) == ["a", "b"]
    assert df.to_dict(orient="records") == [{"a": "1", "b": ""}, {"a": "", "b": "2"}]


def test_rows_to_frame_empty():
    df = rows_to_frame(["a"], [])
    assert list(df.columns) == ["a"]
    assert df.empty


def test_frame_to_rows_stringifies():
    df = pd.DataFrame({"a": ["x", None], "b": [1, 2]})
    assert frame_to_rows(df) == [{"a": "x", "b": "1"}, {"a": "", "b": "2"}]
