import pytest

from csvedit.errors import InvalidFilename, InvalidPayload, NotFound
from csvedit.store import FileStore


def test_list_only_csv_files(store):
    store.write("b.csv", b"x\n")
    store.write("a.CSV", b"x\n")
    store.write("notes.txt", b"x\n")
    (store.directory / "dir.csv").mkdir()
    store.set_separator("b.csv", ";")
    assert store.list() == ["a.CSV", "b.csv"]


def test_read_write_overwrites(store):
    store.write("f.csv", b"a,b\n1,2\n")
    store.write("f.csv", b"a\n")
    assert store.read("f.csv") == b"a\n"
    assert store.exists("f.csv")
    assert not store.exists("g.csv")


def test_read_missing(store):
    with pytest.raises(NotFound):
        store.read("missing.csv")


@pytest.mark.parametrize("name", ["", ".", "..", "../x.csv", "a/b.csv", "a\\b.csv", "x\x00.csv", ".separators.json"])
def test_rejects_traversal(store, name):
    with pytest.raises(InvalidFilename):
        store.path_for(name)


def test_archive_moves_file(store):
    store.write("f.csv", b"a\n")
    store.set_separator("f.csv", ";")
    dest = store.archive("f.csv")
    assert dest == store.archive_dir / "f.csv"
    assert dest.read_bytes() == b"a\n"
    assert not store.exists("f.csv")
    assert store.get_separator("f.csv") is None
    assert store.list() == []


def test_archive_missing(store):
    with pytest.raises(NotFound):
        store.archive("nope.csv")
    assert not store.archive_dir.exists()


def test_separator_sidecar_persists(tmp_path):
    first = FileStore(tmp_path)
    first.set_separator("f.csv", "\t")
    assert FileStore(tmp_path).get_separator("f.csv") == "\t"


def test_corrupt_sidecar_is_ignored(store):
    store.sidecar_path.write_text("{not json", encoding="utf-8")
    assert store.get_separator("f.csv") is None
    store.set_separator("f.csv", ";")
    assert store.get_separator("f.csv") == ";"


def test_save_upload_requires_csv(store):
    with pytest.raises(InvalidPayload):
        store.save_upload("data.txt", b"a\n")
    store.set_separator("data.csv", ";")
    store.save_upload("data.csv", b"a\n")
    assert store.read("data.csv") == b"a\n"
    assert store.get_separator("data.csv") is None
