import pytest
from datetime import datetime, timezone
from pathlib import Path

from tasknotes.adapters.textfile.document_store import TextFileDocumentStore, default_file_location
from tasknotes.domain.errors import InvalidFileFormatError, StorageReadError, StorageWriteError, TaskDecodeError
from tasknotes.domain.task import Document, Task, TaskId


@pytest.fixture
def tmp_store(tmp_path):
    """Magazyn na świeżym pliku tymczasowym."""
    return TextFileDocumentStore(tmp_path / "docs" / "TaskNotes.txt")


def make_task(task_id: str, title: str = "Test", done: bool = False) -> Task:
    return Task(
        task_id=TaskId(task_id),
        title=title,
        created_at=datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc),
        is_completed=done,
    )


def test_missing_file_gives_empty_defaults(tmp_store):
    assert tmp_store.load_tasks() == []
    assert tmp_store.load_notes() == ""
    assert not tmp_store.path.exists()


def test_save_and_load_round_trip(tmp_store):
    doc = Document(tasks=(make_task("b", "B"), make_task("a", "A", done=True)), notes="notatki")

    tmp_store.save(doc)

    assert tmp_store.load() == doc
    assert tmp_store.load_tasks() == tmp_store.load_tasks()


def test_save_leaves_no_swap_file(tmp_store):
    tmp_store.save(Document(notes="x"))

    leftovers = [p.name for p in tmp_store.path.parent.iterdir()]
    assert leftovers == ["TaskNotes.txt"]


def test_save_tasks_keeps_notes_on_disk(tmp_store):
    tmp_store.save(Document(notes="zostaję"))

    tmp_store.save_tasks([make_task("1", "A")])

    assert tmp_store.load_notes() == "zostaję"
    assert [t.title for t in tmp_store.load_tasks()] == ["A"]


def test_save_notes_keeps_tasks_on_disk(tmp_store):
    tmp_store.save(Document(tasks=(make_task("1", "A"),)))

    tmp_store.save_notes("nowe")

    assert [t.task_id for t in tmp_store.load_tasks()] == ["1"]
    assert tmp_store.load_notes() == "nowe"


def test_corrupt_tasks_still_load_notes(tmp_store):
    tmp_store.path.parent.mkdir(parents=True)
    tmp_store.path.write_text("[{broken\n###$$###\nnotatki", encoding="utf-8")

    assert tmp_store.load_tasks() == []
    assert tmp_store.load_notes() == "notatki"
    with pytest.raises(TaskDecodeError):
        tmp_store.check(strict=True)


def test_import_without_separator_is_rejected(tmp_store, tmp_path):
    tmp_store.save(Document(notes="oryginał"))
    before = tmp_store.path.read_bytes()
    source = tmp_path / "hello.txt"
    source.write_text("hello world", encoding="utf-8")

    with pytest.raises(InvalidFileFormatError):
        tmp_store.import_file(source)

    assert tmp_store.path.read_bytes() == before


def test_import_missing_file_is_a_read_error(tmp_store, tmp_path):
    with pytest.raises(StorageReadError):
        tmp_store.import_file(tmp_path / "nope.txt")
    assert not tmp_store.path.exists()


def test_import_copies_content_verbatim(tmp_store, tmp_path):
    raw = '  [{"id":"X","title":"z innego pliku","createdAt":0}]\r\n###$$###\r\nnotes  '
    source = tmp_path / "other.txt"
    source.write_bytes(raw.encode("utf-8"))

    returned = tmp_store.import_file(source)

    assert returned == raw
    assert tmp_store.path.read_bytes() == raw.encode("utf-8")
    assert tmp_store.load_tasks()[0].title == "z innego pliku"


def test_export_writes_copy_and_keeps_default_file(tmp_store, tmp_path):
    doc = Document(tasks=(make_task("1", "A"),), notes="n")
    tmp_store.save(doc)
    target = tmp_path / "copy.txt"

    tmp_store.export_to(target)

    assert TextFileDocumentStore(target).load() == doc
    assert tmp_store.path.read_text(encoding="utf-8") == target.read_text(encoding="utf-8")


def test_write_failure_raises_and_keeps_previous_file(tmp_store, monkeypatch):
    tmp_store.save(Document(notes="stare"))

    def boom(src, dst):
        raise OSError("disk full")
    monkeypatch.setattr("tasknotes.adapters.textfile.document_store.os.replace", boom)

    with pytest.raises(StorageWriteError) as exc:
        tmp_store.save(Document(notes="nowe"))

    assert "disk full" in str(exc.value)
    assert tmp_store.load_notes() == "stare"
    assert not tmp_store.path.with_suffix(".txt.swap").exists()


def test_unwritable_location_raises(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("plik, nie katalog", encoding="utf-8")
    store = TextFileDocumentStore(blocker / "TaskNotes.txt")

    with pytest.raises(StorageWriteError):
        store.save(Document())
    assert store.load_tasks() == []


def test_default_location_is_documents_task_notes(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))

    assert default_file_location() == tmp_path / "Documents" / "TaskNotes.txt"
    assert TextFileDocumentStore().path == Path(tmp_path) / "Documents" / "TaskNotes.txt"


@pytest.mark.parametrize("segment", [
    '[{"id":"a","title":"A","createdAt":1e300}]',
    '[{"id":"a","title":"A","createdAt":Infinity}]',
    "[" * 100000,
])
def test_unreadable_task_list_degrades_instead_of_crashing(tmp_store, segment):
    tmp_store.path.parent.mkdir(parents=True)
    tmp_store.path.write_text(f"{segment}\n###$$###\nnotes", encoding="utf-8")

    assert tmp_store.load_tasks() == []
    assert tmp_store.load_notes() == "notes"
    with pytest.raises(TaskDecodeError):
        tmp_store.check(strict=True)


def test_title_with_separator_survives_save_and_load(tmp_store):
    doc = Document(tasks=(make_task("1", "zapłać ###$$### dziś"),), notes="n ###$$### m")

    tmp_store.save(doc)

    assert tmp_store.load() == doc
