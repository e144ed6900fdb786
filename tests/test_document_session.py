import pytest

from tasknotes.adapters.memory.document_store import InMemoryDocumentStore
from tasknotes.adapters.textfile.document_store import TextFileDocumentStore
from tasknotes.domain.errors import InvalidFileFormatError, NoAssociatedFileError, StorageWriteError
from tasknotes.domain.events import DocumentEvent
from tasknotes.domain.task import Document
from tasknotes.services.document_session import DocumentSession


class FailingStore(InMemoryDocumentStore):
    def save(self, document):
        raise StorageWriteError("<memory>", "read-only")


class Recorder:
    def __init__(self):
        self.events = []
    def __call__(self, event, document):
        self.events.append((event, document))


@pytest.fixture
def disk_session(tmp_path):
    s = DocumentSession(TextFileDocumentStore(tmp_path / "default" / "TaskNotes.txt"))
    s.reload()
    return s


def test_fresh_session_is_untitled_and_clean(session):
    assert session.title == "Untitled"
    assert session.associated_path is None
    assert session.has_unsaved_changes is False
    assert session.document == Document()


def test_set_notes_writes_through_and_marks_edited(session, memory_store):
    recorder = Recorder()
    session.subscribe(DocumentEvent.CHANGED, recorder)

    session.set_notes("notatka")

    assert memory_store.load_notes() == "notatka"
    assert session.has_unsaved_changes is True
    assert recorder.events[0][0] == DocumentEvent.CHANGED


def test_set_same_notes_does_not_write(session, memory_store):
    session.set_notes("x")
    session.set_notes("x")

    assert memory_store.saves == 1


def test_new_document_clears_everything(session, task_list, memory_store):
    recorder = Recorder()
    session.subscribe(DocumentEvent.NEW, recorder)
    task_list.add("A")
    session.set_notes("n")

    session.new_document()

    assert session.document == Document()
    assert memory_store.load() == Document()
    assert session.title == "Untitled"
    assert session.has_unsaved_changes is False
    assert [e for e, _ in recorder.events] == [DocumentEvent.NEW]


def test_open_file_imports_and_associates(disk_session, tmp_path):
    recorder = Recorder()
    disk_session.subscribe(DocumentEvent.OPENED, recorder)
    source = tmp_path / "Monday.txt"
    source.write_text(
        '[{"id":"1","title":"Z pliku","isCompleted":false,"createdAt":"2025-01-01T12:00:00Z"}]'
        "\n###$$###\nnotatki z pliku",
        encoding="utf-8",
    )

    disk_session.open_file(source)

    assert [t.title for t in disk_session.tasks] == ["Z pliku"]
    assert disk_session.notes == "notatki z pliku"
    assert disk_session.title == "Monday.txt"
    assert disk_session.last_decode_error is None
    assert recorder.events[0][1] is disk_session.document
    # kolejne zapisy idą do pliku domyślnego, nie do otwartego
    disk_session.set_notes("zmiana")
    assert "zmiana" not in source.read_text(encoding="utf-8")
    assert disk_session.store.load_notes() == "zmiana"


def test_open_file_without_separator_changes_nothing(disk_session, tmp_path):
    disk_session.set_notes("zostaję")
    source = tmp_path / "hello.txt"
    source.write_text("hello world", encoding="utf-8")

    with pytest.raises(InvalidFileFormatError):
        disk_session.open_file(source)

    assert disk_session.notes == "zostaję"
    assert disk_session.store.load_notes() == "zostaję"
    assert disk_session.associated_path is None


def test_open_file_with_broken_tasks_reports_decode_error(disk_session, tmp_path):
    source = tmp_path / "broken.txt"
    source.write_text('[{"id":1}]\n###$$###\ntylko notatki', encoding="utf-8")

    disk_session.open_file(source)

    assert disk_session.tasks == ()
    assert disk_session.notes == "tylko notatki"
    assert disk_session.last_decode_error is not None


def test_save_without_associated_file_raises(session):
    with pytest.raises(NoAssociatedFileError):
        session.save()


def test_save_as_then_save(disk_session, tmp_path):
    recorder = Recorder()
    disk_session.subscribe(DocumentEvent.SAVED, recorder)
    disk_session.set_notes("pierwsza wersja")
    target = tmp_path / "kopia.txt"

    disk_session.save_as(target)

    assert disk_session.title == "kopia.txt"
    assert disk_session.has_unsaved_changes is False
    assert TextFileDocumentStore(target).load_notes() == "pierwsza wersja"

    disk_session.set_notes("druga wersja")
    assert disk_session.has_unsaved_changes is True
    disk_session.save()

    assert TextFileDocumentStore(target).load_notes() == "druga wersja"
    assert len(recorder.events) == 2


def test_write_failure_keeps_memory_state():
    session = DocumentSession(FailingStore())

    with pytest.raises(StorageWriteError):
        session.set_notes("nie zapisane")

    assert session.notes == "nie zapisane"
    assert session.has_unsaved_changes is True


def test_unsubscribe_stops_callbacks(session):
    recorder = Recorder()
    unsubscribe = session.subscribe(DocumentEvent.CHANGED, recorder)
    unsubscribe()

    session.set_notes("x")

    assert recorder.events == []


def test_open_file_with_out_of_range_timestamp_reports_decode_error(disk_session, tmp_path):
    source = tmp_path / "overflow.txt"
    source.write_text('[{"id":"a","title":"A","createdAt":1e300}]\n###$$###\nnotes', encoding="utf-8")

    disk_session.open_file(source)

    assert disk_session.tasks == ()
    assert disk_session.notes == "notes"
    assert disk_session.last_decode_error is not None


def test_set_notes_keeps_what_a_reload_returns(disk_session):
    disk_session.set_notes("\n  notatka z odstępami  \n")

    assert disk_session.notes == "notatka z odstępami"
    assert disk_session.notes == disk_session.store.load_notes()
    assert disk_session.reload().notes == "notatka z odstępami"
