from tasknotes.ports.document_store import DocumentStore
from tasknotes.domain.task import Task, Document
from tasknotes.domain.events import DocumentEvent
from tasknotes.domain.errors import NoAssociatedFileError, TaskDecodeError
from collections import defaultdict
from pathlib import Path
from typing import Callable, Iterable
import logging

logger = logging.getLogger(__name__)

Callback = Callable[[DocumentEvent, Document], None]


### COMMENTS
# ==========================================================
# Sesja dokumentu (services/document_session.py).
# ==========================================================
# Rola:
# - Trzyma JEDEN dokument w pamięci (zadania + notatki razem) - wspólne źródło prawdy
#   dla listy zadań i dla notatek.
# - Każda zmiana = jeden atomowy zapis całego dokumentu (store.save), bez dociągania
#   "drugiej połowy" z dysku.
# - Polecenia New / Open / Save / Save As + stan "skojarzony plik" i "niezapisane zmiany".
# - Zamiast globalnych powiadomień: jawne subskrypcje `subscribe(event, callback)`.
#
# Zasady:
# - Open kopiuje plik do lokalizacji domyślnej; kolejne zapisy dalej idą do pliku domyślnego,
#   a skojarzony plik służy tylko do Save (eksport) i tytułu.
# - Błąd zapisu (StorageWriteError) leci do wywołującego; stan w pamięci zostaje (brak rollbacku).


class DocumentSession:
    """
    Wspólny stan dokumentu dla listy zadań i notatek.

    :param store: Implementacja portu DocumentStore.
    """
    def __init__(self, store: DocumentStore) -> None:
        self.store = store
        self._document = Document()
        self._associated_path: Path | None = None
        self._has_unsaved_changes = False
        self._subscribers: dict[DocumentEvent, list[Callback]] = defaultdict(list)
        self.last_decode_error: TaskDecodeError | None = None

    @property
    def document(self) -> Document:
        return self._document

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._document.tasks

    @property
    def notes(self) -> str:
        return self._document.notes

    @property
    def associated_path(self) -> Path | None:
        return self._associated_path

    @property
    def title(self) -> str:
        return self._associated_path.name if self._associated_path else "Untitled"

    @property
    def has_unsaved_changes(self) -> bool:
        return self._has_unsaved_changes

    def subscribe(self, event: DocumentEvent, callback: Callback) -> Callable[[], None]:
        """Rejestruje callback dla zdarzenia; zwraca funkcję wyrejestrowującą."""
        self._subscribers[event].append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers[event]:
                self._subscribers[event].remove(callback)
        return unsubscribe

    def _emit(self, event: DocumentEvent) -> None:
        for callback in list(self._subscribers[event]):
            callback(event, self._document)

    def _commit(self, document: Document) -> None:
        self._document = document
        self._has_unsaved_changes = True
        self.store.save(document)
        self._emit(DocumentEvent.CHANGED)

    def reload(self) -> Document:
        """Wczytuje dokument z pliku domyślnego (bez zapisu)."""
        self._document = self.store.load()
        self._has_unsaved_changes = False
        return self._document

    def replace_tasks(self, tasks: Iterable[Task]) -> None:
        self._commit(self._document.with_tasks(tasks))

    def set_notes(self, notes: str) -> None:
        """Zapisuje notatki przycięte tak samo, jak zwraca je odczyt z pliku."""
        notes = notes.strip()
        if notes == self._document.notes:
            return
        self._commit(self._document.with_notes(notes))

    def new_document(self) -> None:
        """Czyści zadania i notatki, zapisuje i zrywa skojarzenie z plikiem."""
        self._document = Document()
        self.store.save(self._document)
        self._associated_path = None
        self._has_unsaved_changes = False
        self.last_decode_error = None
        logger.info("Started a new document")
        self._emit(DocumentEvent.NEW)

    def open_file(self, path: Path) -> Document:
        """
            Otwiera zewnętrzny plik.

            - `store.import_file(path)` kopiuje treść do pliku domyślnego (lub rzuca
              InvalidFileFormatError / StorageReadError).
            - Dokument jest przeładowany z pliku domyślnego.
            - Jeśli JSON zadań jest uszkodzony, lista zadań jest pusta, a błąd trafia
              do `last_decode_error`, żeby UI mogło go pokazać.
        """
        path = Path(path)
        self.store.import_file(path)
        try:
            self.store.check(strict=True)
            self.last_decode_error = None
        except TaskDecodeError as e:
            self.last_decode_error = e
            logger.warning("Opened %s but its task list could not be decoded: %s", path, e)
        self.reload()
        self._associated_path = path
        logger.info("Opened %s", path)
        self._emit(DocumentEvent.OPENED)
        return self._document

    def save(self) -> None:
        if self._associated_path is None:
            raise NoAssociatedFileError()
        self.store.export_to(self._associated_path)
        self._has_unsaved_changes = False
        self._emit(DocumentEvent.SAVED)

    def save_as(self, path: Path) -> None:
        path = Path(path)
        self.store.export_to(path)
        self._associated_path = path
        self._has_unsaved_changes = False
        self._emit(DocumentEvent.SAVED)
