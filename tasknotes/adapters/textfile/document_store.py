from tasknotes.ports.document_store import DocumentStore
from tasknotes.domain.task import Task, Document
from tasknotes.domain.errors import InvalidFileFormatError, StorageReadError, StorageWriteError
from tasknotes.adapters.textfile.codec import encode_document, decode_document, has_separator
from pathlib import Path
from typing import Iterable
import logging
import os

logger = logging.getLogger(__name__)

FILE_NAME = "TaskNotes.txt"


def default_file_location() -> Path:
    """Stała ścieżka pliku domyślnego: katalog dokumentów użytkownika + `TaskNotes.txt`."""
    return Path.home() / "Documents" / FILE_NAME


def _atomic_write(path: Path, content: str) -> None:
    """Zapis przez plik tymczasowy + `os.replace`; przy błędzie sprząta plik `.swap`."""
    tmp = path.with_suffix(path.suffix + ".swap")
    try:
        with tmp.open("w", encoding="utf-8", newline="") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, path)
    except OSError as e:
        try:
            if tmp.exists():
                tmp.unlink()
        except OSError:
            pass
        logger.error("Failed to write %s: %s", path, e)
        raise StorageWriteError(path, str(e)) from e


class TextFileDocumentStore(DocumentStore):
    """Magazyn dokumentu w jednym pliku tekstowym UTF-8.

    :param path: Ścieżka pliku; domyślnie `default_file_location()`.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = Path(path) if path is not None else default_file_location()

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> str | None:
        try:
            return self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read %s, treating it as missing: %s", self._path, e)
            return None

    def load(self) -> Document:
        """Czyta plik domyślny; brak pliku → pusty dokument."""
        content = self._read()
        if content is None:
            return Document()
        return decode_document(content)

    def check(self, strict: bool = True) -> Document:
        """Jak `load`, ale w trybie ścisłym błąd dekodowania zadań rzuca `TaskDecodeError`."""
        content = self._read()
        if content is None:
            return Document()
        return decode_document(content, strict=strict)

    def save(self, document: Document) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error("Failed to create %s: %s", self._path.parent, e)
            raise StorageWriteError(self._path, str(e)) from e
        _atomic_write(self._path, encode_document(document))
        logger.debug("Saved %d task(s) to %s", len(document.tasks), self._path)

    def load_tasks(self) -> list[Task]:
        return list(self.load().tasks)

    def load_notes(self) -> str:
        return self.load().notes

    def save_tasks(self, tasks: Iterable[Task]) -> None:
        """Odczytuje bieżące notatki z dysku i zapisuje je razem z nowymi zadaniami."""
        self.save(Document(tasks=tuple(tasks), notes=self.load_notes()))

    def save_notes(self, notes: str) -> None:
        """Odczytuje bieżące zadania z dysku i zapisuje je razem z nowymi notatkami."""
        self.save(Document(tasks=tuple(self.load_tasks()), notes=notes))

    def import_file(self, path: Path) -> str:
        """
            Importuje zewnętrzny plik do lokalizacji domyślnej.

            - Plik musi zawierać separator; w przeciwnym razie nic nie jest zapisywane.
            - Treść kopiowana jest 1:1 - JSON zadań NIE jest tutaj walidowany.

            :param path: Ścieżka pliku do zaimportowania.
            :raises StorageReadError: Gdy pliku nie da się odczytać.
            :raises InvalidFileFormatError: Gdy brak separatora.
            :raises StorageWriteError: Gdy zapis pliku domyślnego się nie powiódł.
            :return: Zaimportowana treść.
        """
        path = Path(path)
        try:
            with path.open("r", encoding="utf-8", newline="") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Failed to read %s: %s", path, e)
            raise StorageReadError(path, str(e)) from e

        if not has_separator(content):
            logger.warning("Rejected import of %s: separator not found", path)
            raise InvalidFileFormatError(path)

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error("Failed to create %s: %s", self._path.parent, e)
            raise StorageWriteError(self._path, str(e)) from e
        _atomic_write(self._path, content)
        logger.info("Imported %s into %s", path, self._path)
        return content

    def export_to(self, path: Path) -> None:
        """Kopia (nie przeniesienie) bieżącego dokumentu; plik domyślny pozostaje aktywny."""
        path = Path(path)
        _atomic_write(path, encode_document(self.load()))
        logger.info("Exported %s to %s", self._path, path)
