from tasknotes.domain.task import Task, Document
from tasknotes.domain.errors import InvalidFileFormatError, StorageReadError, StorageWriteError
from tasknotes.adapters.textfile.codec import encode_document, decode_document, has_separator
from pathlib import Path
from typing import Iterable

### COMMENTS
# ==========================================================
# Adapter pamięciowy magazynu dokumentu (adapters/memory/document_store.py).
# ==========================================================
# - Do testów serwisów (bez dysku dla pliku domyślnego).
# - "Plik" domyślny trzymany jest jako tekst w `_content` i kodowany tym samym kodekiem,
#   więc zachowanie (strip notatek, separator) jest identyczne jak w adapterze textfile.
# - Import/eksport działają na prawdziwych ścieżkach, ale bez zapisu atomowego.
# - `saves` liczy zapisy - testy mogą sprawdzić write-through.


class InMemoryDocumentStore:
    """
        Magazyn dokumentu w pamięci.
        :param initial: Opcjonalna treść startowa "pliku" domyślnego (None = plik nie istnieje).
    """
    def __init__(self, initial: str | None = None) -> None:
        self._content = initial
        self.saves = 0

    @property
    def path(self) -> Path:
        return Path("<memory>")

    @property
    def content(self) -> str | None:
        return self._content

    def load(self) -> Document:
        if self._content is None:
            return Document()
        return decode_document(self._content)

    def check(self, strict: bool = True) -> Document:
        if self._content is None:
            return Document()
        return decode_document(self._content, strict=strict)

    def save(self, document: Document) -> None:
        self._content = encode_document(document)
        self.saves += 1

    def load_tasks(self) -> list[Task]:
        return list(self.load().tasks)

    def load_notes(self) -> str:
        return self.load().notes

    def save_tasks(self, tasks: Iterable[Task]) -> None:
        self.save(Document(tasks=tuple(tasks), notes=self.load_notes()))

    def save_notes(self, notes: str) -> None:
        self.save(Document(tasks=tuple(self.load_tasks()), notes=notes))

    def import_file(self, path: Path) -> str:
        try:
            with Path(path).open("r", encoding="utf-8", newline="") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise StorageReadError(path, str(e)) from e
        if not has_separator(content):
            raise InvalidFileFormatError(path)
        self._content = content
        self.saves += 1
        return content

    def export_to(self, path: Path) -> None:
        try:
            Path(path).write_text(encode_document(self.load()), encoding="utf-8")
        except OSError as e:
            raise StorageWriteError(path, str(e)) from e
