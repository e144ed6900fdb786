from typing import Protocol, Iterable
from pathlib import Path
from tasknotes.domain.task import Task, Document


### COMMENTS
# ==========================================================
# Kontrakt magazynu dokumentu (ports/document_store.py).
# ==========================================================
# - Dokument = lista zadań + notatki, zawsze zapisywane RAZEM (jeden plik, jeden zapis).
# - Odczyt jest "łagodny": brak pliku / błąd odczytu / zły JSON → puste wartości domyślne.
# - Zapis i import są "twarde": błędy muszą dotrzeć do wywołującego (StorageWriteError,
#   StorageReadError, InvalidFileFormatError).
# - Magazyn nie zawiera logiki listy zadań (prepend, toggle) - to robi serwis.


class DocumentStore(Protocol):
    """Interfejs trwałości dla dokumentu TaskNotes.

    Adaptery muszą:
    - zapisywać cały dokument atomowo (temp + rename),
    - zwracać pusty dokument, gdy plik domyślny nie istnieje,
    - mapować błędy I/O na błędy domenowe.
    """

    @property
    def path(self) -> Path:
        """Ścieżka pliku domyślnego, z którego czyta i do którego pisze magazyn."""

    def load(self) -> Document:
        """Czyta i dekoduje cały dokument; nigdy nie rzuca dla braku pliku ani złego JSON."""

    def check(self, strict: bool = True) -> Document:
        """Jak `load`, ale w trybie ścisłym uszkodzona lista zadań rzuca `TaskDecodeError`."""

    def save(self, document: Document) -> None:
        """Zapisuje cały dokument jednym atomowym zapisem.

        Wyjątki domenowe:
            StorageWriteError: Gdy zapis się nie powiódł (bez ponowień, bez rollbacku).
        """

    def load_tasks(self) -> list[Task]:
        """Lista zadań z pliku domyślnego (pusta przy braku pliku lub błędzie dekodowania)."""

    def load_notes(self) -> str:
        """Notatki z pliku domyślnego (pusty string przy braku pliku lub separatora)."""

    def save_tasks(self, tasks: Iterable[Task]) -> None:
        """Zapisuje zadania razem z notatkami aktualnie zapisanymi w pliku."""

    def save_notes(self, notes: str) -> None:
        """Zapisuje notatki razem z zadaniami aktualnie zapisanymi w pliku."""

    def import_file(self, path: Path) -> str:
        """Kopiuje zewnętrzny plik (z separatorem) do lokalizacji domyślnej.

        Wyjątki domenowe:
            StorageReadError: Gdy pliku nie da się odczytać.
            InvalidFileFormatError: Gdy plik nie zawiera separatora (nic nie zapisano).
            StorageWriteError: Gdy nie udało się zapisać pliku domyślnego.
        """

    def export_to(self, path: Path) -> None:
        """Zapisuje kopię bieżącego dokumentu pod wskazaną ścieżką.

        Wyjątki domenowe:
            StorageWriteError: Gdy zapis się nie powiódł.
        """
