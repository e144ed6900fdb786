### COMMENTS
# ============================================
# Konwencja użycia błędów domenowych w projekcie
# ============================================
# - Magazyn dokumentu (adapter textfile):
#     * brak pliku domyślnego to NIE błąd - zwraca pusty dokument,
#     * uszkodzony JSON zadań → TaskDecodeError (łapany i logowany w trybie łagodnym),
#     * plik importu bez separatora → InvalidFileFormatError,
#     * OSError przy odczycie importu → StorageReadError, przy zapisie → StorageWriteError.
#
# - Serwisy:
#     * pusty tytuł to no-op (zwracają None); CLI pokazuje TaskValidationError
#     * save() bez skojarzonego pliku → NoAssociatedFileError (wywołujący robi "Save As")
#
# - UI (CLI):
#     * nieznane ID lub prefiks ID → TaskNotFoundError (serwis traktuje to jako no-op)
#     * łapie DomainError (lub konkretne klasy) i wyświetla przyjazny komunikat


class DomainError(Exception):
    """Bazowa klasa dla błędów domenowych.
    Umożliwia odróżnienie błędów domeny (logika aplikacji) od błędów technicznych.
    Nie powinna być rzucana bezpośrednio - używaj klas pochodnych.
    """


class TaskValidationError(DomainError):
    """Rzucany/zgłaszany, gdy dane wejściowe nie spełniają reguł dla zadania
    (np. tytuł pusty albo złożony wyłącznie z białych znaków).
    """
    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(self.__str__())
    def __str__(self):
        return f"Błąd walidacji pola '{self.field}': {self.message}"


class TaskDecodeError(DomainError):
    """Segment zadań w pliku nie jest poprawną tablicą JSON zadań."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.__str__())
    def __str__(self):
        return f"Nie można odczytać listy zadań: {self.message}"


class InvalidFileFormatError(DomainError):
    """Importowany plik nie zawiera separatora `###$$###` - import odrzucony, nic nie zapisano."""
    def __init__(self, path):
        self.path = path
        super().__init__(self.__str__())
    def __str__(self):
        return f"Nieprawidłowy format pliku: {self.path} nie zawiera separatora '###$$###'."


class StorageReadError(DomainError):
    """Błąd I/O przy odczycie pliku (z oryginalnym komunikatem systemu)."""
    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(self.__str__())
    def __str__(self):
        return f"Błąd odczytu pliku {self.path}: {self.reason}"


class StorageWriteError(DomainError):
    """Błąd I/O przy zapisie pliku. Brak ponowienia i brak rollbacku."""
    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(self.__str__())
    def __str__(self):
        return f"Błąd zapisu pliku {self.path}: {self.reason}"


class NoAssociatedFileError(DomainError):
    """`save()` wywołane, zanim dokument został skojarzony z plikiem (użyj "Save As")."""
    def __str__(self):
        return "Dokument nie jest skojarzony z żadnym plikiem - użyj 'export'."


class TaskNotFoundError(DomainError):
    """Rzucany przez CLI, gdy podane ID (lub prefiks ID) nie pasuje do żadnego zadania.
    Serwis traktuje nieznane ID jako no-op - to tylko sygnał dla użytkownika.
    """
    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(self.__str__())
    def __str__(self):
        return f"Zadanie o ID {self.task_id} nie istnieje."
