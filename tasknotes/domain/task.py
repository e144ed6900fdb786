from typing import NewType
from datetime import datetime
from dataclasses import dataclass, field

TaskId = NewType("TaskId", str)

@dataclass(frozen=True)
class Task():
    """
    Model domenowy pojedynczej pozycji checklisty; niemutowalny;
    `task_id` i `created_at` (UTC) dostarcza wywołujący (serwis), nie konstruktor.
    """
    task_id: TaskId
    title: str
    created_at: datetime
    is_completed: bool = False


@dataclass(frozen=True)
class Document():
    """Para (lista zadań + notatki) zapisywana razem w jednym pliku."""
    tasks: tuple[Task, ...] = field(default_factory=tuple)
    notes: str = ""

    def with_tasks(self, tasks) -> "Document":
        return Document(tasks=tuple(tasks), notes=self.notes)

    def with_notes(self, notes: str) -> "Document":
        return Document(tasks=self.tasks, notes=notes)


### COMMENTS
# ======================================
# Task
# ======================================
# - frozen=True: "zmiana" zadania (np. odhaczenie) = nowa instancja przez dataclasses.replace.
# - Pola bez wartości domyślnej najpierw (task_id, title, created_at), potem is_completed.
# - Tytuł zapisujemy tak, jak go podał użytkownik (bez strip) - walidacja pustego tytułu
#   odbywa się w serwisie, przed konstrukcją obiektu.
#
# ======================================
# Document
# ======================================
# - Jeden dokument w pamięci = jeden plik na dysku.
# - tasks to tuple: dokument jest w całości niemutowalny.
