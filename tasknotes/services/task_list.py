from tasknotes.services.document_session import DocumentSession
from tasknotes.ports.id_provider import IdProvider
from tasknotes.ports.clock import Clock
from tasknotes.domain.task import Task, TaskId
from dataclasses import replace
import logging

logger = logging.getLogger(__name__)


### COMMENTS
# ==========================================================
# Lista zadań (services/task_list.py) - przypadki użycia.
# ==========================================================
# - Nowe zadania trafiają na POCZĄTEK listy (najnowsze pierwsze).
# - Każda mutacja kończy się zapisem całego dokumentu przez sesję (write-through).
# - Nieznane ID przy toggle/delete to no-op, nie błąd - i wtedy nic nie zapisujemy.
# - ID i created_at generowane są tutaj (porty IdProvider/Clock), nie w modelu.


class TaskListManager:
    """
    Uporządkowana lista zadań dnia.

    :param session: Sesja dokumentu (wspólny stan zadań i notatek).
    :param ids: Źródło identyfikatorów.
    :param clock: Źródło czasu UTC.
    """
    def __init__(self, session: DocumentSession, ids: IdProvider, clock: Clock) -> None:
        self.session = session
        self.ids = ids
        self.clock = clock

    @property
    def tasks(self) -> list[Task]:
        return list(self.session.tasks)

    def add(self, title: str) -> Task | None:
        """
            Dodaje zadanie na początek listy i zapisuje dokument.

            - Tytuł pusty lub z samych białych znaków → no-op, zwraca None.
            - Tytuł zapisywany jest bez przycinania.

            :param title: Tytuł zadania.
            :raises StorageWriteError: Gdy zapis się nie powiódł.
            :return: Utworzony `Task` albo None.
        """
        if not title or not title.strip():
            logger.debug("Ignoring task with an empty title")
            return None

        task = Task(
            task_id=TaskId(self.ids.new_id()),
            title=title,
            created_at=self.clock.now(),
        )
        self.session.replace_tasks([task, *self.session.tasks])
        return task

    def toggle(self, task_id: TaskId) -> Task | None:
        """Odwraca `is_completed`; zwraca nowy Task albo None, gdy ID nie istnieje."""
        tasks = self.tasks
        for index, task in enumerate(tasks):
            if task.task_id == task_id:
                toggled = replace(task, is_completed=not task.is_completed)
                tasks[index] = toggled
                self.session.replace_tasks(tasks)
                return toggled
        logger.debug("toggle: no task with id %s", task_id)
        return None

    def delete(self, task_id: TaskId) -> bool:
        remaining = [t for t in self.session.tasks if t.task_id != task_id]
        if len(remaining) == len(self.session.tasks):
            logger.debug("delete: no task with id %s", task_id)
            return False
        self.session.replace_tasks(remaining)
        return True

    def refresh(self) -> list[Task]:
        """Porzuca stan w pamięci i wczytuje listę z pliku domyślnego (bez zapisu)."""
        self.session.reload()
        return self.tasks

    def clear(self) -> None:
        self.session.replace_tasks([])

    def get(self, task_id: TaskId) -> Task | None:
        for task in self.session.tasks:
            if task.task_id == task_id:
                return task
        return None

    def find_by_prefix(self, prefix: str) -> list[Task]:
        """Zadania, których ID zaczyna się od `prefix` (CLI pokazuje skrócone ID)."""
        if not prefix:
            return []
        return [t for t in self.session.tasks if str(t.task_id).startswith(prefix)]
