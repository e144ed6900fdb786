import pytest
from datetime import datetime, timezone

from tasknotes.adapters.memory.document_store import InMemoryDocumentStore
from tasknotes.services.document_session import DocumentSession
from tasknotes.services.task_list import TaskListManager


class FakeIdProvider:
    def __init__(self):
        self.counter = 0
    def new_id(self) -> str:
        self.counter += 1
        return f"id-{self.counter}"


class FakeClock:
    def __init__(self, fixed: datetime | None = None):
        # jeśli nie podamy fixed, zwróci zawsze ten sam „teraz”
        self.fixed = fixed or datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
    def now(self) -> datetime:
        return self.fixed


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def memory_store():
    return InMemoryDocumentStore()


@pytest.fixture
def session(memory_store):
    s = DocumentSession(memory_store)
    s.reload()
    return s


@pytest.fixture
def task_list(session, clock):
    return TaskListManager(session, FakeIdProvider(), clock)
