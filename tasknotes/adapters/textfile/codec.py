from tasknotes.domain.task import Task, TaskId, Document
from tasknotes.domain.errors import TaskDecodeError
from datetime import datetime, timezone, timedelta
from typing import Iterable
import json
import logging

logger = logging.getLogger(__name__)

SEPARATOR = "###$$###"
# Liczbowe `createdAt` (stare pliki) = sekundy od tej daty.
REFERENCE_DATE = datetime(2001, 1, 1, tzinfo=timezone.utc)


### COMMENTS
# ==========================================================
# Format pliku TaskNotes (adapters/textfile/codec.py).
# ==========================================================
#   <tablica JSON zadań>\n###$$###\n<notatki>
#
# - Podział jest czysto tekstowy: dzielimy po KAŻDYM wystąpieniu separatora,
#   część 0 to JSON zadań, a wszystko dalej sklejamy z powrotem separatorem → notatki.
#   Separator wewnątrz notatek nie jest escapowany.
# - Obie części są przycinane (strip) przy odczycie.
# - Klucze JSON: id, title, isCompleted, createdAt (camelCase - zgodność z istniejącymi plikami).
# - Brak `isCompleted` = False (starsze pliki).


def _encode_dt(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def _decode_dt(raw) -> datetime:
    """ISO 8601 (z 'Z' albo offsetem) lub liczba sekund od REFERENCE_DATE."""
    if isinstance(raw, bool):
        raise ValueError("createdAt must be a timestamp, not a boolean")
    if isinstance(raw, (int, float)):
        return REFERENCE_DATE + timedelta(seconds=raw)
    if not isinstance(raw, str):
        raise ValueError(f"createdAt has unsupported type {type(raw).__name__}")
    dt = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _encode_task(task: Task) -> dict:
    return {
        "id": str(task.task_id),
        "title": task.title,
        "isCompleted": bool(task.is_completed),
        "createdAt": _encode_dt(task.created_at),
    }


def _decode_task(row: dict) -> Task:
    if not isinstance(row, dict):
        raise ValueError("task record must be a JSON object")
    task_id = row["id"]
    title = row["title"]
    if not isinstance(task_id, str) or not isinstance(title, str):
        raise ValueError("'id' and 'title' must be strings")
    is_completed = row.get("isCompleted", False)
    if not isinstance(is_completed, bool):
        raise ValueError("'isCompleted' must be a boolean")
    return Task(
        task_id=TaskId(task_id),
        title=title,
        created_at=_decode_dt(row["createdAt"]),
        is_completed=is_completed,
    )


def encode_tasks(tasks: Iterable[Task]) -> str:
    # `$` występuje tylko w stringach JSON; po escapowaniu segment zadań nie zawiera separatora.
    text = json.dumps([_encode_task(t) for t in tasks], ensure_ascii=False, separators=(",", ":"))
    return text.replace("$", "\\u0024")


def decode_tasks(segment: str, strict: bool = False) -> list[Task]:
    """Dekoduje segment zadań.

    Tryb łagodny (domyślny): błąd → ostrzeżenie w logu i pusta lista.
    Tryb ścisły: błąd → `TaskDecodeError`.
    """
    segment = segment.strip()
    if not segment:
        return []
    try:
        rows = json.loads(segment)
        if not isinstance(rows, list):
            raise TaskDecodeError("expected a JSON array of tasks")
        tasks: list[Task] = []
        seen: set[str] = set()
        for index, row in enumerate(rows):
            try:
                task = _decode_task(row)
            except (KeyError, ValueError, TypeError, OverflowError) as e:
                raise TaskDecodeError(f"record {index}: {e}") from e
            if task.task_id in seen:
                raise TaskDecodeError(f"record {index}: duplicate id '{task.task_id}'")
            seen.add(task.task_id)
            tasks.append(task)
        return tasks
    except json.JSONDecodeError as e:
        error = TaskDecodeError(f"invalid JSON: {e}")
    except RecursionError:
        error = TaskDecodeError("invalid JSON: nesting too deep")
    except TaskDecodeError as e:
        error = e
    if strict:
        raise error
    logger.warning("Failed to decode tasks, falling back to an empty list: %s", error)
    return []


def split_document(text: str) -> tuple[str, str]:
    """Zwraca (segment zadań, notatki); bez separatora notatki są puste."""
    parts = text.split(SEPARATOR)
    tasks_segment = parts[0].strip()
    if len(parts) < 2:
        return tasks_segment, ""
    return tasks_segment, SEPARATOR.join(parts[1:]).strip()


def encode_document(document: Document) -> str:
    return f"{encode_tasks(document.tasks)}\n{SEPARATOR}\n{document.notes}"


def decode_document(text: str, strict: bool = False) -> Document:
    tasks_segment, notes = split_document(text)
    return Document(tasks=tuple(decode_tasks(tasks_segment, strict=strict)), notes=notes)


def has_separator(text: str) -> bool:
    return SEPARATOR in text
