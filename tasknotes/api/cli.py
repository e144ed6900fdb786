from tasknotes.domain.errors import (
    DomainError,
    InvalidFileFormatError,
    NoAssociatedFileError,
    StorageReadError,
    StorageWriteError,
    TaskNotFoundError,
    TaskValidationError,
)
from tasknotes.domain.task import Task, TaskId
from tasknotes.services.document_session import DocumentSession
from tasknotes.services.task_list import TaskListManager
from tasknotes.adapters.textfile.document_store import TextFileDocumentStore
from tasknotes.adapters.system.clock_system import SystemClock
from tasknotes.adapters.system.id_provider_uuid import UuidIdProvider
from tasknotes.api.colors import TaskColor
from tasknotes.config import get_settings
from tasknotes.logging_setup import setup_logging
from typer import Argument, Exit, Option, Typer
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.markup import escape
from pathlib import Path
import logging


### COMMENTS
# ==========================================================
# CLI (Typer + Rich) - interfejs użytkownika dla TaskNotes.
# ==========================================================
# Rola:
# - Lewy panel = lista zadań (add/list/toggle/rm/clear), prawy = notatki (notes show/set/append).
# - Polecenia dokumentu: new / open / export / where.
# - Łapie DomainError i drukuje przyjazne komunikaty (kod wyjścia 1).
#
# Zasady:
# - Zero logiki biznesowej - deleguj do TaskListManager / DocumentSession.
# - Jednorazowy bootstrap zależności w callbacku (store → session → task_list).
# - Plik domyślny jest stały; `open` tylko kopiuje zewnętrzny plik w to miejsce.


app = Typer(help="TaskNotes - zadania na dziś + notatki w jednym pliku")
notes_app = Typer(help="Notatki (prawy panel)")
app.add_typer(notes_app, name="notes")
console = Console()

session: DocumentSession | None = None  # ustawimy w callbacku
task_list: TaskListManager | None = None


def build_services(store: TextFileDocumentStore) -> tuple[DocumentSession, TaskListManager]:
    """Składa sesję i listę zadań na wskazanym magazynie i wczytuje dokument."""
    doc_session = DocumentSession(store)
    doc_session.reload()
    return doc_session, TaskListManager(doc_session, UuidIdProvider(), SystemClock())


@app.callback()
def main(
    verbose: bool = Option(False, "--verbose", "-v", help="Logi DEBUG na stderr"),
) -> None:
    """Bootstrap zależności na starcie procesu CLI."""
    global session, task_list
    settings = get_settings()
    setup_logging(
        console_level=logging.DEBUG if verbose else settings.log_level,
        log_file=settings.log_file,
    )
    session, task_list = build_services(TextFileDocumentStore())


def short_id(task_id: str, n: int = 8) -> str:
    """Zwraca skróconą wersję UUID do wyświetlenia (np. pierwsze 8 znaków)."""
    return task_id[:n]


def color_done(task: Task) -> str:
    if task.is_completed:
        return f"{TaskColor.GREEN}✔{TaskColor.RESET}"
    return f"{TaskColor.DIM}○{TaskColor.RESET}"


def fail(e: DomainError, title: str, hint: str | None = None) -> None:
    """Czerwony panel z błędem + kod wyjścia 1."""
    body = f"❌ {escape(str(e))}" + (f"\n[dim]{hint}[/]" if hint else "")
    console.print(Panel.fit(body, title=title, border_style="red"))
    raise Exit(code=1)


def resolve_task(task_id: str) -> Task:
    """Pełne ID albo jednoznaczny prefiks (tak jak pokazuje `list`)."""
    task = task_list.get(TaskId(task_id))
    if task is not None:
        return task
    matches = task_list.find_by_prefix(task_id)
    if not matches:
        raise TaskNotFoundError(task_id)
    if len(matches) > 1:
        raise TaskValidationError("id", f"prefiks '{task_id}' pasuje do {len(matches)} zadań")
    return matches[0]


def render_list(items: list[Task]) -> None:
    """Renderuje tabelę Rich z kolumnami: ID, Done, Title, Created At + stopka."""
    if not items:
        console.print("[dim italic]Brak zadań[/]")
        return

    table = Table(title="Today's Tasks", show_lines=False, header_style="bold")
    table.add_column("ID", no_wrap=True, style="cyan")
    table.add_column("", no_wrap=True)
    table.add_column("Title")
    table.add_column("Created At", no_wrap=True, style="dim")

    for t in items:
        title = f"[strike dim]{escape(t.title)}[/]" if t.is_completed else escape(t.title)
        table.add_row(
            short_id(t.task_id),
            color_done(t),
            title,
            t.created_at.strftime("%Y-%m-%d %H:%M"),
        )

    done_count = sum(1 for t in items if t.is_completed)
    console.print(table)
    console.print(f"[dim]Razem: {len(items)} • Zrobione: {done_count}[/dim]")


def render_notes(notes: str) -> None:
    console.print(Panel(escape(notes) if notes else "[dim italic]Brak notatek[/]", title="Notes", border_style="cyan"))


@app.command("add")
def add(title: str) -> None:
    """Dodaje nowe zadanie na początek listy."""
    try:
        task = task_list.add(title)
    except StorageWriteError as e:
        fail(e, "Błąd zapisu")
    if task is None:
        fail(
            TaskValidationError("title", "Tytuł nie może być pusty"),
            "Błąd walidacji",
            "Podpowiedź: tasknotes add 'Kup mleko'",
        )
    console.print(Panel.fit(
        f"✅ Dodano zadanie\n[cyan]ID:[/cyan] {short_id(task.task_id)}\n[dim]Title:[/dim] {escape(task.title)}",
        title="Sukces",
        border_style="green",
    ))


@app.command("list")
def list_cmd() -> None:
    """Listuje zadania (najnowsze pierwsze)."""
    render_list(task_list.tasks)


@app.command("toggle")
def toggle(task_id: str) -> None:
    """Odhacza / przywraca zadanie."""
    try:
        task = task_list.toggle(resolve_task(task_id).task_id)
    except TaskNotFoundError as e:
        fail(e, "Nie znaleziono", "Użyj 'tasknotes list', żeby znaleźć poprawne ID")
    except DomainError as e:
        fail(e, "Błąd domenowy")
    state = "zrobione" if task.is_completed else "do zrobienia"
    console.print(Panel.fit(
        f"{color_done(task)} {escape(task.title)}\n[dim]Status:[/dim] {state}",
        title="Sukces",
        border_style="green",
    ))


@app.command("rm")
def rm(task_id: str) -> None:
    """Usuwa zadanie."""
    try:
        task = resolve_task(task_id)
        task_list.delete(task.task_id)
    except TaskNotFoundError as e:
        fail(e, "Nie znaleziono", "Użyj 'tasknotes list', żeby znaleźć poprawne ID")
    except DomainError as e:
        fail(e, "Błąd domenowy")
    console.print(Panel.fit(
        f"🟡 Zadanie usunięte\nID: {short_id(task.task_id)}\n[dim]{escape(task.title)}[/]",
        title="Usunięto",
        border_style="yellow",
    ))


@app.command("clear")
def clear() -> None:
    """Usuwa wszystkie zadania (notatki zostają)."""
    try:
        task_list.clear()
    except StorageWriteError as e:
        fail(e, "Błąd zapisu")
    console.print(Panel.fit("🟡 Lista zadań wyczyszczona", border_style="yellow"))


@notes_app.command("show")
def notes_show() -> None:
    """Wyświetla notatki."""
    render_notes(session.notes)


@notes_app.command("set")
def notes_set(text: str) -> None:
    """Zastępuje notatki podanym tekstem."""
    try:
        session.set_notes(text)
    except StorageWriteError as e:
        fail(e, "Błąd zapisu")
    render_notes(session.notes)


@notes_app.command("append")
def notes_append(text: str) -> None:
    """Dopisuje linię na końcu notatek."""
    current = session.notes
    try:
        session.set_notes(f"{current}\n{text}" if current else text)
    except StorageWriteError as e:
        fail(e, "Błąd zapisu")
    render_notes(session.notes)


@app.command("show")
def show() -> None:
    """Oba panele: zadania + notatki."""
    console.print(f"[bold]{session.title}[/bold] [dim]({session.store.path})[/dim]")
    render_list(task_list.tasks)
    render_notes(session.notes)


@app.command("new")
def new() -> None:
    """Nowy dokument: czyści zadania i notatki."""
    try:
        session.new_document()
    except StorageWriteError as e:
        fail(e, "Błąd zapisu")
    console.print(Panel.fit("🆕 Nowy dokument (Untitled)", border_style="cyan"))


@app.command("open")
def open_cmd(path: Path = Argument(..., help="Plik w formacie TaskNotes")) -> None:
    """Importuje plik do lokalizacji domyślnej i go wczytuje."""
    try:
        session.open_file(path)
    except InvalidFileFormatError as e:
        fail(e, "Invalid File Format", "Plik musi zawierać separator '###$$###'")
    except StorageReadError as e:
        fail(e, "Error Opening File")
    except StorageWriteError as e:
        fail(e, "Error Saving File")
    console.print(Panel.fit(
        f"📂 Otwarto {session.title}\n[dim]Zadania: {len(session.tasks)}[/]",
        title="Sukces",
        border_style="green",
    ))
    if session.last_decode_error is not None:
        console.print(Panel.fit(
            f"⚠️ {escape(str(session.last_decode_error))}\n[dim]Lista zadań została wczytana jako pusta.[/]",
            title="Uszkodzona lista zadań",
            border_style="yellow",
        ))


@app.command("export")
def export(path: Path = Argument(..., help="Docelowy plik (Save As)")) -> None:
    """Zapisuje kopię dokumentu pod wskazaną ścieżką."""
    try:
        session.save_as(path)
    except (StorageWriteError, NoAssociatedFileError) as e:
        fail(e, "Error Saving File")
    console.print(Panel.fit(f"💾 Zapisano {path}", title="Sukces", border_style="green"))


@app.command("where")
def where() -> None:
    """Pokazuje ścieżkę pliku domyślnego."""
    console.print(str(session.store.path), soft_wrap=True, markup=False, highlight=False)


if __name__ == "__main__":
    app()
