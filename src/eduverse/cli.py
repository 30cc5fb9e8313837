"""Command line interface for Eduverse."""

from __future__ import annotations

import asyncio
import difflib
import logging
from typing import Any, Awaitable, Optional, Sequence, TypeVar

import click
import yaml
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from eduverse.calculator import UNDEFINED, Evaluator
from eduverse.config import ConfigError, ConfigManager, MissingSettingError, flatten_for_env
from eduverse.context import AppContext
from eduverse.folders import (
    FOLDERS_ROUTE,
    FileRecord,
    Folder,
    FolderError,
    FolderViewModel,
    SortCriterion,
)
from eduverse.llm import LLMError
from eduverse.notifications import NotificationError
from eduverse.quiz import Question, QuizError, QuizSession
from eduverse.timer import AsyncioTicker, TimerState, TimerType
from eduverse.todo import Todo, TodoError, TodoListViewModel

console = Console()

T = TypeVar("T")

_TIMER_LABELS = {
    TimerType.POMODORO: "Focus",
    TimerType.SHORT_BREAK: "Short break",
    TimerType.LONG_BREAK: "Long break",
}
_OPTION_LABELS = "ABCD"


def _handle_cli_error(
    message: str,
    *,
    code: str,
    json_output: bool,
    details: Any | None = None,
    original: Exception | None = None,
) -> None:
    """Emit a standardized error and terminate the command appropriately.

    Args:
        message: Human-readable error message.
        code: Machine-readable error identifier.
        json_output: Indicates whether JSON mode is active.
        details: Optional structured details to include in the payload.
        original: Original exception for chaining when not using JSON.

    Raises:
        SystemExit: When emitting JSON output to terminate the command.
        click.ClickException: For non-JSON flows to surface the error.
    """

    if json_output:
        payload: dict[str, Any] = {"error": {"code": code, "message": message}}
        if details is not None:
            payload["error"]["details"] = details
        console.print_json(data=payload)
        raise SystemExit(1)

    if isinstance(original, click.ClickException):
        raise original

    raise click.ClickException(message) from original


def _emit_message(message: Any, *, quiet: bool, mode: str = "detail") -> None:
    """Print ``message`` unless quiet mode suppresses it.

    Args:
        message: Renderable or string to emit.
        quiet: Whether quiet mode is active.
        mode: Output mode identifier (`detail`, `warning`, or `error`).
    """

    if quiet and mode != "error":
        return
    console.print(message)


def _configure_logging(level: str) -> None:
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        numeric = logging.WARNING
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s", level=numeric)
    logging.getLogger().setLevel(numeric)


def _load_context(
    ctx: click.Context, cli_overrides: Optional[dict[str, Any]] = None
) -> AppContext:
    """Resolve configuration and build the application context for a command.

    Args:
        ctx: Click context; ``ctx.obj["transport"]`` may carry an httpx transport.
        cli_overrides: Dotted configuration overrides taken from command options.

    Returns:
        AppContext: Context bound to the configured storage root.

    Raises:
        click.ClickException: If the configuration cannot be loaded.
    """
    manager = ConfigManager()
    try:
        config = manager.load(cli_overrides=cli_overrides)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    _configure_logging(config.logging.level)
    obj = ctx.find_root().obj or {}
    return AppContext.from_config(config, transport=obj.get("transport"))


def _is_quiet(ctx: click.Context, app: AppContext) -> bool:
    obj = ctx.find_root().obj or {}
    return bool(obj.get("quiet")) or app.config.cli.quiet_default


def _run(awaitable: Awaitable[T]) -> T:
    async def _wrapper() -> T:
        return await awaitable

    return asyncio.run(_wrapper())


async def _select_folder(view_model: FolderViewModel, folder_id: str) -> Folder:
    """Load the listing holding ``folder_id`` and make that folder active.

    Raises:
        click.ClickException: If neither listing contains the folder.
    """
    for archived in (False, True):
        for folder in await view_model.load_folders(archived=archived):
            if folder.id == folder_id:
                view_model.select_folder(folder)
                return folder
    raise click.ClickException(f"No folder with id {folder_id}.")


def _require_file(folder: Folder, file_id: str) -> FileRecord:
    record = folder.find_file(file_id)
    if record is None:
        raise click.ClickException(f"Folder {folder.name} has no file with id {file_id}.")
    return record


def _folders_table(folders: Sequence[Folder], *, title: str) -> Table:
    table = Table(title=title)
    table.add_column("ID", overflow="fold")
    table.add_column("Name", overflow="fold")
    table.add_column("Files", justify="right")
    table.add_column("Sort")
    for folder in folders:
        table.add_row(folder.id, folder.name, str(len(folder.files)), folder.sort_criterion.value)
    return table


def _files_table(folder: Folder) -> Table:
    table = Table(title=f"Files in {folder.name}")
    table.add_column("ID", overflow="fold")
    table.add_column("Name", overflow="fold")
    table.add_column("Created")
    table.add_column("Last access")
    table.add_column("Opens", justify="right")
    for record in folder.files:
        table.add_row(
            record.id,
            record.name,
            f"{record.created_at:%Y-%m-%d %H:%M}",
            f"{record.last_access:%Y-%m-%d %H:%M}",
            str(record.access_count),
        )
    return table


def _todos_table(todos: Sequence[Todo], *, title: str) -> Table:
    table = Table(title=title)
    table.add_column("ID", overflow="fold")
    table.add_column("Name", overflow="fold")
    table.add_column("Minutes", justify="right")
    for todo in todos:
        table.add_row(todo.id, todo.name, str(todo.time_spent))
    return table


def _todo_payload(todo: Todo) -> dict[str, Any]:
    return todo.model_dump(mode="json")


def _display_option(label: str, answer: str) -> str:
    if len(answer) > 1 and answer[0].upper() == label and answer[1] in ").:-":
        return answer
    return f"{label}) {answer}"


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="eduverse")
@click.option("--quiet", is_flag=True, help="Suppress non-error output.")
@click.pass_context
def cli(ctx: click.Context, quiet: bool) -> None:
    """Eduverse bundles study utilities: folders, todos, a pomodoro timer and more.

    Returns:
        None: This function is invoked for its side effects.
    """
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet


# ---------------------------------------------------------------------- #
# Folders                                                                #
# ---------------------------------------------------------------------- #


@cli.group()
def folders() -> None:
    """Organize study files into folders."""


@folders.command("list")
@click.option("--archived", is_flag=True, help="List archived folders instead.")
@click.option("--json", "json_output", is_flag=True, help="Emit the folders as JSON.")
@click.pass_context
def folders_list(ctx: click.Context, archived: bool, json_output: bool) -> None:
    """List the folders of the configured user."""
    app = _load_context(ctx)
    view_model = app.folder_view_model()
    try:
        listing = _run(view_model.load_folders(archived=archived))
    except FolderError as exc:
        _handle_cli_error(str(exc), code="folder_error", json_output=json_output, original=exc)
        return

    if json_output:
        console.print_json(data={"folders": [folder.model_dump(mode="json") for folder in listing]})
        return

    if not listing:
        console.print("[yellow]No folders found.[/yellow]")
        return
    console.print(_folders_table(listing, title="Archived folders" if archived else "Folders"))


@folders.command("create")
@click.argument("name")
@click.pass_context
def folders_create(ctx: click.Context, name: str) -> None:
    """Create an empty folder called NAME."""
    app = _load_context(ctx)
    view_model = app.folder_view_model()
    try:
        folder = _run(view_model.create_folder(name))
    except FolderError as exc:
        raise click.ClickException(str(exc)) from exc
    _emit_message(
        f"[green]Created folder {folder.name} ({folder.id}).[/green]", quiet=_is_quiet(ctx, app)
    )


@folders.command("rename")
@click.argument("folder_id")
@click.argument("name")
@click.pass_context
def folders_rename(ctx: click.Context, folder_id: str, name: str) -> None:
    """Rename the folder FOLDER_ID to NAME."""
    app = _load_context(ctx)
    view_model = app.folder_view_model()

    async def _rename() -> Folder:
        await _select_folder(view_model, folder_id)
        return await view_model.rename_folder(name)

    try:
        folder = _run(_rename())
    except FolderError as exc:
        raise click.ClickException(str(exc)) from exc
    _emit_message(f"[green]Renamed folder to {folder.name}.[/green]", quiet=_is_quiet(ctx, app))


@folders.command("archive")
@click.argument("folder_id")
@click.pass_context
def folders_archive(ctx: click.Context, folder_id: str) -> None:
    """Archive the folder FOLDER_ID."""
    app = _load_context(ctx)
    view_model = app.folder_view_model()

    async def _archive() -> Folder:
        await _select_folder(view_model, folder_id)
        return await view_model.archive_folder()

    try:
        folder = _run(_archive())
    except FolderError as exc:
        raise click.ClickException(str(exc)) from exc
    _emit_message(f"[green]Archived folder {folder.name}.[/green]", quiet=_is_quiet(ctx, app))


@folders.command("unarchive")
@click.argument("folder_id")
@click.pass_context
def folders_unarchive(ctx: click.Context, folder_id: str) -> None:
    """Restore the archived folder FOLDER_ID and show the folder list."""
    app = _load_context(ctx)
    quiet = _is_quiet(ctx, app)
    routes: list[str] = []
    view_model = app.folder_view_model(navigator=routes.append)

    async def _unarchive() -> list[Folder]:
        await _select_folder(view_model, folder_id)
        await view_model.unarchive_folder()
        if FOLDERS_ROUTE in routes:
            return await view_model.load_folders(archived=False)
        return []

    try:
        listing = _run(_unarchive())
    except FolderError as exc:
        raise click.ClickException(str(exc)) from exc
    _emit_message("[green]Folder restored.[/green]", quiet=quiet)
    if listing:
        _emit_message(_folders_table(listing, title="Folders"), quiet=quiet)


@folders.command("delete")
@click.argument("folder_ids", nargs=-1, required=True)
@click.pass_context
def folders_delete(ctx: click.Context, folder_ids: tuple[str, ...]) -> None:
    """Delete one or more folders together with their file records."""
    app = _load_context(ctx)
    view_model = app.folder_view_model()

    async def _delete() -> list[Folder]:
        targets = [await _select_folder(view_model, folder_id) for folder_id in folder_ids]
        for archived in (False, True):
            await view_model.load_folders(archived=archived)
            batch = [folder for folder in targets if folder.archived == archived]
            if batch:
                await view_model.delete_folders(batch)
        return targets

    try:
        deleted = _run(_delete())
    except FolderError as exc:
        raise click.ClickException(str(exc)) from exc
    _emit_message(
        f"[green]Deleted {len(deleted)} folder(s).[/green]", quiet=_is_quiet(ctx, app)
    )


@folders.command("add-file")
@click.argument("folder_id")
@click.argument("name")
@click.option("--file-id", default="", help="Reference to the stored file content.")
@click.pass_context
def folders_add_file(ctx: click.Context, folder_id: str, name: str, file_id: str) -> None:
    """Add a file record called NAME to the folder FOLDER_ID."""
    app = _load_context(ctx)
    view_model = app.folder_view_model()

    async def _add() -> FileRecord:
        await _select_folder(view_model, folder_id)
        return await view_model.create_file(name, file_id)

    try:
        record = _run(_add())
    except FolderError as exc:
        raise click.ClickException(str(exc)) from exc
    _emit_message(f"[green]Added {record.name} ({record.id}).[/green]", quiet=_is_quiet(ctx, app))


@folders.command("remove-file")
@click.argument("folder_id")
@click.argument("file_id")
@click.pass_context
def folders_remove_file(ctx: click.Context, folder_id: str, file_id: str) -> None:
    """Remove the file record FILE_ID from the folder FOLDER_ID."""
    app = _load_context(ctx)
    view_model = app.folder_view_model()

    async def _remove() -> FileRecord:
        folder = await _select_folder(view_model, folder_id)
        record = _require_file(folder, file_id)
        await view_model.delete_file(record)
        return record

    try:
        record = _run(_remove())
    except FolderError as exc:
        raise click.ClickException(str(exc)) from exc
    _emit_message(f"[green]Removed {record.name}.[/green]", quiet=_is_quiet(ctx, app))


@folders.command("open")
@click.argument("folder_id")
@click.argument("file_id")
@click.pass_context
def folders_open(ctx: click.Context, folder_id: str, file_id: str) -> None:
    """Record an access to FILE_ID in the folder FOLDER_ID."""
    app = _load_context(ctx)
    view_model = app.folder_view_model()

    async def _open() -> Optional[FileRecord]:
        folder = await _select_folder(view_model, folder_id)
        return await view_model.open_file(_require_file(folder, file_id))

    try:
        record = _run(_open())
    except FolderError as exc:
        raise click.ClickException(str(exc)) from exc
    if record is None:
        raise click.ClickException(f"No file with id {file_id}.")
    _emit_message(
        f"Opened {record.name} ({record.access_count} time(s)).", quiet=_is_quiet(ctx, app)
    )


@folders.command("show")
@click.argument("folder_id")
@click.option(
    "--sort",
    "criterion",
    type=click.Choice([criterion.value for criterion in SortCriterion], case_sensitive=False),
    help="Order the files by this criterion.",
)
@click.option("--save", is_flag=True, help="Remember the sort criterion for the folder.")
@click.option("--json", "json_output", is_flag=True, help="Emit the folder as JSON.")
@click.pass_context
def folders_show(
    ctx: click.Context,
    folder_id: str,
    criterion: Optional[str],
    save: bool,
    json_output: bool,
) -> None:
    """Show the files of the folder FOLDER_ID."""
    app = _load_context(ctx)
    view_model = app.folder_view_model()

    async def _show() -> Folder:
        folder = await _select_folder(view_model, folder_id)
        if criterion is not None:
            view_model.sort_by(criterion.upper())
            if save:
                await view_model.update_folder(folder)
        return folder

    try:
        folder = _run(_show())
    except FolderError as exc:
        _handle_cli_error(str(exc), code="folder_error", json_output=json_output, original=exc)
        return

    if json_output:
        console.print_json(data=folder.model_dump(mode="json"))
        return
    if not folder.files:
        console.print(f"[yellow]Folder {folder.name} is empty.[/yellow]")
        return
    console.print(_files_table(folder))


# ---------------------------------------------------------------------- #
# Todos                                                                  #
# ---------------------------------------------------------------------- #


@cli.group()
def todo() -> None:
    """Manage the todo list."""


async def _load_todo(view_model: TodoListViewModel, todo_id: str) -> Todo:
    await view_model.refresh()
    found = view_model.get_todo(todo_id)
    if found is None:
        raise click.ClickException(f"No todo with id {todo_id}.")
    return found


@todo.command("list")
@click.option("--json", "json_output", is_flag=True, help="Emit the todos as JSON.")
@click.pass_context
def todo_list(ctx: click.Context, json_output: bool) -> None:
    """List pending and completed todos."""
    app = _load_context(ctx)
    view_model = app.todo_view_model()
    try:
        _run(view_model.refresh())
    except TodoError as exc:
        _handle_cli_error(str(exc), code="todo_error", json_output=json_output, original=exc)
        return

    if json_output:
        console.print_json(
            data={
                "actual": [_todo_payload(item) for item in view_model.actual_todos],
                "done": [_todo_payload(item) for item in view_model.done_todos],
            }
        )
        return

    console.print(_todos_table(view_model.actual_todos, title="To do"))
    console.print(_todos_table(view_model.done_todos, title="Done"))


@todo.command("add")
@click.argument("name")
@click.pass_context
def todo_add(ctx: click.Context, name: str) -> None:
    """Add a pending todo called NAME."""
    app = _load_context(ctx)
    view_model = app.todo_view_model()
    try:
        created = _run(view_model.add_todo(name))
    except TodoError as exc:
        raise click.ClickException(str(exc)) from exc
    _emit_message(f"[green]Added {created.name} ({created.id}).[/green]", quiet=_is_quiet(ctx, app))


@todo.command("done")
@click.argument("todo_id")
@click.pass_context
def todo_done(ctx: click.Context, todo_id: str) -> None:
    """Mark TODO_ID as done."""
    app = _load_context(ctx)
    view_model = app.todo_view_model()

    async def _done() -> Todo:
        return await view_model.set_done(await _load_todo(view_model, todo_id))

    try:
        updated = _run(_done())
    except TodoError as exc:
        raise click.ClickException(str(exc)) from exc
    _emit_message(f"[green]Completed {updated.name}.[/green]", quiet=_is_quiet(ctx, app))


@todo.command("undo")
@click.argument("todo_id")
@click.pass_context
def todo_undo(ctx: click.Context, todo_id: str) -> None:
    """Move TODO_ID back to the pending list."""
    app = _load_context(ctx)
    view_model = app.todo_view_model()

    async def _undo() -> Todo:
        return await view_model.set_actual(await _load_todo(view_model, todo_id))

    try:
        updated = _run(_undo())
    except TodoError as exc:
        raise click.ClickException(str(exc)) from exc
    _emit_message(f"[green]{updated.name} is pending again.[/green]", quiet=_is_quiet(ctx, app))


@todo.command("rename")
@click.argument("todo_id")
@click.argument("name")
@click.pass_context
def todo_rename(ctx: click.Context, todo_id: str, name: str) -> None:
    """Rename TODO_ID to NAME."""
    app = _load_context(ctx)
    view_model = app.todo_view_model()

    async def _rename() -> Todo:
        return await view_model.rename(await _load_todo(view_model, todo_id), name)

    try:
        updated = _run(_rename())
    except TodoError as exc:
        raise click.ClickException(str(exc)) from exc
    _emit_message(f"[green]Renamed to {updated.name}.[/green]", quiet=_is_quiet(ctx, app))


@todo.command("time")
@click.argument("todo_id")
@click.argument("minutes", type=click.IntRange(min=0))
@click.pass_context
def todo_time(ctx: click.Context, todo_id: str, minutes: int) -> None:
    """Set the minutes spent on TODO_ID."""
    app = _load_context(ctx)
    view_model = app.todo_view_model()

    async def _time() -> Todo:
        return await view_model.update_time_spent(await _load_todo(view_model, todo_id), minutes)

    try:
        updated = _run(_time())
    except TodoError as exc:
        raise click.ClickException(str(exc)) from exc
    _emit_message(
        f"[green]{updated.name}: {updated.time_spent} minute(s).[/green]", quiet=_is_quiet(ctx, app)
    )


@todo.command("delete")
@click.argument("todo_id")
@click.pass_context
def todo_delete(ctx: click.Context, todo_id: str) -> None:
    """Delete TODO_ID."""
    app = _load_context(ctx)
    view_model = app.todo_view_model()

    async def _delete() -> Todo:
        target = await _load_todo(view_model, todo_id)
        await view_model.delete(target.id)
        return target

    try:
        removed = _run(_delete())
    except TodoError as exc:
        raise click.ClickException(str(exc)) from exc
    _emit_message(f"[green]Deleted {removed.name}.[/green]", quiet=_is_quiet(ctx, app))


# ---------------------------------------------------------------------- #
# Timer                                                                  #
# ---------------------------------------------------------------------- #


@cli.group()
def timer() -> None:
    """Pomodoro timer."""


@timer.command("run")
@click.option("--focus", type=click.IntRange(min=1), help="Focus session length in minutes.")
@click.option("--short-break", type=click.IntRange(min=1), help="Short break length in minutes.")
@click.option("--long-break", type=click.IntRange(min=1), help="Long break length in minutes.")
@click.option("--cycles", type=click.IntRange(min=1), help="Focus sessions before a long break.")
@click.option("--todo", "todo_id", help="Credit completed focus sessions to this todo.")
@click.option(
    "--interval",
    type=click.FloatRange(min=0),
    default=1.0,
    show_default=True,
    help="Seconds between ticks.",
)
@click.pass_context
def timer_run(
    ctx: click.Context,
    focus: Optional[int],
    short_break: Optional[int],
    long_break: Optional[int],
    cycles: Optional[int],
    todo_id: Optional[str],
    interval: float,
) -> None:
    """Run the timer until it pauses at the end of a session or round."""
    overrides: dict[str, Any] = {}
    if focus is not None:
        overrides["pomodoro.focus_seconds"] = focus * 60
    if short_break is not None:
        overrides["pomodoro.short_break_seconds"] = short_break * 60
    if long_break is not None:
        overrides["pomodoro.long_break_seconds"] = long_break * 60
    if cycles is not None:
        overrides["pomodoro.cycles"] = cycles

    app = _load_context(ctx, overrides)
    quiet = _is_quiet(ctx, app)
    view_model = app.timer_view_model(ticker=AsyncioTicker(interval))
    todos = app.todo_view_model()

    async def _session() -> tuple[int, Optional[Todo]]:
        credited = await _load_todo(todos, todo_id) if todo_id else None
        if credited is not None:
            todos.select(credited)

        finished = asyncio.Event()
        completed = 0
        previous: TimerState = view_model.state

        def _on_change(state: TimerState) -> None:
            nonlocal completed, previous
            if state.timer_type is not previous.timer_type:
                if previous.timer_type is TimerType.POMODORO:
                    completed += 1
                _emit_message(
                    f"[cyan]{_TIMER_LABELS[state.timer_type]}[/cyan] "
                    f"(cycle {state.current_cycle}/{state.settings.cycles})",
                    quiet=quiet,
                )
            if state.is_paused:
                finished.set()
            previous = state

        view_model.subscribe(_on_change)
        _emit_message(
            f"[cyan]{_TIMER_LABELS[view_model.state.timer_type]}[/cyan] "
            f"(cycle 1/{view_model.state.settings.cycles})",
            quiet=quiet,
        )
        view_model.start()
        try:
            await finished.wait()
        finally:
            view_model.close()

        selected = todos.selected_todo
        if selected is not None and completed:
            minutes = completed * view_model.state.settings.focus_seconds // 60
            selected = await todos.update_time_spent(selected, selected.time_spent + minutes)
        return completed, selected

    try:
        completed, credited = _run(_session())
    except TodoError as exc:
        raise click.ClickException(str(exc)) from exc

    _emit_message(f"[green]Completed {completed} focus session(s).[/green]", quiet=quiet)
    if credited is not None:
        _emit_message(
            f"{credited.name}: {credited.time_spent} minute(s) spent.", quiet=quiet
        )


# ---------------------------------------------------------------------- #
# Assistant, quiz and calculator                                         #
# ---------------------------------------------------------------------- #


@cli.command()
@click.argument("question", nargs=-1, required=True)
@click.pass_context
def ask(ctx: click.Context, question: tuple[str, ...]) -> None:
    """Ask the AI assistant a QUESTION."""
    app = _load_context(ctx)
    if not app.config.assistant.api_key:
        raise click.ClickException(str(MissingSettingError("assistant.api_key")))

    text = " ".join(question)
    view_model = app.assistant_view_model()
    answer = _run(view_model.send_question(text))
    if answer is None:
        raise click.ClickException(view_model.error_message or "The question is empty.")
    console.print(answer, markup=False)


@cli.command()
@click.argument("topic")
@click.option(
    "--difficulty",
    type=click.Choice(["easy", "medium", "hard"], case_sensitive=False),
    default="medium",
    show_default=True,
)
@click.option("--count", type=click.IntRange(min=1, max=20), default=5, show_default=True)
@click.option("--json", "json_output", is_flag=True, help="Emit the questions as JSON.")
@click.pass_context
def quiz(ctx: click.Context, topic: str, difficulty: str, count: int, json_output: bool) -> None:
    """Generate a quiz about TOPIC and answer it interactively."""
    app = _load_context(ctx)
    try:
        questions: list[Question] = _run(
            app.quiz_generator().get_questions(topic, difficulty.lower(), count)
        )
    except MissingSettingError as exc:
        _handle_cli_error(str(exc), code="missing_setting", json_output=json_output, original=exc)
        return
    except (QuizError, LLMError) as exc:
        _handle_cli_error(str(exc), code="quiz_error", json_output=json_output, original=exc)
        return

    if json_output:
        console.print_json(data={"questions": [item.model_dump() for item in questions]})
        return

    session = QuizSession(questions)
    for index, item in enumerate(questions):
        console.print(f"\n{index + 1}. {item.text}", style="bold", markup=False)
        for label, answer in zip(_OPTION_LABELS, item.answers):
            console.print(f"  {_display_option(label, answer)}", markup=False)
        choice = click.prompt(
            "Your answer",
            type=click.Choice(list(_OPTION_LABELS), case_sensitive=False),
        )
        picked = item.answers[_OPTION_LABELS.index(choice.upper())]
        session.answer(index, picked)
        if item.is_correct(picked):
            console.print("[green]Correct![/green]")
        else:
            console.print(f"[red]Wrong.[/red] Correct answer: {item.correct_answer}")

    console.print(f"\n[bold]Score: {session.score()}/{len(questions)}[/bold]")


@cli.command()
@click.argument("expression", nargs=-1, required=True)
def calc(expression: tuple[str, ...]) -> None:
    """Evaluate a calculator EXPRESSION such as 'sqrt(16) + 2^3'."""
    result = Evaluator().evaluate(" ".join(expression))
    if result == UNDEFINED:
        console.print(f"[red]{UNDEFINED}[/red]")
        raise SystemExit(1)
    console.print(result)


# ---------------------------------------------------------------------- #
# Notifications                                                          #
# ---------------------------------------------------------------------- #


@cli.group()
def notifications() -> None:
    """Choose which reminders are shown."""


@notifications.command("show")
@click.option("--json", "json_output", is_flag=True, help="Emit the preferences as JSON.")
@click.pass_context
def notifications_show(ctx: click.Context, json_output: bool) -> None:
    """Display the notification preferences."""
    app = _load_context(ctx)
    try:
        authorizations = app.preferences.load_authorizations()
    except NotificationError as exc:
        _handle_cli_error(
            str(exc), code="notification_error", json_output=json_output, original=exc
        )
        return

    if json_output:
        console.print_json(authorizations.to_json())
        return

    table = Table(title="Notifications")
    table.add_column("Type")
    table.add_column("Enabled")
    table.add_row("Tasks", "yes" if authorizations.task_enabled else "no")
    table.add_row("Events", "yes" if authorizations.event_enabled else "no")
    console.print(table)


@notifications.command("set")
@click.option("--task/--no-task", "task_enabled", default=None, help="Task reminders.")
@click.option("--event/--no-event", "event_enabled", default=None, help="Event reminders.")
@click.pass_context
def notifications_set(
    ctx: click.Context, task_enabled: Optional[bool], event_enabled: Optional[bool]
) -> None:
    """Enable or disable task and event reminders."""
    if task_enabled is None and event_enabled is None:
        raise click.UsageError("Pass --task/--no-task and/or --event/--no-event.")

    app = _load_context(ctx)
    try:
        current = app.preferences.load_authorizations()
    except NotificationError as exc:
        raise click.ClickException(str(exc)) from exc

    updates: dict[str, bool] = {}
    if task_enabled is not None:
        updates["task_enabled"] = task_enabled
    if event_enabled is not None:
        updates["event_enabled"] = event_enabled
    app.preferences.save_authorizations(current.model_copy(update=updates))
    _emit_message("[green]Notification preferences saved.[/green]", quiet=_is_quiet(ctx, app))


# ---------------------------------------------------------------------- #
# Configuration                                                          #
# ---------------------------------------------------------------------- #


@cli.group()
def config() -> None:
    """Manage Eduverse configuration files and overrides.

    Returns:
        None: This function is invoked for its side effects.
    """


@config.command("view")
@click.option("--no-env", is_flag=True, help="Ignore environment overrides when displaying output.")
@click.option(
    "--env",
    "as_env",
    is_flag=True,
    help="Print the settings as EDUVERSE__SECTION__KEY assignments.",
)
def config_view(no_env: bool, as_env: bool) -> None:
    """Display the effective configuration after applying precedence rules.

    Args:
        no_env: If True, ignore environment-derived overrides.
        as_env: If True, print environment assignments instead of YAML.

    Raises:
        click.ClickException: If configuration cannot be loaded.
    """
    manager = ConfigManager()
    try:
        config = manager.load(include_env=not no_env)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    if as_env:
        for name, value in sorted(flatten_for_env(config).items()):
            console.print(f"{name}={value}", markup=False, highlight=False, soft_wrap=True)
        return

    yaml_text = yaml.safe_dump(config.model_dump(mode="python"), sort_keys=False)
    console.print(Syntax(yaml_text, "yaml", word_wrap=True))


def _config_lines(manager: ConfigManager) -> list[str]:
    return [
        line
        for line in manager.read_text().splitlines()
        if not line.startswith("# Last updated:")
    ]


@config.command("set")
@click.argument("key")
@click.option("--value", required=True, help="Value to assign to KEY.")
def config_set(key: str, value: str) -> None:
    """Persist a configuration value expressed as a dotted KEY.

    Args:
        key: Dotted path describing the configuration field to update.
        value: YAML-literal value to write into the configuration file.

    Raises:
        click.ClickException: If parsing, assignment, or validation fails.
    """
    segments = [segment.strip() for segment in key.split(".") if segment.strip()]
    if not segments:
        raise click.ClickException("KEY must specify a dotted path such as 'pomodoro.cycles'.")

    manager = ConfigManager()
    manager.ensure_exists()
    before = _config_lines(manager)

    try:
        manager.set_value(".".join(segments), value)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    after = _config_lines(manager)
    diff = list(
        difflib.unified_diff(
            before,
            after,
            fromfile="config.yaml (before)",
            tofile="config.yaml (after)",
            lineterm="",
        )
    )

    if not diff:
        console.print("[yellow]No changes applied; value already up to date.[/yellow]")
        return

    console.print(Syntax("\n".join(diff), "diff", word_wrap=False))
    console.print(f"[green]Updated {'.'.join(segments)}.[/green]")


def main() -> None:
    """Invoke the Click CLI as the console script entry point.

    Returns:
        None: This function is invoked for its side effects.
    """
    cli()


if __name__ == "__main__":
    main()
