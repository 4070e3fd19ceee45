"""Interactive CLI application."""
import logging
from datetime import datetime

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.table import Table

from quizstore.config import DEFAULT_DB_PATH, LOCAL_STORAGE_PATH
from quizstore.data_service import delete_all_user_data
from quizstore.db import Store, StoreError
from quizstore.logging_config import init_logging
from quizstore.onboarding import mark_welcome_seen, should_show_welcome
from quizstore.preferences import get_preference
from quizstore.progression import get_continues_until_next_level
from quizstore.samples import load_samples_if_needed
from quizstore.sessions import get_recent_sessions, get_session, is_replayable, replay_session
from quizstore.settings import is_openrouter_connected, remove_openrouter_key, store_openrouter_key
from quizstore.sidechannel import JsonFileStore, MemoryStore
from quizstore.state import AppState
from quizstore.storage import get_storage_breakdown
from quizstore.topics import get_all_topics

logger = logging.getLogger(__name__)

console = Console()

LETTERS = "abcdefgh"


def show_welcome(store: Store):
    if not should_show_welcome(store):
        return
    console.print(Panel(
        "[bold]Quiz Store[/bold]\n[dim]Your quizzes, kept on this device[/dim]",
        title="Welcome", border_style="blue",
    ))
    mark_welcome_seen(store)


def show_menu(store: Store):
    status = "[green]connected[/green]" if is_openrouter_connected(store) else "[dim]not connected[/dim]"
    console.print(f"\n[bold]Commands:[/bold]  (OpenRouter: {status})")
    commands = [
        ("history", "Recent quizzes"),
        ("topics", "Topics practiced"),
        ("play", "Replay a saved quiz"),
        ("continue", "Continue a topic at the next level"),
        ("connect", "Store an OpenRouter API key"),
        ("disconnect", "Remove the stored API key"),
        ("usage", "Storage used on this device"),
        ("delete", "Delete all my data"),
        ("quit", "Exit"),
    ]
    for cmd, desc in commands:
        console.print(f"  [cyan]{cmd:<14}[/cyan] {desc}")


def format_timestamp(timestamp) -> str:
    if not timestamp:
        return "-"
    return datetime.fromtimestamp(timestamp / 1000).strftime("%Y-%m-%d %H:%M")


def format_score(session: dict) -> str:
    if session.get("score") is None:
        return "-"
    return f"{session['score']}/{session.get('total_questions') or len(session.get('questions') or [])}"


def is_playable(question: dict) -> bool:
    options = question.get("options")
    correct = question.get("correct")
    return (
        bool(options) and len(options) <= len(LETTERS)
        and isinstance(correct, int) and 0 <= correct < len(options)
    )


def run_quiz_session(questions: list) -> tuple[list, int]:
    """Ask each question and return (answers, correct).

    Questions without options or a valid correct index are skipped and get
    a None answer.
    """
    answers = []
    correct = 0
    console.print(f"\n[bold]Quiz[/bold] — {len(questions)} questions\n")
    for i, q in enumerate(questions, 1):
        if not is_playable(q):
            console.print(f"[dim]Skipping Q{i}: no answer options saved.[/dim]\n")
            answers.append(None)
            continue
        console.print(f"[bold]Q{i}.[/bold] {q.get('question', '')}\n")
        options = q["options"]
        choices = list(LETTERS[:len(options)])
        for letter, option in zip(choices, options):
            console.print(f"  [cyan]{letter})[/cyan] {option}")
        answer = choices.index(Prompt.ask("\nYour answer", choices=choices))
        answers.append(answer)
        if answer == q["correct"]:
            console.print("[green]Correct![/green]")
            correct += 1
        else:
            console.print(f"[red]Incorrect.[/red] Answer: [green]{options[q['correct']]}[/green]")
        if q.get("right_answer_explanation"):
            console.print(f"[dim]{q['right_answer_explanation']}[/dim]")
        console.print()
    console.print(f"[bold]Score: {correct}/{len(questions)}[/bold]\n")
    return answers, correct


def cmd_history(store: Store):
    sessions = get_recent_sessions(store, limit=15)
    if not sessions:
        console.print("[yellow]No quizzes yet.[/yellow]")
        return
    table = Table(title="Recent Quizzes")
    table.add_column("ID", justify="right")
    table.add_column("Topic", style="cyan")
    table.add_column("Level")
    table.add_column("Score", justify="right")
    table.add_column("When")
    for s in sessions:
        topic = s.get("topic") or "-"
        if s.get("is_sample"):
            topic += " [dim](sample)[/dim]"
        table.add_row(
            str(s["id"]), topic, s.get("grade_level") or "-",
            format_score(s), format_timestamp(s.get("timestamp")),
        )
    console.print(table)


def cmd_topics(store: Store):
    topics = get_all_topics(store)
    if not topics:
        console.print("[yellow]No topics yet.[/yellow]")
        return
    table = Table(title="Topics")
    table.add_column("Topic", style="cyan")
    table.add_column("Questions", justify="right")
    table.add_column("Correct", justify="right")
    for t in topics:
        table.add_row(t.get("name") or t["id"], str(t.get("total_questions", 0)), str(t.get("correct_answers", 0)))
    console.print(table)


def cmd_play(store: Store, app_state: AppState):
    session_id = IntPrompt.ask("Quiz ID")
    session = get_session(store, session_id)
    if session is None:
        console.print(f"[red]No quiz with ID {session_id}.[/red]")
        return
    if not is_replayable(session) or not any(is_playable(q) for q in session["questions"]):
        console.print("[red]This quiz has no saved questions and can't be replayed.[/red]")
        return
    app_state.update({
        "current_topic": session.get("topic"),
        "current_questions": session["questions"],
    })
    answers, correct = run_quiz_session(session["questions"])
    replay_session(store, session_id, answers, correct)
    app_state.update({"current_answers": answers, "current_score": correct, "last_session_id": session_id})


def cmd_continue(store: Store, app_state: AppState):
    session_id = IntPrompt.ask("Continue from quiz ID")
    session = get_session(store, session_id)
    if session is None or not session.get("questions"):
        console.print("[red]That quiz can't be continued.[/red]")
        return
    chain = app_state.get_continue_chain()
    if chain is None or chain.topic != session.get("topic"):
        app_state.init_continue_chain(session.get("topic"), session.get("grade_level"), session["questions"])
    else:
        prompts = [q.get("question") for q in session["questions"]]
        if all(p in chain.previous_questions for p in prompts):
            console.print("[yellow]That quiz is already part of the chain. Pick the next quiz on this topic.[/yellow]")
            return
        app_state.add_to_continue_chain(session["questions"])
    chain = app_state.get_continue_chain()
    remaining = get_continues_until_next_level(chain.continue_count)
    console.print(Panel(
        f"Topic: [cyan]{chain.topic}[/cyan]\n"
        f"Rounds continued: [bold]{chain.continue_count}[/bold]\n"
        f"Next quiz level: [bold]{app_state.next_grade_level()}[/bold]\n"
        + (f"Level up in {remaining} more" if remaining is not None else "Top of the progression")
        + f"\n[dim]{len(chain.previous_questions)} questions will be avoided[/dim]",
        title="Continue Chain",
    ))


def cmd_connect(store: Store):
    key = Prompt.ask("OpenRouter API key", password=True).strip()
    if not key:
        console.print("[yellow]No key entered.[/yellow]")
        return
    store_openrouter_key(store, key)
    console.print("[green]Connected.[/green]")


def cmd_disconnect(store: Store):
    remove_openrouter_key(store)
    console.print("[green]Disconnected.[/green]")


def cmd_usage(store: Store, local_storage: MemoryStore):
    usage = get_storage_breakdown(store, local_storage)
    table = Table(title="Storage Used")
    table.add_column("Category")
    table.add_column("Size", justify="right")
    table.add_row("Settings", usage.settings)
    table.add_row("Quizzes", usage.quizzes)
    table.add_row("[bold]Total[/bold]", f"[bold]{usage.total}[/bold]")
    console.print(table)


def cmd_delete(store: Store, app_state: AppState, local_storage: MemoryStore, session_storage: MemoryStore):
    if not Confirm.ask("[red]Delete all quizzes, topics and settings?[/red]", default=False):
        return
    try:
        delete_all_user_data(store, app_state, local_storage, session_storage)
    except Exception as e:
        console.print(f"[red]Deletion failed: {e}[/red]")
        return
    console.print("[green]All your data was deleted. Sample quizzes are back.[/green]")


def build_app_state(local_storage: MemoryStore) -> AppState:
    """Fresh app state, seeded with the user's preferred grade level."""
    app_state = AppState()
    app_state.set("current_grade_level", get_preference(local_storage, "default_grade_level"))
    return app_state


def main():
    init_logging()
    store = Store(DEFAULT_DB_PATH)
    local_storage = JsonFileStore(LOCAL_STORAGE_PATH)
    session_storage = MemoryStore()
    app_state = build_app_state(local_storage)

    try:
        load_samples_if_needed(store)
    except StoreError as e:
        console.print(f"[red]Could not open your data: {e}[/red]")
        return

    show_welcome(store)

    while True:
        show_menu(store)
        choice = Prompt.ask("\n[bold]>[/bold]", default="history").strip().lower()
        try:
            if choice == "history":
                cmd_history(store)
            elif choice == "topics":
                cmd_topics(store)
            elif choice == "play":
                cmd_play(store, app_state)
            elif choice == "continue":
                cmd_continue(store, app_state)
            elif choice == "connect":
                cmd_connect(store)
            elif choice == "disconnect":
                cmd_disconnect(store)
            elif choice == "usage":
                cmd_usage(store, local_storage)
            elif choice == "delete":
                cmd_delete(store, app_state, local_storage, session_storage)
            elif choice in ("quit", "exit", "q"):
                console.print("[dim]Bye![/dim]")
                break
            else:
                console.print("[red]Unknown command. Try again.[/red]")
        except KeyboardInterrupt:
            console.print("\n[dim]Use 'quit' to exit.[/dim]")
        except Exception as e:
            logger.exception("Command %r failed", choice)
            console.print(f"[red]Error: {e}[/red]")

    store.close()


if __name__ == "__main__":
    main()
