"""Interactive CLI application."""
import logging
import os
import time
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import Progress, BarColumn, TextColumn
from rich.prompt import Confirm, Prompt
from rich.table import Table

from studygenie.adaptive import build_quiz
from studygenie.auth import AuthError, LocalIdentityProvider
from studygenie.config import (
    DEFAULT_CONFIG_PATH, DEFAULT_DATA_DIR, PROVIDER_KEYS, load_config, mask_secret, save_config,
)
from studygenie.dashboard import (
    format_study_time, get_progress_color, get_progress_label, get_recommendation,
    get_study_stats, get_subject_breakdown,
)
from studygenie.notes import ensure_notes
from studygenie.quiz import QuizSession
from studygenie.review import get_focus_topics, get_weak_topics_by_subject
from studygenie.seed import load_baseline_questions, seed_demo
from studygenie.storage import LocalBlobStorage, UploadError
from studygenie.store import ProgressStore
from studygenie.syllabus import process_syllabus, save_syllabus
from studygenie.utils import format_time

console = Console()
logger = logging.getLogger(__name__)

EXIT_WORDS = ("q", "menu")
LETTERS = ["a", "b", "c", "d"]


class SessionExitRequested(Exception):
    """User asked to leave the current activity and return to the menu."""


def session_prompt(prompt: str, **kwargs) -> str:
    choices = kwargs.pop("choices", None)
    if choices is not None:
        choices = list(choices) + [w for w in EXIT_WORDS if w not in choices]
    answer = Prompt.ask(prompt, choices=choices, **kwargs)
    if answer.strip().lower() in EXIT_WORDS:
        raise SessionExitRequested()
    return answer


def configure_logging(level: str | None = None) -> None:
    level = level or os.environ.get("STUDYGENIE_LOG_LEVEL", "WARNING")
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def show_welcome():
    console.print(Panel(
        "[bold]StudyGenie[/bold]\n[dim]Syllabus-driven study tracker[/dim]",
        title="Welcome", border_style="blue",
    ))


def show_menu():
    console.print("\n[bold]Commands:[/bold]")
    commands = [
        ("dashboard", "Progress overview"),
        ("subjects", "Browse subjects and topics"),
        ("notes", "Study notes for a topic"),
        ("complete", "Mark a topic complete / incomplete"),
        ("quiz", "Adaptive quiz"),
        ("review", "Drill weak areas"),
        ("syllabus", "Add a subject from a syllabus"),
        ("upload", "Upload study material"),
        ("signup", "Create an account"),
        ("login", "Sign in"),
        ("logout", "Sign out"),
        ("profile", "Account and study statistics"),
        ("settings", "Provider configuration"),
        ("quit", "Exit"),
    ]
    for cmd, desc in commands:
        console.print(f"  [cyan]{cmd:<14}[/cyan] {desc}")


def render_question(session: QuizSession) -> None:
    q = session.current_question
    total = len(session.questions)
    tag = " [magenta](adaptive)[/magenta]" if q.is_adaptive else ""
    console.print(
        f"\n[bold]Q{session.question_index + 1}/{total}.[/bold]{tag} {q.question}"
        f"  [dim]{format_time(session.time_left)} left[/dim]\n"
    )
    selected = session.answers.get(q.id)
    for letter, option in zip(LETTERS, q.options):
        marker = " [green]<[/green]" if selected == LETTERS.index(letter) else ""
        console.print(f"  [cyan]{letter})[/cyan] {option}{marker}")


def show_quiz_result(session: QuizSession) -> None:
    result = session.result
    color = get_progress_color(result.score)
    console.print(Panel(
        f"[bold {color}]{result.score}%[/bold {color}]  "
        f"{result.correct_answers}/{result.total_questions} correct in {format_time(result.time_spent)}",
        title="Quiz Complete", border_style=color,
    ))
    for q in session.questions:
        answer = session.answers.get(q.id)
        if answer is None:
            status = "[dim]skipped[/dim]"
        elif answer == q.correct_answer_index:
            status = "[green]correct[/green]"
        else:
            status = f"[red]incorrect[/red] (answer: {LETTERS[q.correct_answer_index]})"
        console.print(f"  {status} {q.question}")
        if q.explanation and answer != q.correct_answer_index:
            console.print(f"    [dim]{q.explanation}[/dim]")
    if result.weak_topics:
        console.print(f"\n[yellow]Topics to review: {', '.join(result.weak_topics)}[/yellow]")


def run_quiz_session(store: ProgressStore, questions: list, clock=time.monotonic):
    """Walk the user through a quiz; returns the result, or None if nothing to ask."""
    if not questions:
        console.print("[yellow]No questions available![/yellow]")
        return None
    session = QuizSession(questions, on_finish=store.update_user_progress, clock=clock)
    last = clock()
    while not session.finished:
        render_question(session)
        answer = session_prompt(
            "\nAnswer (n=next, p=previous, f=finish)", choices=LETTERS + ["n", "p", "f"],
        ).strip().lower()
        elapsed = int(clock() - last)
        last += elapsed
        session.tick(elapsed)
        if session.finished:
            console.print("[red]Time's up![/red]")
            break
        if answer in LETTERS:
            session.select_answer(LETTERS.index(answer))
            if session.question_index == session.last_index:
                session.finish()
            else:
                session.next_question()
        elif answer == "n":
            session.next_question()
        elif answer == "p":
            session.previous_question()
        elif answer == "f":
            session.finish()
    store.record_study_activity(session.result.time_spent)
    show_quiz_result(session)
    return session.result


def run_stage_progress(label: str, task_fn):
    """Run ``task_fn(on_progress)`` under a rich progress bar."""
    with Progress(TextColumn("{task.description}"), BarColumn(), TextColumn("{task.percentage:>3.0f}%"),
                  console=console) as progress:
        task = progress.add_task(label, total=100)

        def on_progress(stage_name, pct):
            progress.update(task, completed=pct, description=stage_name)

        return task_fn(on_progress)


def ask_topic(store: ProgressStore):
    topic_id = session_prompt("Topic id")
    topic = store.find_topic(topic_id.strip())
    if topic is None:
        console.print(f"[red]Unknown topic: {topic_id}[/red]")
    return topic


def cmd_dashboard(store: ProgressStore):
    stats = get_study_stats(store)
    overall = stats["overall_progress"]
    color = get_progress_color(overall)
    bar_filled = int(overall / 5)
    bar = f"[{color}]{'█' * bar_filled}{'░' * (20 - bar_filled)}[/{color}]"
    console.print(Panel(f"[bold]Day {stats['days_tracked']}[/bold] of tracking",
                        title="StudyGenie Dashboard", border_style="blue"))
    console.print(f"\n  Overall Progress: [bold]{overall}%[/bold] {bar} "
                  f"[{color}]{get_progress_label(overall)}[/{color}]\n")

    table = Table(title="Subjects")
    table.add_column("Subject", style="cyan")
    table.add_column("Topics", justify="right")
    table.add_column("Progress", justify="right")
    table.add_column("Weak", justify="right")
    table.add_column("Status")
    for row in get_subject_breakdown(store):
        sc = get_progress_color(row["progress"])
        table.add_row(
            row["name"],
            f"{row['completed_topics']}/{row['total_topics']}",
            f"{row['progress']}%",
            str(row["weak_topics"]),
            f"[{sc}]{row['label']}[/{sc}]",
        )
    console.print(table)

    console.print(f"\n  Streak: [bold]{stats['streak_days']} days[/bold]  |  "
                  f"Study time: [bold]{format_study_time(stats['total_study_time'])}[/bold]  |  "
                  f"Quizzes: [bold]{stats['quizzes_taken']}[/bold]  |  "
                  f"Avg score: [bold]{stats['average_score']}%[/bold]")

    focus = get_recommendation(store)
    if focus:
        console.print(f"\n  [yellow]Recommendation: Focus on {focus}[/yellow]")


def cmd_subjects(store: ProgressStore):
    if not store.subjects:
        console.print("[yellow]No subjects yet. Use 'syllabus' to add one.[/yellow]")
        return
    for subject in store.subjects:
        table = Table(title=f"{subject.name} ({subject.progress}%)")
        table.add_column("Id", style="dim")
        table.add_column("Unit")
        table.add_column("Topic", style="cyan")
        table.add_column("Status")
        for unit in subject.units:
            for topic in unit.topics:
                flags = []
                if topic.completed:
                    flags.append("[green]done[/green]")
                if topic.has_notes:
                    flags.append("notes")
                if topic.weak_area:
                    flags.append("[red]weak[/red]")
                table.add_row(topic.id, unit.name, topic.name, " ".join(flags))
        console.print(table)


def cmd_complete(store: ProgressStore):
    topic = ask_topic(store)
    if topic is None:
        return
    store.update_topic_completion(topic.id, not topic.completed)
    state = "complete" if topic.completed else "not complete"
    console.print(f"[green]{topic.name} marked {state}.[/green]")


def cmd_notes(store: ProgressStore):
    topic = ask_topic(store)
    if topic is None:
        return
    if topic.notes is None:
        run_stage_progress("Generating notes...",
                           lambda on_progress: ensure_notes(store, topic.id, on_progress=on_progress))
    notes = topic.notes
    console.print(Panel(notes.overview, title=topic.name, border_style="cyan"))
    for heading, items in (("Key Points", notes.key_points), ("Examples", notes.examples),
                           ("Practice Questions", notes.practice_questions)):
        console.print(f"\n[bold]{heading}[/bold]")
        for item in items:
            console.print(f"  • {item}")
    if not topic.completed and Confirm.ask("\nMark this topic complete?", default=False):
        store.update_topic_completion(topic.id, True)
        console.print("[green]Topic complete![/green]")


def cmd_quiz(store: ProgressStore):
    questions = build_quiz(store, load_baseline_questions())
    run_quiz_session(store, questions)


def cmd_review(store: ProgressStore):
    console.print("\n[bold]Weak Area Review[/bold]\n")
    grouped = get_weak_topics_by_subject(store)
    if not grouped:
        console.print("[green]No weak areas detected! Keep up the good work.[/green]")
        return
    table = Table(title="Weak Topics")
    table.add_column("Subject")
    table.add_column("Unit")
    table.add_column("Topic", style="red")
    for group in grouped:
        for t in group["topics"]:
            table.add_row(group["subject_name"], t["unit_name"], t["topic_name"])
    console.print(table)

    focus = get_focus_topics(store)
    if focus:
        console.print(f"\n[bold]Drilling: {', '.join(focus)}[/bold]")
        run_quiz_session(store, store.generate_adaptive_questions(focus))


def cmd_syllabus(store: ProgressStore):
    file_path = session_prompt("Syllabus file path (blank to paste text)", default="").strip()
    text = ""
    if not file_path:
        text = session_prompt("Paste syllabus text")
    parsed = run_stage_progress(
        "Processing syllabus...",
        lambda on_progress: process_syllabus(file_path or None, text=text, on_progress=on_progress),
    )
    console.print(f"\n[bold]{parsed.subject}[/bold] — {parsed.topic_count} topics")
    for unit in parsed.units:
        console.print(f"  [cyan]{unit.name}[/cyan]: {', '.join(unit.topics)}")
    if Confirm.ask("\nSave this syllabus?", default=True):
        subject = save_syllabus(store, parsed)
        console.print(f"[green]Added {subject.name} ({subject.total_topics} topics).[/green]")


def cmd_upload(storage: LocalBlobStorage):
    file_path = session_prompt("File path").strip()
    with Progress(TextColumn("Uploading"), BarColumn(), TextColumn("{task.percentage:>3.0f}%"),
                  console=console) as progress:
        task = progress.add_task("upload", total=100)
        try:
            url = storage.upload(
                file_path, on_progress=lambda snap: progress.update(task, completed=snap.percent),
            )
        except UploadError as e:
            progress.stop()
            console.print(f"[red]{e}[/red]")
            return None
    console.print(f"[green]Uploaded![/green] {url}")
    return url


def cmd_signup(provider: LocalIdentityProvider):
    name = session_prompt("Name")
    email = session_prompt("Email")
    password = Prompt.ask("Password", password=True)
    try:
        provider.sign_up(email, password, name)
    except AuthError as e:
        console.print(f"[red]Sign up failed: {e}[/red]")


def cmd_login(provider: LocalIdentityProvider):
    email = session_prompt("Email")
    password = Prompt.ask("Password", password=True)
    try:
        provider.sign_in(email, password)
    except AuthError as e:
        console.print(f"[red]Sign in failed: {e}[/red]")


def cmd_logout(provider: LocalIdentityProvider):
    provider.sign_out()


def cmd_profile(provider: LocalIdentityProvider, store: ProgressStore):
    user = provider.current_user
    if user is None:
        console.print("[yellow]Not signed in.[/yellow] Use 'signup' or 'login'.")
    else:
        console.print(Panel(
            f"[bold]{user.display_name}[/bold]\n{user.email}\n[dim]{user.avatar_url}[/dim]",
            title="Profile", border_style="blue",
        ))

    stats = get_study_stats(store)
    table = Table(title="Study Statistics")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Study time", format_study_time(stats["total_study_time"]))
    table.add_row("Streak", f"{stats['streak_days']} days")
    table.add_row("Topics completed", str(stats["completed_topics"]))
    table.add_row("Quizzes taken", str(stats["quizzes_taken"]))
    table.add_row("Average score", f"{stats['average_score']}%")
    table.add_row("Weak topics", str(stats["weak_topic_count"]))
    console.print(table)
    return user


def cmd_settings(config_path: str):
    config = load_config(config_path)
    table = Table(title="Provider Configuration")
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    for key in PROVIDER_KEYS:
        value = config.get(key, "")
        table.add_row(key, mask_secret(value) if key == "api_key" else value)
    console.print(table)
    if not Confirm.ask("Edit settings?", default=False):
        return
    for key in PROVIDER_KEYS:
        value = Prompt.ask(key, default=config.get(key, ""), password=(key == "api_key"),
                           show_default=key != "api_key")
        config[key] = value.strip()
    save_config(config_path, config)
    console.print("[green]Settings saved.[/green]")


def on_auth_change(user):
    if user is None:
        console.print("[dim]Not signed in.[/dim]")
    else:
        console.print(f"[green]Signed in as {user.display_name} ({user.email})[/green]")


def main():
    configure_logging()
    config_path = DEFAULT_CONFIG_PATH
    store = ProgressStore()
    seed_demo(store)
    provider = LocalIdentityProvider()
    storage = LocalBlobStorage(Path(DEFAULT_DATA_DIR))

    show_welcome()
    provider.on_auth_state_changed(on_auth_change)

    commands = {
        "dashboard": lambda: cmd_dashboard(store),
        "subjects": lambda: cmd_subjects(store),
        "notes": lambda: cmd_notes(store),
        "complete": lambda: cmd_complete(store),
        "quiz": lambda: cmd_quiz(store),
        "review": lambda: cmd_review(store),
        "syllabus": lambda: cmd_syllabus(store),
        "upload": lambda: cmd_upload(storage),
        "signup": lambda: cmd_signup(provider),
        "login": lambda: cmd_login(provider),
        "logout": lambda: cmd_logout(provider),
        "profile": lambda: cmd_profile(provider, store),
        "settings": lambda: cmd_settings(config_path),
    }

    while True:
        show_menu()
        choice = Prompt.ask("\n[bold]>[/bold]", default="dashboard").strip().lower()
        try:
            if choice in commands:
                commands[choice]()
            elif choice in ("quit", "exit", "q"):
                console.print("[dim]Keep up the streak![/dim]")
                break
            else:
                console.print("[red]Unknown command. Try again.[/red]")
        except SessionExitRequested:
            console.print("[dim]Back to menu.[/dim]")
        except KeyboardInterrupt:
            console.print("\n[dim]Use 'quit' to exit.[/dim]")
        except Exception as e:
            logger.debug("Command %s failed", choice, exc_info=True)
            console.print(f"[red]Error: {e}[/red]")


if __name__ == "__main__":
    main()
