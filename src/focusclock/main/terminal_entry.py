import asyncio
import argparse
from dataclasses import dataclass

from focusclock.config import Settings
from focusclock.core.session import FocusSession
from focusclock.adapters.audio_adapters.recording_adapter import RecordingToneEmitter
from focusclock.adapters.audio_adapters.sd_adapter import SoundDeviceToneEmitter
from focusclock.tools.sound_tools.alarm_patterns import list_patterns
from focusclock.tools.time_tools.session_clock import SessionKind, CYCLE_LENGTH
from focusclock.tools.time_tools.ticker import Ticker
from focusclock.utils.logging_handler import setup_logger, set_log_level, set_log_console

logger = setup_logger(__name__)

KIND_ALIASES = {
    "work": SessionKind.WORK,
    "focus": SessionKind.WORK,
    "short": SessionKind.SHORT_BREAK,
    "long": SessionKind.LONG_BREAK,
}

HELP_TEXT = """commands:
  start | pause | reset | status
  kind <work|short|long>
  alarm <id> | preview [id] | alarms
  add <text> | toggle <n> | del <n> | todos
  quit"""


@dataclass
class Args:
    kind: str = "work"
    alarm: str | None = None
    repeats: int | None = None
    mute: bool = False
    log_level: str | None = None
    quiet: bool = False


def render_status(snapshot: dict) -> str:
    filled = snapshot["cycle_position"]
    cycle = "●" * filled + "○" * (CYCLE_LENGTH - filled)
    return (
        f"[{snapshot['label']}] {snapshot['remaining_formatted']} "
        f"{snapshot['progress'] * 100:5.1f}% {snapshot['status']} {cycle} "
        f"| todos {snapshot['todos_completed']}/{snapshot['todos_total']}"
    )


def render_todos(session: FocusSession) -> str:
    if not len(session.todos):
        return "(no todos)"
    return "\n".join(
        f"{n}. [{'x' if todo.completed else ' '}] {todo.text}"
        for n, todo in enumerate(session.todos.items, start=1)
    )


def _todo_id_at(session: FocusSession, arg: str):
    try:
        index = int(arg) - 1
    except ValueError:
        return None
    items = session.todos.items
    if 0 <= index < len(items):
        return items[index].id
    return None


def handle_command(session: FocusSession, line: str) -> str | None:
    """
    Apply one typed command to the session and return the text to show.
    Returns None when the user asked to quit.
    """
    command, _, arg = line.strip().partition(" ")
    command = command.lower()
    arg = arg.strip()

    if command in {"quit", "exit", "q"}:
        return None
    if command == "start":
        session.start()
    elif command == "pause":
        session.pause()
    elif command == "reset":
        session.reset()
    elif command == "kind":
        kind = KIND_ALIASES.get(arg.lower())
        if kind is None:
            return "usage: kind <work|short|long>"
        session.select_kind(kind)
    elif command == "alarm":
        if not session.select_alarm_pattern(arg):
            return f"unknown alarm '{arg}'"
        return f"alarm set to {arg}"
    elif command == "preview":
        events = session.preview_alarm(arg or None)
        return f"previewing {len(events)} tones" if events else f"unknown alarm '{arg}'"
    elif command == "alarms":
        return "\n".join(
            f"{'*' if p.id == session.alarm_pattern_id else ' '} {p.id:<8} {p.display_name}"
            for p in list_patterns()
        )
    elif command == "add":
        todo = session.add_todo(arg)
        return "todo text cannot be empty" if todo is None else f"added: {todo.text}"
    elif command in {"toggle", "del"}:
        todo_id = _todo_id_at(session, arg)
        if todo_id is None:
            return f"no todo #{arg}"
        if command == "toggle":
            session.toggle_todo(todo_id)
        else:
            session.delete_todo(todo_id)
        return render_todos(session)
    elif command == "todos":
        return render_todos(session)
    elif command in {"", "status"}:
        pass
    else:
        return HELP_TEXT
    return render_status(session.snapshot())


async def user_input_loop(session: FocusSession, loop=None):
    loop = asyncio.get_running_loop() if loop is None else loop
    while True:
        line = await loop.run_in_executor(None, input, ">>> ")
        output = handle_command(session, line)
        if output is None:
            return
        print(output)


def build_settings(args: Args) -> Settings:
    settings = Settings.from_env()
    if args.alarm:
        settings.alarm_pattern = args.alarm
    if args.repeats is not None:
        settings.alarm_repeats = args.repeats
    if args.mute:
        settings.mute = True
    if args.log_level:
        settings.log_level = args.log_level.upper()
    if args.quiet:
        settings.log_console = False
    return settings


async def run(args: Args) -> None:
    settings = build_settings(args)
    set_log_level(settings.log_level)
    set_log_console(settings.log_console)
    loop = asyncio.get_running_loop()

    if settings.mute:
        emitter = RecordingToneEmitter()
    else:
        emitter = SoundDeviceToneEmitter(rate=settings.sample_rate, volume=settings.volume)

    session = FocusSession(emitter, settings, loop=loop)
    session.select_kind(KIND_ALIASES.get(args.kind, SessionKind.WORK))
    ticker = Ticker(session.clock, loop=loop)

    last_status = {"value": session.clock.status}

    def _print_transitions(**status):
        if session.clock.status is not last_status["value"]:
            last_status["value"] = session.clock.status
            print(render_status(session.snapshot()))

    session.clock.on_change.add_listener(_print_transitions)
    session.clock.on_expired.add_listener(lambda **_: print("\a*** time is up ***"))

    print(render_status(session.snapshot()))
    print(HELP_TEXT)
    try:
        await user_input_loop(session, loop=loop)
    finally:
        ticker.close()
        emitter.close()


def main() -> None:
    default_args = Args()
    parser = argparse.ArgumentParser(description="Focus session timer.")
    parser.add_argument("--kind", choices=sorted(KIND_ALIASES), default=default_args.kind)
    parser.add_argument("--alarm", type=str, default=default_args.alarm)
    parser.add_argument("--repeats", type=int, default=default_args.repeats)
    parser.add_argument("--mute", action="store_true")
    parser.add_argument("--log-level", type=str, default=default_args.log_level)
    parser.add_argument("--quiet", action="store_true", help="keep log lines off the terminal; they still go to the log file")
    parsed_args = parser.parse_args()
    try:
        asyncio.run(run(Args(**vars(parsed_args))))
    except (KeyboardInterrupt, EOFError):
        logger.info("Exiting.")


if __name__ == "__main__":
    main()
