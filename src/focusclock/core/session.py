from focusclock.config import Settings
from focusclock.ports.act_port import ToneEmitter
from focusclock.tools.sound_tools.alarm_patterns import (
    ALARM_PATTERNS,
    DEFAULT_ALARM_PATTERN_ID,
    TODO_COMPLETE_PATTERN,
)
from focusclock.tools.sound_tools.alarm_sequencer import AlarmSequencer
from focusclock.tools.task_tools.todo_list import TodoList
from focusclock.tools.time_tools.session_clock import SessionClock, SessionKind
from focusclock.utils.time_conversions import format_seconds_to_ms
from focusclock.utils.logging_handler import setup_logger

logger = setup_logger(__name__)


class FocusSession:
    """
    Front door for a UI: accepts user intents and wires the clock, the alarm
    sequencer and the todo list together.

    The only links between the parts are events: clock expiry plays the
    selected alarm, and a todo turning done plays the completion chime.
    A tick source is attached separately (see Ticker).
    """
    def __init__(self, emitter: ToneEmitter, settings: Settings | None = None, loop=None):
        self.settings = settings or Settings()
        self.clock = SessionClock(loop=loop)
        self.sequencer = AlarmSequencer(emitter)
        self.todos = TodoList()

        self._alarm_pattern_id = DEFAULT_ALARM_PATTERN_ID
        if not self.select_alarm_pattern(self.settings.alarm_pattern):
            logger.warning(f"Falling back to the '{DEFAULT_ALARM_PATTERN_ID}' alarm.")

        self.clock.on_expired.add_listener(self._on_expired)
        self.todos.on_completed.add_listener(self._on_todo_completed)

    @property
    def alarm_pattern_id(self) -> str:
        return self._alarm_pattern_id

    # --- clock intents ---
    def start(self):
        self.clock.start()

    def pause(self):
        self.clock.pause()

    def reset(self):
        self.clock.reset()

    def select_kind(self, kind: SessionKind):
        self.clock.select_kind(kind)

    # --- alarm intents ---
    def select_alarm_pattern(self, pattern_id: str) -> bool:
        if pattern_id not in ALARM_PATTERNS:
            logger.warning(f"Unknown alarm pattern '{pattern_id}' ignored.")
            return False
        self._alarm_pattern_id = pattern_id
        logger.info(f"Alarm pattern set to '{pattern_id}'.")
        return True

    def preview_alarm(self, pattern_id: str | None = None) -> list:
        return self.sequencer.preview(pattern_id or self._alarm_pattern_id)

    # --- todo intents ---
    def add_todo(self, text: str):
        return self.todos.add(text)

    def toggle_todo(self, todo_id: str) -> bool:
        return self.todos.toggle(todo_id)

    def delete_todo(self, todo_id: str) -> bool:
        return self.todos.delete(todo_id)

    def snapshot(self) -> dict:
        """Everything a view needs to render the current state."""
        clock = self.clock
        return {
            "kind": clock.kind.name,
            "label": clock.kind.label,
            "status": clock.status.value,
            "remaining_seconds": clock.remaining_seconds,
            "remaining_formatted": format_seconds_to_ms(clock.remaining_seconds),
            "progress": clock.progress_fraction(),
            "is_running": clock.is_running,
            "is_expired": clock.is_expired,
            "completed_work_sessions": clock.completed_work_sessions,
            "cycle_position": clock.cycle_position,
            "alarm_pattern": self._alarm_pattern_id,
            "todos_total": len(self.todos),
            "todos_remaining": self.todos.remaining_count,
            "todos_completed": self.todos.completed_count,
        }

    def _on_expired(self, kind, completed_work_sessions):
        logger.info(f"Playing '{self._alarm_pattern_id}' alarm for the end of {kind.label}.")
        self.sequencer.play(self._alarm_pattern_id, self.settings.alarm_repeats)

    def _on_todo_completed(self, todo):
        self.sequencer.preview(TODO_COMPLETE_PATTERN)
