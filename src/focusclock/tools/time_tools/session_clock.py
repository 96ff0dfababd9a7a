from enum import Enum, auto
from focusclock.core.status import ClockStatus
from focusclock.tools.time_tools.base_tool import TimeTool, Event
from focusclock.utils.time_conversions import convert_to_seconds, format_seconds_to_ms
from focusclock.utils.logging_handler import setup_logger

logger = setup_logger(__name__)

CYCLE_LENGTH = 4


class SessionKind(Enum):
    WORK = auto()
    SHORT_BREAK = auto()
    LONG_BREAK = auto()

    @property
    def duration(self) -> int:
        return SESSION_DURATIONS[self]

    @property
    def label(self) -> str:
        return SESSION_LABELS[self]


SESSION_DURATIONS = {
    SessionKind.WORK: convert_to_seconds(0, 25, 0),
    SessionKind.SHORT_BREAK: convert_to_seconds(0, 5, 0),
    SessionKind.LONG_BREAK: convert_to_seconds(0, 15, 0),
}

SESSION_LABELS = {
    SessionKind.WORK: "Focus",
    SessionKind.SHORT_BREAK: "Short Break",
    SessionKind.LONG_BREAK: "Long Break",
}


def duration_of(kind: SessionKind) -> int:
    return SESSION_DURATIONS[kind]


class SessionClock(TimeTool):
    """
    Countdown state machine for one focus/break session.

    The clock never reads the wall clock: it moves only when `tick()` is called,
    which an external 1 Hz source does while the clock is running. Every public
    operation is total; disallowed intents are logged and ignored.

    Events:
        on_change: any transition of status, kind or remaining seconds.
        on_expired: exactly once per RUNNING -> EXPIRED transition.
        on_tick / on_start / on_pause / on_reset: finer-grained hooks.
    """
    def __init__(self, kind: SessionKind = SessionKind.WORK, loop=None):
        super().__init__(loop)
        self._kind = kind
        self._remaining_seconds = duration_of(kind)
        self._completed_work_sessions = 0

        self.on_expired = Event(loop)
        self.on_kind_change = Event(loop)

    @property
    def kind(self) -> SessionKind:
        return self._kind

    @property
    def remaining_seconds(self) -> int:
        return self._remaining_seconds

    @property
    def completed_work_sessions(self) -> int:
        return self._completed_work_sessions

    @property
    def cycle_position(self) -> int:
        """Position inside the repeating four-session cycle, 0..3."""
        return self._completed_work_sessions % CYCLE_LENGTH

    def start(self):
        if self._status is ClockStatus.RUNNING:
            logger.warning("Session clock is already running.")
            return
        if self._remaining_seconds <= 0:
            logger.warning(f"Cannot start a {self._kind.name} session with no time left; reset or switch first.")
            return
        before = self._state_key()
        self._status = ClockStatus.RUNNING
        self.on_start.emit(kind=self._kind.name, remaining_time=self._remaining_seconds)
        logger.info(f"{self._kind.label} session started with {format_seconds_to_ms(self._remaining_seconds)} left.")
        self._announce_change(before)

    def pause(self):
        if self._status is not ClockStatus.RUNNING:
            logger.debug(f"Pause ignored: clock is {self._status.value}.")
            return
        before = self._state_key()
        self._status = ClockStatus.IDLE
        self.on_pause.emit(kind=self._kind.name, remaining_time=self._remaining_seconds)
        logger.info(f"{self._kind.label} session paused at {format_seconds_to_ms(self._remaining_seconds)}.")
        self._announce_change(before)

    def reset(self):
        """Back to IDLE with the full duration of the current kind. Never counts as a completion."""
        before = self._state_key()
        self._status = ClockStatus.IDLE
        self._remaining_seconds = duration_of(self._kind)
        self.on_reset.emit(kind=self._kind.name, remaining_time=self._remaining_seconds)
        logger.info(f"{self._kind.label} session reset.")
        self._announce_change(before)

    def select_kind(self, kind: SessionKind):
        """Switch session kind. Allowed in any status; a running session is stopped."""
        before = self._state_key()
        previous = self._kind
        self._kind = kind
        self._status = ClockStatus.IDLE
        self._remaining_seconds = duration_of(kind)
        if previous is not kind:
            self.on_kind_change.emit(previous_kind=previous.name, kind=kind.name)
            logger.info(f"Switched from {previous.label} to {kind.label}.")
        self._announce_change(before)

    def tick(self):
        if self._status is not ClockStatus.RUNNING:
            logger.debug(f"Tick ignored: clock is {self._status.value}.")
            return
        before = self._state_key()
        self._remaining_seconds = max(0, self._remaining_seconds - 1)
        expired = self._remaining_seconds == 0
        if expired:
            self._status = ClockStatus.EXPIRED
            if self._kind is SessionKind.WORK:
                self._completed_work_sessions += 1

        self.on_tick.emit(
            remaining_time=self._remaining_seconds,
            phase=self._kind.name,
            remaining_time_formatted=format_seconds_to_ms(self._remaining_seconds),
        )
        self._announce_change(before)

        if expired:
            logger.info(f"{self._kind.label} session finished. Completed work sessions: {self._completed_work_sessions}.")
            self.on_expired.emit(kind=self._kind, completed_work_sessions=self._completed_work_sessions)

    def progress_fraction(self) -> float:
        """0.0 at full duration, 1.0 at expiry."""
        return 1 - self._remaining_seconds / duration_of(self._kind)

    def get_status(self) -> dict:
        return {
            "kind": self._kind.name,
            "label": self._kind.label,
            "status": self._status.value,
            "is_running": self.is_running,
            "is_expired": self.is_expired,
            "remaining_time": self._remaining_seconds,
            "remaining_time_formatted": format_seconds_to_ms(self._remaining_seconds),
            "total_duration": duration_of(self._kind),
            "progress": self.progress_fraction(),
            "completed_work_sessions": self._completed_work_sessions,
            "cycle_position": self.cycle_position,
        }

    def _state_key(self):
        return (self._kind, self._status, self._remaining_seconds)
