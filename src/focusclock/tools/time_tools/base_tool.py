import asyncio
from abc import ABC, abstractmethod
from focusclock.core.status import ClockStatus
from focusclock.utils.logging_handler import setup_logger
from focusclock.utils import Event

logger = setup_logger(__name__)


class TimeTool(ABC):
    """
    An abstract base class for tick-driven time tools.
    It owns the Idle/Running/Expired status and the event hooks that observers
    subscribe to. Subclasses implement the actual transitions and decide when
    a change is worth announcing.
    """
    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        """Initializes the TimeTool in the IDLE state with its event hooks."""
        self._status = ClockStatus.IDLE

        self.on_tick = Event(loop)
        self.on_start = Event(loop)
        self.on_pause = Event(loop)
        self.on_reset = Event(loop)
        self.on_change = Event(loop)

    @property
    def status(self) -> ClockStatus:
        return self._status

    @property
    def is_running(self) -> bool:
        """Property that returns True if the tool is currently counting."""
        return self._status is ClockStatus.RUNNING

    @property
    def is_expired(self) -> bool:
        return self._status is ClockStatus.EXPIRED

    def _announce_change(self, before) -> None:
        """Emit on_change with a fresh status dict if the observable state moved since `before`."""
        if self._state_key() != before:
            self.on_change.emit(**self.get_status())

    @abstractmethod
    def _state_key(self):
        """Hashable summary of everything an observer can see."""

    @abstractmethod
    def start(self):
        pass

    @abstractmethod
    def pause(self):
        pass

    @abstractmethod
    def reset(self):
        pass

    @abstractmethod
    def tick(self):
        """Advance by one time unit. Called by an external periodic source."""

    @abstractmethod
    def get_status(self) -> dict:
        """
        Should return a dictionary containing relevant state data (e.g. remaining time).
        """
