from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Sequence


class WaveShape(Enum):
    SINE = "sine"
    SQUARE = "square"


@dataclass(frozen=True)
class ScheduledToneEvent:
    """One tone to emit, in seconds relative to the moment its batch was submitted."""
    start_offset_seconds: float
    stop_offset_seconds: float
    frequency_hz: float
    wave_shape: WaveShape = WaveShape.SINE

    @property
    def duration_seconds(self) -> float:
        return self.stop_offset_seconds - self.start_offset_seconds


class ToneEmitter(ABC):
    """This class turns scheduled tone events into sound. Uses an audio output provided to play them."""
    @abstractmethod
    def schedule(self, events: Sequence[ScheduledToneEvent]) -> None:
        """
        Queue a batch of tones relative to now and return immediately.
        Batches submitted while earlier ones are still playing must overlap, not replace them.
        """
        pass

    def close(self) -> None:
        """Release any audio resource held by the emitter."""
        pass
