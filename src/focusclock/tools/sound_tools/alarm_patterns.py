from dataclasses import dataclass
from focusclock.ports.act_port import WaveShape
from focusclock.utils.custom_exception import UnknownAlarmPatternError


@dataclass(frozen=True)
class AlarmPattern:
    id: str
    display_name: str
    frequencies_hz: tuple
    slot_duration_seconds: float

    def __len__(self):
        return len(self.frequencies_hz)

    @property
    def cycle_seconds(self) -> float:
        """Length of one pass over the pattern."""
        return len(self.frequencies_hz) * self.slot_duration_seconds


DEFAULT_ALARM_PATTERN_ID = "bell"
HARSH_PATTERN_ID = "buzzer"

ALARM_PATTERNS = {
    pattern.id: pattern
    for pattern in (
        AlarmPattern("bell", "Bell", (880, 1100, 880), 0.15),
        AlarmPattern("chime", "Chime", (523.25, 659.25, 783.99, 1046.5), 0.2),
        AlarmPattern("digital", "Digital", (1200, 1500, 1200, 1500), 0.08),
        AlarmPattern("gentle", "Gentle", (392, 523.25), 0.4),
        AlarmPattern(HARSH_PATTERN_ID, "Buzzer", (220, 220, 220), 0.25),
    )
}

# C5-E5-G5, played once when a task is ticked off
TODO_COMPLETE_PATTERN = AlarmPattern("todo-complete", "Task Done", (523.25, 659.25, 783.99), 0.1)


def wave_shape_for(pattern_id: str) -> WaveShape:
    return WaveShape.SQUARE if pattern_id == HARSH_PATTERN_ID else WaveShape.SINE


def get_pattern(pattern_id: str) -> AlarmPattern:
    try:
        return ALARM_PATTERNS[pattern_id]
    except (KeyError, TypeError):
        raise UnknownAlarmPatternError(f"Alarm pattern '{pattern_id}' not found.") from None


def list_patterns():
    return list(ALARM_PATTERNS.values())
