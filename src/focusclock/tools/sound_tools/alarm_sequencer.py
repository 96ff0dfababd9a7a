from typing import Union
from focusclock.ports.act_port import ScheduledToneEvent, ToneEmitter
from focusclock.tools.sound_tools.alarm_patterns import AlarmPattern, get_pattern, wave_shape_for
from focusclock.utils import custom_exception as ce
from focusclock.utils.logging_handler import setup_logger

logger = setup_logger(__name__)

INTER_REPEAT_GAP_SECONDS = 0.2

PatternRef = Union[str, AlarmPattern]


def build_tone_events(pattern: AlarmPattern, repeat_count: int, gap_seconds: float = INTER_REPEAT_GAP_SECONDS) -> list:
    """
    Lay out every tone of `repeat_count` passes over `pattern`.

    Tone i of repeat r starts at r * (len * slot + gap) + i * slot and lasts one slot.
    Pure function: the same inputs always give the same offsets.
    """
    slot = pattern.slot_duration_seconds
    shape = wave_shape_for(pattern.id)
    stride = len(pattern) * slot + gap_seconds
    events = []
    for r in range(repeat_count):
        for i, frequency in enumerate(pattern.frequencies_hz):
            start = r * stride + i * slot
            events.append(ScheduledToneEvent(start, start + slot, frequency, shape))
    return events


class AlarmSequencer:
    """
    Turns alarm patterns into batches of timed tones for a ToneEmitter.

    Holds no timeline state: each call computes its own event list up front and
    hands it over in one piece, so overlapping calls play independently and an
    alarm that has been scheduled always runs to the end.
    """
    def __init__(self, emitter: ToneEmitter):
        self.emitter = emitter

    def play(self, pattern: PatternRef, repeat_count: int) -> list:
        """Schedule `repeat_count` passes with a fixed gap between passes. Unknown ids schedule nothing."""
        resolved = self._resolve(pattern)
        if resolved is None:
            return []
        if repeat_count < 1:
            logger.warning(f"Ignoring play of '{resolved.id}' with repeat count {repeat_count}.")
            return []
        events = build_tone_events(resolved, repeat_count)
        self._submit(resolved, events)
        return events

    def preview(self, pattern: PatternRef) -> list:
        """Single pass, no gap. Used to audition a pattern and for one-shot sounds."""
        resolved = self._resolve(pattern)
        if resolved is None:
            return []
        events = build_tone_events(resolved, 1, gap_seconds=0.0)
        self._submit(resolved, events)
        return events

    def _resolve(self, pattern: PatternRef):
        if isinstance(pattern, AlarmPattern):
            return pattern
        try:
            return get_pattern(pattern)
        except ce.UnknownAlarmPatternError as upe:
            logger.warning(f"{upe} Nothing scheduled.")
            return None

    def _submit(self, pattern: AlarmPattern, events: list):
        try:
            self.emitter.schedule(events)
            logger.debug(f"Scheduled {len(events)} tones for '{pattern.id}'.")
        except Exception as e:
            logger.exception(f"Tone emitter failed for '{pattern.id}': {e}")
