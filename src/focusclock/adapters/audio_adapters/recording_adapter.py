from focusclock.ports.act_port import ToneEmitter
from focusclock.utils.logging_handler import setup_logger

logger = setup_logger(__name__)


class RecordingToneEmitter(ToneEmitter):
    """Silent emitter that keeps every submitted batch. Used for --mute and headless runs."""

    def __init__(self):
        self.batches = []

    def schedule(self, events):
        batch = list(events)
        self.batches.append(batch)
        logger.info(f"[mute] {len(batch)} tones scheduled, last ends at +{batch[-1].stop_offset_seconds:.2f}s" if batch else "[mute] empty batch")

    @property
    def events(self):
        return [event for batch in self.batches for event in batch]

    def clear(self):
        self.batches = []
