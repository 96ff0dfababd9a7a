import os
import tempfile

# keep log files out of the source tree; must be set before focusclock is imported
os.environ.setdefault("FOCUSCLOCK_LOG_DIR", tempfile.mkdtemp(prefix="focusclock-logs-"))

import pytest

from focusclock.adapters.audio_adapters.recording_adapter import RecordingToneEmitter
from focusclock.config import Settings
from focusclock.core.session import FocusSession
from focusclock.tools.sound_tools.alarm_sequencer import AlarmSequencer
from focusclock.tools.time_tools.session_clock import SessionClock


@pytest.fixture
def emitter():
    return RecordingToneEmitter()


@pytest.fixture
def clock():
    return SessionClock()


@pytest.fixture
def sequencer(emitter):
    return AlarmSequencer(emitter)


@pytest.fixture
def session(emitter):
    return FocusSession(emitter, Settings())


def run_ticks(clock, n):
    for _ in range(n):
        clock.tick()
