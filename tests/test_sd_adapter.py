import numpy as np
import pytest

from focusclock.adapters.audio_adapters.sd_adapter import (
    AudioContext,
    SoundDeviceToneEmitter,
    render_tone,
)
from focusclock.ports.act_port import ScheduledToneEvent, WaveShape

RATE = 8000


class OfflineContext(AudioContext):
    """AudioContext whose stream is never opened; blocks are pulled by the test."""

    def ensure_open(self):
        pass


def test_render_tone_length_and_envelope():
    samples = render_tone(440, WaveShape.SINE, 0.25, RATE, volume=0.5)
    assert samples.dtype == np.float32
    assert len(samples) == 2000
    assert samples[0] == pytest.approx(0.0)
    assert samples[-1] == pytest.approx(0.0, abs=1e-3)
    assert np.max(np.abs(samples)) <= 0.5 + 1e-6


def test_square_wave_is_flat_topped():
    samples = render_tone(100, WaveShape.SQUARE, 0.1, RATE, volume=1.0)
    middle = samples[100:-100]
    assert set(np.round(np.abs(middle[middle != 0]), 3)) == {0.5}


def test_zero_length_tone():
    assert len(render_tone(440, WaveShape.SINE, 0, RATE)) == 0


def test_mix_block_places_voices_at_their_offsets():
    context = OfflineContext(rate=RATE)
    ones = np.ones(4, dtype=np.float32) * 0.25
    context.add_voices([(2, ones), (4, ones)])

    block = context.mix_block(10)
    assert list(block) == pytest.approx([0, 0, 0.25, 0.25, 0.5, 0.5, 0.25, 0.25, 0, 0])
    assert context.pending_voices() == 0
    assert context.current_frame() == 10


def test_mix_block_keeps_voices_that_span_blocks_and_clips():
    context = OfflineContext(rate=RATE)
    loud = np.ones(6, dtype=np.float32) * 0.8
    context.add_voices([(0, loud), (0, loud)])

    first = context.mix_block(4)
    assert np.all(first == 1.0)
    assert context.pending_voices() == 2
    second = context.mix_block(4)
    assert list(second) == pytest.approx([1.0, 1.0, 0, 0])


def test_emitter_schedules_relative_to_current_playhead():
    context = OfflineContext(rate=RATE)
    context.mix_block(100)
    emitter = SoundDeviceToneEmitter(rate=RATE, volume=0.3, context=context)
    emitter.schedule([
        ScheduledToneEvent(0.0, 0.01, 440.0),
        ScheduledToneEvent(0.02, 0.03, 880.0, WaveShape.SQUARE),
    ])

    starts = sorted(start for start, _ in context._voices)
    assert starts == [100, 260]


def test_emitter_drops_tones_when_output_cannot_open():
    class NoDevice(AudioContext):
        def ensure_open(self):
            raise OSError("PortAudio library not found")

    context = NoDevice(rate=RATE)
    emitter = SoundDeviceToneEmitter(rate=RATE, context=context)
    emitter.schedule([ScheduledToneEvent(0.0, 0.1, 440.0)])
    assert context.pending_voices() == 0


def test_rendered_tones_are_cached():
    emitter = SoundDeviceToneEmitter(rate=RATE, context=OfflineContext(rate=RATE))
    event = ScheduledToneEvent(0.0, 0.1, 440.0)
    emitter.schedule([event, event])
    assert len(emitter._tone_cache) == 1
