import threading
import numpy as np
from focusclock.ports.act_port import ToneEmitter, WaveShape
from focusclock.utils.logging_handler import setup_logger


logger = setup_logger(__name__)

FADE_SECONDS = 0.005
# square waves sound much louder than sines at the same amplitude
SQUARE_GAIN = 0.5


def render_tone(frequency_hz, shape, duration_seconds, rate, volume=0.3):
    """Float32 mono samples for one tone with a raised-cosine attack and release."""
    n = int(round(duration_seconds * rate))
    if n <= 0:
        return np.zeros(0, dtype=np.float32)
    t = np.arange(n) / rate
    wave = np.sin(2 * np.pi * frequency_hz * t)
    if shape is WaveShape.SQUARE:
        wave = np.sign(wave) * SQUARE_GAIN

    fade = min(int(rate * FADE_SECONDS), n // 2)
    if fade > 0:
        ramp = 0.5 - 0.5 * np.cos(np.linspace(0, np.pi, fade))
        envelope = np.ones(n)
        envelope[:fade] = ramp
        envelope[-fade:] = ramp[::-1]
        wave = wave * envelope
    return (volume * wave).astype(np.float32)


class AudioContext:
    """
    Single output stream shared by every tone an emitter schedules.

    The stream is opened on first use and mixes all pending voices in its
    callback, so batches submitted at different times simply overlap.
    """
    def __init__(self, rate=44100, channels=1, dtype='float32'):
        self.rate = rate
        self.channels = channels
        self.dtype = dtype

        self.output_stream = None
        self._voices = []  # (start_frame, samples)
        self._frame = 0
        self._lock = threading.Lock()

    @property
    def is_open(self):
        return self.output_stream is not None

    def ensure_open(self):
        """Initialize the speaker output stream once."""
        if self.output_stream is None:
            # importing sounddevice loads PortAudio
            import sounddevice as sd

            self.output_stream = sd.OutputStream(
                samplerate=self.rate,
                channels=self.channels,
                dtype=self.dtype,
                callback=self._callback,
            )
            self.output_stream.start()
            logger.info(f"Audio output opened at {self.rate} Hz.")

    def current_frame(self):
        with self._lock:
            return self._frame

    def add_voices(self, voices):
        """Queue (offset_frames, samples) pairs, all measured from the same current playhead."""
        with self._lock:
            base = self._frame
            for offset, samples in voices:
                self._voices.append((base + max(0, offset), samples))

    def pending_voices(self):
        with self._lock:
            return len(self._voices)

    def mix_block(self, frames):
        """Sum every voice overlapping the next `frames` frames and advance the playhead."""
        block = np.zeros(frames, dtype=np.float32)
        with self._lock:
            start = self._frame
            end = start + frames
            alive = []
            for voice_start, samples in self._voices:
                voice_end = voice_start + len(samples)
                if voice_start < end and voice_end > start:
                    lo = max(voice_start, start)
                    hi = min(voice_end, end)
                    block[lo - start:hi - start] += samples[lo - voice_start:hi - voice_start]
                if voice_end > end:
                    alive.append((voice_start, samples))
            self._voices = alive
            self._frame = end
        np.clip(block, -1.0, 1.0, out=block)
        return block

    def _callback(self, outdata, frames, time_info, status):
        if status:
            logger.warning(f"Audio output status: {status}")
        outdata[:] = self.mix_block(frames)[:, np.newaxis]

    def close(self):
        if self.output_stream is not None:
            try:
                self.output_stream.stop()
                self.output_stream.close()
            except Exception as e:
                logger.error("Audio close error", exc_info=e)
            self.output_stream = None
        with self._lock:
            self._voices = []


class SoundDeviceToneEmitter(ToneEmitter):
    """
    Plays scheduled tones through sounddevice.
    Works natively with NumPy arrays; rendered tones are cached per (frequency, shape, duration).
    """
    def __init__(self, rate=44100, volume=0.3, context=None):
        self.rate = rate
        self.volume = volume
        self.context = context or AudioContext(rate=rate)
        self._tone_cache = {}

    def schedule(self, events):
        try:
            self.context.ensure_open()
        except Exception as e:
            logger.error("Audio output unavailable; tones dropped.", exc_info=e)
            return

        self.context.add_voices([
            (
                int(round(event.start_offset_seconds * self.rate)),
                self._tone(event.frequency_hz, event.wave_shape, event.duration_seconds),
            )
            for event in events
        ])

    def _tone(self, frequency_hz, shape, duration_seconds):
        key = (frequency_hz, shape, round(duration_seconds, 6))
        if key not in self._tone_cache:
            self._tone_cache[key] = render_tone(frequency_hz, shape, duration_seconds, self.rate, self.volume)
        return self._tone_cache[key]

    def close(self):
        self.context.close()
