import os
from dataclasses import dataclass
import dotenv
from focusclock.tools.sound_tools.alarm_patterns import DEFAULT_ALARM_PATTERN_ID
from focusclock.utils.logging_handler import setup_logger

logger = setup_logger(__name__)

ENV_PREFIX = "FOCUSCLOCK_"


@dataclass
class Settings:
    alarm_pattern: str = DEFAULT_ALARM_PATTERN_ID
    alarm_repeats: int = 3
    sample_rate: int = 44100
    volume: float = 0.3
    log_level: str = "INFO"
    log_console: bool = True
    mute: bool = False

    @classmethod
    def from_env(cls, environ=None, load_dotenv=True) -> "Settings":
        """Read FOCUSCLOCK_* variables (optionally from a .env file). Bad values fall back to defaults."""
        if load_dotenv:
            dotenv.load_dotenv()
        env = os.environ if environ is None else environ
        defaults = cls()

        def _get(name):
            return env.get(ENV_PREFIX + name)

        return cls(
            alarm_pattern=_get("ALARM_PATTERN") or defaults.alarm_pattern,
            alarm_repeats=_parse(_get("ALARM_REPEATS"), int, defaults.alarm_repeats, "ALARM_REPEATS"),
            sample_rate=_parse(_get("SAMPLE_RATE"), int, defaults.sample_rate, "SAMPLE_RATE"),
            volume=_parse(_get("VOLUME"), float, defaults.volume, "VOLUME"),
            log_level=(_get("LOG_LEVEL") or defaults.log_level).upper(),
            log_console=_parse_bool(_get("LOG_CONSOLE"), defaults.log_console),
            mute=_parse_bool(_get("MUTE"), defaults.mute),
        )


def _parse(raw, cast, default, name):
    if raw is None or raw == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        logger.warning(f"Invalid {ENV_PREFIX}{name}={raw!r}; using {default}.")
        return default


def _parse_bool(raw, default):
    if raw is None or raw == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}
