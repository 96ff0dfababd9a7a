from focusclock.config import Settings
from focusclock.main.terminal_entry import Args, build_settings
from focusclock.utils.logging_handler import set_log_console, setup_logger


def test_defaults_when_environment_is_empty():
    settings = Settings.from_env({}, load_dotenv=False)
    assert settings == Settings()
    assert settings.alarm_pattern == "bell"
    assert settings.alarm_repeats == 3


def test_reads_prefixed_variables():
    settings = Settings.from_env(
        {
            "FOCUSCLOCK_ALARM_PATTERN": "chime",
            "FOCUSCLOCK_ALARM_REPEATS": "5",
            "FOCUSCLOCK_VOLUME": "0.8",
            "FOCUSCLOCK_LOG_LEVEL": "debug",
            "FOCUSCLOCK_MUTE": "yes",
        },
        load_dotenv=False,
    )
    assert settings.alarm_pattern == "chime"
    assert settings.alarm_repeats == 5
    assert settings.volume == 0.8
    assert settings.log_level == "DEBUG"
    assert settings.mute is True


def test_malformed_numbers_fall_back_to_defaults():
    settings = Settings.from_env(
        {"FOCUSCLOCK_ALARM_REPEATS": "many", "FOCUSCLOCK_SAMPLE_RATE": "fast"},
        load_dotenv=False,
    )
    assert settings.alarm_repeats == 3
    assert settings.sample_rate == 44100


def test_console_logging_flag_from_environment():
    assert Settings.from_env({}, load_dotenv=False).log_console is True
    settings = Settings.from_env({"FOCUSCLOCK_LOG_CONSOLE": "false"}, load_dotenv=False)
    assert settings.log_console is False


def _handler_types(logger):
    return sorted(type(handler).__name__ for handler in logger.handlers)


def test_set_log_console_detaches_and_restores_console_handlers():
    existing = setup_logger("focusclock.tests.console_existing")
    assert _handler_types(existing) == ["FileHandler", "StreamHandler"]
    try:
        set_log_console(False)
        assert _handler_types(existing) == ["FileHandler"]
        created_while_quiet = setup_logger("focusclock.tests.console_new")
        assert _handler_types(created_while_quiet) == ["FileHandler"]
    finally:
        set_log_console(True)
    assert _handler_types(existing) == ["FileHandler", "StreamHandler"]
    assert _handler_types(created_while_quiet) == ["FileHandler", "StreamHandler"]


def test_quiet_flag_turns_console_logging_off(monkeypatch):
    monkeypatch.delenv("FOCUSCLOCK_LOG_CONSOLE", raising=False)
    assert build_settings(Args()).log_console is True
    assert build_settings(Args(quiet=True)).log_console is False


def test_log_dir_can_be_redirected(monkeypatch, tmp_path):
    monkeypatch.setenv("FOCUSCLOCK_LOG_DIR", str(tmp_path))
    logger = setup_logger("focusclock.tests.redirected", log_file="redirected.log")
    logger.warning("written outside the package")
    for handler in logger.handlers:
        handler.flush()
    assert "written outside the package" in (tmp_path / "redirected.log").read_text()
