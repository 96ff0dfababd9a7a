import logging
import os
from typing import Optional, Union
from focusclock.utils import BASE_DIR

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_LOG_LEVEL_OVERRIDE: Optional[int] = None
_CONSOLE_ENABLED = True


def _package_loggers():
    for name in list(logging.root.manager.loggerDict):
        if name.startswith("focusclock"):
            yield logging.getLogger(name)


def _is_console_handler(handler: logging.Handler) -> bool:
    # FileHandler subclasses StreamHandler
    return isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler)


def _console_handler(level: int) -> logging.Handler:
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    return console_handler


def set_log_level(level: Union[int, str]) -> None:
    """Change the level of every logger created through setup_logger, now and later."""
    global _LOG_LEVEL_OVERRIDE
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    _LOG_LEVEL_OVERRIDE = level
    for logger in _package_loggers():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)


def set_log_console(enabled: bool) -> None:
    """Attach or detach the console handler of every package logger, now and later. File logging is untouched."""
    global _CONSOLE_ENABLED
    _CONSOLE_ENABLED = enabled
    for logger in _package_loggers():
        console_handlers = [h for h in logger.handlers if _is_console_handler(h)]
        if not enabled:
            for handler in console_handlers:
                logger.removeHandler(handler)
        elif logger.handlers and not console_handlers:
            logger.addHandler(_console_handler(logger.level))


def setup_logger(
    name: str,
    log_file: str = "app.log",
    level: int = logging.DEBUG,
    console: bool = True,
    handler_level: Optional[int] = None,
) -> logging.Logger:
    """Configure and return a module-level logger."""
    log_dir = os.path.expanduser(os.environ.get("FOCUSCLOCK_LOG_DIR") or os.path.join(BASE_DIR, "logs"))
    os.makedirs(log_dir, exist_ok=True)
    full_log_file_path = os.path.join(log_dir, log_file)

    if _LOG_LEVEL_OVERRIDE is not None:
        level = _LOG_LEVEL_OVERRIDE

    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        file_handler = logging.FileHandler(full_log_file_path)
        file_handler.setLevel(handler_level or level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)

        if console and _CONSOLE_ENABLED:
            logger.addHandler(_console_handler(handler_level or level))

    return logger
