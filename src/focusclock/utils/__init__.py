from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

from focusclock.utils.logging_handler import setup_logger
from focusclock.utils.event import Event
from focusclock.utils import custom_exception
