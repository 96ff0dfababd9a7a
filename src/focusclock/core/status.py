from enum import Enum

class ClockStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"
    EXPIRED = "expired"
