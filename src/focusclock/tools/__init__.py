from focusclock.tools.time_tools.session_clock import SessionClock, SessionKind
from focusclock.tools.time_tools.ticker import Ticker
from focusclock.tools.sound_tools.alarm_sequencer import AlarmSequencer
from focusclock.tools.task_tools.todo_list import TodoList
