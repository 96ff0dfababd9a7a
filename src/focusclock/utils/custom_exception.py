class UnknownAlarmPatternError(Exception):
    """Exception raised when an alarm pattern id is not in the catalog."""
    pass


class TodoNotFoundError(Exception):
    """Exception raised when a todo id does not match any item in the list."""
    pass
