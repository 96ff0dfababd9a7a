def convert_to_seconds(hours=0, minutes=0, seconds=0):
    """
    Converts hours, minutes, and seconds into a total duration in seconds.

    Raises:
        ValueError: If any input is negative.
    """
    if any(val < 0 for val in [hours, minutes, seconds]):
        raise ValueError("Time components cannot be negative.")
    return (hours * 3600) + (minutes * 60) + seconds

def format_seconds_to_ms(total_seconds):
    """MM:SS countdown display; minutes keep counting past 59 instead of rolling into hours."""
    if total_seconds < 0:
        return "-Invalid Time-"
    minutes, seconds = divmod(int(total_seconds), 60)
    return f"{minutes:02}:{seconds:02}"
