"""
CLI Utilities

Small helpers shared by commands.
"""


def format_duration(seconds: float) -> str:
    """
    Render an elapsed time in the largest sensible unit.

    Examples:
        0.25   -> '250 ms'
        12.5   -> '12.50 sec'
        90     -> '1.50 min'
        5400   -> '1.50 hrs'
    """
    millis = int(seconds * 1000)
    if millis < 1000:
        return f"{millis} ms"
    if millis < 60 * 1000:
        return f"{millis / 1000:.2f} sec"
    if millis < 3600 * 1000:
        return f"{millis / 1000 / 60:.2f} min"
    return f"{millis / 1000 / 3600:.2f} hrs"
