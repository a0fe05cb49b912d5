"""Human-readable byte count formatting."""

UNITS = ("KB", "MB", "GB", "TB", "PB")

# Scaled magnitudes carry two implied decimal places (1000.00 == 100000).
_SCALE = 100
_ROLLOVER = 1000 * _SCALE


def format_size(byte_count: int) -> str:
    """Format a byte count with base-1000 units.

    Counts up to and including 1000 are rendered as exact bytes. Larger
    counts are divided by 1000 until the value drops below 1000.00 in the
    current unit or PB is reached, using fixed-point integers so repeated
    division does not accumulate float error.

    Args:
        byte_count: Number of bytes.

    Returns:
        Formatted size such as "999B", "999.99KB" or "1.00MB".

    Example:
        >>> format_size(2)
        '2B'
        >>> format_size(1_000_000)
        '1.00MB'
    """
    if byte_count <= 1000:
        return f"{byte_count}B"

    unit = "B"
    scaled = byte_count * _SCALE
    for next_unit in UNITS:
        if scaled < _ROLLOVER:
            break
        scaled //= 1000
        unit = next_unit

    whole, fraction = divmod(scaled, _SCALE)
    return f"{whole}.{fraction:02d}{unit}"
