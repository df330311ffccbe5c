"""Pure formatting utilities for human-readable output.

This module provides stateless formatting functions for converting raw byte
counts and durations into display strings. All functions are pure with no
side effects.
"""

# Binary unit labels, smallest first (1024-based)
_SIZE_UNITS: tuple[str, ...] = ("B", "KB", "MB", "GB")
_KB = 1024

_MINUTE = 60


def format_bytes(size: int) -> str:
    """Convert a byte count to a human-readable size.

    Selects the largest unit from B, KB, MB and GB whose scaled value is at
    least one, then shows that value with two decimal places. Values beyond
    the gigabyte range stay in GB.

    Args:
        size: Number of bytes to format (must be non-negative)

    Returns:
        Human-readable string representation of the size.

    Examples:
        >>> format_bytes(0)
        '0 B'
        >>> format_bytes(512)
        '512.00 B'
        >>> format_bytes(1536)
        '1.50 KB'
        >>> format_bytes(1073741824)
        '1.00 GB'
    """
    if size < 0:
        msg = "size must be non-negative"
        raise ValueError(msg)

    if size == 0:
        return "0 B"

    unit_index = 0
    while unit_index < len(_SIZE_UNITS) - 1 and size >= _KB ** (unit_index + 1):
        unit_index += 1

    scaled = size / _KB**unit_index
    # 1048575 bytes would otherwise render as "1024.00 KB"
    if round(scaled, 2) >= _KB and unit_index < len(_SIZE_UNITS) - 1:
        unit_index += 1
        scaled = size / _KB**unit_index
    return f"{scaled:.2f} {_SIZE_UNITS[unit_index]}"


def format_duration(seconds: float) -> str:
    """Convert seconds to a short human-readable duration.

    Args:
        seconds: Duration in seconds (must be non-negative)

    Returns:
        Duration string.
        - Under 10 seconds: two decimals ("0.42s")
        - Under a minute: one decimal ("12.3s")
        - Otherwise: whole minutes and seconds ("2m 5s", "3m")

    Examples:
        >>> format_duration(0.4231)
        '0.42s'
        >>> format_duration(12.34)
        '12.3s'
        >>> format_duration(125)
        '2m 5s'
    """
    if seconds < 0:
        msg = "seconds must be non-negative"
        raise ValueError(msg)

    if seconds < 10:
        return f"{seconds:.2f}s"

    if seconds < _MINUTE:
        return f"{seconds:.1f}s"

    minutes, remaining = divmod(int(seconds), _MINUTE)
    if remaining > 0:
        return f"{minutes}m {remaining}s"
    return f"{minutes}m"
