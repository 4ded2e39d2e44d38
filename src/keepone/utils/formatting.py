"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/formatting.py
Size filters typed by the user ("500KB", "1.5G") and the size/date columns of reports.
"""
import re
import time

SIZE_UNITS = ("B", "KB", "MB", "GB", "TB", "PB")

# "<number><unit>", unit is one of B, K, KB, M, MB, ... (case-insensitive)
_SIZE_RE = re.compile(r"(-?)(\d+(?:\.\d+)?)\s*(?:([KMGTP])B?|B)?", re.IGNORECASE)


def parse_size(text: str) -> int:
    """
    Bytes for a size filter such as '0', '2048', '1K', '1.5MB' or '0.5gb'.
    Raises ValueError for negative or malformed sizes.
    """
    match = _SIZE_RE.fullmatch(text.strip())
    if match is None:
        raise ValueError(f"Invalid size format: '{text}'. Use e.g. 1000, 500KB, 1.5MB, 2G")

    sign, number, prefix = match.groups()
    if sign:
        raise ValueError(f"Negative size not allowed: '{text.strip()}'")

    exponent = "BKMGTP".index(prefix.upper()) if prefix else 0
    return int(float(number) * 1024 ** exponent)


def format_size(size_bytes: int) -> str:
    """Two decimals in the largest unit below 1024, e.g. 1536 -> '1.50KB'."""
    if size_bytes < 0:
        return "0B"

    value = float(size_bytes)
    unit = 0
    while value >= 1024 and unit < len(SIZE_UNITS) - 1:
        value /= 1024
        unit += 1
    return f"{value:.2f}{SIZE_UNITS[unit]}"


def format_timestamp(timestamp: float, fmt: str = "%Y-%m-%d %H:%M:%S") -> str:
    """Local time of a modification timestamp; unrepresentable values are reported as such."""
    try:
        return time.strftime(fmt, time.localtime(timestamp))
    except (OverflowError, OSError, ValueError, TypeError):
        return "Invalid timestamp"
