"""Human-readable number formatting for the listing page."""

_DECIMAL_UNITS = ["B", "kB", "MB", "GB", "TB", "PB"]


def format_count(value: int) -> str:
    """Thousands separators: 1234567 -> '1,234,567'."""
    return f"{value:,}"


def format_size(size: int) -> str:
    """Format a byte count in decimal (SI) units: 1500000 -> '1.50 MB'."""
    if size < 1000:
        return f"{size} B"
    value = float(size)
    for unit in _DECIMAL_UNITS[1:]:
        value /= 1000
        if value < 1000 or unit == _DECIMAL_UNITS[-1]:
            return f"{value:.2f} {unit}"
