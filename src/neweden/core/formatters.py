"""
neweden Output Formatters

Display helpers shared by the CLI commands.
"""

from datetime import datetime, timezone


def format_datetime(dt: datetime) -> str:
    """
    Format datetime for display.

    Returns:
        ISO format string like "2026-01-15T12:30:00Z"
    """
    return dt.strftime("%Y-%m-%dT%H:%M:%SZ")


def get_utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(timezone.utc)


def get_utc_timestamp() -> str:
    """Get current UTC timestamp string."""
    return format_datetime(get_utc_now())


def format_security(sec_status: float) -> str:
    """
    Format security status for display.

    Args:
        sec_status: Security status (-1.0 to 1.0)

    Returns:
        Formatted string like "0.5", "-0.3", "1.0"
    """
    return f"{sec_status:.1f}"


def format_light_years(distance: float) -> str:
    """Format a distance in light years, e.g. "4.27 ly"."""
    return f"{distance:.2f} ly"
