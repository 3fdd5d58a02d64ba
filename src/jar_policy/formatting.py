from __future__ import annotations

from decimal import Decimal

from eth_utils import from_wei

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 60 * SECONDS_PER_MINUTE
SECONDS_PER_DAY = 24 * SECONDS_PER_HOUR


def format_countdown(seconds: int) -> str:
    """Render a cooldown countdown as ``[Nd ]HH:MM:SS``."""
    remaining = max(0, int(seconds))
    days, remaining = divmod(remaining, SECONDS_PER_DAY)
    hours, remaining = divmod(remaining, SECONDS_PER_HOUR)
    minutes, secs = divmod(remaining, SECONDS_PER_MINUTE)
    prefix = f"{days}d " if days > 0 else ""
    return f"{prefix}{hours:02d}:{minutes:02d}:{secs:02d}"


def format_cooldown_period(seconds: int) -> str:
    if not seconds:
        return "None"
    minutes = Decimal(seconds) / SECONDS_PER_MINUTE
    return f"{minutes.normalize():f} minutes"


def format_amount(wei: int | None, symbol: str = "ETH") -> str:
    if wei is None:
        return "No limit"
    ether = Decimal(from_wei(wei, "ether"))
    return f"{ether.normalize():f} {symbol}"
