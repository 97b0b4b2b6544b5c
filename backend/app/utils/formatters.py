"""Display formatting helpers shared by the content generators"""

from typing import Union


def format_currency(amount: Union[int, float]) -> str:
    """Format a dollar amount rounded to whole dollars, e.g. $1,250,000"""
    rounded = int(round(amount))
    sign = "-" if rounded < 0 else ""
    return f"{sign}${abs(rounded):,}"


def location_from_address(address: str, default: str) -> str:
    """Last comma-separated part of an address, or ``default`` when empty"""
    return address.split(",")[-1].strip() or default


def excerpt(text: str, limit: int = 100) -> str:
    """Cut text to ``limit`` characters, marking the cut with an ellipsis"""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."
