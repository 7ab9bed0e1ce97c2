"""Display formatting for yen amounts."""


def format_yen(amount) -> str:
    """Format whole yen with grouping, e.g. 206700 -> '¥206,700'."""
    try:
        return f"¥{int(amount):,}"
    except (TypeError, ValueError):
        return str(amount)
