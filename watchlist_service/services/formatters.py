from typing import Optional


def format_price(price: float) -> str:
    return f"${price:.2f}"


def format_change_percent(change_percent: float) -> str:
    # zero renders without a sign, same as negative values
    sign = "+" if change_percent > 0 else ""
    return f"{sign}{change_percent:.2f}%"


def format_market_cap(market_cap_billions: float) -> str:
    """Formats a market capitalization given in billions of dollars."""
    if market_cap_billions >= 1000:
        return f"${market_cap_billions / 1000:.2f}T"
    if market_cap_billions >= 1:
        return f"${market_cap_billions:.2f}B"
    return f"${market_cap_billions * 1000:.2f}M"


def format_pe_ratio(pe_ratio: float) -> str:
    return f"{pe_ratio:.2f}"


def change_color(change_percent: Optional[float]) -> str:
    if change_percent and change_percent > 0:
        return "positive"
    if change_percent and change_percent < 0:
        return "negative"
    return "neutral"
