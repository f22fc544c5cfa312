# utils/fx.py
"""
USD -> local currency for display. Purely cosmetic: any failure falls back
to DEFAULT_EXCHANGE_RATE and never reaches the evaluators.
"""
from __future__ import annotations

import math

import requests

from config import DEFAULT_EXCHANGE_RATE, FX_CURRENCY, FX_TIMEOUT, FX_URL, logger


def fetch_usd_rate(
    currency: str = FX_CURRENCY,
    session: requests.Session | None = None,
    timeout: float = FX_TIMEOUT,
) -> float:
    """Live USD->`currency` rate, or the fixed default when the lookup fails."""
    http = session or requests
    try:
        resp = http.get(FX_URL, timeout=timeout)
        resp.raise_for_status()
        rate = float(resp.json()["rates"][currency])
    except (requests.RequestException, ValueError, KeyError, TypeError) as e:
        logger.debug(f"FX lookup failed ({e}); using default {DEFAULT_EXCHANGE_RATE}")
        return DEFAULT_EXCHANGE_RATE
    if not math.isfinite(rate) or rate <= 0:
        return DEFAULT_EXCHANGE_RATE
    return rate


def to_local(usd: float, rate: float) -> float:
    return usd * rate


def format_local(usd: float, rate: float, symbol: str = "₹") -> str:
    """'₹6,880' style, no decimals."""
    return f"{symbol}{to_local(usd, rate):,.0f}"


__all__ = ["fetch_usd_rate", "to_local", "format_local"]
