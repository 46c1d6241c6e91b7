"""
Application service: deterministic synthetic market data.

Used whenever the live provider fails. The price is a pure function of the
symbol text and the wall clock, so repeated fallbacks within a session look
continuous. Series noise comes from *rng* and is cosmetic only.
"""

import math
import random
import time
from typing import Optional

from finpeek.domain.entities.quote import Quote, Series, Timeframe

BENCHMARK_BASE_PRICE = 420.0


def _now_ms() -> float:
    return time.time() * 1000


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def symbol_hash(symbol: str) -> int:
    """31-multiplier string hash wrapped to the signed 32-bit range."""
    acc = 0
    for char in symbol:
        acc = _to_int32(acc * 31 + ord(char))
    return acc


def mock_price(symbol: str, now_ms: Optional[float] = None) -> float:
    """Stable pseudo-price in [50, 550) plus a slow +/-5 drift, floored at 10."""
    if now_ms is None:
        now_ms = _now_ms()
    base = abs(symbol_hash(symbol)) % 500 + 50
    drift = math.sin(now_ms / 100000) * 5
    return max(base + drift, 10.0)


def _wave_series(
    symbol: str,
    timeframe: Timeframe,
    base: float,
    amplitude: float,
    period_divisor: float,
    rng: random.Random,
) -> Series:
    count = timeframe.point_count
    closes = tuple(
        base + (math.sin(i / (count / period_divisor)) + rng.random() - 0.5) * base * amplitude
        for i in range(count)
    )
    return Series(symbol=symbol, timeframe=timeframe, closes=closes)


def mock_series(
    symbol: str,
    timeframe: Timeframe,
    now_ms: Optional[float] = None,
    rng: Optional[random.Random] = None,
) -> Series:
    return _wave_series(
        symbol,
        timeframe,
        base=mock_price(symbol, now_ms),
        amplitude=0.02,
        period_divisor=4,
        rng=rng or random.Random(),
    )


def mock_benchmark_series(
    symbol: str,
    timeframe: Timeframe,
    rng: Optional[random.Random] = None,
) -> Series:
    return _wave_series(
        symbol,
        timeframe,
        base=BENCHMARK_BASE_PRICE,
        amplitude=0.015,
        period_divisor=3,
        rng=rng or random.Random(),
    )


def mock_quote(
    symbol: str,
    now_ms: Optional[float] = None,
    rng: Optional[random.Random] = None,
) -> Quote:
    """Synthetic quote with a change of at most +/-2.5% of the price.

    The percent is measured against the prior price (price - change).
    """
    rng = rng or random.Random()
    price = mock_price(symbol, now_ms)
    change = (rng.random() - 0.5) * price * 0.05
    return Quote(
        symbol=symbol,
        price=price,
        change=change,
        change_percent=change / (price - change) * 100,
    )


def mock_benchmark_quote(symbol: str, rng: Optional[random.Random] = None) -> Quote:
    rng = rng or random.Random()
    price = BENCHMARK_BASE_PRICE + (rng.random() - 0.5) * 20
    change = (rng.random() - 0.5) * 4
    volume = int((rng.random() * 50 + 10) * 1_000_000)
    return Quote(
        symbol=symbol,
        price=price,
        change=change,
        change_percent=change / price * 100,
        volume=volume,
    )
