"""
Runtime configuration read from environment variables (and .env via python-dotenv).

Every value has a default so the dashboard starts without configuration; the
'demo' API key degrades to mock data for anything the provider won't serve.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from finpeek.domain.entities.quote import Timeframe

QUOTE_PROVIDERS = ("alphavantage", "yfinance")


def _env_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


def _env_timeframe(env: Mapping[str, str], name: str) -> Timeframe:
    raw = (env.get(name) or "").strip().upper()
    if not raw:
        return Timeframe.DAILY
    try:
        return Timeframe(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be one of 1D, 1H; got {raw!r}") from exc


@dataclass(frozen=True)
class Settings:
    api_key: str = "demo"
    quote_provider: str = "alphavantage"
    api_base_url: str = "https://www.alphavantage.co/query"
    benchmark_symbol: str = "SPY"
    refresh_interval: float = 10.0
    timeframe_cycle_interval: float = 5.0
    keep_awake_interval: float = 30.0
    request_timeout: float = 5.0
    chart_width: float = 300.0
    chart_height: float = 150.0
    chart_padding: float = 10.0
    default_stock_timeframe: Timeframe = Timeframe.DAILY
    default_benchmark_timeframe: Timeframe = Timeframe.DAILY
    ticker_store_path: str = "data/finpeek.json"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from *env* (defaults to os.environ).

        Raises:
            ValueError: on an unknown provider, timeframe or a non-positive number.
        """
        env = os.environ if env is None else env

        provider = env.get("FINPEEK_QUOTE_PROVIDER", "alphavantage").strip().lower()
        if provider not in QUOTE_PROVIDERS:
            raise ValueError(
                f"FINPEEK_QUOTE_PROVIDER must be one of {', '.join(QUOTE_PROVIDERS)}; "
                f"got {provider!r}"
            )

        padding = _env_float(env, "FINPEEK_CHART_PADDING", cls.chart_padding)
        width = _env_float(env, "FINPEEK_CHART_WIDTH", cls.chart_width)
        height = _env_float(env, "FINPEEK_CHART_HEIGHT", cls.chart_height)
        if 2 * padding >= min(width, height):
            raise ValueError("FINPEEK_CHART_PADDING leaves no room to draw")

        benchmark = env.get("FINPEEK_BENCHMARK_SYMBOL", cls.benchmark_symbol).strip().upper()

        return cls(
            api_key=env.get("ALPHA_VANTAGE_API_KEY", "").strip() or "demo",
            quote_provider=provider,
            api_base_url=env.get("FINPEEK_API_BASE_URL", cls.api_base_url),
            benchmark_symbol=benchmark or cls.benchmark_symbol,
            refresh_interval=_env_float(env, "FINPEEK_REFRESH_INTERVAL", cls.refresh_interval),
            timeframe_cycle_interval=_env_float(
                env, "FINPEEK_TIMEFRAME_CYCLE_INTERVAL", cls.timeframe_cycle_interval
            ),
            keep_awake_interval=_env_float(
                env, "FINPEEK_KEEP_AWAKE_INTERVAL", cls.keep_awake_interval
            ),
            request_timeout=_env_float(env, "FINPEEK_REQUEST_TIMEOUT", cls.request_timeout),
            chart_width=width,
            chart_height=height,
            chart_padding=padding,
            default_stock_timeframe=_env_timeframe(env, "FINPEEK_DEFAULT_STOCK_TIMEFRAME"),
            default_benchmark_timeframe=_env_timeframe(
                env, "FINPEEK_DEFAULT_BENCHMARK_TIMEFRAME"
            ),
            ticker_store_path=env.get("FINPEEK_TICKER_STORE_PATH", cls.ticker_store_path),
            log_level=env.get("FINPEEK_LOG_LEVEL", cls.log_level).strip().upper(),
        )
