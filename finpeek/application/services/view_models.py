"""
Application service: Quote → presentation-ready view-models.
Pure functions, no I/O.
"""

from finpeek.domain.entities.quote import Quote
from finpeek.domain.entities.view_model import BenchmarkViewModel, QuoteViewModel, Sentiment


def _sentiment(change: float) -> Sentiment:
    # Zero counts as positive, matching the "+" display convention.
    return Sentiment.POSITIVE if change >= 0 else Sentiment.NEGATIVE


def _sign(change: float) -> str:
    return "+" if change >= 0 else "-"


def build_view_model(quote: Quote) -> QuoteViewModel:
    """Format *quote* as e.g. ``$185.20`` / ``+$1.23 (+0.67%)``."""
    sign = _sign(quote.change)
    return QuoteViewModel(
        symbol=quote.symbol,
        price_text=f"${quote.price:.2f}",
        change_text=(
            f"{sign}${abs(quote.change):.2f} ({sign}{abs(quote.change_percent):.2f}%)"
        ),
        sentiment=_sentiment(quote.change),
    )


def format_volume(volume: int | None) -> str:
    if volume is None:
        return "--"
    return f"{volume / 1_000_000:.1f}M"


def build_benchmark_view_model(quote: Quote) -> BenchmarkViewModel:
    sign = _sign(quote.change)
    return BenchmarkViewModel(
        symbol=quote.symbol,
        price_text=f"${quote.price:.2f}",
        change_text=f"{sign}{abs(quote.change_percent):.2f}%",
        sentiment=_sentiment(quote.change),
        volume_text=format_volume(quote.volume),
    )
