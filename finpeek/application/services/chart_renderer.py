"""
Application service: price series → normalized chart geometry.

Stateless. The minimum value sits on the baseline (height - padding) and the
maximum at the top padding edge; the x axis spreads points evenly.
"""

from typing import Sequence

from finpeek.domain.entities.view_model import DrawingInstructions


def _fmt(value: float) -> str:
    return f"{value:.2f}".rstrip("0").rstrip(".")


def render_points(
    series: Sequence[float],
    width: float,
    height: float,
    padding: float,
    color: str,
) -> DrawingInstructions:
    """Map *series* into viewport coordinates.

    Raises:
        ValueError: if *series* is empty.
    """
    values = list(series)
    if not values:
        raise ValueError("cannot render an empty series")

    low = min(values)
    high = max(values)
    value_range = (high - low) or 1
    count = len(values)
    inner_width = width - 2 * padding
    inner_height = height - 2 * padding
    baseline_y = height - padding

    points = []
    for index, value in enumerate(values):
        if count == 1:
            x = width / 2
        else:
            x = padding + index / (count - 1) * inner_width
        y = height - padding - (value - low) / value_range * inner_height
        points.append((x, y))

    line_path = " ".join(
        f"{'M' if index == 0 else 'L'} {_fmt(x)} {_fmt(y)}"
        for index, (x, y) in enumerate(points)
    )
    last_x = points[-1][0]
    first_x = points[0][0]
    area_path = (
        f"{line_path} L {_fmt(last_x)} {_fmt(baseline_y)} "
        f"L {_fmt(first_x)} {_fmt(baseline_y)} Z"
    )

    return DrawingInstructions(
        width=width,
        height=height,
        padding=padding,
        color=color,
        points=tuple(points),
        line_path=line_path,
        area_path=area_path,
        baseline_y=baseline_y,
    )
