from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Sequence, Tuple

from .classify import DEFAULT_VARIANTS, Variant, mean, select
from .series import Series, total_series

TOTAL_NAME = "Total"
NBSP = "&nbsp;"


class LineStyle(Enum):
    SOLID = "solid"
    LONG_DASH_DOT = "longdashdot"


@dataclass(frozen=True)
class ChartSeries:
    name: str
    label: str
    values: Tuple[float, ...]
    style: LineStyle = LineStyle.SOLID


@dataclass(frozen=True)
class ChartRequest:
    worksheet: str
    variant: Variant
    title: str
    x_axis: Tuple[str, ...]
    series: Tuple[ChartSeries, ...]


def escape_label(s: str) -> str:
    return s.replace(" ", NBSP)


def display_label(name: str, values: Sequence[float]) -> str:
    """'Food (avg: 12k)': mean in whole thousands, truncated toward zero."""
    avg = mean(values) if len(values) else 0.0
    return f"{name} (avg: {int(avg / 1000)}k)"


def _chart_series(name: str, values: Sequence[float], style: LineStyle = LineStyle.SOLID) -> ChartSeries:
    values = tuple(float(v) for v in values)
    return ChartSeries(
        name=name,
        label=escape_label(display_label(name, values)),
        values=values,
        style=style,
    )


def assemble(
    worksheet: str,
    series: Dict[str, Series],
    window: Sequence[str],
    variants: Sequence[Variant] = DEFAULT_VARIANTS,
) -> List[ChartRequest]:
    window = tuple(window)
    requests = []
    for variant in variants:
        selected = select(series, variant)
        lines = [_chart_series(s.label, s.values) for s in selected]
        lines.append(_chart_series(TOTAL_NAME, total_series(selected, len(window)), LineStyle.LONG_DASH_DOT))
        requests.append(ChartRequest(
            worksheet=worksheet,
            variant=variant,
            title=escape_label(variant.title),
            x_axis=window,
            series=tuple(lines),
        ))
    return requests
