from __future__ import annotations

import re
from pathlib import Path
from typing import Optional, Set

import matplotlib.pyplot as plt
import plotly.graph_objects as go

from .config import Settings
from .report import NBSP, ChartRequest, LineStyle

# plotly dash names -> matplotlib linestyles
_MPL_LINESTYLES = {
    LineStyle.SOLID: "-",
    LineStyle.LONG_DASH_DOT: (0, (10, 3, 2, 3)),
}


def _plain(s: str) -> str:
    return s.replace(NBSP, " ")


def legend_label(s: str) -> str:
    """Plain-text legend label; matplotlib hides entries whose label starts with "_"."""
    s = _plain(s)
    if s.startswith("_"):
        return "\u200b" + s
    return s


def _slug(s: str) -> str:
    return re.sub(r"[^\w\-]+", "_", s).strip("_") or "sheet"


def chart_filename(request: ChartRequest, fmt: str) -> str:
    return f"{_slug(request.worksheet)}-{request.variant.value}.{fmt}"


def unique_filename(name: str, taken: Set[str]) -> str:
    """name, or name with a -2, -3, ... suffix if an earlier chart in this run already took it."""
    stem, dot, ext = name.rpartition(".")
    candidate = name
    n = 1
    while candidate in taken:
        n += 1
        candidate = f"{stem}-{n}{dot}{ext}"
    taken.add(candidate)
    return candidate


def build_figure(request: ChartRequest) -> go.Figure:
    fig = go.Figure()
    for s in request.series:
        fig.add_trace(go.Scatter(
            x=list(request.x_axis),
            y=list(s.values),
            mode="lines+markers",
            name=s.label,
            line=dict(dash=s.style.value),
        ))
    fig.update_layout(title=dict(text=request.title))
    return fig


def show_chart(request: ChartRequest) -> None:
    build_figure(request).show()


def plot_lines(request: ChartRequest, outpath: Path, width: int, height: int, scale: float = 1.0):
    dpi = 100 * scale
    fig, ax = plt.subplots(figsize=(width / 100, height / 100), dpi=dpi)
    for s in request.series:
        ax.plot(
            list(request.x_axis),
            list(s.values),
            marker="o",
            linestyle=_MPL_LINESTYLES[s.style],
            label=legend_label(s.label),
        )
    ax.set_title(_plain(request.title))
    ax.legend(loc="upper left", fontsize="small")
    fig.autofmt_xdate()
    fig.tight_layout()
    fig.savefig(outpath, dpi=dpi)
    plt.close(fig)


def save_chart(request: ChartRequest, outdir: Path, settings: Settings, taken: Optional[Set[str]] = None) -> Path:
    """
    Write one chart to outdir and return its path.

    Pass the same taken set for every chart of a run so that worksheets whose
    names slug to the same file don't overwrite each other.

    html is rendered with plotly (interactive); svg and png with matplotlib.
    """
    outdir = Path(outdir)
    outdir.mkdir(parents=True, exist_ok=True)
    name = chart_filename(request, settings.image_format)
    if taken is not None:
        name = unique_filename(name, taken)
    path = outdir / name

    if settings.image_format == "html":
        fig = build_figure(request)
        fig.update_layout(width=settings.width, height=settings.height)
        fig.write_html(str(path))
    else:
        plot_lines(request, path, settings.width, settings.height, settings.scale)
    return path
