# basecall_MultiPanelPlotter/core/plotting.py
from __future__ import annotations
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Sequence
import io, logging, os
import numpy as np
import matplotlib
import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle
from matplotlib.ticker import MaxNLocator

from .bounds import AxisBounds, panel_bounds
from .errors import EmptyDataset, FileOpenError, RenderError
from .model import PANELS, Panel, Record
from ..utils.detect import detect_format

_LOG = logging.getLogger(__name__)

# timestamps would make two renders of the same data differ
_STABLE_METADATA: dict[str, dict] = {
    "svg": {"Date": None},
    "svgz": {"Date": None},
    "pdf": {"CreationDate": None},
    "ps": {"CreationDate": None},
    "eps": {"CreationDate": None},
}
_SVG_HASHSALT = "basecall_MultiPanelPlotter"

@dataclass
class RenderSettings:
    width_px: int = 2200
    height_px: int = 1800
    dpi: int = 100
    background: str = "#9e9e9e"        # material grey 500
    line_color: str = "#00ff00"
    line_width_px: float = 1.0
    border_color: str = "black"
    border_width_px: float = 2.0
    margin_px: int = 20
    caption_area_px: int = 30
    x_label_area_px: int = 50
    y_label_area_px: int = 100
    font_size: int = 20
    tick_font_size: int = 12
    n_ticks: int = 5
    x_label: str = "Batch Time"

    @classmethod
    def from_config(cls, cfg: dict | None) -> "RenderSettings":
        """Overrides from the ``render:`` section; absent keys keep their defaults."""
        section = (cfg or {}).get("render") or {}
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(section) - known)
        if unknown:
            _LOG.warning("ignoring unknown render setting(s): %s", ", ".join(unknown))
        return cls(**{k: v for k, v in section.items() if k in known})

    def pt(self, px: float) -> float:
        return px * 72.0 / self.dpi

def _band_rect(i: int, n: int, s: RenderSettings) -> tuple[float, float, float, float]:
    """Pixel bounds (x0, y0, x1, y1) of horizontal band i, y measured from the top."""
    band_h = s.height_px / n
    return 0.0, i * band_h, float(s.width_px), (i + 1) * band_h

def _to_fig(rect_px: tuple[float, float, float, float], s: RenderSettings) -> list[float]:
    """(x0, y0, x1, y1) in top-down pixels -> [left, bottom, width, height] figure fractions."""
    x0, y0, x1, y1 = rect_px
    return [x0 / s.width_px, 1.0 - y1 / s.height_px,
            (x1 - x0) / s.width_px, (y1 - y0) / s.height_px]

def _draw_border(fig, band: tuple[float, float, float, float], s: RenderSettings):
    x0, y0, x1, y1 = band
    left, bottom, width, height = _to_fig((x0, y0, x1 - 1, y1 - 1), s)
    fig.add_artist(Rectangle((left, bottom), width, height,
                             transform=fig.transFigure, fill=False,
                             edgecolor=s.border_color, linewidth=s.pt(s.border_width_px)))

def _chart_rect(band: tuple[float, float, float, float], s: RenderSettings) -> tuple[float, float, float, float]:
    x0, y0, x1, y1 = band
    return (x0 + s.margin_px + s.y_label_area_px,
            y0 + s.margin_px + s.caption_area_px,
            x1 - s.margin_px,
            y1 - s.margin_px - s.x_label_area_px)

def _draw_panel(fig, band, panel: Panel, x_bounds: AxisBounds, y_bounds: AxisBounds,
                records: Sequence[Record], s: RenderSettings):
    _draw_border(fig, band, s)
    ax = fig.add_axes(_to_fig(_chart_rect(band, s), s))
    ax.set_facecolor(s.background)

    ax.set_xlim(*x_bounds.view_limits())
    ax.set_ylim(*y_bounds.view_limits())
    for axis, b in (("x", x_bounds), ("y", y_bounds)):
        if b.is_degenerate:
            _LOG.info("%s: single-point %s range at %g, view widened", panel.label, axis, b.lo)

    ax.set_title(panel.label, fontsize=s.font_size)
    ax.set_xlabel(s.x_label, fontsize=s.font_size)
    ax.set_ylabel(panel.label, fontsize=s.font_size)
    ax.ticklabel_format(axis="x", style="plain", useOffset=False)
    ax.xaxis.set_major_locator(MaxNLocator(nbins=s.n_ticks))
    ax.yaxis.set_major_locator(MaxNLocator(nbins=s.n_ticks))
    ax.tick_params(axis="x", labelsize=s.font_size)
    ax.tick_params(axis="y", labelsize=s.tick_font_size)
    ax.grid(True, alpha=0.3)

    xs = np.fromiter((r.time for r in records), dtype=float, count=len(records))
    ys = np.fromiter((panel.extract(r) for r in records), dtype=float, count=len(records))
    ax.plot(xs, ys, color=s.line_color, linewidth=s.pt(s.line_width_px))

def _write_atomic(out_path: Path, payload: bytes):
    """Write next to the destination, then move over it; never leaves a truncated file."""
    tmp = out_path.with_name(f".{out_path.name}.tmp")
    try:
        with tmp.open("wb") as f:
            f.write(payload)
        os.replace(tmp, out_path)
    except OSError as e:
        tmp.unlink(missing_ok=True)
        raise FileOpenError(f"cannot write {out_path}: {e.strerror or e}") from e

def render_panels(records: Sequence[Record], out_path: Path,
                  settings: RenderSettings | None = None) -> Path:
    """
    Five stacked line charts (PANELS order, top to bottom) sharing the batch-time axis.
    Format follows the output suffix; an existing file is replaced.
    """
    s = settings or RenderSettings()
    out_path = Path(out_path)
    if len(records) == 0:
        raise EmptyDataset("dataset has no records; nothing to plot")
    fmt = detect_format(out_path)
    per_panel = panel_bounds(records)

    buf = io.BytesIO()
    fig = None
    try:
        with matplotlib.rc_context({"svg.hashsalt": _SVG_HASHSALT}):
            fig = plt.figure(figsize=(s.width_px / s.dpi, s.height_px / s.dpi),
                             dpi=s.dpi, facecolor=s.background)
            for i, (panel, x_bounds, y_bounds) in enumerate(per_panel):
                band = _band_rect(i, len(PANELS), s)
                _draw_panel(fig, band, panel, x_bounds, y_bounds, records, s)
            fig.savefig(buf, format=fmt, dpi=s.dpi, facecolor=s.background,
                        metadata=_STABLE_METADATA.get(fmt))
    except Exception as e:
        raise RenderError(f"failed to render {out_path.name}: {e}") from e
    finally:
        if fig is not None:
            plt.close(fig)

    _write_atomic(out_path, buf.getvalue())
    _LOG.info("[OK] %d panel(s), %d record(s) -> %s", len(per_panel), len(records), out_path)
    return out_path
