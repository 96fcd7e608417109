# basecall_MultiPanelPlotter/core/bounds.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence
import pandas as pd

from .errors import EmptyDataset
from .model import PANELS, Panel, Record, records_frame

# single-point ranges are widened by this fraction of the value (absolute at zero)
_DEGENERATE_PAD = 0.05

@dataclass(frozen=True)
class AxisBounds:
    lo: float
    hi: float

    @property
    def is_degenerate(self) -> bool:
        return self.lo == self.hi

    def view_limits(self) -> tuple[float, float]:
        """Limits handed to the axes; a single-point range is widened so it can be drawn."""
        if not self.is_degenerate:
            return self.lo, self.hi
        if self.lo == 0:
            return -_DEGENERATE_PAD, _DEGENERATE_PAD
        pad = abs(self.lo) * _DEGENERATE_PAD
        return self.lo - pad, self.hi + pad

def compute_bounds(df: pd.DataFrame, column: str) -> AxisBounds:
    if df.empty:
        raise EmptyDataset(f"no data to compute '{column}' bounds")
    s = df[column]
    return AxisBounds(float(s.min()), float(s.max()))

def panel_bounds(records: Sequence[Record]) -> list[tuple[Panel, AxisBounds, AxisBounds]]:
    """
    Per panel (in PANELS order): (panel, x_bounds, y_bounds).
    x_bounds is the global batch-time range, shared by every panel;
    y_bounds covers that panel's field only.
    """
    if len(records) == 0:
        raise EmptyDataset("dataset has no records; nothing to plot")
    df = records_frame(records)
    x_bounds = compute_bounds(df, "time")
    return [(p, x_bounds, compute_bounds(df, p.field)) for p in PANELS]
