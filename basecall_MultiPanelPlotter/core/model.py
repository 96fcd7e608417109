# basecall_MultiPanelPlotter/core/model.py
from __future__ import annotations
from dataclasses import dataclass, fields, astuple
from operator import attrgetter
from typing import Callable, Sequence
import pandas as pd

@dataclass(frozen=True)
class Record:
    time: float                        # batch time, unix seconds (sort key)
    samples: float
    bases: float
    mean_qscore: float
    time_to_package_and_send: float
    time_in_basecaller: float

RECORD_FIELDS: tuple[str, ...] = tuple(f.name for f in fields(Record))

@dataclass(frozen=True)
class Panel:
    label: str                         # caption and y-axis description
    field: str                         # Record attribute / frame column
    extract: Callable[[Record], float]

def _panel(label: str, field: str) -> Panel:
    return Panel(label=label, field=field, extract=attrgetter(field))

# top to bottom
PANELS: tuple[Panel, ...] = (
    _panel("Samples", "samples"),
    _panel("Bases", "bases"),
    _panel("Mean Q-score", "mean_qscore"),
    _panel("Time to Package", "time_to_package_and_send"),
    _panel("Time in Basecaller", "time_in_basecaller"),
)

def records_frame(records: Sequence[Record]) -> pd.DataFrame:
    """One column per Record field, rows in sequence order."""
    rows = [astuple(r) for r in records]
    return pd.DataFrame(rows, columns=list(RECORD_FIELDS), dtype=float)
