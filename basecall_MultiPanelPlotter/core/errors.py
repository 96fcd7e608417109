# basecall_MultiPanelPlotter/core/errors.py
from __future__ import annotations


class BasecallPlotError(Exception):
    """Base class for every failure surfaced by the plotter."""


class UsageError(BasecallPlotError):
    pass


class FileOpenError(BasecallPlotError):
    """Input missing/unreadable or output path unwritable."""


class MissingField(BasecallPlotError, ValueError):
    def __init__(self, field: str, line: int, n_columns: int):
        self.field = field
        self.line = line
        self.n_columns = n_columns
        super().__init__(f"line {line}: missing {field} (row has {n_columns} column(s))")


class ParseError(BasecallPlotError, ValueError):
    pass


class UnorderableTime(ParseError):
    """A NaN batch time makes chronological ordering undefined."""


class EmptyDataset(BasecallPlotError, ValueError):
    pass


class RenderError(BasecallPlotError):
    pass
