# basecall_MultiPanelPlotter/loaders/csv_loader.py
from __future__ import annotations
from pathlib import Path
import csv, logging, math, re
from typing import Sequence

from ..core.errors import FileOpenError, MissingField, ParseError, UnorderableTime
from ..core.model import Record, RECORD_FIELDS, records_frame

_LOG = logging.getLogger(__name__)

# Positional contract with the basecaller's batch log. Columns are NOT matched
# by header name; 0, 1 and 5 are ignored, anything past 8 too.
COLUMN_INDEX: dict[str, int] = {
    "time": 2,
    "samples": 3,
    "bases": 4,
    "mean_qscore": 6,
    "time_to_package_and_send": 7,
    "time_in_basecaller": 8,
}

# error messages name the column the way the batch log header does
_COLUMN_NAME: dict[str, str] = {"time": "batch_time"}

def _column_name(field: str) -> str:
    return _COLUMN_NAME.get(field, field)

# plain ASCII decimal literal: no padding, digit separators or word forms (nan, inf)
_FLOAT_LITERAL = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

def _to_float(text: str, field: str, line: int) -> float:
    if not _FLOAT_LITERAL.fullmatch(text):
        raise ParseError(f"line {line}: {_column_name(field)} is not a number: {text!r}")
    value = float(text)
    if not math.isfinite(value):
        raise ParseError(f"line {line}: {_column_name(field)} is not finite: {text!r}")
    return value

def _parse_row(row: Sequence[str], line: int) -> Record:
    values = {}
    for field in RECORD_FIELDS:
        idx = COLUMN_INDEX[field]
        if idx >= len(row):
            raise MissingField(_column_name(field), line, len(row))
        values[field] = _to_float(row[idx], field, line)
    return Record(**values)

def _read_records(reader) -> list[Record]:
    records: list[Record] = []
    for row in reader:
        if not row:
            continue                    # blank line
        records.append(_parse_row(row, reader.line_num))
    return records

def sort_records(records: Sequence[Record]) -> list[Record]:
    """
    Stable chronological sort (ties keep file order).
    NaN batch times have no ordering and are rejected up front.
    """
    if not records:
        return []
    df = records_frame(records)
    nan_rows = df.index[df["time"].isna()].tolist()
    if nan_rows:
        raise UnorderableTime(
            f"batch_time is NaN for {len(nan_rows)} record(s) (first at position {nan_rows[0]}); "
            "records cannot be ordered"
        )
    df = df.sort_values("time", kind="stable")
    return [Record(*(float(v) for v in row)) for row in df.itertuples(index=False, name=None)]

# ---------- public loader ----------
def load(path: Path) -> list[Record]:
    """
    Reads a basecaller batch log (header row + data rows, >= 9 columns each).
    Returns: records sorted by batch time. Any bad row aborts the whole load.
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8", newline="") as f:
            reader = csv.reader(f)
            header = next(reader, None)
            if header is None:
                _LOG.info("%s: empty file, no records", path.name)
                return []
            records = _read_records(reader)
    except OSError as e:
        raise FileOpenError(f"cannot read {path}: {e.strerror or e}") from e
    except UnicodeDecodeError as e:
        raise FileOpenError(f"cannot read {path}: not UTF-8 text ({e.reason})") from e
    except csv.Error as e:
        raise ParseError(f"{path.name}: malformed CSV: {e}") from e

    records = sort_records(records)
    if records:
        _LOG.info("%s: loaded %d record(s), batch_time %.3f .. %.3f",
                  path.name, len(records), records[0].time, records[-1].time)
    else:
        _LOG.info("%s: header only, no records", path.name)
    return records
