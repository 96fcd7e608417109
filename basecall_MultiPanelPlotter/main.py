# basecall_MultiPanelPlotter/main.py
from __future__ import annotations
from pathlib import Path
import logging
import sys
import yaml

from .core.errors import BasecallPlotError, UsageError
from .core.plotting import RenderSettings, render_panels
from .loaders import csv_loader

_LOG = logging.getLogger(__name__)

def load_config(cfg_path: Path) -> dict:
    with cfg_path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}

def _setup_logging(cfg: dict):
    verbose = bool(cfg.get("logging", {}).get("verbose", False))
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

def _parse_args(argv: list[str], prog: str) -> tuple[Path, Path]:
    if len(argv) != 2:
        raise UsageError(f"Usage: {prog} <input_csv> <output_image>")
    return Path(argv[0]), Path(argv[1])

def main(argv: list[str] | None = None) -> int:
    prog = Path(sys.argv[0]).name if sys.argv and sys.argv[0] else "basecall-plot"
    if argv is None:
        argv = sys.argv[1:]

    # ---------- args ----------
    try:
        in_path, out_path = _parse_args(list(argv), prog)
    except UsageError as e:
        print(e, file=sys.stderr)
        return 1

    # ---------- config ----------
    here = Path(__file__).resolve().parent
    cfg = load_config(here / "config.yaml")
    _setup_logging(cfg)
    _LOG.info("input=%s output=%s", in_path, out_path)

    # ---------- load + render ----------
    try:
        records = csv_loader.load(in_path)
        render_panels(records, out_path, RenderSettings.from_config(cfg))
    except BasecallPlotError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(f"Plot saved to {out_path}")
    return 0

def run():
    sys.exit(main())

if __name__ == "__main__":
    run()
