# basecall_MultiPanelPlotter/utils/detect.py
from __future__ import annotations
from pathlib import Path
from matplotlib.backends.backend_agg import FigureCanvasAgg

from ..core.errors import RenderError

def supported_formats() -> dict[str, str]:
    """Extension -> description, for everything the Agg canvas can write."""
    return dict(FigureCanvasAgg.get_supported_filetypes())

def detect_format(path: Path) -> str:
    """
    Classify an output path by suffix.
    - .png / .PNG -> 'png'
    - .svg        -> 'svg'
    - no suffix or a suffix matplotlib cannot write -> RenderError
    """
    suffix = Path(path).suffix.lower().lstrip(".")
    if not suffix:
        raise RenderError(f"{path}: output path has no extension; cannot pick an image format")
    formats = supported_formats()
    if suffix not in formats:
        raise RenderError(
            f"{path}: unsupported image format '.{suffix}' (supported: {', '.join(sorted(formats))})"
        )
    return suffix
