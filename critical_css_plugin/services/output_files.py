"""Disk writes for reserved and final critical CSS files."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from critical_css_plugin.build.host import Asset, Compilation
from critical_css_plugin.core.logging import get_logger

logger = get_logger(__name__)


def output_file(compilation: Compilation, filename: str) -> Path:
    return Path(compilation.output_path) / filename


def write_text_atomic(path: Path, text: str) -> None:
    """Replace ``path`` with ``text`` so readers never see a partial file.

    The content goes to a temporary sibling first and is moved into place
    once fully written; the temporary file is removed if anything fails.
    OSError propagates to the caller.
    """

    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
            handle.write(text)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    logger.debug("critical_css_file_written", path=str(path), size=len(text))


def register_file_asset(path: Path, compilation: Compilation) -> str:
    """Add an on-disk file to the asset table, keyed by its base name."""

    text = path.read_text(encoding="utf-8")
    resolved = Path(compilation.context, path).resolve()
    key = resolved.name
    compilation.assets[key] = Asset.from_text(text)
    return key
