"""Reserve build output slots for critical CSS before the content exists."""

from __future__ import annotations

from typing import List

from critical_css_plugin.build.host import Chunk, Compilation, VirtualModule
from critical_css_plugin.core.logging import get_logger
from critical_css_plugin.models.options import PluginOptions
from critical_css_plugin.services.namer import resolve_output_filename
from critical_css_plugin.services.output_files import output_file, register_file_asset, write_text_atomic

logger = get_logger(__name__)

CHUNK_NAME = "criticalcss"
MODULE_NAME = f"{CHUNK_NAME}-module"


def reserve_chunk(compilation: Compilation) -> Chunk:
    """Attach the virtual ``criticalcss`` chunk to the build graph."""

    chunk = compilation.add_chunk(CHUNK_NAME)
    chunk.add_module(VirtualModule(identifier=MODULE_NAME))
    logger.debug("critical_css_chunk_reserved", chunk=CHUNK_NAME)
    return chunk


def swap_placeholder_files(compilation: Compilation, options: PluginOptions) -> List[str]:
    """Replace the chunk's placeholder output with one empty file per page.

    Each file is written to the output directory right away and registered
    in the asset table, so later build stages see the final filenames.
    """

    chunk = compilation.get_chunk(CHUNK_NAME)
    if chunk is None:
        raise LookupError(f"Chunk {CHUNK_NAME!r} was not reserved for this build")

    for placeholder in chunk.files:
        compilation.assets.pop(placeholder, None)
    chunk.files = []

    for name in options.job_requests:
        filename = resolve_output_filename(name, options.filename_template, compilation.hash)
        path = output_file(compilation, filename)
        write_text_atomic(path, "")
        register_file_asset(path, compilation)
        chunk.files.append(filename)

    logger.info("critical_css_slots_reserved", files=chunk.files)
    return list(chunk.files)
