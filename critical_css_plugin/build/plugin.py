"""Critical CSS plugin: hooks the extraction pipeline into a host build."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from critical_css_plugin.build.host import Compilation
from critical_css_plugin.core.logging import get_logger
from critical_css_plugin.models.build import BuildContext, SkipReason
from critical_css_plugin.models.options import PluginOptions
from critical_css_plugin.services.aggregator import aggregate_css
from critical_css_plugin.services.orchestrator import Extractor, run_extraction
from critical_css_plugin.services.reservation import reserve_chunk, swap_placeholder_files

logger = get_logger(__name__)

PLUGIN_NAME = "critical-css-plugin"


class CriticalCssPlugin:
    """Generates one critical CSS file per configured page.

    The host calls the phase methods in a fixed order once per build:
    :meth:`make`, :meth:`optimize_assets`, :meth:`after_compile` and
    :meth:`after_emit`. The :class:`BuildContext` returned by ``make`` is
    passed back into every later phase.
    """

    def __init__(
        self,
        options: Optional[Mapping[str, Any] | PluginOptions] = None,
        *,
        extractor: Extractor,
        **overrides: Any,
    ) -> None:
        if isinstance(options, PluginOptions):
            options = options.model_dump()
        self.options = PluginOptions.model_validate({**(options or {}), **overrides})
        self.extractor = extractor

    def make(self, compilation: Compilation) -> BuildContext:
        """Graph construction: reserve the virtual chunk."""

        reserve_chunk(compilation)
        return BuildContext()

    def optimize_assets(self, compilation: Compilation, context: BuildContext) -> None:
        """Swap the chunk's placeholder for empty files at the final paths."""

        context.reserved_files = swap_placeholder_files(compilation, self.options)

    def after_compile(self, compilation: Compilation, context: BuildContext) -> None:
        """Aggregate the build's stylesheets as the shared extraction input."""

        if not self.options.job_requests:
            context.skipped = SkipReason.no_job_requests
            logger.debug("critical_css_skipped", reason=context.skipped.value)
            return

        css_source = aggregate_css(compilation.assets, self.options.match_pattern)
        if not css_source:
            context.skipped = SkipReason.no_stylesheets
            logger.debug("critical_css_skipped", reason=context.skipped.value)
            return

        context.css_source = css_source

    async def after_emit(self, compilation: Compilation, context: BuildContext) -> None:
        """Run extraction for every page and surface a failure to the build."""

        if not context.should_extract:
            return

        errors = await run_extraction(
            self.options.jobs,
            context.css_source,
            self.extractor,
            filename_template=self.options.filename_template,
            build_hash=compilation.hash,
            output_path=compilation.output_path,
            extraction_config=self.options.extraction_config,
            ledger=context.ledger,
        )
        compilation.errors.extend(errors)


async def run_build(plugin: CriticalCssPlugin, compilation: Compilation) -> BuildContext:
    """Drive the plugin through one build's phases in order."""

    logger.info("critical_css_build_started", plugin=PLUGIN_NAME, hash=compilation.hash)
    context = plugin.make(compilation)
    plugin.optimize_assets(compilation, context)
    plugin.after_compile(compilation, context)
    await plugin.after_emit(compilation, context)
    logger.info(
        "critical_css_build_finished",
        plugin=PLUGIN_NAME,
        skipped=context.skipped.value if context.skipped else None,
        errors=len(compilation.errors),
    )
    return context
