"""Collect stylesheet content emitted by the build."""

from __future__ import annotations

from re import Pattern
from typing import Iterator, Mapping, Optional

from critical_css_plugin.build.host import Asset

STYLESHEET_SUFFIX = ".css"


def stylesheet_names(assets: Mapping[str, Asset], match_pattern: Optional[Pattern[str]] = None) -> Iterator[str]:
    """Yield asset names that are stylesheets and match ``match_pattern`` if given."""

    for filename in assets:
        if not filename.endswith(STYLESHEET_SUFFIX):
            continue
        if match_pattern is not None and not match_pattern.search(filename):
            continue
        yield filename


def aggregate_css(assets: Mapping[str, Asset], match_pattern: Optional[Pattern[str]] = None) -> str:
    """Concatenate matching stylesheets in asset-table order, no separator."""

    return "".join(assets[filename].source() for filename in stylesheet_names(assets, match_pattern))
