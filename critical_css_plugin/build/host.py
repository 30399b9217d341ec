"""Interfaces the plugin consumes from the host build system."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, MutableMapping, Protocol


@dataclass(frozen=True)
class Asset:
    """Content/size provider pair stored in the host's asset table."""

    source: Callable[[], str]
    size: Callable[[], int]

    @classmethod
    def from_text(cls, text: str) -> "Asset":
        encoded_size = len(text.encode("utf-8"))
        return cls(source=lambda: text, size=lambda: encoded_size)


@dataclass
class VirtualModule:
    """Build-graph module with no real source, used to reserve output slots."""

    identifier: str
    source: str = ""
    hash: str = ""
    virtual: bool = True


class Chunk(Protocol):
    name: str
    files: List[str]

    def add_module(self, module: VirtualModule) -> None: ...


class Compilation(Protocol):
    """A single build cycle as seen by the plugin."""

    assets: MutableMapping[str, Asset]
    errors: List[Exception]

    @property
    def hash(self) -> str: ...

    @property
    def output_path(self) -> str: ...

    @property
    def context(self) -> str: ...

    def add_chunk(self, name: str) -> Chunk: ...

    def get_chunk(self, name: str) -> Chunk | None: ...
