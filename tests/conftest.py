"""Shared fixtures: an in-memory host build and a scripted extractor."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, MutableMapping

import pytest

from critical_css_plugin.build.host import Asset, VirtualModule
from critical_css_plugin.core.logging import configure_logging


@pytest.fixture(scope="session", autouse=True)
def _logging():
    configure_logging("DEBUG")


@dataclass
class FakeChunk:
    name: str
    files: List[str] = field(default_factory=list)
    modules: List[VirtualModule] = field(default_factory=list)

    def add_module(self, module: VirtualModule) -> None:
        self.modules.append(module)


@dataclass
class FakeCompilation:
    output_path: str
    context: str
    hash: str = "abc123"
    assets: MutableMapping[str, Asset] = field(default_factory=dict)
    errors: List[Exception] = field(default_factory=list)
    chunks: Dict[str, FakeChunk] = field(default_factory=dict)

    def add_chunk(self, name: str) -> FakeChunk:
        # Hosts assign every chunk an initial output file.
        chunk = FakeChunk(name=name, files=[f"{name}.{self.hash}.js"])
        self.assets[chunk.files[0]] = Asset.from_text("")
        self.chunks[name] = chunk
        return chunk

    def get_chunk(self, name: str) -> FakeChunk | None:
        return self.chunks.get(name)

    def add_stylesheet(self, filename: str, text: str) -> None:
        self.assets[filename] = Asset.from_text(text)


@pytest.fixture
def compilation(tmp_path) -> FakeCompilation:
    output = tmp_path / "dist"
    output.mkdir()
    return FakeCompilation(output_path=str(output), context=str(tmp_path))


class RecordingExtractor:
    """Async extractor returning ``/* <url> */`` and remembering each call."""

    def __init__(self, fail_for: tuple[str, ...] = (), delay: float = 0.0,
                 render: Callable[[Dict[str, Any]], str] | None = None) -> None:
        self.calls: List[Dict[str, Any]] = []
        self.fail_for = fail_for
        self.delay = delay
        self.render = render or (lambda options: f"/* {options['url']} */ body{{margin:0}}")

    async def __call__(self, options: Dict[str, Any]) -> str:
        self.calls.append(dict(options))
        if self.delay:
            await asyncio.sleep(self.delay)
        if options["url"] in self.fail_for:
            raise RuntimeError(f"render failed for {options['url']}")
        return self.render(options)


@pytest.fixture
def extractor() -> RecordingExtractor:
    return RecordingExtractor()


@pytest.fixture
def make_extractor() -> Callable[..., RecordingExtractor]:
    return RecordingExtractor


@pytest.fixture
def make_compilation() -> Callable[..., FakeCompilation]:
    return FakeCompilation
