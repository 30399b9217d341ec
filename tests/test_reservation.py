"""Tests for placeholder chunk and file reservation."""

from pathlib import Path

import pytest

from critical_css_plugin.models.options import PluginOptions
from critical_css_plugin.services.output_files import register_file_asset, write_text_atomic
from critical_css_plugin.services.reservation import CHUNK_NAME, MODULE_NAME, reserve_chunk, swap_placeholder_files


class TestReserveChunk:
    def test_adds_virtual_chunk_with_empty_module(self, compilation):
        chunk = reserve_chunk(compilation)
        assert chunk.name == CHUNK_NAME
        assert compilation.get_chunk(CHUNK_NAME) is chunk
        [module] = chunk.modules
        assert module.identifier == MODULE_NAME
        assert module.source == ""
        assert module.virtual is True


class TestSwapPlaceholderFiles:
    def test_replaces_placeholder_with_one_file_per_job(self, compilation):
        chunk = reserve_chunk(compilation)
        placeholder = chunk.files[0]
        options = PluginOptions(job_requests={"Home": "https://x.test/", "About": "https://x.test/about"})

        files = swap_placeholder_files(compilation, options)

        assert files == ["home.critical.css", "about.critical.css"]
        assert chunk.files == files
        assert placeholder not in compilation.assets
        for filename in files:
            path = Path(compilation.output_path) / filename
            assert path.read_text() == ""
            assert compilation.assets[filename].size() == 0

    def test_no_jobs_reserves_nothing(self, compilation):
        chunk = reserve_chunk(compilation)
        assert swap_placeholder_files(compilation, PluginOptions()) == []
        assert chunk.files == []
        assert list(Path(compilation.output_path).iterdir()) == []

    def test_hash_in_template(self, compilation):
        reserve_chunk(compilation)
        options = PluginOptions(job_requests={"home": "https://a.test/"}, filename_template="[name].[hash].css")
        assert swap_placeholder_files(compilation, options) == ["home.abc123.css"]

    def test_requires_reserved_chunk(self, compilation):
        with pytest.raises(LookupError):
            swap_placeholder_files(compilation, PluginOptions())


class TestOutputFiles:
    def test_register_file_asset_uses_base_name(self, compilation):
        path = Path(compilation.output_path) / "css" / "home.critical.css"
        write_text_atomic(path, "body{}")
        key = register_file_asset(path, compilation)
        assert key == "home.critical.css"
        assert compilation.assets[key].source() == "body{}"
        assert compilation.assets[key].size() == 6

    def test_size_counts_utf8_bytes(self, compilation):
        path = Path(compilation.output_path) / "x.css"
        write_text_atomic(path, 'a::before{content:"é"}')
        register_file_asset(path, compilation)
        assert compilation.assets["x.css"].size() == len('a::before{content:"é"}'.encode("utf-8"))

    def test_write_overwrites_in_place_without_leftovers(self, tmp_path):
        path = tmp_path / "home.critical.css"
        write_text_atomic(path, "")
        write_text_atomic(path, "h1{color:red}")
        assert path.read_text() == "h1{color:red}"
        assert [p.name for p in tmp_path.iterdir()] == ["home.critical.css"]

    def test_write_failure_propagates(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        with pytest.raises(OSError):
            write_text_atomic(blocker / "home.critical.css", "x")
