"""Tests for ChunkManager packing, Chunk and ChunkBuilder."""

from __future__ import annotations

import logging
import re
from pathlib import Path

import pytest

from chunking.chunk_manager import Chunk, ChunkBuilder, ChunkManager
from chunking.exceptions import ConfigurationError, FileTooLargeError
from chunking.file_info import FileInfo
from chunking.token_counter import EnhancedTokenEstimator, SimpleTokenEstimator
from tests.helpers import numbered_lines

PART_LABEL = re.compile(r"^(?P<name>.+) \[Part (?P<k>\d+)/(?P<m>\d+)\]$")


def _flatten(chunks):
    return [f for chunk in chunks for f in chunk.files]


# ---------------------------------------------------------------------------
# Chunk / ChunkBuilder
# ---------------------------------------------------------------------------

class TestChunk:
    def test_utilization(self) -> None:
        chunk = Chunk(index=0, files=(), total_tokens=500)
        assert chunk.utilization(1000) == 0.5
        assert chunk.utilization(500) == 1.0
        assert chunk.utilization(0) == 0.0

    def test_file_count_and_lines(self, make_text_file, make_binary_file) -> None:
        chunk = Chunk(
            index=3,
            files=(make_text_file("a.py", 5, "x\ny\nz"), make_binary_file("b.png", 64)),
            total_tokens=5,
        )
        assert chunk.file_count == 2
        assert chunk.total_lines == 3

    def test_is_immutable(self) -> None:
        chunk = Chunk(index=0, files=(), total_tokens=0)
        with pytest.raises(AttributeError):
            chunk.index = 1  # type: ignore[misc]


class TestChunkBuilder:
    def test_empty_builder_builds_nothing(self) -> None:
        assert ChunkBuilder(0, 100).build() is None

    def test_accumulates_tokens(self, make_text_file) -> None:
        builder = ChunkBuilder(4, 100)
        builder.add_file(make_text_file("a.py", 60))
        assert builder.can_fit(40)
        assert not builder.can_fit(41)
        builder.add_file(make_text_file("b.py", 40))

        chunk = builder.build()
        assert chunk is not None
        assert chunk.index == 4
        assert chunk.total_tokens == 100
        assert [f.relative_path for f in chunk.files] == ["a.py", "b.py"]


# ---------------------------------------------------------------------------
# ChunkManager
# ---------------------------------------------------------------------------

class TestChunkManagerPacking:
    def test_empty_input_yields_no_chunks(self) -> None:
        assert ChunkManager(max_tokens=3000).create_chunks([]) == []

    def test_single_file(self, make_text_file) -> None:
        chunks = ChunkManager(max_tokens=3000).create_chunks([make_text_file("test.rs", 300)])
        assert len(chunks) == 1
        assert chunks[0].files[0].relative_path == "test.rs"
        assert chunks[0].total_tokens == 300

    def test_two_files_share_a_chunk(self, make_text_file) -> None:
        files = [make_text_file("file1.rs", 300), make_text_file("file2.rs", 300)]
        chunks = ChunkManager(max_tokens=1000).create_chunks(files)

        assert len(chunks) == 1
        assert chunks[0].index == 0
        assert chunks[0].file_count == 2
        assert chunks[0].total_tokens == 600

    def test_two_files_need_two_chunks(self, make_text_file) -> None:
        files = [make_text_file("file1.rs", 300), make_text_file("file2.rs", 300)]
        chunks = ChunkManager(max_tokens=500).create_chunks(files)

        assert [c.index for c in chunks] == [0, 1]
        assert [c.file_count for c in chunks] == [1, 1]
        assert [c.files[0].relative_path for c in chunks] == ["file1.rs", "file2.rs"]

    def test_file_exactly_at_limit_is_not_split(self, make_text_file) -> None:
        record = make_text_file("exact.py", 500, numbered_lines(50))
        chunks = ChunkManager(max_tokens=500).create_chunks([record])
        assert len(chunks) == 1
        assert chunks[0].files[0] is record

    def test_greedy_order_preserving_grouping(self, make_text_file) -> None:
        tokens = [100, 450, 50, 200, 499, 1, 0, 300]
        files = [make_text_file(f"f{i}.py", t) for i, t in enumerate(tokens)]

        chunks = ChunkManager(max_tokens=500).create_chunks(files)

        groups = [[f.token_count for f in c.files] for c in chunks]
        assert groups == [[100], [450, 50], [200], [499, 1, 0], [300]]
        assert [c.index for c in chunks] == list(range(len(chunks)))

    def test_packing_invariants(self, make_text_file) -> None:
        tokens = [37, 250, 480, 12, 12, 12, 333, 167, 0, 499, 500, 1, 250, 250, 251]
        files = [make_text_file(f"dir/{i:02d}.py", t) for i, t in enumerate(tokens)]

        chunks = ChunkManager(max_tokens=500).create_chunks(files)

        assert [c.index for c in chunks] == list(range(len(chunks)))
        for chunk in chunks:
            assert chunk.files
            assert chunk.total_tokens == sum(f.token_count for f in chunk.files)
            assert chunk.total_tokens <= 500
        # No file is split or reordered when every file fits
        assert _flatten(chunks) == files

    def test_small_binary_files_are_packed(self, make_text_file, make_binary_file) -> None:
        files = [make_binary_file("logo.png", 20_000), make_text_file("main.py", 100)]
        chunks = ChunkManager(max_tokens=500).create_chunks(files)
        assert len(chunks) == 1
        assert chunks[0].total_tokens == 100

    def test_is_deterministic(self, make_text_file) -> None:
        files = [make_text_file(f"f{i}.py", (i * 137) % 450) for i in range(40)]
        files.append(make_text_file("zz_large.py", 2000, numbered_lines(400)))
        manager = ChunkManager(max_tokens=500, overlap_tokens=50)

        assert manager.create_chunks(files) == manager.create_chunks(files)


class TestChunkManagerLargeFiles:
    def test_large_file_is_split_into_labelled_parts(self, make_text_file) -> None:
        record = make_text_file("large.rs", 3000, numbered_lines(1000))
        chunks = ChunkManager(max_tokens=500, overlap_tokens=100).create_chunks([record])

        assert len(chunks) > 1
        assert [c.index for c in chunks] == list(range(len(chunks)))

        for k, chunk in enumerate(chunks, start=1):
            assert chunk.file_count == 1
            part = chunk.files[0]
            match = PART_LABEL.match(part.relative_path)
            assert match is not None
            assert match.group("name") == "large.rs"
            assert int(match.group("k")) == k
            assert int(match.group("m")) == len(chunks)
            assert part.path == Path("/project/large.rs")
            assert chunk.total_tokens == part.token_count == SimpleTokenEstimator().estimate(part.text)

        assert chunks[0].files[0].text.startswith("fn function_0() {}")
        assert chunks[-1].files[0].text.endswith("fn function_999() {}")

    def test_parts_overlap(self, make_text_file) -> None:
        record = make_text_file("large.rs", 3000, numbered_lines(1000))
        chunks = ChunkManager(max_tokens=500, overlap_tokens=100).create_chunks([record])

        first = chunks[0].files[0].text.split("\n")
        second = chunks[1].files[0].text.split("\n")
        assert second[0] in first
        assert first[-1] in second

    def test_oversized_part_is_emitted_with_warning(self, make_text_file, caplog) -> None:
        record = make_text_file("minified.js", 1000, "x" * 4000)

        with caplog.at_level(logging.WARNING, logger="chunking.file_splitter"):
            chunks = ChunkManager(max_tokens=500).create_chunks([record])

        assert len(chunks) == 1
        assert chunks[0].files[0].relative_path == "minified.js [Part 1/1]"
        assert chunks[0].total_tokens == 1000
        assert "exceeds limit of 500" in caplog.text

    def test_empty_large_file_is_kept_whole(self, make_text_file) -> None:
        record = make_text_file("empty.txt", 900, "")
        chunks = ChunkManager(max_tokens=500).create_chunks([record])
        assert len(chunks) == 1
        assert chunks[0].files[0] is record

    def test_surrounding_files_keep_order_and_indices(self, make_text_file) -> None:
        files = [
            make_text_file("a.py", 300),
            make_text_file("big.py", 3000, numbered_lines(600, "value_{i} = {i}")),
            make_text_file("c.py", 300),
            make_text_file("d.py", 100),
        ]
        chunks = ChunkManager(max_tokens=500, overlap_tokens=50).create_chunks(files)

        assert [c.index for c in chunks] == list(range(len(chunks)))
        assert [f.relative_path for f in chunks[0].files] == ["a.py"]
        assert [f.relative_path for f in chunks[-1].files] == ["c.py", "d.py"]
        middle = chunks[1:-1]
        assert middle
        assert all(c.files[0].relative_path.startswith("big.py [Part ") for c in middle)

    def test_enhanced_estimator_is_used_for_parts(self, make_text_file) -> None:
        estimator = EnhancedTokenEstimator()
        record = make_text_file("big.py", 5000, numbered_lines(800, "total += items[{i}] * 2;"))
        chunks = ChunkManager(max_tokens=400, overlap_tokens=40, token_estimator=estimator).create_chunks([record])

        assert len(chunks) > 1
        for chunk in chunks:
            assert chunk.total_tokens == estimator.estimate(chunk.files[0].text)


class TestChunkManagerErrors:
    def test_oversized_binary_aborts(self, make_binary_file) -> None:
        record = make_binary_file("large.bin", 10_000, token_count=10_000)

        with pytest.raises(FileTooLargeError) as exc_info:
            ChunkManager(max_tokens=2500).create_chunks([record])

        error = exc_info.value
        assert error.path == Path("/project/large.bin")
        assert error.size == 10_000
        assert error.limit == 2500
        assert "large.bin" in str(error)

    def test_oversized_binary_after_text_files_still_aborts(self, make_text_file, make_binary_file) -> None:
        files = [
            make_text_file("a.py", 400),
            make_text_file("b.py", 400),
            make_binary_file("model.bin", 1000, token_count=1000),
        ]
        with pytest.raises(FileTooLargeError):
            ChunkManager(max_tokens=500).create_chunks(files)

    @pytest.mark.parametrize("max_tokens", [0, -10])
    def test_rejects_non_positive_capacity(self, max_tokens: int) -> None:
        with pytest.raises(ConfigurationError):
            ChunkManager(max_tokens=max_tokens)

    def test_rejects_negative_overlap(self) -> None:
        with pytest.raises(ConfigurationError):
            ChunkManager(max_tokens=100, overlap_tokens=-1)

    def test_file_info_rejects_negative_tokens(self) -> None:
        with pytest.raises(ValueError):
            FileInfo.text_file("/project/a.py", "a.py", "x", -1)
