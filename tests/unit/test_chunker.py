"""
Test suite for the word-window chunker.

System role: Verification of chunk boundaries, coverage and determinism
"""

import math

import pytest

from studybuddy.core.document_processing.chunker import (
    CHUNK_OVERLAP_WORDS,
    CHUNK_SIZE_WORDS,
    chunk_text,
    estimate_tokens,
)


def _words(n: int) -> list[str]:
    return [f"w{i}" for i in range(n)]


def _expected_count(n: int, window: int, overlap: int) -> int:
    if n == 0:
        return 0
    if n <= overlap:
        return 1
    return max(1, math.ceil((n - overlap) / (window - overlap)))


class TestChunkTextBoundaries:
    """Test suite for chunk_text() window placement."""

    def test_520_words_should_produce_two_chunks_with_50_word_overlap(self) -> None:
        """Test the default policy on 520 words yields words 0-499 and 450-519."""
        # Arrange
        words = _words(520)

        # Act
        chunks = chunk_text(" ".join(words))

        # Assert
        assert len(chunks) == 2
        assert chunks[0] == " ".join(words[0:500])
        assert chunks[1] == " ".join(words[450:520])

    def test_text_shorter_than_window_should_produce_single_chunk(self) -> None:
        chunks = chunk_text("alpha beta  gamma\n\tdelta", chunk_size=10, overlap=2)

        assert chunks == ["alpha beta gamma delta"]

    def test_blank_text_should_produce_no_chunks(self) -> None:
        assert chunk_text("") == []
        assert chunk_text("   \n\t ") == []

    def test_exact_window_should_not_emit_trailing_overlap_chunk(self) -> None:
        """Test a text of exactly one window stops once the window reaches the end."""
        chunks = chunk_text(" ".join(_words(500)))

        assert len(chunks) == 1

    def test_zero_overlap_should_partition_words(self) -> None:
        chunks = chunk_text(" ".join(_words(10)), chunk_size=4, overlap=0)

        assert chunks == ["w0 w1 w2 w3", "w4 w5 w6 w7", "w8 w9"]

    @pytest.mark.parametrize(
        ("chunk_size", "overlap"),
        [(0, 0), (5, 5), (5, 6), (5, -1)],
    )
    def test_invalid_parameters_should_raise_value_error(self, chunk_size: int, overlap: int) -> None:
        with pytest.raises(ValueError):
            chunk_text("some words here", chunk_size=chunk_size, overlap=overlap)


class TestChunkTextProperties:
    """Coverage, overlap, count bound and determinism across sizes."""

    @pytest.mark.parametrize("n", [1, 3, 49, 50, 51, 499, 500, 501, 950, 951, 1234])
    @pytest.mark.parametrize(
        ("window", "overlap"),
        [(CHUNK_SIZE_WORDS, CHUNK_OVERLAP_WORDS), (7, 3), (4, 0)],
    )
    def test_chunks_should_cover_source_with_exact_overlap(self, n: int, window: int, overlap: int) -> None:
        # Arrange
        words = _words(n)

        # Act
        chunks = [chunk.split() for chunk in chunk_text(" ".join(words), window, overlap)]

        # Assert: count bound
        assert len(chunks) == _expected_count(n, window, overlap)

        # Assert: every chunk is a contiguous slice, overlapping the previous by `overlap`
        step = window - overlap
        for i, chunk in enumerate(chunks):
            start = i * step
            assert chunk == words[start:start + window]
            assert len(chunk) <= window
            if i > 0 and overlap:
                assert chunk[:overlap] == chunks[i - 1][-overlap:]

        # Assert: reconstruction without the repeated prefixes gives the source
        rebuilt = list(chunks[0])
        for chunk in chunks[1:]:
            rebuilt.extend(chunk[overlap:])
        assert rebuilt == words

    def test_chunking_should_be_deterministic(self) -> None:
        text = " ".join(_words(1777))

        assert chunk_text(text) == chunk_text(text)


class TestEstimateTokens:
    def test_estimate_tokens_should_use_four_characters_per_token(self) -> None:
        assert estimate_tokens("") == 0
        assert estimate_tokens("abc") == 0
        assert estimate_tokens("a" * 41) == 10
