"""
Word-window text chunker.

Splits extracted document text into overlapping windows of words. Pure
functions with no I/O or randomness: the same text and parameters always
produce the same chunk boundaries.

Dependencies: None
System role: Chunking stage of document ingestion pipeline
"""

CHUNK_SIZE_WORDS = 500
CHUNK_OVERLAP_WORDS = 50


def chunk_text(
    text: str,
    chunk_size: int = CHUNK_SIZE_WORDS,
    overlap: int = CHUNK_OVERLAP_WORDS,
) -> list[str]:
    """
    Split text into ordered, overlapping word windows.

    Each window holds up to ``chunk_size`` words joined by single spaces.
    Consecutive windows share ``overlap`` words. The last window is the
    first one that reaches the end of the text, so it may be shorter.

    Args:
        text: Raw document text
        chunk_size: Words per window
        overlap: Words repeated from the previous window

    Returns:
        list[str]: Chunks in document order (empty for blank text)

    Raises:
        ValueError: When chunk_size < 1 or overlap is not in [0, chunk_size)
    """
    if chunk_size < 1:
        raise ValueError("chunk_size must be at least 1")
    if overlap < 0 or overlap >= chunk_size:
        raise ValueError("overlap must be >= 0 and smaller than chunk_size")

    words = text.split()
    if not words:
        return []

    step = chunk_size - overlap
    chunks: list[str] = []
    start = 0
    while start < len(words):
        end = min(start + chunk_size, len(words))
        chunks.append(" ".join(words[start:end]))
        if end >= len(words):
            break
        start += step

    return chunks


def estimate_tokens(content: str) -> int:
    """Rough token estimate (one token per four characters)."""
    return len(content) // 4
