"""
Text chunking task.

Joins segments into the full paper text and cuts it into bounded windows
where each window repeats the last `chunk_overlap` characters of the
previous one. Chunk text carries page metadata from the segments it covers.

Dependencies: langchain_text_splitters
System role: Fourth stage of the notes pipeline
"""

import re
from bisect import bisect_right
from collections.abc import Sequence

from langchain_text_splitters import TextSplitter

from papernotes.core.document_processing.models import TextChunk, TextSegment
from papernotes.core.exceptions import ConfigurationError

SEGMENT_SEPARATOR = "\n\n"

# A word plus its trailing whitespace, or a leading whitespace run.
_UNIT_PATTERN = re.compile(r"\s+|\S+\s*")


def join_segments(segments: Sequence[TextSegment]) -> str:
    """
    Full paper text: segment contents in order, separated by a blank line.

    Args:
        segments: Segments in reading order

    Returns:
        str: Joined text
    """
    return SEGMENT_SEPARATOR.join(segment.content for segment in segments)


class ChunkingTask(TextSplitter):
    """
    Split segments into overlapping, size-bounded chunks.

    Consecutive windows share exactly `chunk_overlap` characters.
    """

    def __init__(
        self,
        chunk_size: int = 300,
        chunk_overlap: int = 30,
    ) -> None:
        """
        Initialize chunking task.

        Args:
            chunk_size: Maximum chunk size in characters
            chunk_overlap: Characters shared between consecutive chunks

        Raises:
            ConfigurationError: When the sizes are inconsistent
        """
        if chunk_size <= 0:
            raise ConfigurationError(
                f"chunk_size must be positive, got {chunk_size}",
                setting="chunk_size",
            )
        if chunk_overlap < 0:
            raise ConfigurationError(
                f"chunk_overlap must not be negative, got {chunk_overlap}",
                setting="chunk_overlap",
            )
        if chunk_overlap >= chunk_size:
            raise ConfigurationError(
                f"chunk_overlap ({chunk_overlap}) must be smaller than chunk_size ({chunk_size})",
                setting="chunk_overlap",
            )
        super().__init__(
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            length_function=len,
            strip_whitespace=False,
        )

    def _units(self, text: str) -> list[str]:
        """Tokenize text into units no longer than chunk_size - chunk_overlap."""
        max_unit = self._chunk_size - self._chunk_overlap
        units = []
        for match in _UNIT_PATTERN.finditer(text):
            unit = match.group()
            if len(unit) <= max_unit:
                units.append(unit)
            else:
                units.extend(unit[i : i + max_unit] for i in range(0, len(unit), max_unit))
        return units

    def split_windows(self, text: str) -> list[tuple[int, str]]:
        """
        Cut text into windows with their offsets.

        Args:
            text: Text to split

        Returns:
            list[tuple[int, str]]: (start offset, window text) pairs
        """
        windows: list[tuple[int, str]] = []
        current = ""
        start = 0
        offset = 0
        has_new_text = False

        for unit in self._units(text):
            if has_new_text and len(current) + len(unit) > self._chunk_size:
                windows.append((start, current))
                overlap = current[-self._chunk_overlap :] if self._chunk_overlap else ""
                start = offset - len(overlap)
                current = overlap
                has_new_text = False
            current += unit
            offset += len(unit)
            has_new_text = True

        if has_new_text:
            windows.append((start, current))
        return windows

    def split_text(self, text: str) -> list[str]:
        """
        Cut text into windows.

        Args:
            text: Text to split

        Returns:
            list[str]: Window texts in order
        """
        return [content for _, content in self.split_windows(text)]

    def split(self, segments: Sequence[TextSegment]) -> list[TextChunk]:
        """
        Split segments into chunks.

        Each chunk inherits the metadata of the segment it starts in and
        records `start_index`, `chunk_index`, `page` and `pages`.

        Args:
            segments: Segments in reading order

        Returns:
            list[TextChunk]: Chunks in order (empty when there is no text)
        """
        text = join_segments(segments)
        if not text:
            return []

        spans = []
        position = 0
        for segment in segments:
            spans.append((position, position + len(segment.content)))
            position += len(segment.content) + len(SEGMENT_SEPARATOR)
        span_starts = [span_start for span_start, _ in spans]

        chunks = []
        for chunk_index, (start, content) in enumerate(self.split_windows(text)):
            end = start + len(content)
            owner = segments[max(bisect_right(span_starts, start) - 1, 0)]
            pages = sorted(
                {
                    segment.origin_page
                    for segment, (span_start, span_end) in zip(segments, spans)
                    if segment.origin_page is not None and span_start < end and span_end > start
                }
            )
            metadata = {
                **owner.metadata,
                "start_index": start,
                "chunk_index": chunk_index,
                "page": pages[0] if pages else owner.origin_page,
                "pages": pages,
            }
            chunks.append(TextChunk(content=content, metadata=metadata))
        return chunks
