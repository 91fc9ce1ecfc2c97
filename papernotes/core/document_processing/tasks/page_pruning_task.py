"""
Page pruning task.

Removes caller-selected pages (references, appendices) from a PDF before
it is partitioned.

Dependencies: pypdf
System role: Second stage of the notes pipeline
"""

from collections.abc import Iterable
from io import BytesIO

from pypdf import PdfReader, PdfWriter

from papernotes.core.exceptions import MalformedDocumentError


class PagePruningTask:
    """Delete 1-indexed pages from PDF bytes."""

    def prune(self, data: bytes, excluded_pages: Iterable[int]) -> bytes:
        """
        Remove pages from a PDF.

        Pages are removed in ascending order; after k removals the remaining
        pages have shifted left by k, so the k-th removal targets
        index `page - 1 - k`.

        Args:
            data: PDF bytes
            excluded_pages: 1-indexed pages to remove

        Returns:
            bytes: The input object itself when nothing is excluded,
                otherwise a new PDF without those pages

        Raises:
            MalformedDocumentError: Unreadable PDF or page outside 1..page_count
        """
        pages = sorted(set(excluded_pages))
        if not pages:
            return data

        try:
            reader = PdfReader(BytesIO(data))
            page_count = len(reader.pages)
        except Exception as e:
            raise MalformedDocumentError(f"Could not read PDF: {e}") from e

        out_of_range = [page for page in pages if page < 1 or page > page_count]
        if out_of_range:
            raise MalformedDocumentError(
                f"Pages out of range for a {page_count}-page document",
                details={"pages": out_of_range, "page_count": page_count},
            )

        writer = PdfWriter(clone_from=reader)
        for removed, page in enumerate(pages):
            del writer.pages[page - 1 - removed]

        buffer = BytesIO()
        writer.write(buffer)
        return buffer.getvalue()
