"""Tests for pipeline domain models and note records."""

import pytest
from pydantic import ValidationError

from papernotes.core.document_processing.models import (
    DocumentReference,
    PersistenceResult,
    PersistenceSide,
    PersistenceStatus,
    PipelineRun,
    PipelineStage,
    TextSegment,
)
from papernotes.core.exceptions import ExtractionError, PersistenceFailure
from papernotes.core.note_extraction import NoteRecord, deserialize_notes, serialize_notes


class TestDocumentReference:
    """Test DocumentReference normalization."""

    def test_excluded_pages_sorted_and_deduplicated(self) -> None:
        document = DocumentReference(
            source_location="https://example.org/doc.pdf",
            display_name="Paper A",
            excluded_pages=[5, 2, 5, 3],
        )

        assert document.excluded_pages == (2, 3, 5)

    def test_defaults_to_no_excluded_pages(self) -> None:
        document = DocumentReference(source_location="https://example.org/doc.pdf", display_name="A")

        assert document.excluded_pages == ()

    def test_is_immutable(self) -> None:
        document = DocumentReference(source_location="https://example.org/doc.pdf", display_name="A")

        with pytest.raises(ValidationError):
            document.display_name = "B"

    def test_empty_location_rejected(self) -> None:
        with pytest.raises(ValidationError):
            DocumentReference(source_location="", display_name="A")

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("https://arxiv.org/pdf/1706.03762.pdf", "1706.03762.pdf"),
            ("https://arxiv.org/pdf/1706.03762", "1706.03762.pdf"),
            ("https://example.org/", "paper.pdf"),
        ],
    )
    def test_file_name(self, url: str, expected: str) -> None:
        document = DocumentReference(source_location=url, display_name="A")

        assert document.file_name == expected


class TestNoteRecord:
    """Test NoteRecord validation and storage format."""

    def test_accepts_wire_alias(self) -> None:
        note = NoteRecord.model_validate({"text": "t", "pageNumbers": [1, 2]})

        assert note.page_numbers == [1, 2]

    def test_blank_text_rejected(self) -> None:
        with pytest.raises(ValidationError):
            NoteRecord(text="  \n", page_numbers=[])

    def test_empty_pages_allowed(self) -> None:
        assert NoteRecord(text="t").page_numbers == []

    def test_storage_round_trip(self) -> None:
        notes = [
            NoteRecord(text="X uses Y", page_numbers=[1]),
            NoteRecord(text="X uses Y", page_numbers=[1]),
            NoteRecord(text="\"quoted\" detail", page_numbers=[]),
        ]

        stored = serialize_notes(notes)

        assert stored[0] == {"text": "X uses Y", "pageNumbers": [1]}
        assert deserialize_notes(stored) == notes

    def test_deserialize_none(self) -> None:
        assert deserialize_notes(None) == []


class TestTextSegment:
    def test_defaults(self) -> None:
        segment = TextSegment(content="abc")

        assert segment.metadata == {}
        assert segment.origin_page is None


class TestPersistenceResult:
    """Test outcome classification."""

    def test_no_failures_is_success(self) -> None:
        result = PersistenceResult.from_outcomes(None, ["a"], {})

        assert result.status == PersistenceStatus.SUCCESS
        assert result.error is None

    def test_both_failures_is_failed(self) -> None:
        result = PersistenceResult.from_outcomes(
            None,
            None,
            {PersistenceSide.VECTOR: RuntimeError("v"), PersistenceSide.RELATIONAL: RuntimeError("r")},
        )

        assert result.status == PersistenceStatus.FAILED
        assert result.failed_sides == [PersistenceSide.RELATIONAL, PersistenceSide.VECTOR]
        assert isinstance(result.error, PersistenceFailure)
        assert result.chunk_ids == []


class TestPipelineRun:
    """Test PipelineRun helpers."""

    def test_raise_for_failure_reraises_cause(self) -> None:
        document = DocumentReference(source_location="https://example.org/doc.pdf", display_name="A")
        error = ExtractionError("no structured response")
        run = PipelineRun(
            document=document,
            state=PipelineStage.FAILED,
            failed_stage=PipelineStage.NOTES_EXTRACTED,
            error=error,
        )

        assert not run.succeeded
        with pytest.raises(ExtractionError) as exc_info:
            run.raise_for_failure()
        assert exc_info.value is error

    def test_successful_run_does_not_raise(self) -> None:
        document = DocumentReference(source_location="https://example.org/doc.pdf", display_name="A")
        run = PipelineRun(document=document, state=PipelineStage.PERSISTED)

        assert run.succeeded
        run.raise_for_failure()

    def test_stage_names(self) -> None:
        assert [stage.value for stage in PipelineStage] == [
            "Pending",
            "Fetched",
            "Pruned",
            "Partitioned",
            "Chunked",
            "NotesExtracted",
            "Persisted",
            "Failed",
        ]
