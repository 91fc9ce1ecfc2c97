"""
Notes API endpoints.

Routes: POST /take_notes

Dependencies: papernotes.api.deps, papernotes.core.document_processing
System role: Notes HTTP API
"""

from fastapi import APIRouter, Depends

from papernotes.api.deps import get_notes_pipeline
from papernotes.api.routers.notes_error_handling import handle_pipeline_errors
from papernotes.core.document_processing.entrypoint import NotesPipeline
from papernotes.models.notes import NoteResponse, TakeNotesRequest

router = APIRouter(tags=["notes"])


@router.post("/take_notes", response_model=list[NoteResponse])
@handle_pipeline_errors
async def take_notes(
    request: TakeNotesRequest,
    pipeline: NotesPipeline = Depends(get_notes_pipeline),
) -> list[NoteResponse]:
    """
    Process a paper and return its notes.

    Runs the full pipeline; a 200 response means both the paper row and
    its chunk vectors were written.

    Args:
        request: Paper URL, display name and pages to drop
        pipeline: Injected NotesPipeline

    Returns:
        list[NoteResponse]: Extracted notes

    Raises:
        HTTPException(422): Malformed PDF or page out of range
        HTTPException(502): Fetch, partitioning or model call failed
        HTTPException(500): Misconfiguration or persistence failure

    Example Response:
        [
            {"text": "X uses Y to ...", "pageNumbers": [1, 2]}
        ]
    """
    run = await pipeline.process(request.to_document())
    run.raise_for_failure()
    return [NoteResponse.from_record(note) for note in run.notes]
