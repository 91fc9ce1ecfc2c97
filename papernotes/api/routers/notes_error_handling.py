"""
Notes error handling utilities.

Provides a decorator that maps pipeline exceptions to HTTPExceptions so
every notes endpoint reports failures the same way.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status

from papernotes.core.exceptions import (
    ConfigurationError,
    ExtractionError,
    FetchError,
    MalformedDocumentError,
    NotesPipelineException,
    PartitioningError,
    PersistenceError,
)

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])


def _detail(e: NotesPipelineException, **extra: Any) -> dict[str, Any]:
    return {"error": type(e).__name__, "message": e.message, **extra}


def handle_pipeline_errors(func: F) -> F:
    """
    Decorator to turn pipeline failures into HTTPExceptions.

    Mapping:
    - MalformedDocumentError: 422
    - FetchError, PartitioningError, ExtractionError: 502 (upstream failure)
    - ConfigurationError: 500
    - PartialPersistenceFailure, PersistenceFailure: 500 naming the failed sides
    - anything else: 500
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except MalformedDocumentError as e:
            logger.warning("Malformed document", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=_detail(e),
            )

        except (FetchError, PartitioningError, ExtractionError) as e:
            logger.warning(
                "Upstream collaborator failed",
                extra={"error_type": type(e).__name__, "error": str(e)},
            )
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=_detail(e),
            )

        except ConfigurationError as e:
            logger.error("Service misconfigured", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=_detail(e),
            )

        except PersistenceError as e:
            logger.error(
                "Persistence did not complete",
                extra={"failed_sides": e.failed_sides, "error": str(e)},
            )
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=_detail(e, failed_sides=e.failed_sides),
            )

        except NotesPipelineException as e:
            logger.error("Notes pipeline error", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=_detail(e),
            )

        except Exception as e:
            logger.exception(
                "Unexpected failure in notes operation",
                extra={"error": str(e)},
            )
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"An internal error occurred while taking notes: {str(e)}",
            )

    return wrapper  # type: ignore
