"""
Persistence outcome model.

Reports the result of the dual write: full success, partial failure naming
the failed side, or total failure.

Dependencies: pydantic
System role: Return type for PersistenceTask.persist()
"""

import enum
import uuid

from pydantic import BaseModel, ConfigDict, Field

from papernotes.core.exceptions import (
    PartialPersistenceFailure,
    PersistenceError,
    PersistenceFailure,
)


class PersistenceSide(str, enum.Enum):
    """The two independent writes performed for every paper."""

    RELATIONAL = "relational"
    VECTOR = "vector"


class PersistenceStatus(str, enum.Enum):
    """Combined outcome of both writes."""

    SUCCESS = "success"
    PARTIAL = "partial"
    FAILED = "failed"


class PersistenceResult(BaseModel):
    """Outcome of one dual write."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    status: PersistenceStatus
    paper_id: uuid.UUID | None = Field(default=None, description="ID of the inserted paper row")
    chunk_ids: list[str] = Field(default_factory=list, description="IDs of upserted vector entries")
    failures: dict[PersistenceSide, BaseException] = Field(default_factory=dict)
    error: PersistenceError | None = Field(
        default=None,
        description="PartialPersistenceFailure or PersistenceFailure when not a success",
    )

    @classmethod
    def from_outcomes(
        cls,
        paper_id: uuid.UUID | None,
        chunk_ids: list[str] | None,
        failures: dict[PersistenceSide, BaseException],
    ) -> "PersistenceResult":
        """
        Combine both write outcomes into a single result.

        Args:
            paper_id: Inserted row ID, None if the relational write failed
            chunk_ids: Upserted vector IDs, None if the vector write failed
            failures: Failed sides mapped to their errors

        Returns:
            PersistenceResult: Success, partial, or failed result
        """
        named = {side.value: exc for side, exc in failures.items()}
        if not failures:
            status, error = PersistenceStatus.SUCCESS, None
        elif len(failures) == len(PersistenceSide):
            status = PersistenceStatus.FAILED
            error = PersistenceFailure("Both persistence writes failed", failures=named)
        else:
            status = PersistenceStatus.PARTIAL
            failed = ", ".join(sorted(named))
            error = PartialPersistenceFailure(
                f"Persistence partially failed: {failed} write failed",
                failures=named,
            )
        return cls(
            status=status,
            paper_id=paper_id,
            chunk_ids=chunk_ids or [],
            failures=failures,
            error=error,
        )

    @property
    def succeeded(self) -> bool:
        """True when both writes completed."""
        return self.status == PersistenceStatus.SUCCESS

    @property
    def failed_sides(self) -> list[PersistenceSide]:
        """Sides that failed, in declaration order."""
        return [side for side in PersistenceSide if side in self.failures]

    def raise_for_status(self) -> None:
        """
        Raise the combined persistence error, if any.

        Raises:
            PartialPersistenceFailure: Exactly one side failed
            PersistenceFailure: Both sides failed
        """
        if self.error is not None:
            raise self.error
