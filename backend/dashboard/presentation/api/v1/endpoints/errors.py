"""Maps failed roster writes onto HTTP errors."""

from fastapi import HTTPException, status

from dashboard.domain.entities import MutationResult
from dashboard.domain.exceptions import (
    EntityNotFoundError,
    NoPreviousPeriodDataError,
    ProtectedFieldError,
)

_STATUS_BY_ERROR: list[tuple[type[Exception], int]] = [
    (EntityNotFoundError, status.HTTP_404_NOT_FOUND),
    (ProtectedFieldError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (NoPreviousPeriodDataError, status.HTTP_409_CONFLICT),
]


def raise_for_result(result: MutationResult) -> None:
    """Raise an HTTPException for a failed result; backend failures become 503."""
    if result.success:
        return
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(result.exception, error_type):
            raise HTTPException(status_code=status_code, detail=result.error)
    raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=result.error)
