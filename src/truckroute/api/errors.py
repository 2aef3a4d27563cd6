"""HTTP mapping for data-access failures."""

from __future__ import annotations

from fastapi import HTTPException, status

from ..data.reference_repository import DatabaseNotConfiguredError, ReferenceDataError


def data_error(exc: ReferenceDataError) -> HTTPException:
    if isinstance(exc, DatabaseNotConfiguredError):
        return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))
