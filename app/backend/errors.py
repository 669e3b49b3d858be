"""Error taxonomy shared by the user and food stores."""

from fastapi import HTTPException, status


class StoreError(Exception):
    """Base class for recoverable store outcomes."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFound(StoreError):
    status_code = status.HTTP_404_NOT_FOUND


class DuplicateKey(StoreError):
    status_code = status.HTTP_409_CONFLICT


class ReferentialViolation(StoreError):
    status_code = status.HTTP_409_CONFLICT


class ValidationError(StoreError):
    status_code = status.HTTP_422_UNPROCESSABLE_CONTENT


def to_http_exception(exc: StoreError) -> HTTPException:
    return HTTPException(status_code=exc.status_code, detail=exc.detail)
