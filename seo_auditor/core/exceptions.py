"""
Custom HTTP exceptions for SEO Auditor.
"""
from fastapi import HTTPException, status


class BadRequestError(HTTPException):
    """Bad request exception (missing or invalid caller input)."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail
        )


class InternalServerError(HTTPException):
    """Unexpected failure while serving a request."""

    def __init__(self, detail: str = "Internal server error"):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail
        )
