"""
Custom Exception Classes for the D.E.F.E.N.D API.

Provides standardized HTTP exceptions with consistent error messages
across all API endpoints.
"""
from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """Exception raised when a requested resource is not found."""

    def __init__(self, resource: str, id: str = None):
        detail = f"{resource} not found" + (f": {id}" if id else "")
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
