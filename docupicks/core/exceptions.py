"""
Global Exception Handlers

Custom exceptions and FastAPI exception handlers.
"""

from typing import Optional

from fastapi import Request
from fastapi.responses import JSONResponse


class DocuPicksException(Exception):
    """Base exception for DocuPicks errors."""
    
    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ConfigurationError(DocuPicksException):
    """Required configuration (API keys, keywords) is missing."""
    
    def __init__(self, message: str = "Service is not configured"):
        super().__init__(message=message, status_code=500)


class NotFoundError(DocuPicksException):
    """Resource not found."""
    
    def __init__(self, resource: str, resource_id: str, reason: Optional[str] = None):
        super().__init__(
            message=f"{reason or resource + ' not found'}: {resource_id}",
            status_code=404
        )


class UpstreamError(DocuPicksException):
    """No usable data could be produced from the upstream sources."""
    
    def __init__(self, message: str = "Failed to load movies"):
        super().__init__(message=message, status_code=502)


async def docupicks_exception_handler(
    request: Request, 
    exc: DocuPicksException
) -> JSONResponse:
    """Handle DocuPicksException and return JSON response."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": True,
            "message": exc.message,
            "status_code": exc.status_code,
        }
    )


def register_exception_handlers(app):
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(DocuPicksException, docupicks_exception_handler)
