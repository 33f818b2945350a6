"""Exceptions raised by the Tana MCP server."""

from typing import Optional


class TanaMCPError(Exception):
    """Base exception for Tana MCP operations."""

    pass


class TanaValidationError(TanaMCPError):
    """Raised when a request is rejected locally, before reaching Tana."""

    pass


class TanaAPIError(TanaMCPError):
    """Raised when the Tana Input API answers with an error."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class TanaConnectionError(TanaMCPError):
    """Raised when no response could be obtained from the Tana Input API."""

    pass
