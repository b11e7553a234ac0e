"""
Gateway error taxonomy.

Client input errors answer 400 with a descriptive message. Backend
failures answer 500 with a generic message; the detail is logged where
the failure happens, never returned. Both are rendered as plain text.
"""
import logging

from fastapi import Request, status
from fastapi.responses import PlainTextResponse

from r2gateway.gateway.paths import raw_object_name
from r2gateway.utils.logging import log_request_rejected

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    """Base error carrying the HTTP status and the body sent to the client."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ClientInputError(GatewayError):
    status_code = status.HTTP_400_BAD_REQUEST


class BackendFailure(GatewayError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


async def gateway_error_handler(request: Request, exc: GatewayError) -> PlainTextResponse:
    """Render a GatewayError as a plain-text response."""
    if isinstance(exc, ClientInputError):
        log_request_rejected(
            logger,
            method=request.method,
            object_name=raw_object_name(request),
            reason=exc.message,
        )
    return PlainTextResponse(exc.message, status_code=exc.status_code)
