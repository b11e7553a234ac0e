"""
FastAPI dependencies for the gateway route.
"""
from fastapi import Request

from r2gateway.gateway.errors import ClientInputError

CODE_HEADER = "code"


async def require_code_header(request: Request) -> str:
    """
    Require a non-empty `code` header on every request.

    The value is only presence-checked; it is not validated or matched
    against the body's code.

    Raises:
        ClientInputError: If the header is missing or empty
    """
    code = request.headers.get(CODE_HEADER)
    if not code:
        raise ClientInputError("code header is missing or empty")
    return code
