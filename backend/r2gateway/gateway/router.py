"""
Gateway endpoint.

Every path is an object name. The request method picks the operation:

- GET /standards...   -> presigned PUT URL for that exact key (raw body)
- GET /gallery...     -> JSON array of keys under {code}/gallery/
- POST|PUT /<name>    -> presigned public-read PUT URL for {code}/{category}/<name>
- DELETE /<key>       -> delete <key> as given
- anything else       -> 400

A non-empty `code` header is required before any of the above runs.
"""
import asyncio
import json
import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import PlainTextResponse, Response
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from r2gateway.config import settings
from r2gateway.gateway.categories import (
    GALLERY_READ_PREFIX,
    STANDARDS_READ_PREFIX,
    build_object_key,
    gallery_prefix,
    missing_category_message,
    resolve_category,
)
from r2gateway.gateway.dependencies import require_code_header
from r2gateway.gateway.errors import BackendFailure, ClientInputError, gateway_error_handler
from r2gateway.gateway.paths import raw_object_name
from r2gateway.schemas import PresignedUpload, UploadRequest
from r2gateway.storage import R2Client, StorageError, get_r2_client

logger = logging.getLogger(__name__)

router = APIRouter()

GALLERY_CONTENT_TYPE = "application/json; charset=UTF-8"

# Methods routed to the gateway; the dispatcher rejects all but four.
# Any other method reaches unrouted_method_handler through Starlette's 405.
ROUTED_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"]


@router.api_route("/{path:path}", methods=ROUTED_METHODS)
async def gateway(
    request: Request,
    code: str = Depends(require_code_header),
    object_name: str = Depends(raw_object_name),
    r2: R2Client = Depends(get_r2_client),
) -> Response:
    """Dispatch by HTTP method."""
    method = request.method
    if method == "GET":
        return await handle_get(object_name, code, r2)
    if method in ("POST", "PUT"):
        return await handle_write(request, object_name, r2)
    if method == "DELETE":
        return await handle_delete(object_name, r2)
    raise ClientInputError("Unsupported method")


async def handle_get(object_name: str, code: str, r2: R2Client) -> Response:
    """
    Serve the two readable paths.

    The standards path presigns the object name as-is (no code prefix,
    backend default expiry). The gallery path lists the caller's gallery.
    """
    if object_name.startswith(STANDARDS_READ_PREFIX):
        try:
            url = await asyncio.to_thread(r2.generate_presigned_put, object_name)
        except StorageError as e:
            logger.error(f"Error fetching presigned URL: {e}")
            raise BackendFailure("Error fetching presigned URL") from e
        return PlainTextResponse(url)

    if object_name.startswith(GALLERY_READ_PREFIX):
        try:
            keys = await asyncio.to_thread(r2.list_keys, gallery_prefix(code))
        except StorageError as e:
            logger.error(f"Error listing gallery: {e}")
            raise BackendFailure("Internal Server Error") from e
        return Response(
            content=json.dumps(keys, separators=(",", ":"), ensure_ascii=False),
            media_type=GALLERY_CONTENT_TYPE,
        )

    raise ClientInputError("Invalid GET request")


async def handle_write(request: Request, object_name: str, r2: R2Client) -> Response:
    """
    Presign an upload into {code}/{category}/{object_name}.

    The code comes from the JSON body, not the header. The response body
    is the JSON text of {presignedUrl, objectPath}.
    """
    body = await request.body()
    try:
        payload = UploadRequest.model_validate_json(body)
    except ValidationError:
        raise ClientInputError("invalid request body") from None

    if not payload.code:
        raise ClientInputError("code is missing in the request body")

    category = resolve_category(request.headers)
    if category is None:
        raise ClientInputError(missing_category_message())

    object_key = build_object_key(payload.code, category, object_name)
    try:
        url = await asyncio.to_thread(
            r2.generate_presigned_put,
            object_key,
            public_read=True,
            expiration=settings.upload_presign_expiration,
        )
    except StorageError as e:
        logger.error(f"Error generating presigned URL: {e}")
        raise BackendFailure("Error generating presigned URL") from e

    upload = PresignedUpload(presigned_url=url, object_path=object_key)
    return PlainTextResponse(upload.render())


async def handle_delete(object_name: str, r2: R2Client) -> Response:
    """Delete the object at exactly object_name."""
    try:
        await asyncio.to_thread(r2.delete_object, object_name)
    except StorageError as e:
        logger.error(f"Error deleting object: {e}")
        raise BackendFailure("Error deleting object") from e
    return PlainTextResponse("Object deleted successfully")


async def unrouted_method_handler(request: Request, exc: StarletteHTTPException) -> Response:
    """
    Answer methods outside ROUTED_METHODS like the dispatcher does.

    The code header check still runs first, then the method is rejected
    as unsupported. Other HTTP errors keep FastAPI's default rendering.
    """
    if exc.status_code != status.HTTP_405_METHOD_NOT_ALLOWED:
        return await http_exception_handler(request, exc)
    try:
        await require_code_header(request)
        error = ClientInputError("Unsupported method")
    except ClientInputError as e:
        error = e
    return await gateway_error_handler(request, error)
