"""
Pydantic schemas for gateway request bodies and responses.
"""
from r2gateway.schemas.upload import UploadRequest, PresignedUpload

__all__ = [
    "UploadRequest",
    "PresignedUpload",
]
