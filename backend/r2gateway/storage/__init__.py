"""
Storage module for S3-compatible object storage (Cloudflare R2).

Clients upload directly to R2 using presigned URLs.
The gateway NEVER receives file bytes.
"""
from r2gateway.storage.r2_client import R2Client, StorageError, get_r2_client

__all__ = ["R2Client", "StorageError", "get_r2_client"]
