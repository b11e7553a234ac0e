"""
Cloudflare R2 / S3-compatible storage client.

Uses boto3 with S3-compatible API to interact with Cloudflare R2.
This is storage-provider agnostic - works with any S3-compatible storage.

The gateway never proxies file bytes: uploads go straight to the bucket
through presigned PUT URLs, and the gateway only lists and deletes keys.
"""
import logging
import time
from typing import Any, Callable, List, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from r2gateway.config import Settings, settings as default_settings
from r2gateway.utils.logging import log_storage_failure, log_storage_operation
from r2gateway.utils.metrics import (
    storage_operation_duration_seconds,
    storage_operations_total,
)

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when the storage backend cannot complete an operation."""

    def __init__(self, operation: str, object_key: str, message: str):
        super().__init__(f"{operation} failed for {object_key!r}: {message}")
        self.operation = operation
        self.object_key = object_key


class R2Client:
    """
    S3-compatible client for Cloudflare R2.

    Offers the three capabilities the gateway needs: listing keys under a
    prefix, deleting a key and presigning PUT uploads. Every failure is
    raised as StorageError; nothing is retried.
    """

    def __init__(self, config: Optional[Settings] = None):
        """
        Initialize R2 client with boto3.

        Args:
            config: Settings to use (defaults to the global settings)

        A missing endpoint or credential leaves the client unconfigured;
        startup continues and each operation raises StorageError.
        """
        self._settings = config or default_settings
        self._client = None

        if not all([
            self._settings.r2_endpoint,
            self._settings.r2_access_key,
            self._settings.r2_secret_key
        ]):
            logger.warning(
                "R2 storage not configured. "
                "Set R2_ACCOUNT_ID (or R2_ENDPOINT), R2_ACCESS_KEY and R2_SECRET_KEY."
            )
            return

        self._client = boto3.client(
            's3',
            endpoint_url=self._settings.r2_endpoint,
            aws_access_key_id=self._settings.r2_access_key,
            aws_secret_access_key=self._settings.r2_secret_key,
            region_name=self._settings.r2_region,
            config=Config(
                signature_version='s3v4',
                s3={'addressing_style': 'path'},  # R2 uses path-style
                retries={'max_attempts': 1, 'mode': 'standard'},
                connect_timeout=self._settings.r2_connect_timeout,
                read_timeout=self._settings.r2_read_timeout,
            )
        )
        logger.info(f"R2 client initialized for bucket: {self.bucket}")

    @property
    def is_configured(self) -> bool:
        """Check if R2 client is properly configured."""
        return self._client is not None

    @property
    def bucket(self) -> str:
        """Get configured bucket name."""
        return self._settings.r2_bucket

    def _call(self, operation: str, object_key: str, fn: Callable[[], Any]) -> Any:
        """Run one backend call, recording metrics and wrapping failures."""
        if not self.is_configured:
            storage_operations_total.labels(operation=operation, status="error").inc()
            raise StorageError(operation, object_key, "R2 storage not configured")

        start = time.perf_counter()
        try:
            result = fn()
        except (ClientError, BotoCoreError) as e:
            duration = time.perf_counter() - start
            storage_operations_total.labels(operation=operation, status="error").inc()
            log_storage_failure(
                logger,
                operation=operation,
                object_key=object_key,
                error=e,
                duration_ms=duration * 1000,
            )
            raise StorageError(operation, object_key, str(e)) from e

        duration = time.perf_counter() - start
        storage_operations_total.labels(operation=operation, status="success").inc()
        storage_operation_duration_seconds.labels(operation=operation).observe(duration)
        log_storage_operation(
            logger,
            operation=operation,
            object_key=object_key,
            duration_ms=duration * 1000,
        )
        return result

    def list_keys(self, prefix: str) -> List[str]:
        """
        List every object key under a prefix.

        Follows continuation tokens until the listing is exhausted.
        Entries without a key are skipped.

        Args:
            prefix: Key prefix, e.g. "ABC123/gallery/"

        Returns:
            Keys in the order the backend returned them (possibly empty)
        """
        def _list() -> List[str]:
            keys: List[str] = []
            paginator = self._client.get_paginator('list_objects_v2')
            for page in paginator.paginate(Bucket=self.bucket, Prefix=prefix):
                for obj in page.get('Contents', []):
                    key = obj.get('Key')
                    if key is not None:
                        keys.append(key)
            return keys

        return self._call('list', prefix, _list)

    def delete_object(self, object_key: str) -> None:
        """
        Delete an object from the bucket.

        No existence check is made: deleting a missing key succeeds the
        way the backend reports it.

        Args:
            object_key: The S3 object key to delete
        """
        self._call(
            'delete',
            object_key,
            lambda: self._client.delete_object(Bucket=self.bucket, Key=object_key),
        )

    def generate_presigned_put(
        self,
        object_key: str,
        public_read: bool = False,
        expiration: Optional[int] = None
    ) -> str:
        """
        Generate a presigned PUT URL for direct upload.

        Args:
            object_key: The S3 object key (path in bucket)
            public_read: Sign the upload with the public-read ACL
            expiration: URL expiration in seconds; the backend default
                applies when omitted

        Returns:
            Presigned URL string
        """
        params = {
            'Bucket': self.bucket,
            'Key': object_key,
        }
        if public_read:
            params['ACL'] = 'public-read'

        kwargs = {'ClientMethod': 'put_object', 'Params': params}
        if expiration is not None:
            kwargs['ExpiresIn'] = expiration

        return self._call(
            'presign_put',
            object_key,
            lambda: self._client.generate_presigned_url(**kwargs),
        )


# Singleton instance
_r2_client: Optional[R2Client] = None


def get_r2_client() -> R2Client:
    """
    Get the singleton R2 client instance.

    Returns:
        R2Client instance (may or may not be configured)
    """
    global _r2_client
    if _r2_client is None:
        _r2_client = R2Client()
    return _r2_client
