"""
Test configuration and fixtures.
The storage backend is replaced by an in-memory fake that records calls.
"""
import os

# Set test environment before any imports
os.environ["PUBLIC_S3_BUCKET_NAME"] = "test-bucket"
os.environ["UPLOAD_PRESIGN_EXPIRATION"] = "300"

import pytest
from typing import AsyncGenerator, List, Optional

from httpx import AsyncClient, ASGITransport

from r2gateway.storage import StorageError


class FakeR2Client:
    """In-memory stand-in for R2Client."""

    bucket = "test-bucket"
    is_configured = True

    def __init__(self):
        self.objects: List[str] = []
        self.calls: List[tuple] = []
        self.failing: set = set()

    def _check(self, operation: str, object_key: str):
        if operation in self.failing:
            raise StorageError(operation, object_key, "simulated backend failure")

    def list_keys(self, prefix: str) -> List[str]:
        self.calls.append(("list", prefix))
        self._check("list", prefix)
        return [key for key in self.objects if key.startswith(prefix)]

    def delete_object(self, object_key: str) -> None:
        self.calls.append(("delete", object_key))
        self._check("delete", object_key)
        if object_key in self.objects:
            self.objects.remove(object_key)

    def generate_presigned_put(
        self,
        object_key: str,
        public_read: bool = False,
        expiration: Optional[int] = None
    ) -> str:
        self.calls.append(("presign_put", object_key, public_read, expiration))
        self._check("presign_put", object_key)
        return f"https://r2.example.com/{self.bucket}/{object_key}?X-Amz-Signature=fake"


@pytest.fixture
def fake_r2() -> FakeR2Client:
    return FakeR2Client()


@pytest.fixture
async def client(fake_r2: FakeR2Client) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client with the fake storage backend."""
    from r2gateway.main import app
    from r2gateway.storage import get_r2_client

    app.dependency_overrides[get_r2_client] = lambda: fake_r2

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    # Clean up overrides
    app.dependency_overrides.clear()
