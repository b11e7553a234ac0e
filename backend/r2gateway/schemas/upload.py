"""
Pydantic schemas for the upload (POST/PUT) path.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class UploadRequest(BaseModel):
    """JSON body of a write request. Only `code` is read."""
    model_config = ConfigDict(extra="allow")

    # Strings only; the format is not validated and the value is used verbatim
    code: Optional[StrictStr] = Field(None, description="Namespace identifier for the object key")


class PresignedUpload(BaseModel):
    """Presigned upload URL and the key it writes to."""
    model_config = ConfigDict(populate_by_name=True)

    presigned_url: str = Field(..., alias="presignedUrl", description="Presigned PUT URL")
    object_path: str = Field(..., alias="objectPath", description="Object key in storage bucket")

    def render(self) -> str:
        """Compact JSON text, keys in camelCase."""
        return self.model_dump_json(by_alias=True)
