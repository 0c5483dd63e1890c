"""
Pydantic schemas for the presign (upload authorization) exchange.
"""
from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from typing import Optional


class PresignRequest(BaseModel):
    """Request schema for presigned URL generation."""
    filename: str = Field(..., min_length=1, description="Target file name")
    content_type: str = Field(..., min_length=1, description="MIME type (e.g., 'image/png')")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "filename": "1718000000000_cover.png",
                "content_type": "image/png"
            }
        }
    )


class PresignResponse(BaseModel):
    """
    Upload authorization grant.

    Backends answer either {url, key} or {presignedUrl, fileUrl, key};
    both shapes are accepted.
    """
    url: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("url", "presignedUrl", "upload_url"),
        description="Presigned PUT URL for direct upload"
    )
    key: str = Field(..., min_length=1, description="Object key in storage bucket")
    file_url: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("file_url", "fileUrl"),
        description="Public URL of the object once uploaded"
    )

    model_config = ConfigDict(populate_by_name=True)

    @property
    def storage_reference(self) -> str:
        """What callers store: the public URL when known, else the key."""
        return self.file_url or self.key


class PresignServerResponse(BaseModel):
    """Response schema served by the development presign backend."""
    url: str
    key: str
    presignedUrl: str
    fileUrl: Optional[str] = None
    expires_in: int = Field(..., description="URL expiration time in seconds")
