"""
Tests for Pydantic schemas validation.
"""
import pytest
from pydantic import ValidationError

from directupload.schemas.upload import PresignRequest, PresignResponse


class TestPresignRequest:
    """Tests for the presign request schema."""

    def test_valid(self):
        """Test a valid request serializes to the wire shape."""
        schema = PresignRequest(filename="cover.png", content_type="image/png")
        assert schema.model_dump() == {"filename": "cover.png", "content_type": "image/png"}

    def test_empty_filename(self):
        """Test an empty filename is rejected."""
        with pytest.raises(ValidationError):
            PresignRequest(filename="", content_type="image/png")

    def test_missing_content_type(self):
        """Test content_type is required."""
        with pytest.raises(ValidationError):
            PresignRequest(filename="cover.png")


class TestPresignResponse:
    """Tests for the upload grant schema."""

    def test_url_key_shape(self):
        """Test the {url, key} shape."""
        grant = PresignResponse.model_validate({"url": "https://store/x", "key": "k1"})
        assert grant.url == "https://store/x"
        assert grant.key == "k1"
        assert grant.file_url is None
        assert grant.storage_reference == "k1"

    def test_presigned_url_shape(self):
        """Test the {presignedUrl, fileUrl, key} shape."""
        grant = PresignResponse.model_validate({
            "presignedUrl": "https://store/x?sig=1",
            "fileUrl": "https://cdn/x.png",
            "key": "x.png"
        })
        assert grant.url == "https://store/x?sig=1"
        assert grant.file_url == "https://cdn/x.png"
        assert grant.storage_reference == "https://cdn/x.png"

    def test_missing_key(self):
        """Test a grant without a key is invalid."""
        with pytest.raises(ValidationError):
            PresignResponse.model_validate({"url": "https://store/x"})

    def test_empty_key(self):
        """Test an empty key is invalid."""
        with pytest.raises(ValidationError):
            PresignResponse.model_validate({"url": "https://store/x", "key": ""})

    def test_missing_url(self):
        """Test a grant without an upload URL is invalid."""
        with pytest.raises(ValidationError):
            PresignResponse.model_validate({"key": "k1"})

    def test_construct_by_field_name(self):
        """Test building a grant in code with field names."""
        grant = PresignResponse(url="https://store/x", key="k1", file_url="https://cdn/k1")
        assert grant.storage_reference == "https://cdn/k1"
