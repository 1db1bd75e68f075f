"""Tests for upload request construction."""

import pytest

from s3mirror.exceptions import ObjectRequestCreationError
from s3mirror.request_factory import (
    PUBLIC_READ_ACL,
    PutObjectRequest,
    PutObjectRequestFactory,
)


class TestPutObjectRequestFactory:
    """Tests for PutObjectRequestFactory."""

    def test_create_sets_metadata(self, tmp_path):
        """Test that requests carry size, ACL and content type."""
        file = tmp_path / "index.html"
        file.write_bytes(b"<html></html>")

        request = PutObjectRequestFactory("bucket").create(file, "site/index.html")
        try:
            assert request.bucket == "bucket"
            assert request.key == "site/index.html"
            assert request.content_length == 13
            assert request.acl == PUBLIC_READ_ACL
            assert request.content_type == "text/html"
            assert request.body.read() == b"<html></html>"
        finally:
            request.close()

    def test_create_unknown_content_type(self, tmp_path):
        """Test that unknown extensions leave the content type unset."""
        file = tmp_path / "artifact.unknownext"
        file.write_bytes(b"x")

        with PutObjectRequestFactory("bucket").create(file, "a") as request:
            assert request.content_type is None
            assert "ContentType" not in request.to_kwargs()

    def test_create_missing_file_raises(self, tmp_path):
        """Test that an unreadable file becomes a request creation error."""
        factory = PutObjectRequestFactory("bucket")
        with pytest.raises(ObjectRequestCreationError):
            factory.create(tmp_path / "missing.txt", "missing.txt")

    def test_create_validates_arguments(self, tmp_path):
        """Test argument validation."""
        factory = PutObjectRequestFactory("bucket")
        with pytest.raises(TypeError):
            factory.create(None, "key")
        with pytest.raises(TypeError):
            factory.create(tmp_path, None)
        with pytest.raises(ValueError):
            factory.create(tmp_path, " ")

    @pytest.mark.parametrize("name,error", [(None, TypeError), ("", ValueError)])
    def test_invalid_bucket_name(self, name, error):
        """Test that the factory needs a bucket name."""
        with pytest.raises(error):
            PutObjectRequestFactory(name)


class TestPutObjectRequest:
    """Tests for PutObjectRequest."""

    def test_to_kwargs(self, tmp_path):
        """Test the boto3 keyword arguments."""
        file = tmp_path / "a.txt"
        file.write_bytes(b"abc")

        with open(file, "rb") as body:
            request = PutObjectRequest(
                bucket="bucket",
                key="a.txt",
                body=body,
                content_length=3,
                content_type="text/plain",
            )
            assert request.to_kwargs() == {
                "Bucket": "bucket",
                "Key": "a.txt",
                "Body": body,
                "ContentLength": 3,
                "ACL": "public-read",
                "ContentType": "text/plain",
            }

    def test_context_manager_closes_body(self, tmp_path):
        """Test that leaving the context closes the stream."""
        file = tmp_path / "a.txt"
        file.write_bytes(b"abc")

        with PutObjectRequestFactory("bucket").create(file, "a.txt") as request:
            assert not request.body.closed
        assert request.body.closed
