"""Tests for S3Strategy."""

import io
from unittest.mock import Mock

import pytest

from catstream.reader import MultiSourceReader
from catstream.strategies.s3 import S3Strategy, parse_s3_uri

try:
    import boto3  # noqa: F401
    from botocore.exceptions import ClientError

    HAS_BOTO3 = True
except ImportError:
    HAS_BOTO3 = False

try:
    import moto  # noqa: F401

    HAS_MOTO = True
except ImportError:
    HAS_MOTO = False


def _client_error(code: str) -> "ClientError":
    return ClientError({"Error": {"Code": code, "Message": code}}, "GetObject")


def test_parse_s3_uri() -> None:
    """Test splitting S3 URIs into bucket and key."""
    assert parse_s3_uri("s3://bucket/path/to/file.txt") == ("bucket", "path/to/file.txt")

    with pytest.raises(ValueError, match="Invalid S3 URI"):
        parse_s3_uri("s3://bucket/")

    with pytest.raises(ValueError, match="Invalid S3 URI"):
        parse_s3_uri("s3:///key")

    with pytest.raises(ValueError, match="Invalid S3 URI"):
        parse_s3_uri("https://bucket/key")


@pytest.mark.skipif(not HAS_BOTO3, reason="boto3 not installed")
def test_s3_strategy_validation() -> None:
    """Test S3Strategy parameter validation."""
    with pytest.raises(ValueError, match="chunk_size"):
        S3Strategy(client=Mock(), chunk_size=0)

    strategy = S3Strategy(client=Mock())
    with pytest.raises(ValueError, match="Invalid S3 URI"):
        strategy.open("s3://bucket-only")


@pytest.mark.skipif(not HAS_BOTO3, reason="boto3 not installed")
def test_s3_strategy_streams_body() -> None:
    """Test that the object body is read in chunks and closed with the handle."""
    body = io.BytesIO(b"s3 object content")
    client = Mock()
    client.get_object.return_value = {"Body": body}
    strategy = S3Strategy(client=client, chunk_size=5)

    handle = strategy.open("s3://test-bucket/dir/obj.txt")

    client.get_object.assert_called_once_with(Bucket="test-bucket", Key="dir/obj.txt")
    buffer = bytearray(100)
    parts = []
    while count := handle.readinto(buffer):
        assert count <= 5
        parts.append(bytes(buffer[:count]))
    assert b"".join(parts) == b"s3 object content"

    handle.close()  # type: ignore[attr-defined]
    assert body.closed


@pytest.mark.skipif(not HAS_BOTO3, reason="boto3 not installed")
@pytest.mark.parametrize(
    ("code", "error"),
    [
        ("NoSuchKey", FileNotFoundError),
        ("NoSuchBucket", FileNotFoundError),
        ("404", FileNotFoundError),
        ("AccessDenied", PermissionError),
        ("403", PermissionError),
    ],
)
def test_s3_strategy_maps_client_errors(code: str, error: type[OSError]) -> None:
    """Test that S3 error codes become matching OSError subclasses."""
    client = Mock()
    client.get_object.side_effect = _client_error(code)
    strategy = S3Strategy(client=client)

    with pytest.raises(error) as excinfo:
        strategy.open("s3://bucket/key")

    assert excinfo.value.filename == "s3://bucket/key"
    assert isinstance(excinfo.value.__cause__, ClientError)


@pytest.mark.skipif(not HAS_BOTO3, reason="boto3 not installed")
def test_s3_strategy_other_errors() -> None:
    """Test that unknown failures raise a plain OSError."""
    client = Mock()
    client.get_object.side_effect = _client_error("InternalError")
    strategy = S3Strategy(client=client)

    with pytest.raises(OSError, match="Failed to open S3 object") as excinfo:
        strategy.open("s3://bucket/key")

    assert type(excinfo.value) is OSError


@pytest.mark.skipif(not HAS_BOTO3, reason="boto3 not installed")
def test_s3_strategy_read_errors() -> None:
    """Test that failures while reading the body raise OSError."""
    body = Mock()
    body.read.side_effect = RuntimeError("connection dropped")
    client = Mock()
    client.get_object.return_value = {"Body": body}

    handle = S3Strategy(client=client).open("s3://bucket/key")

    with pytest.raises(OSError, match="Failed to read S3 object"):
        handle.readinto(bytearray(10))


@pytest.mark.skipif(not HAS_MOTO, reason="Requires moto for mocking")
def test_s3_strategy_with_mock_s3() -> None:
    """Test S3Strategy with mocked S3 using moto."""
    import boto3
    from moto import mock_aws

    with mock_aws():
        s3_client = boto3.client("s3", region_name="us-east-1")
        s3_client.create_bucket(Bucket="test-bucket")
        s3_client.put_object(Bucket="test-bucket", Key="one.txt", Body=b"One.\n")
        s3_client.put_object(Bucket="test-bucket", Key="empty.txt", Body=b"")
        s3_client.put_object(Bucket="test-bucket", Key="two.txt", Body=b"Two.\n")

        reader = MultiSourceReader(
            [
                "s3://test-bucket/one.txt",
                "s3://test-bucket/missing.txt",
                "s3://test-bucket/empty.txt",
                "s3://test-bucket/two.txt",
            ],
            S3Strategy(client=s3_client),
        )

        assert reader.read(100) == b"One.\n"
        with pytest.raises(FileNotFoundError):
            reader.read(100)
        assert reader.read(100) == b"Two.\n"
        assert reader.read(100) == b""
