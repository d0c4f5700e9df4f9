from s3fsr.interfaces import IS3Client
from s3fsr.s3client import S3Client
from s3fsr.s3client import S3OperationError

import boto3
import pytest


@pytest.fixture
def client(s3_env):
    return S3Client(region_name="us-east-1")


@pytest.fixture
def raw(s3_env):
    return boto3.client("s3", region_name="us-east-1")


class TestS3ClientInterface:
    def test_interface_provided(self, client):
        assert IS3Client.providedBy(client)


class TestObjects:
    def test_put_and_get_roundtrip(self, client):
        client.put_object("test-bucket", "a/key.txt", b"hello data")
        assert client.get_object("test-bucket", "a/key.txt") == b"hello data"

    def test_put_with_headers(self, client, raw):
        client.put_object(
            "test-bucket",
            "typed.txt",
            b"text",
            headers={"ContentType": "text/plain", "Metadata": {"owner": "me"}},
        )
        head = raw.head_object(Bucket="test-bucket", Key="typed.txt")
        assert head["ContentType"] == "text/plain"
        assert head["Metadata"] == {"owner": "me"}

    def test_head_object(self, client):
        client.put_object(
            "test-bucket", "head.txt", b"head test", headers={"ContentType": "text/plain"}
        )
        meta = client.head_object("test-bucket", "head.txt")
        assert meta["size"] == 9
        assert not meta["etag"].startswith('"')
        assert meta["headers"]["ContentType"] == "text/plain"

    def test_head_object_missing(self, client):
        assert client.head_object("test-bucket", "missing.txt") is None

    def test_get_missing_raises(self, client):
        with pytest.raises(S3OperationError) as exc_info:
            client.get_object("test-bucket", "missing.txt")
        assert "NoSuchKey" in str(exc_info.value)
        assert exc_info.value.__cause__ is not None

    def test_delete_object(self, client):
        client.put_object("test-bucket", "del.txt", b"delete me")
        client.delete_object("test-bucket", "del.txt")
        assert client.head_object("test-bucket", "del.txt") is None

    def test_delete_nonexistent_does_not_raise(self, client):
        client.delete_object("test-bucket", "nonexistent/key.txt")


class TestListObjects:
    def test_prefixes_and_objects(self, client):
        for key in ("top.txt", "dir/a.txt", "dir/b.txt", "other/c.txt"):
            client.put_object("test-bucket", key, b"x")
        page = client.list_objects("test-bucket")
        assert page["prefixes"] == ["dir/", "other/"]
        assert [obj["key"] for obj in page["objects"]] == ["top.txt"]
        assert page["objects"][0]["size"] == 1
        assert not page["objects"][0]["etag"].startswith('"')
        assert page["truncated"] is False

    def test_prefix_listing(self, client):
        client.put_object("test-bucket", "dir/", b"")
        client.put_object("test-bucket", "dir/a.txt", b"x")
        page = client.list_objects("test-bucket", prefix="dir/")
        assert [obj["key"] for obj in page["objects"]] == ["dir/", "dir/a.txt"]
        assert page["prefixes"] == []

    def test_truncated(self, client):
        for i in range(3):
            client.put_object("test-bucket", f"f{i}", b"x")
        page = client.list_objects("test-bucket", max_keys=2)
        assert page["truncated"] is True
        assert [obj["key"] for obj in page["objects"]] == ["f0", "f1"]
        rest = client.list_objects("test-bucket", marker="f1", max_keys=2)
        assert [obj["key"] for obj in rest["objects"]] == ["f2"]
        assert rest["truncated"] is False

    def test_missing_bucket_raises(self, client):
        with pytest.raises(S3OperationError):
            client.list_objects("no-such-bucket")


class TestBuckets:
    def test_list_buckets(self, client):
        assert client.list_buckets() == ["test-bucket"]

    def test_create_and_delete_bucket(self, client):
        client.create_bucket("another-bucket")
        assert "another-bucket" in client.list_buckets()
        client.delete_bucket("another-bucket")
        assert "another-bucket" not in client.list_buckets()

    def test_create_bucket_outside_us_east_1(self, s3_env):
        client = S3Client(region_name="eu-west-1")
        client.create_bucket("eu-bucket")
        assert "eu-bucket" in client.list_buckets()

    def test_delete_non_empty_bucket_raises(self, client):
        client.put_object("test-bucket", "keep.txt", b"x")
        with pytest.raises(S3OperationError):
            client.delete_bucket("test-bucket")
