from moto import mock_aws
from s3fsr.interfaces import IS3Client
from zope.interface import implementer

import boto3
import hashlib
import pytest


@implementer(IS3Client)
class FakeS3Client:
    """In-memory S3 with list_objects marker/delimiter/max-keys semantics.

    Records every list call. ``scripted_pages`` bypasses the store and
    returns the given pages in order, raising any exception among them.
    """

    def __init__(self):
        self.buckets = {}
        self.list_calls = []
        self.get_calls = 0
        self.scripted_pages = None

    def add(self, bucket, key, data=b"", etag=None, headers=None):
        etag = etag or hashlib.md5(data).hexdigest()
        self.buckets.setdefault(bucket, {})[key] = (data, etag, headers or {})

    def list_objects(self, bucket, prefix="", delimiter="/", marker="", max_keys=1000):
        self.list_calls.append(
            {"bucket": bucket, "prefix": prefix, "marker": marker, "max_keys": max_keys}
        )
        if self.scripted_pages is not None:
            page = self.scripted_pages.pop(0)
            if isinstance(page, Exception):
                raise page
            return page
        prefixes = []
        objects = []
        truncated = False
        for key in sorted(self.buckets[bucket]):
            if not key.startswith(prefix) or key <= marker:
                continue
            rest = key[len(prefix):]
            if delimiter and delimiter in rest:
                common = prefix + rest[: rest.index(delimiter) + 1]
                if common <= marker or (prefixes and prefixes[-1] == common):
                    continue
                if len(prefixes) + len(objects) == max_keys:
                    truncated = True
                    break
                prefixes.append(common)
            else:
                if len(prefixes) + len(objects) == max_keys:
                    truncated = True
                    break
                data, etag, _headers = self.buckets[bucket][key]
                objects.append({"key": key, "etag": etag, "size": len(data)})
        return {"prefixes": prefixes, "objects": objects, "truncated": truncated}

    def head_object(self, bucket, key):
        if key not in self.buckets[bucket]:
            return None
        data, etag, headers = self.buckets[bucket][key]
        return {"size": len(data), "etag": etag, "headers": dict(headers)}

    def get_object(self, bucket, key):
        self.get_calls += 1
        return self.buckets[bucket][key][0]

    def put_object(self, bucket, key, data, headers=None):
        self.add(bucket, key, data, headers=headers)

    def delete_object(self, bucket, key):
        self.buckets[bucket].pop(key, None)

    def list_buckets(self):
        return sorted(self.buckets)

    def create_bucket(self, name):
        self.buckets[name] = {}

    def delete_bucket(self, name):
        del self.buckets[name]


@pytest.fixture
def fake_client():
    return FakeS3Client()


@pytest.fixture
def s3_env():
    with mock_aws():
        boto3.client("s3", region_name="us-east-1").create_bucket(Bucket="test-bucket")
        yield
