from botocore.config import Config
from botocore.exceptions import ClientError
from s3fsr.interfaces import IS3Client
from zope.interface import implementer

import boto3
import logging


logger = logging.getLogger(__name__)

# head_object response fields that put_object accepts back unchanged.
_PUTTABLE_HEADERS = (
    "CacheControl",
    "ContentDisposition",
    "ContentEncoding",
    "ContentLanguage",
    "ContentType",
    "Metadata",
)


class S3OperationError(Exception):
    """Wraps boto3 ClientError to avoid leaking AWS infrastructure details."""


def _strip_etag(etag):
    return etag.strip('"') if etag else ""


@implementer(IS3Client)
class S3Client:
    """Thin boto3 wrapper for S3-compatible object storage."""

    def __init__(
        self,
        endpoint_url=None,
        region_name=None,
        aws_access_key_id=None,
        aws_secret_access_key=None,
        use_ssl=True,
        addressing_style="auto",
        connect_timeout=60,
        read_timeout=60,
    ):
        self.region_name = region_name

        config = Config(
            s3={"addressing_style": addressing_style},
            connect_timeout=connect_timeout,
            read_timeout=read_timeout,
        )

        kwargs = {"config": config}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        if region_name:
            kwargs["region_name"] = region_name
        if aws_access_key_id:
            kwargs["aws_access_key_id"] = aws_access_key_id
        if aws_secret_access_key:
            kwargs["aws_secret_access_key"] = aws_secret_access_key
        kwargs["use_ssl"] = use_ssl
        if not use_ssl:
            logger.warning(
                "S3 SSL is disabled, data and credentials are transmitted in cleartext"
            )

        self._client = boto3.client("s3", **kwargs)

    def _wrap_client_error(self, e, operation, target):
        """Wrap ClientError in a generic error, logging the original at DEBUG."""
        logger.debug("S3 %s failed for %s: %s", operation, target, e)
        raise S3OperationError(
            f"S3 {operation} failed for {target}: "
            f"{e.response['Error'].get('Code', 'Unknown')}"
        ) from e

    def list_objects(self, bucket, prefix="", delimiter="/", marker="", max_keys=1000):
        try:
            response = self._client.list_objects(
                Bucket=bucket,
                Prefix=prefix,
                Delimiter=delimiter,
                Marker=marker,
                MaxKeys=max_keys,
            )
        except ClientError as e:
            self._wrap_client_error(e, "list", f"{bucket}/{prefix}")
        return {
            "prefixes": [
                common["Prefix"] for common in response.get("CommonPrefixes", [])
            ],
            "objects": [
                {
                    "key": obj["Key"],
                    "etag": _strip_etag(obj.get("ETag")),
                    "size": obj.get("Size", 0),
                }
                for obj in response.get("Contents", [])
            ],
            "truncated": response.get("IsTruncated", False),
        }

    def head_object(self, bucket, key):
        try:
            response = self._client.head_object(Bucket=bucket, Key=key)
        except ClientError as e:
            if e.response["Error"]["Code"] in ("404", "NoSuchKey"):
                return None
            self._wrap_client_error(e, "head", f"{bucket}/{key}")
        return {
            "size": response.get("ContentLength", 0),
            "etag": _strip_etag(response.get("ETag")),
            "headers": {
                name: response[name] for name in _PUTTABLE_HEADERS if name in response
            },
        }

    def get_object(self, bucket, key):
        try:
            response = self._client.get_object(Bucket=bucket, Key=key)
        except ClientError as e:
            self._wrap_client_error(e, "get", f"{bucket}/{key}")
        return response["Body"].read()

    def put_object(self, bucket, key, data, headers=None):
        try:
            self._client.put_object(Bucket=bucket, Key=key, Body=data, **(headers or {}))
        except ClientError as e:
            self._wrap_client_error(e, "put", f"{bucket}/{key}")

    def delete_object(self, bucket, key):
        try:
            self._client.delete_object(Bucket=bucket, Key=key)
        except ClientError as e:
            self._wrap_client_error(e, "delete", f"{bucket}/{key}")

    def list_buckets(self):
        try:
            response = self._client.list_buckets()
        except ClientError as e:
            self._wrap_client_error(e, "list buckets", "account")
        return [bucket["Name"] for bucket in response.get("Buckets", [])]

    def create_bucket(self, name):
        kwargs = {"Bucket": name}
        # us-east-1 rejects an explicit location constraint
        if self.region_name and self.region_name != "us-east-1":
            kwargs["CreateBucketConfiguration"] = {
                "LocationConstraint": self.region_name
            }
        try:
            self._client.create_bucket(**kwargs)
        except ClientError as e:
            self._wrap_client_error(e, "create bucket", name)
        logger.info("Created bucket %s", name)

    def delete_bucket(self, name):
        try:
            self._client.delete_bucket(Bucket=name)
        except ClientError as e:
            self._wrap_client_error(e, "delete bucket", name)
        logger.info("Deleted bucket %s", name)
