import io
import os
import ZConfig


SCHEMA_PATH = os.path.join(os.path.dirname(__file__), "schema.xml")

_schema = None


def get_schema():
    global _schema
    if _schema is None:
        with open(SCHEMA_PATH) as f:
            _schema = ZConfig.loadSchemaFile(f)
    return _schema


def load_config(path):
    config, _handlers = ZConfig.loadConfig(get_schema(), path)
    return config


def load_config_string(text):
    config, _handlers = ZConfig.loadConfigFile(get_schema(), io.StringIO(text))
    return config


class S3FilesystemFactory:
    """Builds an S3Filesystem from a loaded ZConfig section."""

    def __init__(self, config):
        self.config = config

    def open(self):
        from s3fsr.entries import BucketDirEntry
        from s3fsr.entries import RootDirEntry
        from s3fsr.filesystem import S3Filesystem
        from s3fsr.s3client import S3Client
        from s3fsr.tracing import LoggingFilesystem

        config = self.config
        if config.page_size < 1:
            raise ValueError(f"page-size must be positive, got {config.page_size}")

        client = S3Client(
            endpoint_url=config.s3_endpoint_url,
            region_name=config.s3_region,
            aws_access_key_id=config.s3_access_key,
            aws_secret_access_key=config.s3_secret_key,
            use_ssl=config.s3_use_ssl,
            addressing_style=config.s3_addressing_style,
        )
        if config.bucket_name:
            root = BucketDirEntry(
                client, config.bucket_name, page_size=config.page_size
            )
        else:
            root = RootDirEntry(client, page_size=config.page_size)

        filesystem = S3Filesystem(root)
        if config.log_operations:
            return LoggingFilesystem(filesystem)
        return filesystem
