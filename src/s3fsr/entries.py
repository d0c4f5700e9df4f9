"""Virtual filesystem tree built from S3 buckets and key conventions.

S3 has no directories. They are inferred from common prefixes, from
trailing-slash objects and from the marker objects written by S3 Organizer
and s3sync. Every directory owns a ``DirectoryListing`` of its children;
children keep a reference to their parent only to report their deletion.
"""

from s3fsr.cache import DEFAULT_PAGE_SIZE
from s3fsr.cache import DirectoryListing
from s3fsr.cache import iter_pages
from s3fsr.interfaces import IDirectoryEntry
from s3fsr.interfaces import IFileEntry
from s3fsr.interfaces import ITopDirectoryEntry
from s3fsr.naming import classify_object
from s3fsr.naming import DELIMITER
from s3fsr.naming import display_name
from s3fsr.naming import FAKE_DIR
from s3fsr.naming import fake_dir_prefix
from s3fsr.naming import FILE
from s3fsr.naming import FLUSH_SEGMENT
from s3fsr.naming import last_path_segment
from zope.interface import implementer

import logging


logger = logging.getLogger(__name__)


class InvalidOperationError(Exception):
    """Raised for operations the tree never allows, e.g. deleting the root."""


@implementer(IFileEntry)
class FileEntry:
    """An S3 object. Only its length and headers are cached, never its body."""

    is_directory = False
    is_file = True

    def __init__(self, parent, key, size, headers=None):
        self._parent = parent
        self.key = key
        self.name = last_path_segment(key)
        self._size = size
        self._headers = headers

    def __repr__(self):
        return f"<FileEntry {self.bucket}/{self.key}>"

    @property
    def bucket(self):
        return self._parent.bucket

    @property
    def client(self):
        return self._parent.client

    def size(self):
        return self._size

    def headers(self):
        # Listings carry no headers, capture them once on first use.
        if self._headers is None:
            meta = self.client.head_object(self.bucket, self.key)
            self._headers = meta["headers"] if meta is not None else {}
        return self._headers

    def read(self):
        return self.client.get_object(self.bucket, self.key)

    def write(self, data):
        self.client.put_object(self.bucket, self.key, data, headers=self.headers())
        self._size = len(data)

    def delete(self):
        self.client.delete_object(self.bucket, self.key)
        self._parent.child_deleted(self.name)

    def touch(self):
        pass


class DirectoryEntry:
    """Behaviour shared by every directory: the cached listing of children."""

    is_directory = True
    is_file = False
    can_write_files = True

    def __init__(self, parent, client, page_size=DEFAULT_PAGE_SIZE):
        self._parent = parent
        self.client = client
        self.page_size = page_size
        self._listing = DirectoryListing(self._load)

    def _load(self):
        raise NotImplementedError

    def contents(self):
        return list(self._listing.entries())

    def get(self, name):
        return self._listing.entries().get(name)

    def size(self):
        return 0

    def flush(self):
        self._listing.invalidate()

    def touch(self):
        self.flush()

    def child_deleted(self, name):
        self._listing.discard(name)


class ObjectDirectory(DirectoryEntry):
    """A directory whose children are the keys below ``prefix`` in a bucket."""

    key = None
    prefix = ""

    def create_file(self, key, content):
        self.client.put_object(self.bucket, key, content)
        meta = self.client.head_object(self.bucket, key)
        if meta is None:
            # not visible yet, trust what was just written
            meta = {"size": len(content), "headers": {}}
        entry = FileEntry(self, key, meta["size"], meta["headers"])
        self._listing.add(entry)
        return entry

    def create_dir(self, key):
        if last_path_segment(key) == FLUSH_SEGMENT:
            self.flush()
            return None
        if not key.endswith(DELIMITER):
            key += DELIMITER
        self.client.put_object(self.bucket, key, b"")
        entry = PrefixDirEntry(self, key)
        self._listing.add(entry)
        return entry

    def delete(self):
        self.client.delete_object(self.bucket, self.key)
        self._parent.child_deleted(self.name)

    def _load(self):
        logger.info("Loading %r from %s...", self.name, self.bucket)
        entries = {}
        pages = 0
        for page in iter_pages(self.client, self.bucket, self.prefix, self.page_size):
            pages += 1
            for prefix in page["prefixes"]:
                if prefix == DELIMITER:
                    continue
                entry = PrefixDirEntry(self, prefix)
                entries[entry.name] = entry
            for obj in page["objects"]:
                kind = classify_object(obj["key"], obj["etag"], obj["size"])
                if kind == FAKE_DIR:
                    entry = FakeDirEntry(self, obj["key"])
                elif kind == FILE:
                    entry = FileEntry(self, obj["key"], obj["size"])
                else:
                    # the trailing-slash object of this very directory
                    continue
                entries[entry.name] = entry
        logger.debug(
            "Loaded %d entries of %r in %d page(s)", len(entries), self.name, pages
        )
        return entries


@implementer(IDirectoryEntry)
class PrefixDirEntry(ObjectDirectory):
    """Directory inferred from a common prefix or a trailing-slash object."""

    def __init__(self, parent, key):
        super().__init__(parent, parent.client, parent.page_size)
        self.key = key
        self.prefix = key
        self.name = last_path_segment(key)

    def __repr__(self):
        return f"<PrefixDirEntry {self.bucket}/{self.prefix}>"

    @property
    def bucket(self):
        return self._parent.bucket


@implementer(IDirectoryEntry)
class FakeDirEntry(ObjectDirectory):
    """Directory backed by an S3 Organizer or s3sync marker object."""

    def __init__(self, parent, key):
        super().__init__(parent, parent.client, parent.page_size)
        self.key = key
        self.prefix = fake_dir_prefix(key)
        self.name = display_name(key)

    def __repr__(self):
        return f"<FakeDirEntry {self.bucket}/{self.key}>"

    @property
    def bucket(self):
        return self._parent.bucket


@implementer(ITopDirectoryEntry)
class BucketDirEntry(ObjectDirectory):
    """A bucket, either below a ``RootDirEntry`` or as the tree root itself."""

    def __init__(self, client, bucket_name, parent=None, page_size=DEFAULT_PAGE_SIZE):
        super().__init__(parent, client, page_size)
        self.bucket = bucket_name
        self.name = bucket_name

    def __repr__(self):
        return f"<BucketDirEntry {self.bucket}>"

    def delete(self):
        if self._parent is None:
            raise InvalidOperationError(f"cannot delete bucket dir {self.name}")
        self.client.delete_bucket(self.name)
        self._parent.child_deleted(self.name)

    def path_to_key(self, relative_path):
        return relative_path


@implementer(ITopDirectoryEntry)
class RootDirEntry(DirectoryEntry):
    """Virtual root whose children are all buckets of the account."""

    name = "buckets"
    can_write_files = False

    def __init__(self, client, page_size=DEFAULT_PAGE_SIZE):
        super().__init__(None, client, page_size)

    def __repr__(self):
        return "<RootDirEntry>"

    def _load(self):
        logger.info("Loading buckets...")
        entries = {}
        for bucket_name in self.client.list_buckets():
            entry = BucketDirEntry(self.client, bucket_name, self, self.page_size)
            entries[entry.name] = entry
        logger.debug("Loaded %d buckets", len(entries))
        return entries

    def create_file(self, key, content):
        raise InvalidOperationError("cannot create files outside of a bucket")

    def create_dir(self, key):
        self.client.create_bucket(key)
        entry = BucketDirEntry(self.client, key, self, self.page_size)
        self._listing.add(entry)
        return entry

    def delete(self):
        raise InvalidOperationError("cannot delete the buckets dir")

    def path_to_key(self, relative_path):
        # a path without separator names a bucket and is used to create it
        _bucket, sep, key = relative_path.partition(DELIMITER)
        return key if sep else relative_path
