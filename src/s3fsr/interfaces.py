from zope.interface import Attribute
from zope.interface import Interface


class IS3Client(Interface):
    """Abstraction over S3-compatible object storage."""

    def list_objects(bucket, prefix, delimiter, marker, max_keys):
        """Return one listing page.

        The page is a dict with ``prefixes`` (common prefixes), ``objects``
        (dicts with ``key``, ``etag`` and ``size``) and ``truncated``.
        """

    def head_object(bucket, key):
        """Return size, etag and put-able headers of an object, or None."""

    def get_object(bucket, key):
        """Return the body of an object, always fetched from the store."""

    def put_object(bucket, key, data, headers):
        """Store data at key, replacing any existing object."""

    def delete_object(bucket, key):
        """Delete an S3 object."""

    def list_buckets():
        """Return the names of all buckets."""

    def create_bucket(name):
        """Create a bucket."""

    def delete_bucket(name):
        """Delete an empty bucket."""


class IDirectoryListing(Interface):
    """Lazily loaded name -> entry mapping of one directory."""

    loaded = Attribute("True once the entries are loaded and not invalidated.")

    def entries():
        """Return the mapping, loading it first if needed."""

    def invalidate():
        """Forget the mapping; the next access loads it again."""

    def add(entry):
        """Insert or replace an entry under its name."""

    def discard(name):
        """Drop a single entry if the mapping is loaded."""


class IEntry(Interface):
    """A node of the virtual filesystem tree."""

    name = Attribute("Display name within the parent directory.")
    is_directory = Attribute("True for directory entries.")
    is_file = Attribute("True for file entries.")

    def size():
        """Content length in bytes, 0 for directories."""

    def delete():
        """Remove the entry from the store and from its parent."""

    def touch():
        """Refresh cached state, if any."""


class IFileEntry(IEntry):
    """An S3 object."""

    key = Attribute("Object key within the bucket.")

    def read():
        """Return the object body."""

    def write(data):
        """Replace the object body, keeping its headers."""


class IDirectoryEntry(IEntry):
    """A real or inferred directory."""

    can_write_files = Attribute("True if files may be created in here.")

    def contents():
        """Return the names of all children."""

    def get(name):
        """Return the named child or None."""

    def create_file(key, content):
        """Store a new object at key and return its entry."""

    def create_dir(key):
        """Create a child directory at key and return its entry."""

    def flush():
        """Invalidate the cached listing."""

    def child_deleted(name):
        """Forget a child that removed itself."""


class ITopDirectoryEntry(IDirectoryEntry):
    """The directory at the root of a tree: a bucket or all buckets."""

    def path_to_key(relative_path):
        """Map a path relative to the tree root to an object key."""


class IFilesystem(Interface):
    """Path based operations consumed by a mount layer.

    Queries and ``can_*`` predicates answer False or empty for a missing
    path. Mutating operations do not check again: the caller must ask the
    matching ``can_*`` predicate first.
    """

    def resolve(path):
        """Return the entry at an absolute path, or None."""

    def resolve_parent(path):
        """Return the entry of the parent of an absolute path, or None."""

    def contents(path):
        """Return the child names of a directory, empty if there is none."""

    def is_directory(path):
        """True if path is an existing directory."""

    def is_file(path):
        """True if path is an existing file."""

    def is_executable(path):
        """Always False, S3 objects carry no mode bits."""

    def size(path):
        """Content length of a file, 0 for directories and missing paths."""

    def read(path):
        """Return the body of a file, fetched from the store."""

    def can_write(path):
        """True for an existing file or a new file in a writable directory."""

    def write(path, data):
        """Replace an existing file or create a new one.

        Requires ``can_write(path)``.
        """

    def can_delete(path):
        """True if path is an existing file."""

    def delete(path):
        """Delete a file. Requires ``can_delete(path)``."""

    def can_mkdir(path):
        """True if path does not exist and its parent is a directory."""

    def mkdir(path):
        """Create a directory, or a bucket below the root.

        Requires ``can_mkdir(path)``.
        """

    def can_rmdir(path):
        """True only for an existing empty directory other than the root."""

    def rmdir(path):
        """Delete a directory. Requires ``can_rmdir(path)``."""

    def touch(path):
        """Refresh a directory listing, or create an empty file if missing."""
