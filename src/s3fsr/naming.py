"""Key naming conventions used to fake directories on top of S3."""

DELIMITER = "/"

# S3 Organizer writes "<dir>_$folder$" marker objects.
ORGANIZER_DIR_SUFFIX = "_$folder$"

# s3sync writes a 38 byte marker object, without trailing slash, per directory.
S3SYNC_DIR_ETAG = "d66759af42f282e1ba19144df2d405d0"
S3SYNC_DIR_LENGTH = 38

# mkdir on this name only flushes the parent's cached listing.
FLUSH_SEGMENT = "flush"

FILE = "file"
FAKE_DIR = "fake-dir"
SELF_MARKER = "self-marker"


def last_path_segment(key):
    """Return the last slash-delimited component of ``key``.

    A trailing slash is ignored, so ``"a/b/"`` and ``"a/b"`` both give ``"b"``.
    """
    if key.endswith(DELIMITER):
        key = key[:-1]
    return key.rsplit(DELIMITER, 1)[-1]


def strip_dir_suffix(key):
    return key.removesuffix(ORGANIZER_DIR_SUFFIX)


def display_name(key):
    return strip_dir_suffix(last_path_segment(key))


def fake_dir_prefix(key):
    """Listing prefix for the children of a fake directory marker."""
    return strip_dir_suffix(key) + DELIMITER


def is_s3sync_marker(etag, size):
    return etag == S3SYNC_DIR_ETAG and size == S3SYNC_DIR_LENGTH


def classify_object(key, etag, size):
    """Decide how a listed object shows up in its directory.

    Returns ``FAKE_DIR`` for S3 Organizer and s3sync markers,
    ``SELF_MARKER`` for the trailing-slash object of the listed directory
    itself, and ``FILE`` for everything else.
    """
    if key.endswith(ORGANIZER_DIR_SUFFIX) or is_s3sync_marker(etag, size):
        return FAKE_DIR
    if key.endswith(DELIMITER):
        return SELF_MARKER
    return FILE
