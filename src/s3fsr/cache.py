from s3fsr.interfaces import IDirectoryListing
from s3fsr.naming import DELIMITER
from zope.interface import implementer

import logging


logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 1000


def next_marker(page):
    """Return the marker resuming a listing after ``page``.

    Common prefixes and objects are sorted independently, so the listing
    resumes after whichever of the two last items sorts later.
    """
    last_object_key = max((obj["key"] for obj in page["objects"]), default="")
    last_prefix = max(page["prefixes"], default="")
    return last_prefix if last_object_key < last_prefix else last_object_key


def iter_pages(client, bucket, prefix, page_size=DEFAULT_PAGE_SIZE):
    """Yield every listing page of ``prefix`` until one is not truncated."""
    marker = ""
    while True:
        page = client.list_objects(
            bucket,
            prefix=prefix,
            delimiter=DELIMITER,
            marker=marker,
            max_keys=page_size,
        )
        yield page
        if not page["truncated"]:
            break
        marker = next_marker(page)
        logger.debug("Listing %s/%s continues after %r", bucket, prefix, marker)


@implementer(IDirectoryListing)
class DirectoryListing:
    """Name -> entry mapping of one directory, loaded on first access.

    ``loader`` must return a complete mapping. The mapping is only stored
    once the loader returns, so a failing load leaves nothing cached.
    """

    def __init__(self, loader):
        self._loader = loader
        self._entries = None

    @property
    def loaded(self):
        return self._entries is not None

    def entries(self):
        if self._entries is None:
            self._entries = self._loader()
        return self._entries

    def invalidate(self):
        self._entries = None

    def add(self, entry):
        self.entries()[entry.name] = entry

    def discard(self, name):
        if self._entries is not None:
            self._entries.pop(name, None)
