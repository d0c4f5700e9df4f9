from s3fsr.interfaces import IFilesystem
from s3fsr.naming import DELIMITER
from zope.interface import implementer


def _split(path):
    return [part for part in path.split(DELIMITER) if part]


@implementer(IFilesystem)
class S3Filesystem:
    """Path based operations on a tree of entries, for use by a mount layer.

    Predicates (``can_*``, ``is_*``) and queries treat a missing path as a
    normal answer. Mutating operations trust that the caller asked the
    matching ``can_*`` predicate first and do not check again; they only
    raise ``FileNotFoundError`` when there is no entry to act on.
    """

    def __init__(self, root):
        self.root = root

    def __repr__(self):
        return f"<S3Filesystem on {self.root!r}>"

    def resolve(self, path):
        return self._walk(_split(path))

    def resolve_parent(self, path):
        return self._walk(_split(path)[:-1])

    def _walk(self, parts):
        entry = self.root
        for part in parts:
            if not entry.is_directory:
                return None
            entry = entry.get(part)
            if entry is None:
                return None
        return entry

    def _require(self, path):
        entry = self.resolve(path)
        if entry is None:
            raise FileNotFoundError(path)
        return entry

    def _require_parent(self, path):
        parent = self.resolve_parent(path)
        if parent is None:
            raise FileNotFoundError(path)
        return parent

    def _key_for(self, path):
        return self.root.path_to_key(DELIMITER.join(_split(path)))

    # -- Queries --

    def contents(self, path):
        entry = self.resolve(path)
        if entry is None or not entry.is_directory:
            return []
        return entry.contents()

    def is_directory(self, path):
        entry = self.resolve(path)
        return entry is not None and entry.is_directory

    def is_file(self, path):
        entry = self.resolve(path)
        return entry is not None and entry.is_file

    def is_executable(self, path):
        return False

    def size(self, path):
        entry = self.resolve(path)
        return 0 if entry is None else entry.size()

    def read(self, path):
        entry = self.resolve(path)
        if entry is None or not entry.is_file:
            return b""
        return entry.read()

    # -- Files --

    def can_write(self, path):
        entry = self.resolve(path)
        if entry is not None:
            return entry.is_file
        parent = self.resolve_parent(path)
        return parent is not None and parent.is_directory and parent.can_write_files

    def write(self, path, data):
        entry = self.resolve(path)
        if entry is not None:
            entry.write(data)
            return
        parent = self._require_parent(path)
        parent.create_file(self._key_for(path), data)

    def can_delete(self, path):
        entry = self.resolve(path)
        return entry is not None and entry.is_file

    def delete(self, path):
        self._require(path).delete()

    # -- Directories --

    def can_mkdir(self, path):
        if self.resolve(path) is not None:
            return False
        parent = self.resolve_parent(path)
        return parent is not None and parent.is_directory

    def mkdir(self, path):
        parent = self._require_parent(path)
        parent.create_dir(self._key_for(path))

    def can_rmdir(self, path):
        if not _split(path):
            return False
        entry = self.resolve(path)
        if entry is None or not entry.is_directory:
            return False
        return len(entry.contents()) == 0

    def rmdir(self, path):
        self._require(path).delete()

    def touch(self, path):
        entry = self.resolve(path)
        if entry is not None:
            entry.touch()
        else:
            self.write(path, b"")
