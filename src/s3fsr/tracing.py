import logging


logger = logging.getLogger(__name__)


def _describe(value):
    # bodies are logged by length only
    if isinstance(value, bytes):
        return f"<{len(value)} bytes>"
    return repr(value)


class LoggingFilesystem:
    """Proxy logging every filesystem call and its result at DEBUG.

    Wraps an ``S3Filesystem`` via __getattr__. Written data and read bodies
    are logged by length only.
    """

    def __init__(self, filesystem):
        self.__filesystem = filesystem

    def __getattr__(self, name):
        attr = getattr(self.__filesystem, name)
        if not callable(attr):
            return attr

        def traced(*args, **kwargs):
            arguments = [_describe(value) for value in args]
            arguments += [f"{key}={_describe(value)}" for key, value in kwargs.items()]
            logger.debug("%s(%s)", name, ", ".join(arguments))
            try:
                result = attr(*args, **kwargs)
            except Exception:
                logger.debug("    %s failed", name, exc_info=True)
                raise
            logger.debug("    %s", _describe(result))
            return result

        return traced

    def __repr__(self):
        return f"<LoggingFilesystem proxy for {self.__filesystem!r}>"
