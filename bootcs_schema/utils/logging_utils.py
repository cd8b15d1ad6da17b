import logging
import sys
from typing import IO, Optional

DEFAULT_FORMAT = "%(name)s - %(levelname)s - %(message)s"


def _stream_handler(
    stream: IO[str],
    formatter: logging.Formatter,
    *,
    min_level: int = logging.NOTSET,
    below: Optional[int] = None,
) -> logging.Handler:
    handler = logging.StreamHandler(stream=stream)
    handler.setLevel(min_level)
    handler.setFormatter(formatter)
    if below is not None:
        handler.addFilter(lambda record: record.levelno < below)
    return handler


def configure_split_stream_logging(
    *,
    level: int = logging.INFO,
    stderr_level: int = logging.WARNING,
    formatter: Optional[logging.Formatter] = None,
) -> None:
    """Replace the root handlers with a stdout/stderr pair split at ``stderr_level``.

    Validation findings are printed on stdout by the CLI, so diagnostics about
    the tool itself (schema bundle defects, unreadable files) stay on stderr
    where they remain visible when stdout is piped.
    """

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(level)

    formatter = formatter or logging.Formatter(DEFAULT_FORMAT)
    split_at = max(stderr_level, logging.DEBUG)

    root.addHandler(_stream_handler(sys.stdout, formatter, below=split_at))
    root.addHandler(_stream_handler(sys.stderr, formatter, min_level=split_at))
