"""
Opening series content as scoped binary or text streams.

Extractors accept raw bytes, an open binary stream, or a filesystem path.
Every stream opened here is closed when the ``with`` block exits, including
the text wrapper layered over a caller's binary stream.
"""

from __future__ import annotations

import io
import os
from contextlib import contextmanager
from typing import BinaryIO, Iterator, TextIO, Union

from ..exceptions import DataUnavailable

SeriesContent = Union[bytes, bytearray, BinaryIO, "os.PathLike[str]"]


def describe(content: SeriesContent) -> str:
    """Short description of *content* for log records."""
    if isinstance(content, (bytes, bytearray)):
        return f"<{len(content)} bytes>"
    if isinstance(content, os.PathLike):
        return os.fspath(content)
    return getattr(content, "name", None) or type(content).__name__


@contextmanager
def open_binary(content: SeriesContent) -> Iterator[BinaryIO]:
    """Yield a readable binary stream over *content*.

    Raises:
        DataUnavailable: if *content* is a path that cannot be opened.
    """
    if isinstance(content, (bytes, bytearray)):
        stream: BinaryIO = io.BytesIO(bytes(content))
    elif isinstance(content, os.PathLike):
        try:
            stream = open(content, "rb")
        except OSError as e:
            raise DataUnavailable(f"Cannot open series data file {os.fspath(content)}: {e}") from e
    else:
        stream = content

    try:
        yield stream
    finally:
        stream.close()


@contextmanager
def open_text(content: SeriesContent, encoding: str | None = None) -> Iterator[TextIO]:
    """Yield a text stream decoding *content* with *encoding*.

    ``None`` selects the platform's preferred encoding. Newlines are passed
    through untranslated so the csv module can handle quoted line breaks.
    """
    with open_binary(content) as stream:
        text = io.TextIOWrapper(stream, encoding=encoding, newline="")
        try:
            yield text
        finally:
            text.close()
