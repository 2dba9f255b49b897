"""Safe output writing for the llmview CLI.

This module provides a writing interface that reports a closed output pipe (for
example ``llmview view.txt | head``) as BrokenPipeError so that the CLI can exit
quietly with the conventional status.
"""

import errno
import os
import types
from pathlib import Path
from typing import IO, Optional, Type, Union

from llmview.types import PathType


class SafeWriter:
    """Writes text to a file descriptor or a file path.

    Attributes:
        file: Either a file path or file descriptor for output.
        fd: The actual file descriptor being written to.

    Example:
        >>> with SafeWriter(sys.stdout.fileno()) as writer:  # doctest: +SKIP
        ...     writer.write("hello\\n")
    """

    def __init__(self, file: Union[int, PathType]):
        """Initialize the safe writer.

        Args:
            file: Either a file descriptor (int) or a path to create or truncate.
                Descriptors passed in are not closed by the writer.

        Raises:
            TypeError: If file is neither a descriptor nor a path.
            OSError: If the output file cannot be opened.
        """
        self.file = file
        self._closed = False
        self._file_obj: Optional[IO[bytes]] = None

        if isinstance(file, int):
            self.fd = file
        elif isinstance(file, (str, os.PathLike)):
            self._file_obj = Path(file).open("wb")
            self.fd = self._file_obj.fileno()
        else:
            raise TypeError(f"Expected int, str, or PathLike, got {type(file).__name__}")

    def write(self, data: str) -> None:
        """Write all of data, encoded as UTF-8.

        Raises:
            BrokenPipeError: If the reading end of the pipe has been closed.
            OSError: If an I/O error occurs during writing.
            ValueError: If attempting to write to a closed writer.
        """
        if self._closed:
            raise ValueError("Cannot write to closed SafeWriter")

        view = memoryview(data.encode("utf-8"))
        try:
            while view:
                written = os.write(self.fd, view)
                view = view[written:]
        except OSError as e:
            if e.errno == errno.EPIPE:
                raise BrokenPipeError()
            raise

    def close(self) -> None:
        """Close the file if it was opened by this writer.

        The writer is marked as closed even if closing fails with a broken pipe.
        """
        if self._closed:
            return

        if self._file_obj is not None:
            try:
                self._file_obj.close()
            except OSError as e:
                if e.errno != errno.EPIPE:
                    raise

        self._closed = True

    def __enter__(self) -> "SafeWriter":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        """Close the writer; an exception from the with block takes priority over close errors."""
        try:
            self.close()
        except OSError:
            if exc_type is None:
                raise
