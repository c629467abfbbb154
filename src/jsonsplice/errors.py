"""Exception classes for jsonsplice.

Provides standardized exceptions for error handling throughout jsonsplice.

Only ``InvalidInputError`` (and its ``PathError`` subclass) ever reaches
callers of ``apply_patch``. ``EditComputationError`` is raised inside the
minimal-edit machinery and converted into a rebuild request there.
"""

from __future__ import annotations


class JsonSpliceError(Exception):
    """Base exception for all jsonsplice errors.

    Subclass this for specific error categories.
    """

    pass


class InvalidInputError(JsonSpliceError):
    """Edited text or authoritative document is not valid JSON.

    Raised before any holder is touched, so a caller can show the message
    and leave the document as it was.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source: str | None = None,
    ) -> None:
        """Initialize input error with optional location.

        Args:
            message: Error description
            lineno: Line number where error occurred (1-indexed)
            col_offset: Column offset where error occurred (1-indexed)
            source: Which input failed ("edited" or "document")
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.source = source

        location = ""
        if source:
            location = f"{source}:"
        if lineno is not None:
            location += f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class PathError(InvalidInputError):
    """Path cannot be written into the document.

    Raised by the fallback rebuild when a segment cannot address the
    container it lands on (a key on an array, anything under a scalar).
    """

    def __init__(self, path: tuple, index: int, message: str) -> None:
        """Initialize path error.

        Args:
            path: The full structural path being written
            index: Position of the offending segment in ``path``
            message: Description of the mismatch
        """
        self.path = path
        self.index = index
        super().__init__(f"segment {index} of {list(path)!r}: {message}", source="path")


class EditComputationError(JsonSpliceError):
    """Minimal textual edit could not be computed.

    Raised when the original text does not parse or the path cannot be
    resolved inside it. Never surfaced to users: the engine falls back to
    a full rebuild.
    """

    def __init__(self, message: str, offset: int | None = None) -> None:
        """Initialize edit computation error.

        Args:
            message: Description of the failure
            offset: Offset in the original text, when known
        """
        self.offset = offset
        location = f" (offset {offset})" if offset is not None else ""
        super().__init__(f"{message}{location}")
