"""Exception classes for smartpatch.

Every failure of a patch run is terminal: nothing is retried and no partial
output is produced. The CLI catches SmartPatchError and reports it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from smartpatch.tokens import Token


class SmartPatchError(Exception):
    """Base exception for all smartpatch errors.

    Subclass this for specific error categories.
    """

    pass


class ExtractionError(SmartPatchError):
    """The document does not contain both a match and a patch section.

    Raised by the document extractor when a heading or its fenced code
    block is missing.
    """

    def __init__(self, missing: list[str], source_file: str | None = None) -> None:
        """Initialize extraction error.

        Args:
            missing: Section names that were not found (e.g., ["match"])
            source_file: Path to the document (optional)
        """
        self.missing = missing
        self.source_file = source_file

        location = f"{source_file}: " if source_file else ""
        sections = " and ".join(repr(name) for name in missing)
        super().__init__(f"{location}could not extract {sections} block from document")


class NoMatchFound(SmartPatchError):
    """The pattern does not occur in the source token stream.

    Raised when the backtracking search is exhausted without reaching
    the end of the pattern.
    """

    def __init__(self, message: str = "pattern does not match the source") -> None:
        super().__init__(message)


class TokenNotFound(NoMatchFound):
    """A literal pattern token never appears in the source.

    Detected by a linear scan before backtracking starts, so the error can
    name the offending token instead of a generic failure.
    """

    def __init__(self, token: Token) -> None:
        """Initialize with the pattern token that has no occurrence.

        Args:
            token: Pattern token absent from the source
        """
        self.token = token
        super().__init__(
            f"pattern token {token.text!r} ({token.kind.name.lower()}) does not occur in the source"
        )


class MissingInserter(SmartPatchError):
    """The pattern matched but contains no >>> marker.

    Without an insertion point there is nowhere to splice the patch.
    """

    def __init__(self) -> None:
        super().__init__("pattern matched but has no '>>>' insertion marker")


class SearchLimitExceeded(SmartPatchError):
    """The backtracking search exceeded a configured ceiling.

    Raised instead of letting a pathological pattern run unbounded.
    """

    def __init__(self, limit_name: str, limit: int) -> None:
        """Initialize search limit error.

        Args:
            limit_name: Name of the config field that tripped (e.g., "max_steps")
            limit: The configured value
        """
        self.limit_name = limit_name
        self.limit = limit
        super().__init__(f"pattern search exceeded {limit_name}={limit}")


class PatchIOError(SmartPatchError):
    """Reading an input or writing the output file failed."""

    def __init__(self, path: str, reason: str) -> None:
        """Initialize I/O error.

        Args:
            path: File path involved
            reason: Description of the failure (usually str(OSError))
        """
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


__all__ = [
    "ExtractionError",
    "MissingInserter",
    "NoMatchFound",
    "PatchIOError",
    "SearchLimitExceeded",
    "SmartPatchError",
    "TokenNotFound",
]
