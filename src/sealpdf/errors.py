"""sealpdf error types."""

from __future__ import annotations

import enum

__all__ = [
    "CapacityError",
    "CredentialError",
    "ErrorKind",
    "InputTypeError",
    "PlaceholderError",
    "SealPdfError",
    "VerificationError",
]


class ErrorKind(str, enum.Enum):
    """Tag carried by every :class:`SealPdfError`."""

    INPUT_TYPE = "input_type"
    PARSE = "parse"
    CREDENTIAL = "credential"
    CAPACITY = "capacity"
    VERIFICATION = "verification"


class SealPdfError(Exception):
    """Base error for sealpdf operations."""

    kind: ErrorKind


class InputTypeError(SealPdfError, TypeError):
    """Input has the wrong shape (e.g. str where bytes are expected)."""

    kind = ErrorKind.INPUT_TYPE


class PlaceholderError(SealPdfError):
    """ByteRange placeholder, Contents field, or signature not found in the PDF."""

    kind = ErrorKind.PARSE


class CredentialError(SealPdfError):
    """PKCS#12 container unusable: no private key, or no certificate matches it."""

    kind = ErrorKind.CREDENTIAL


class CapacityError(SealPdfError):
    """Encoded signature does not fit the reserved Contents placeholder.

    Args:
        message: Human-readable error description.
        required: Hex characters needed for the signature.
        available: Hex characters reserved in the document.
    """

    kind = ErrorKind.CAPACITY

    def __init__(self, message: str, *, required: int = 0, available: int = 0) -> None:
        super().__init__(message)
        self.required = required
        self.available = available

    def __reduce__(self) -> tuple[type[CapacityError], tuple[str], dict[str, int]]:
        """Preserve sizes across pickle/unpickle."""
        return (type(self), (str(self),), {"required": self.required, "available": self.available})

    def __setstate__(self, state: dict[str, int] | None) -> None:
        if state is None:
            return
        self.required = state.get("required", 0)
        self.available = state.get("available", 0)


class VerificationError(SealPdfError):
    """Embedded signature does not verify against the document."""

    kind = ErrorKind.VERIFICATION
