from __future__ import annotations


class KeyConversionError(RuntimeError):
    """
    Base exception for every failure of a JWK to PEM conversion.

    Subclasses set ``exit_code``, the process status the command line maps
    the failure to. ``kind`` is the class name and is what gets reported.
    """

    exit_code = 1

    @property
    def kind(self) -> str:
        return type(self).__name__


class KeyFileError(KeyConversionError):
    """Exception raised when reading the key document or writing PEM files fails."""

    exit_code = 1


class DocumentFormatError(KeyConversionError):
    """Exception raised when the key document is not a single JSON object."""

    exit_code = 3


class UnsupportedKeyTypeError(KeyConversionError):
    """Exception raised for a key type, curve or algorithm other than EC / P-256 / ES256."""

    exit_code = 4


class MissingFieldError(KeyConversionError):
    """Exception raised when a required key member is absent or empty."""

    exit_code = 5


class DecodeError(KeyConversionError):
    """Exception raised when base64url text cannot be decoded."""

    exit_code = 6


class MalformedFieldError(KeyConversionError):
    """Exception raised when a key member decodes to the wrong size or type."""

    exit_code = 7


class RangeError(KeyConversionError):
    """Exception raised when the private scalar is 0 or not below the curve order."""

    exit_code = 8


class KeyMismatchError(KeyConversionError):
    """Exception raised when the supplied public point differs from d * G."""

    exit_code = 9


class EncodingError(KeyConversionError):
    """Exception raised when an encoded structure breaks a fixed-length invariant."""

    exit_code = 10
