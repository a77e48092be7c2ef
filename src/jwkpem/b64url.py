from __future__ import annotations

import base64
import binascii

from .errors import DecodeError


def b64url_encode(b: bytes) -> str:
    """
    Encode bytes to URL-safe base64 string without padding.

    Args:
        b: Bytes to encode.

    Returns:
        URL-safe base64 encoded string with trailing '=' padding removed.
    """
    return base64.urlsafe_b64encode(b).decode("ascii").rstrip("=")


def b64url_decode(s: str) -> bytes:
    """
    Decode URL-safe unpadded base64 text to bytes.

    The URL-safe characters are translated to the standard alphabet, the text
    is right-padded with '=' to a multiple of 4 and then strictly decoded, so
    any character outside the alphabet (including whitespace) is rejected.

    Args:
        s: base64url text, normally without padding.

    Returns:
        Decoded bytes.

    Raises:
        DecodeError: If the input is not text, contains characters outside the
                     base64url alphabet, or has an impossible length.
    """
    if not isinstance(s, str):
        raise DecodeError(f"Expected base64url text, got {type(s).__name__}")

    translated = s.replace("-", "+").replace("_", "/")
    translated += "=" * (-len(translated) % 4)

    try:
        return base64.b64decode(translated.encode("ascii"), validate=True)
    except (UnicodeEncodeError, binascii.Error) as e:
        raise DecodeError("Invalid base64url text") from e
