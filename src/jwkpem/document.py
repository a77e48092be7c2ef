from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Union

from .b64url import b64url_decode, b64url_encode
from .curve import P256, CurveParameters
from .errors import (
    DecodeError,
    DocumentFormatError,
    MalformedFieldError,
    MissingFieldError,
    UnsupportedKeyTypeError,
)

EXPECTED_KTY = "EC"
EXPECTED_ALG = "ES256"
KEY_FIELDS = ("d", "x", "y")


@dataclass(frozen=True)
class KeyDocument:
    """
    Immutable view of a JSON Web Key document.

    Only the members needed for conversion are kept. ``d`` is excluded from
    ``repr`` so the private scalar never ends up in logs or tracebacks.

    Attributes:
        kty: Key type, must be "EC".
        crv: Curve name, must be "P-256".
        x: base64url public x coordinate.
        y: base64url public y coordinate.
        d: base64url private scalar.
        kid: Optional key identifier.
        alg: Optional algorithm, must be "ES256" when present.
        use: Optional public key use.
    """

    kty: Any
    crv: Any
    x: Any
    y: Any
    d: Any = field(repr=False)
    kid: Optional[str] = None
    alg: Optional[str] = None
    use: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "KeyDocument":
        return cls(
            kty=data.get("kty"),
            crv=data.get("crv"),
            x=data.get("x"),
            y=data.get("y"),
            d=data.get("d"),
            kid=data.get("kid"),
            alg=data.get("alg"),
            use=data.get("use"),
        )


@dataclass(frozen=True)
class DecodedFields:
    """
    Raw key material decoded from a validated key document.

    Attributes:
        x: Big-endian x coordinate bytes (coordinate size long).
        y: Big-endian y coordinate bytes (coordinate size long).
        d: Big-endian private scalar bytes (coordinate size long).
        kid: Key identifier carried over from the document, if any.
    """

    x: bytes
    y: bytes
    d: bytes = field(repr=False)
    kid: Optional[str] = None


def parse_key_document(raw: Union[bytes, str, Mapping[str, Any]]) -> KeyDocument:
    """
    Parse a key document from JSON text/bytes or an already-parsed mapping.

    Args:
        raw: UTF-8 JSON bytes, JSON text, or a mapping.

    Returns:
        KeyDocument holding the relevant members.

    Raises:
        DocumentFormatError: If the JSON is invalid, is not an object, or is a
                             JWK Set rather than a single key.
    """
    if isinstance(raw, Mapping):
        data = raw
    else:
        try:
            if isinstance(raw, (bytes, bytearray)):
                raw = bytes(raw).decode("utf-8")
            data = json.loads(raw)
        except (UnicodeDecodeError, ValueError) as e:
            raise DocumentFormatError("Key document is not valid JSON") from e

    if not isinstance(data, Mapping):
        raise DocumentFormatError("Key document is not a JSON object")

    if "keys" in data and "kty" not in data:
        raise DocumentFormatError(
            "JWK Sets are not supported; provide a single key document"
        )

    return KeyDocument.from_mapping(data)


def _decode_field(name: str, value: Any, curve: CurveParameters) -> bytes:
    if not isinstance(value, str):
        raise MalformedFieldError(
            f"Field {name!r} must be a base64url string, got {type(value).__name__}"
        )

    try:
        raw = b64url_decode(value)
    except DecodeError as e:
        raise DecodeError(f"Field {name!r} is not valid base64url") from e

    if len(raw) != curve.coordinate_size:
        raise MalformedFieldError(
            f"Field {name!r} decodes to {len(raw)} bytes, "
            f"expected {curve.coordinate_size}"
        )
    return raw


def validate_key_document(
    document: KeyDocument, curve: CurveParameters = P256
) -> DecodedFields:
    """
    Validate a key document and decode its key members.

    Key type, curve and algorithm are checked before any member is decoded,
    so an unsupported key never reaches base64 decoding or curve arithmetic.

    Args:
        document: Parsed key document.
        curve: Curve the document must be on (default P-256).

    Returns:
        DecodedFields with fixed-size x, y and d.

    Raises:
        UnsupportedKeyTypeError: If kty is not "EC", crv does not name the
                                 curve, or alg is present and not "ES256".
        MissingFieldError: If d, x or y is absent or empty.
        MalformedFieldError: If a member is not a string or has the wrong size.
        DecodeError: If a member is not valid base64url.
    """
    if document.kty != EXPECTED_KTY:
        raise UnsupportedKeyTypeError(
            f"Unsupported key type {document.kty!r}, expected {EXPECTED_KTY!r}"
        )
    if document.crv != curve.jwk_name:
        raise UnsupportedKeyTypeError(
            f"Unsupported curve {document.crv!r}, expected {curve.jwk_name!r}"
        )
    if document.alg is not None and document.alg != EXPECTED_ALG:
        raise UnsupportedKeyTypeError(
            f"Unsupported algorithm {document.alg!r}, expected {EXPECTED_ALG!r}"
        )

    for name in KEY_FIELDS:
        if getattr(document, name) in (None, ""):
            raise MissingFieldError(f"Key document is missing {name!r}")

    return DecodedFields(
        x=_decode_field("x", document.x, curve),
        y=_decode_field("y", document.y, curve),
        d=_decode_field("d", document.d, curve),
        kid=document.kid if isinstance(document.kid, str) else None,
    )


def jwk_thumbprint(document: KeyDocument) -> str:
    """
    Compute the RFC 7638 SHA-256 thumbprint of an EC key document.

    Only the required public members (crv, kty, x, y) take part, serialized
    with sorted keys and no whitespace, so the thumbprint is identical for the
    private key and its public counterpart.

    Returns:
        base64url encoded SHA-256 digest.

    Raises:
        MissingFieldError: If one of the public members is absent.
    """
    members: Dict[str, Any] = {
        "crv": document.crv,
        "kty": document.kty,
        "x": document.x,
        "y": document.y,
    }
    for name, value in members.items():
        if not value:
            raise MissingFieldError(f"Key document is missing {name!r}")

    canonical = json.dumps(members, separators=(",", ":"), sort_keys=True)
    return b64url_encode(hashlib.sha256(canonical.encode("utf-8")).digest())
