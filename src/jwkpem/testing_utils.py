"""
Testing utilities for jwkpem - for use in this package's tests and in
packages that feed jwkpem with key documents.

Provides:
1. Published P-256 test vectors
2. Helpers to build key documents from a known scalar
3. Pytest fixtures wrapping those helpers
"""

import json
from typing import Any, Dict

import pytest

from .b64url import b64url_encode
from .curve import P256, PublicPoint

# SEC 2, section 2.4.2 (secp256r1) and multiples of G
P256_ORDER = 0xFFFFFFFF00000000FFFFFFFFFFFFFFFFBCE6FAADA7179E84F3B9CAC2FC632551
P256_PRIME = 0xFFFFFFFF00000001000000000000000000000000FFFFFFFFFFFFFFFFFFFFFFFF
P256_B = 0x5AC635D8AA3A93E7B3EBBD55769886BC651D06B0CC53B0F63BCE3C3E27D2604B
P256_G = (
    0x6B17D1F2E12C4247F8BCE6E563A440F277037D812DEB33A0F4A13945D898C296,
    0x4FE342E2FE1A7F9B8EE7EB4A7C0F9E162BCE33576B315ECECBB6406837BF51F5,
)
P256_2G = (
    0x7CF27B188D034F7E8A52380304B51AC3C08969E277F21B35A60B48FC47669978,
    0x07775510DB8ED040293D9AC69F7430DBBA7DADE63CE982299E04B79D227873D1,
)

# RFC 6979, appendix A.2.5 (ECDSA, 256 bits, prime field)
RFC6979_P256_KEY = {
    "d": 0xC9AFA9D845BA75166B5C215767B1D6934E50C3DB36E89B127B8A622B120F6721,
    "x": 0x60FED4BA255A9D31C961EB74C6356D68C049B8923B61FA6CE669622E60F29FB6,
    "y": 0x7903FE1008B8BC99A41AE9E95628BC64F2F1B20C2D7E9F5177A3C294D4462299,
}

# RFC 7515, appendix A.3.1 (ES256 example key)
RFC7515_ES256_JWK = {
    "kty": "EC",
    "crv": "P-256",
    "x": "f83OJ3D2xF1Bg8vub9tLe1gHMzV76e8Tus9uPHvRVEU",
    "y": "x_FEzRu9m36HLN_tue659LNpXW6pCyStikYjKIWI5a0",
    "d": "jpsQnnGQmL-YBIffH1136cspYG6-0iY7X1fCE9-E9LI",
}


def encode_int(value: int, length: int = P256.coordinate_size) -> str:
    """Encode a non-negative integer as fixed-width big-endian base64url."""
    return b64url_encode(value.to_bytes(length, "big"))


def make_key_document(secret: int, **overrides: Any) -> Dict[str, Any]:
    """
    Build a P-256 key document for a known private scalar.

    x and y are derived from the scalar, so the document is internally
    consistent unless overridden.

    Args:
        secret: Private scalar, 1 <= secret < order.
        **overrides: Members to replace or add (None removes the member).

    Returns:
        Key document as a dict.
    """
    point: PublicPoint = P256.derive_public_point(secret)
    doc: Dict[str, Any] = {
        "kty": "EC",
        "crv": "P-256",
        "x": encode_int(point.x),
        "y": encode_int(point.y),
        "d": encode_int(secret),
    }
    for k, v in overrides.items():
        if v is None:
            doc.pop(k, None)
        else:
            doc[k] = v
    return doc


@pytest.fixture
def key_document() -> Dict[str, Any]:
    """A consistent P-256 key document (RFC 6979 A.2.5 key)."""
    return make_key_document(RFC6979_P256_KEY["d"], kid="test-key")


@pytest.fixture
def key_document_file(tmp_path, key_document):
    """The key_document fixture written to a JSON file; returns its path."""
    path = tmp_path / "key.jwk.json"
    path.write_text(json.dumps(key_document), encoding="utf-8")
    return path
