from __future__ import annotations

import enum
from dataclasses import dataclass, field

from ecdsa import der

from .crypto import EncodedKeyPair
from .curve import CurveParameters, PublicPoint
from .errors import EncodingError

# id-ecPublicKey, RFC 5480
OID_EC_PUBLIC_KEY = (1, 2, 840, 10045, 2, 1)

UNCOMPRESSED_POINT_PREFIX = b"\x04"


class KeyStructure(enum.Enum):
    """Binary key structures this package produces, valued by their PEM label."""

    SEC1_PRIVATE_KEY = "EC PRIVATE KEY"
    PKCS8_PRIVATE_KEY = "PRIVATE KEY"
    PUBLIC_KEY = "PUBLIC KEY"

    @property
    def pem_label(self) -> str:
        return self.value

    @property
    def is_private(self) -> bool:
        return self is not KeyStructure.PUBLIC_KEY


@dataclass(frozen=True)
class BinaryKeyBlob:
    """
    DER encoded key structure.

    Attributes:
        kind: Which structure ``data`` holds.
        data: DER bytes. Secret for private structures, hence not in ``repr``.
    """

    kind: KeyStructure
    data: bytes = field(repr=False)


def _fixed_width(value: int, curve: CurveParameters, what: str) -> bytes:
    try:
        return value.to_bytes(curve.coordinate_size, "big")
    except OverflowError as e:
        raise EncodingError(
            f"{what} does not fit in {curve.coordinate_size} unsigned bytes"
        ) from e


def encode_public_point(point: PublicPoint, curve: CurveParameters) -> bytes:
    """
    Encode a point in SEC1 uncompressed form: 0x04 || x || y.

    Raises:
        EncodingError: If a coordinate does not fit the curve's coordinate size.
    """
    p = curve.prime_modulus
    if not (0 <= point.x < p and 0 <= point.y < p):
        raise EncodingError("Point coordinates are not reduced field elements")

    encoded = (
        UNCOMPRESSED_POINT_PREFIX
        + _fixed_width(point.x, curve, "x")
        + _fixed_width(point.y, curve, "y")
    )
    if len(encoded) != 1 + 2 * curve.coordinate_size:
        raise EncodingError("Uncompressed point has the wrong length")
    return encoded


def _algorithm_identifier(curve: CurveParameters) -> bytes:
    return der.encode_sequence(
        der.encode_oid(*OID_EC_PUBLIC_KEY),
        der.encode_oid(*curve.oid),
    )


def _ec_private_key(
    key_pair: EncodedKeyPair, *, with_parameters: bool, embed_public_key: bool
) -> bytes:
    # ECPrivateKey, RFC 5915 section 3
    curve = key_pair.curve
    elems = [
        der.encode_integer(1),
        der.encode_octet_string(_fixed_width(key_pair.private.value, curve, "d")),
    ]
    if with_parameters:
        elems.append(der.encode_constructed(0, der.encode_oid(*curve.oid)))
    if embed_public_key:
        point = encode_public_point(key_pair.public, curve)
        elems.append(der.encode_constructed(1, der.encode_bitstring(point, 0)))
    return der.encode_sequence(*elems)


def encode_private_key(
    key_pair: EncodedKeyPair, *, embed_public_key: bool = True
) -> BinaryKeyBlob:
    """
    Encode the private key as a SEC1 ECPrivateKey structure.

    Layout: version 1, the scalar as a left-zero-padded fixed-width octet
    string, the named curve under [0] and, optionally, the uncompressed public
    point under [1].

    Args:
        key_pair: Reconstructed key pair.
        embed_public_key: Include the public point (OpenSSL does by default).

    Returns:
        BinaryKeyBlob of kind SEC1_PRIVATE_KEY.

    Raises:
        EncodingError: On any fixed-length invariant violation.
    """
    data = _ec_private_key(
        key_pair, with_parameters=True, embed_public_key=embed_public_key
    )
    return BinaryKeyBlob(kind=KeyStructure.SEC1_PRIVATE_KEY, data=data)


def encode_private_key_pkcs8(
    key_pair: EncodedKeyPair, *, embed_public_key: bool = True
) -> BinaryKeyBlob:
    """
    Encode the private key as a PKCS#8 PrivateKeyInfo structure.

    The curve is named in the algorithm identifier, so the inner ECPrivateKey
    omits its own [0] parameters.

    Returns:
        BinaryKeyBlob of kind PKCS8_PRIVATE_KEY.
    """
    inner = _ec_private_key(
        key_pair, with_parameters=False, embed_public_key=embed_public_key
    )
    data = der.encode_sequence(
        der.encode_integer(0),
        _algorithm_identifier(key_pair.curve),
        der.encode_octet_string(inner),
    )
    return BinaryKeyBlob(kind=KeyStructure.PKCS8_PRIVATE_KEY, data=data)


def encode_public_key(key_pair: EncodedKeyPair) -> BinaryKeyBlob:
    """
    Encode the public key as a SubjectPublicKeyInfo structure.

    Returns:
        BinaryKeyBlob of kind PUBLIC_KEY carrying the uncompressed point.
    """
    point = encode_public_point(key_pair.public, key_pair.curve)
    data = der.encode_sequence(
        _algorithm_identifier(key_pair.curve),
        der.encode_bitstring(point, 0),
    )
    return BinaryKeyBlob(kind=KeyStructure.PUBLIC_KEY, data=data)


PRIVATE_KEY_ENCODERS = {
    "sec1": encode_private_key,
    "pkcs8": encode_private_key_pkcs8,
}
