from __future__ import annotations

from dataclasses import dataclass, field

from ecdsa import SigningKey, VerifyingKey
from ecdsa.util import string_to_number

from .curve import P256, CurveParameters, PublicPoint
from .document import DecodedFields
from .errors import EncodingError, KeyMismatchError, RangeError


@dataclass(frozen=True)
class PrivateScalar:
    """
    Private EC scalar d, with 1 <= d < order.

    The value is left out of ``repr`` and must be kept secret.
    """

    value: int = field(repr=False)


@dataclass(frozen=True)
class EncodedKeyPair:
    """
    Immutable container for reconstructed EC key material.

    Attributes:
        private: The private scalar d.
        public: The public point, always derived as d * G.
        curve: Curve both belong to.
    """

    private: PrivateScalar
    public: PublicPoint
    curve: CurveParameters = P256


def private_scalar_from_bytes(
    raw: bytes, curve: CurveParameters = P256
) -> PrivateScalar:
    """
    Interpret big-endian bytes as the private scalar.

    Args:
        raw: Unsigned big-endian scalar bytes.
        curve: Curve whose order bounds the scalar.

    Returns:
        PrivateScalar within [1, order - 1].

    Raises:
        RangeError: If the value is 0 or not below the curve order.
    """
    value = string_to_number(raw) if raw else 0
    if not curve.is_valid_scalar(value):
        raise RangeError("Private scalar d must satisfy 1 <= d < curve order")
    return PrivateScalar(value=value)


def reconstruct_key_pair(
    fields: DecodedFields,
    curve: CurveParameters = P256,
    *,
    verify_public_key: bool = True,
) -> EncodedKeyPair:
    """
    Rebuild the key pair from decoded key document members.

    The public point is computed from the private scalar; the supplied x and y
    are never used as the output point. With ``verify_public_key`` they must
    equal the derived point, otherwise they are ignored.

    Args:
        fields: Decoded x, y and d.
        curve: Curve to reconstruct on.
        verify_public_key: If True, reject documents whose x/y differ from d * G.

    Returns:
        EncodedKeyPair with the scalar and the derived point.

    Raises:
        RangeError: If d is out of range.
        KeyMismatchError: If verification is enabled and x/y do not match.
        EncodingError: If the derived point is not a finite curve point.
    """
    private = private_scalar_from_bytes(fields.d, curve)

    try:
        public = curve.derive_public_point(private.value)
    except ValueError as e:
        raise EncodingError("Failed to derive public point") from e

    if not curve.is_on_curve(public):
        raise EncodingError("Derived public point is not on the curve")

    if verify_public_key:
        supplied = PublicPoint(
            x=string_to_number(fields.x), y=string_to_number(fields.y)
        )
        if supplied != public:
            raise KeyMismatchError(
                "Public coordinates x/y do not match the point derived from d"
            )

    return EncodedKeyPair(private=private, public=public, curve=curve)


def load_private_key(pem_bytes: bytes) -> SigningKey:
    """
    Load an EC private key from PEM-encoded bytes.

    Accepts both SEC1 ("EC PRIVATE KEY") and PKCS#8 ("PRIVATE KEY") armor.

    Args:
        pem_bytes: PEM-formatted private key bytes.

    Returns:
        ECDSA SigningKey object.

    Raises:
        Various ecdsa exceptions if PEM format is invalid or key is corrupted.
    """
    return SigningKey.from_pem(pem_bytes)


def load_public_key(pem_bytes: bytes) -> VerifyingKey:
    """
    Load an EC public key from PEM-encoded bytes.

    Args:
        pem_bytes: PEM-formatted SubjectPublicKeyInfo bytes.

    Returns:
        ECDSA VerifyingKey object.

    Raises:
        Various ecdsa exceptions if PEM format is invalid or key is corrupted.
    """
    return VerifyingKey.from_pem(pem_bytes)
