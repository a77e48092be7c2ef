import pytest

from jwkpem.b64url import b64url_decode
from jwkpem.crypto import (
    PrivateScalar,
    private_scalar_from_bytes,
    reconstruct_key_pair,
)
from jwkpem.curve import P256, PublicPoint
from jwkpem.document import DecodedFields, parse_key_document, validate_key_document
from jwkpem.errors import KeyMismatchError, RangeError
from jwkpem.testing_utils import (
    P256_G,
    P256_ORDER,
    RFC6979_P256_KEY,
    RFC7515_ES256_JWK,
    make_key_document,
)


def _fields(doc):
    return validate_key_document(parse_key_document(doc))


def test_scalar_is_big_endian():
    raw = (1).to_bytes(32, "big")
    assert private_scalar_from_bytes(raw) == PrivateScalar(1)
    raw = RFC6979_P256_KEY["d"].to_bytes(32, "big")
    assert private_scalar_from_bytes(raw).value == RFC6979_P256_KEY["d"]


def test_scalar_repr_hides_value():
    scalar = PrivateScalar(RFC6979_P256_KEY["d"])
    assert str(RFC6979_P256_KEY["d"]) not in repr(scalar)


@pytest.mark.parametrize(
    "value", [0, P256_ORDER, P256_ORDER + 1, 2**256 - 1]
)
def test_scalar_out_of_range(value):
    with pytest.raises(RangeError):
        private_scalar_from_bytes(value.to_bytes(32, "big"))


def test_largest_scalar_accepted():
    assert private_scalar_from_bytes((P256_ORDER - 1).to_bytes(32, "big")).value == (
        P256_ORDER - 1
    )


def test_secret_one_gives_generator():
    pair = reconstruct_key_pair(_fields(make_key_document(1)))
    assert pair.private.value == 1
    assert pair.public == PublicPoint(*P256_G)
    assert pair.curve is P256


def test_rfc6979_vector():
    pair = reconstruct_key_pair(_fields(make_key_document(RFC6979_P256_KEY["d"])))
    assert pair.public == PublicPoint(RFC6979_P256_KEY["x"], RFC6979_P256_KEY["y"])


def test_rfc7515_document_is_consistent():
    fields = _fields(RFC7515_ES256_JWK)
    pair = reconstruct_key_pair(fields)
    assert pair.public.x == int.from_bytes(b64url_decode(RFC7515_ES256_JWK["x"]), "big")
    assert pair.public.y == int.from_bytes(b64url_decode(RFC7515_ES256_JWK["y"]), "big")


def test_mismatched_public_point_rejected():
    other = make_key_document(2)
    doc = make_key_document(3, x=other["x"], y=other["y"])
    with pytest.raises(KeyMismatchError):
        reconstruct_key_pair(_fields(doc))


def test_mismatch_ignored_when_verification_disabled():
    other = make_key_document(2)
    doc = make_key_document(3, x=other["x"], y=other["y"])
    pair = reconstruct_key_pair(_fields(doc), verify_public_key=False)
    assert pair.public == P256.derive_public_point(3)


def test_zero_scalar_rejected_in_reconstruction():
    fields = DecodedFields(x=b"\x00" * 32, y=b"\x00" * 32, d=b"\x00" * 32)
    with pytest.raises(RangeError):
        reconstruct_key_pair(fields)
