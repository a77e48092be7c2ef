import pytest
from ecdsa import NIST256p, SigningKey
from ecdsa import der

from jwkpem.crypto import EncodedKeyPair, PrivateScalar, load_private_key
from jwkpem.curve import P256, PublicPoint
from jwkpem.encoding import (
    KeyStructure,
    encode_private_key,
    encode_private_key_pkcs8,
    encode_public_key,
    encode_public_point,
)
from jwkpem.errors import EncodingError
from jwkpem.pem import serialize_pem
from jwkpem.testing_utils import P256_ORDER, RFC6979_P256_KEY


def _pair(secret):
    return EncodedKeyPair(
        private=PrivateScalar(secret), public=P256.derive_public_point(secret)
    )


def test_uncompressed_point_layout():
    point = PublicPoint(RFC6979_P256_KEY["x"], RFC6979_P256_KEY["y"])
    encoded = encode_public_point(point, P256)
    assert len(encoded) == 65
    assert encoded[0] == 0x04
    assert encoded[1:33] == RFC6979_P256_KEY["x"].to_bytes(32, "big")
    assert encoded[33:] == RFC6979_P256_KEY["y"].to_bytes(32, "big")


def test_small_coordinates_are_left_padded():
    encoded = encode_public_point(PublicPoint(1, 2), P256)
    assert encoded[1:33] == b"\x00" * 31 + b"\x01"
    assert encoded[33:] == b"\x00" * 31 + b"\x02"


def test_oversized_coordinate_is_encoding_error():
    with pytest.raises(EncodingError):
        encode_public_point(PublicPoint(P256.prime_modulus, 1), P256)


def test_oversized_scalar_is_encoding_error():
    pair = EncodedKeyPair(private=PrivateScalar(2**256), public=P256.generator)
    with pytest.raises(EncodingError):
        encode_private_key(pair)


@pytest.mark.parametrize("secret", [1, 2, RFC6979_P256_KEY["d"], P256_ORDER - 1])
def test_sec1_matches_ecdsa(secret):
    expected = SigningKey.from_secret_exponent(secret, curve=NIST256p).to_der()
    blob = encode_private_key(_pair(secret))
    assert blob.kind is KeyStructure.SEC1_PRIVATE_KEY
    assert blob.data == expected


@pytest.mark.parametrize("secret", [1, RFC6979_P256_KEY["d"]])
def test_public_key_matches_ecdsa(secret):
    sk = SigningKey.from_secret_exponent(secret, curve=NIST256p)
    blob = encode_public_key(_pair(secret))
    assert blob.kind is KeyStructure.PUBLIC_KEY
    assert blob.data == sk.get_verifying_key().to_der()


def test_sec1_scalar_is_fixed_width():
    blob = encode_private_key(_pair(1), embed_public_key=False)
    body, rest = der.remove_sequence(blob.data)
    assert rest == b""
    version, body = der.remove_integer(body)
    assert version == 1
    scalar, body = der.remove_octet_string(body)
    assert scalar == b"\x00" * 31 + b"\x01"
    tag, oid, body = der.remove_constructed(body)
    assert tag == 0
    assert der.remove_object(oid)[0] == P256.oid
    assert body == b""


def test_sec1_without_public_key_still_loads():
    blob = encode_private_key(_pair(RFC6979_P256_KEY["d"]), embed_public_key=False)
    sk = SigningKey.from_der(blob.data)
    assert sk.privkey.secret_multiplier == RFC6979_P256_KEY["d"]


@pytest.mark.parametrize("embed", [True, False])
def test_pkcs8_loads(embed):
    blob = encode_private_key_pkcs8(_pair(RFC6979_P256_KEY["d"]), embed_public_key=embed)
    assert blob.kind is KeyStructure.PKCS8_PRIVATE_KEY
    sk = load_private_key(serialize_pem(blob))
    assert sk.curve == NIST256p
    assert sk.privkey.secret_multiplier == RFC6979_P256_KEY["d"]


def test_pkcs8_layout():
    blob = encode_private_key_pkcs8(_pair(5))
    body, _ = der.remove_sequence(blob.data)
    version, body = der.remove_integer(body)
    assert version == 0
    alg, body = der.remove_sequence(body)
    oid, params = der.remove_object(alg)
    assert oid == (1, 2, 840, 10045, 2, 1)
    assert der.remove_object(params)[0] == P256.oid
    inner, body = der.remove_octet_string(body)
    assert body == b""
    assert der.is_sequence(inner)


def test_blob_repr_hides_data():
    blob = encode_private_key(_pair(RFC6979_P256_KEY["d"]))
    assert repr(blob.data) not in repr(blob)
