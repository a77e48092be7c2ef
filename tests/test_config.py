from pathlib import Path

import pytest

from jwkpem.config import ConversionConfig
from jwkpem.errors import UnsupportedKeyTypeError


def test_defaults():
    config = ConversionConfig(input_path="key.json")
    assert config.input_path == Path("key.json")
    assert config.private_key_path == Path("private.pem")
    assert config.public_key_path == Path("public.pem")
    assert config.curve_name == "P-256"
    assert config.private_key_format == "sec1"
    assert config.embed_public_key and config.verify_public_key and config.overwrite


def test_from_env():
    env = {
        "JWKPEM_INPUT": "in.json",
        "JWKPEM_PRIVATE_KEY": "k.pem",
        "JWKPEM_PUBLIC_KEY": "k.pub",
        "JWKPEM_PRIVATE_FORMAT": "PKCS8",
    }
    config = ConversionConfig.from_env(env)
    assert config.input_path == Path("in.json")
    assert config.private_key_path == Path("k.pem")
    assert config.public_key_path == Path("k.pub")
    assert config.private_key_format == "pkcs8"


def test_overrides_win_over_env():
    env = {"JWKPEM_INPUT": "in.json", "JWKPEM_PRIVATE_KEY": "k.pem"}
    config = ConversionConfig.from_env(
        env, input_path="other.json", private_key_path=None, verify_public_key=False
    )
    assert config.input_path == Path("other.json")
    assert config.private_key_path == Path("k.pem")
    assert config.verify_public_key is False


def test_input_required():
    with pytest.raises(ValueError):
        ConversionConfig.from_env({})


def test_invalid_format():
    with pytest.raises(ValueError):
        ConversionConfig(input_path="k.json", private_key_format="jks")


def test_same_destination_rejected():
    with pytest.raises(ValueError):
        ConversionConfig(
            input_path="k.json", private_key_path="k.pem", public_key_path="k.pem"
        )


def test_aliased_destination_rejected(tmp_path):
    with pytest.raises(ValueError):
        ConversionConfig(
            input_path="k.json",
            private_key_path=tmp_path / "k.pem",
            public_key_path=tmp_path / "sub" / ".." / "k.pem",
        )


def test_unsupported_curve():
    with pytest.raises(UnsupportedKeyTypeError):
        ConversionConfig(input_path="k.json", curve_name="P-521")
