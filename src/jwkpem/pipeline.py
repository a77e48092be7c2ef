from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple, Union

from .config import ConversionConfig
from .crypto import reconstruct_key_pair
from .curve import curve_for_name
from .document import jwk_thumbprint, parse_key_document, validate_key_document
from .encoding import PRIVATE_KEY_ENCODERS, encode_public_key
from .errors import KeyConversionError
from .io import read_key_document, write_key_pair
from .log import get_logger
from .pem import serialize_pem

logger = get_logger("pipeline")

DocumentInput = Union[bytes, str, Mapping[str, Any]]


@dataclass(frozen=True)
class PemKeyPair:
    """
    Immutable container for a converted key pair.

    Attributes:
        private_pem: PEM-encoded private key (bytes). Must be kept secret.
        public_pem: PEM-encoded public key (bytes). Safe to distribute.
        thumbprint: RFC 7638 thumbprint of the key.
        kid: Key identifier from the source document, if any.
    """

    private_pem: bytes = field(repr=False)
    public_pem: bytes
    thumbprint: str
    kid: Optional[str] = None


@dataclass(frozen=True)
class ConversionResult:
    """
    Outcome of a conversion: either ``keys`` or ``error`` is set.

    Attributes:
        keys: The converted PEM pair on success.
        error: The failure on error.
        paths: Written (private, public) paths when produced by run_conversion.
    """

    keys: Optional[PemKeyPair] = None
    error: Optional[KeyConversionError] = None
    paths: Optional[Tuple[Path, Path]] = None

    def __post_init__(self) -> None:
        if (self.keys is None) == (self.error is None):
            raise ValueError("ConversionResult needs exactly one of keys or error")

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> PemKeyPair:
        """Return the keys, or raise the recorded error."""
        if self.error is not None:
            raise self.error
        return self.keys


def convert_jwk(
    document: DocumentInput,
    *,
    curve_name: str = "P-256",
    private_key_format: str = "sec1",
    embed_public_key: bool = True,
    verify_public_key: bool = True,
) -> PemKeyPair:
    """
    Convert an EC key document into private and public key PEM buffers.

    Pure: no file access. Steps are parse, validate and decode, reconstruct
    the scalar and derive the public point, DER encode, PEM armor. Any
    failure aborts before output exists.

    Args:
        document: JSON bytes/text or an already-parsed mapping.
        curve_name: Curve the document must use.
        private_key_format: "sec1" or "pkcs8".
        embed_public_key: Include the public point in the private structure.
        verify_public_key: Require the document's x/y to match d * G.

    Returns:
        PemKeyPair with both PEM buffers.

    Raises:
        KeyConversionError: Any subclass, see jwkpem.errors.
        ValueError: If private_key_format is unknown.
    """
    try:
        encode_private = PRIVATE_KEY_ENCODERS[private_key_format]
    except KeyError:
        raise ValueError(
            f"private_key_format must be one of {sorted(PRIVATE_KEY_ENCODERS)}"
        ) from None

    curve = curve_for_name(curve_name)

    doc = parse_key_document(document)
    fields = validate_key_document(doc, curve)
    thumbprint = jwk_thumbprint(doc)
    logger.debug(
        "Validated %s key document, thumbprint %s", curve.jwk_name, thumbprint
    )

    key_pair = reconstruct_key_pair(
        fields, curve, verify_public_key=verify_public_key
    )

    private_blob = encode_private(key_pair, embed_public_key=embed_public_key)
    public_blob = encode_public_key(key_pair)

    return PemKeyPair(
        private_pem=serialize_pem(private_blob),
        public_pem=serialize_pem(public_blob),
        thumbprint=thumbprint,
        kid=fields.kid,
    )


def try_convert_jwk(document: DocumentInput, **options: Any) -> ConversionResult:
    """Like convert_jwk, but report conversion failures as a ConversionResult."""
    try:
        return ConversionResult(keys=convert_jwk(document, **options))
    except KeyConversionError as e:
        logger.debug("Conversion failed: %s: %s", e.kind, e)
        return ConversionResult(error=e)


def run_conversion(config: ConversionConfig) -> ConversionResult:
    """
    Read, convert and write according to config.

    Both PEM buffers are built in memory before anything is written, and
    write_key_pair writes both files or neither.

    Returns:
        ConversionResult with keys and written paths, or the error.
    """
    try:
        raw = read_key_document(config.input_path)
        keys = convert_jwk(
            raw,
            curve_name=config.curve_name,
            private_key_format=config.private_key_format,
            embed_public_key=config.embed_public_key,
            verify_public_key=config.verify_public_key,
        )
        paths = write_key_pair(
            keys.private_pem,
            keys.public_pem,
            config.private_key_path,
            config.public_key_path,
            overwrite=config.overwrite,
        )
    except KeyConversionError as e:
        logger.debug("Conversion of %s failed: %s: %s", config.input_path, e.kind, e)
        return ConversionResult(error=e)

    logger.info(
        "Converted %s (kid=%s, thumbprint=%s)",
        config.input_path,
        keys.kid,
        keys.thumbprint,
    )
    return ConversionResult(keys=keys, paths=paths)
