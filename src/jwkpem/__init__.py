from .b64url import b64url_decode, b64url_encode
from .curve import (
    P256,
    CurveParameters,
    PublicPoint,
    curve_for_name,
    is_on_curve,
    is_valid_scalar,
    scalar_multiply,
)
from .document import (
    DecodedFields,
    KeyDocument,
    jwk_thumbprint,
    parse_key_document,
    validate_key_document,
)
from .crypto import (
    EncodedKeyPair,
    PrivateScalar,
    load_private_key,
    load_public_key,
    private_scalar_from_bytes,
    reconstruct_key_pair,
)
from .encoding import (
    BinaryKeyBlob,
    KeyStructure,
    encode_private_key,
    encode_private_key_pkcs8,
    encode_public_key,
    encode_public_point,
)
from .pem import PEM_LINE_WIDTH, PemDocument, serialize_pem
from .pipeline import (
    ConversionResult,
    PemKeyPair,
    convert_jwk,
    run_conversion,
    try_convert_jwk,
)
from .config import ConversionConfig
from .io import (
    load_public_key_pem,
    public_key_fingerprint_sha256,
    read_key_document,
    write_key_pair,
)
from .errors import (
    DecodeError,
    DocumentFormatError,
    EncodingError,
    KeyConversionError,
    KeyFileError,
    KeyMismatchError,
    MalformedFieldError,
    MissingFieldError,
    RangeError,
    UnsupportedKeyTypeError,
)

__version__ = "0.1.0"

__all__ = [
    "b64url_decode",
    "b64url_encode",
    "P256",
    "CurveParameters",
    "PublicPoint",
    "curve_for_name",
    "is_on_curve",
    "is_valid_scalar",
    "scalar_multiply",
    "DecodedFields",
    "KeyDocument",
    "jwk_thumbprint",
    "parse_key_document",
    "validate_key_document",
    "EncodedKeyPair",
    "PrivateScalar",
    "load_private_key",
    "load_public_key",
    "private_scalar_from_bytes",
    "reconstruct_key_pair",
    "BinaryKeyBlob",
    "KeyStructure",
    "encode_private_key",
    "encode_private_key_pkcs8",
    "encode_public_key",
    "encode_public_point",
    "PEM_LINE_WIDTH",
    "PemDocument",
    "serialize_pem",
    "ConversionResult",
    "PemKeyPair",
    "convert_jwk",
    "run_conversion",
    "try_convert_jwk",
    "ConversionConfig",
    "load_public_key_pem",
    "public_key_fingerprint_sha256",
    "read_key_document",
    "write_key_pair",
    "DecodeError",
    "DocumentFormatError",
    "EncodingError",
    "KeyConversionError",
    "KeyFileError",
    "KeyMismatchError",
    "MalformedFieldError",
    "MissingFieldError",
    "RangeError",
    "UnsupportedKeyTypeError",
]

# Testing utilities - conditionally imported to avoid pytest dependency in production
try:
    from .testing_utils import make_key_document, key_document, key_document_file

    __all__ += ["make_key_document", "key_document", "key_document_file"]
except ImportError:
    # pytest not available, testing utilities not exported
    pass
