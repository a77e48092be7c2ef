from __future__ import annotations

import argparse
import sys

from .config import (
    DEFAULT_PRIVATE_FORMAT,
    ENV_INPUT,
    ENV_PRIVATE_FORMAT,
    ENV_PRIVATE_KEY,
    ENV_PUBLIC_KEY,
    ConversionConfig,
)
from .encoding import PRIVATE_KEY_ENCODERS
from .errors import KeyConversionError
from .log import setup_logging
from .pipeline import run_conversion


def _report(e: KeyConversionError) -> int:
    print(f"Error [{e.kind}]: {e}", file=sys.stderr)
    return e.exit_code


def main(argv: list[str] | None = None) -> int:
    """
    CLI command to convert an EC P-256 JWK into PEM key files.

    Reads the key document, writes the private key (SEC1 "EC PRIVATE KEY" or
    PKCS#8 "PRIVATE KEY") and the public key ("PUBLIC KEY"), and prints the
    paths of both files to stdout. Either both files are written or neither.

    Args:
        argv: Command-line arguments (default: sys.argv). Useful for testing.

    Returns:
        Exit code:
        - 0: Success
        - 1: Reading the document or writing the files failed
        - 2: Invalid arguments or configuration
        - 3-10: Conversion failure, see jwkpem.errors

    Command-line arguments:
        input: Key document path (default: $JWKPEM_INPUT)
        --private-key: Private key destination (default: $JWKPEM_PRIVATE_KEY or private.pem)
        --public-key: Public key destination (default: $JWKPEM_PUBLIC_KEY or public.pem)
        --format: Private key format, sec1 or pkcs8 (default: $JWKPEM_PRIVATE_FORMAT or sec1)
        --no-embed-public-key: Leave the public point out of the private key
        --no-verify-public-key: Ignore the document's x/y instead of checking them
        --no-overwrite: Fail if an output file already exists
        -v/--verbose: Log progress to stderr (repeat for debug output)
    """
    ap = argparse.ArgumentParser(
        description="Convert an EC P-256 JSON Web Key into PEM key files."
    )
    ap.add_argument(
        "input",
        nargs="?",
        default=None,
        help=f"Key document (JWK JSON). Defaults to ${ENV_INPUT}.",
    )
    ap.add_argument(
        "--private-key",
        default=None,
        help=f"Private key PEM destination (default: ${ENV_PRIVATE_KEY} or private.pem)",
    )
    ap.add_argument(
        "--public-key",
        default=None,
        help=f"Public key PEM destination (default: ${ENV_PUBLIC_KEY} or public.pem)",
    )
    ap.add_argument(
        "--format",
        dest="private_key_format",
        choices=sorted(PRIVATE_KEY_ENCODERS),
        default=None,
        help=f"Private key structure (default: ${ENV_PRIVATE_FORMAT} or {DEFAULT_PRIVATE_FORMAT})",
    )
    ap.add_argument(
        "--no-embed-public-key",
        action="store_true",
        help="Do not embed the public point in the private key structure",
    )
    ap.add_argument(
        "--no-verify-public-key",
        action="store_true",
        help="Ignore the document's x/y instead of requiring them to match d",
    )
    ap.add_argument(
        "--no-overwrite",
        action="store_true",
        help="Fail instead of replacing existing output files",
    )
    ap.add_argument("-v", "--verbose", action="count", default=0)
    args = ap.parse_args(argv)

    level = "DEBUG" if args.verbose > 1 else "INFO" if args.verbose else "WARNING"
    setup_logging(level)

    try:
        config = ConversionConfig.from_env(
            input_path=args.input,
            private_key_path=args.private_key,
            public_key_path=args.public_key,
            private_key_format=args.private_key_format,
            embed_public_key=not args.no_embed_public_key,
            verify_public_key=not args.no_verify_public_key,
            overwrite=not args.no_overwrite,
        )
    except KeyConversionError as e:
        return _report(e)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    result = run_conversion(config)
    if not result.ok:
        return _report(result.error)

    priv_path, pub_path = result.paths
    print(str(priv_path))
    print(str(pub_path))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
