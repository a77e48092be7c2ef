from __future__ import annotations

import argparse
import sys

from .config import DEFAULT_PUBLIC_KEY
from .crypto import load_public_key
from .document import jwk_thumbprint, parse_key_document
from .errors import KeyConversionError
from .io import load_public_key_pem, public_key_fingerprint_sha256, read_key_document


def main(argv: list[str] | None = None) -> int:
    """
    CLI command to display the fingerprint of a converted public key.

    By default reads a public key PEM, checks that it parses as an EC public
    key and prints the SHA-256 fingerprint of the normalized PEM as hex. With
    --jwk the path is a key document instead and its RFC 7638 thumbprint is
    printed.

    Returns:
        Exit code: 0 on success, the error's exit code otherwise.
    """
    ap = argparse.ArgumentParser(
        description="Print the SHA-256 fingerprint of a public key PEM or JWK."
    )
    ap.add_argument("path", nargs="?", default=DEFAULT_PUBLIC_KEY)
    ap.add_argument(
        "--jwk",
        action="store_true",
        help="Treat path as a key document and print its RFC 7638 thumbprint",
    )
    args = ap.parse_args(argv)

    try:
        if args.jwk:
            print(jwk_thumbprint(parse_key_document(read_key_document(args.path))))
            return 0

        pem = load_public_key_pem(args.path)
    except KeyConversionError as e:
        print(f"Error [{e.kind}]: {e}", file=sys.stderr)
        return e.exit_code

    try:
        load_public_key(pem)
    except Exception as e:
        print(f"Error: {args.path} is not a valid EC public key: {e}", file=sys.stderr)
        return 1

    print(public_key_fingerprint_sha256(pem))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
