from __future__ import annotations

import hashlib
import os
import tempfile
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from .errors import KeyFileError
from .log import get_logger

logger = get_logger("io")

PRIVATE_KEY_MODE = 0o600
PUBLIC_KEY_MODE = 0o644


def read_key_document(path: Union[str, os.PathLike]) -> bytes:
    """
    Read a key document from disk.

    Raises:
        KeyFileError: If the file cannot be read.
    """
    p = Path(path).expanduser()
    try:
        return p.read_bytes()
    except OSError as e:
        raise KeyFileError(f"Failed to read key document: {p}") from e


def _stage(data: bytes, target: Path, mode: int) -> Path:
    """Write data to a temporary file next to target and return its path."""
    target.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(
        prefix=f".{target.name}.", suffix=".tmp", dir=str(target.parent)
    )
    try:
        os.fchmod(fd, mode)
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise
    return Path(tmp)


def _move_aside(target: Path) -> Optional[Path]:
    """Rename an existing target to a hidden backup next to it."""
    if not target.exists():
        return None
    fd, backup = tempfile.mkstemp(
        prefix=f".{target.name}.", suffix=".bak", dir=str(target.parent)
    )
    os.close(fd)
    try:
        os.replace(target, backup)
    except OSError:
        Path(backup).unlink(missing_ok=True)
        raise
    return Path(backup)


def write_key_pair(
    private_pem: bytes,
    public_pem: bytes,
    private_path: Union[str, os.PathLike],
    public_path: Union[str, os.PathLike],
    *,
    overwrite: bool = True,
) -> Tuple[Path, Path]:
    """
    Write both PEM files, or neither.

    Both payloads are first staged as temporary files in the destination
    directories. Existing destination files are renamed aside, then the staged
    files are renamed into place. If anything fails, the staged files and any
    newly placed file are removed and the previous files are restored, so the
    destinations are left as they were found.

    Args:
        private_pem: Private key PEM bytes (written with mode 0600).
        public_pem: Public key PEM bytes.
        private_path: Private key destination.
        public_path: Public key destination.
        overwrite: If False, refuse to replace existing files.

    Returns:
        Resolved (private_path, public_path).

    Raises:
        KeyFileError: If both destinations name the same file, a destination
                      is a directory, a destination exists and overwrite is
                      False, or any write or rename fails.
    """
    priv = Path(private_path).expanduser().resolve()
    pub = Path(public_path).expanduser().resolve()

    if priv == pub:
        raise KeyFileError(
            f"Private and public key destinations are the same file: {priv}"
        )
    for p in (priv, pub):
        if p.is_dir():
            raise KeyFileError(f"Destination is a directory: {p}")
    if not overwrite:
        for p in (priv, pub):
            if p.exists():
                raise KeyFileError(f"Refusing to overwrite existing file: {p}")

    staged: List[Path] = []
    backups: Dict[Path, Path] = {}
    placed: List[Path] = []
    try:
        staged.append(_stage(private_pem, priv, PRIVATE_KEY_MODE))
        staged.append(_stage(public_pem, pub, PUBLIC_KEY_MODE))

        for target in (priv, pub):
            backup = _move_aside(target)
            if backup is not None:
                backups[target] = backup

        for tmp, target in zip(staged, (priv, pub)):
            os.replace(tmp, target)
            placed.append(target)
    except OSError as e:
        for tmp in staged:
            tmp.unlink(missing_ok=True)
        for target in placed:
            target.unlink(missing_ok=True)
        for target, backup in backups.items():
            os.replace(backup, target)
        raise KeyFileError(f"Failed to write key pair to {priv} and {pub}") from e

    for backup in backups.values():
        backup.unlink(missing_ok=True)

    logger.info("Wrote private key to %s", priv)
    logger.info("Wrote public key to %s", pub)
    return priv, pub


def _normalize_pem_bytes(pem_bytes: bytes) -> bytes:
    """
    Normalize PEM-formatted bytes for consistent handling.

    Converts line endings to Unix style (\\n), removes leading/trailing whitespace,
    and ensures the data ends with a newline.

    Args:
        pem_bytes: Raw PEM-formatted bytes.

    Returns:
        Normalized PEM bytes.
    """
    data = pem_bytes.replace(b"\r\n", b"\n").replace(b"\r", b"\n").strip()
    if not data.endswith(b"\n"):
        data += b"\n"
    return data


def public_key_fingerprint_sha256(pem_bytes: bytes) -> str:
    """
    Compute a SHA-256 fingerprint (hex) for a PEM public key blob.

    Args:
        pem_bytes: PEM-formatted public key bytes.

    Returns:
        SHA-256 fingerprint as a hex string (lowercase).
    """
    normalized = _normalize_pem_bytes(pem_bytes)
    return hashlib.sha256(normalized).hexdigest()


def load_public_key_pem(pubkey_path: Union[str, os.PathLike]) -> bytes:
    """
    Load a public key PEM from disk.

    Raises:
        KeyFileError: If the file cannot be read or is not a PEM public key.
    """
    p = Path(pubkey_path).expanduser()

    try:
        data = p.read_bytes()
    except OSError as e:
        raise KeyFileError(f"Failed to read public key file: {p}") from e

    if b"BEGIN PUBLIC KEY" not in data:
        raise KeyFileError(f"Not a PEM public key file: {p}")

    return data
