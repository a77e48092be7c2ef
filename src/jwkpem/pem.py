from __future__ import annotations

import base64
from dataclasses import dataclass

from .encoding import BinaryKeyBlob

PEM_LINE_WIDTH = 64


@dataclass(frozen=True)
class PemDocument:
    """
    A labeled PEM block around one encoded key structure.

    Attributes:
        label: Armor label, e.g. "EC PRIVATE KEY".
        body: The DER blob being armored.
    """

    label: str
    body: BinaryKeyBlob

    @classmethod
    def for_blob(cls, blob: BinaryKeyBlob) -> "PemDocument":
        return cls(label=blob.kind.pem_label, body=blob)

    def to_bytes(self, line_width: int = PEM_LINE_WIDTH) -> bytes:
        """
        Render the PEM text.

        The base64 body is wrapped at ``line_width`` characters, framed by
        BEGIN/END lines and terminated with a newline.
        """
        if line_width <= 0:
            raise ValueError("line_width must be positive")

        b64 = base64.b64encode(self.body.data)
        lines = [f"-----BEGIN {self.label}-----\n".encode("ascii")]
        lines.extend(
            b64[start : start + line_width] + b"\n"
            for start in range(0, len(b64), line_width)
        )
        lines.append(f"-----END {self.label}-----\n".encode("ascii"))
        return b"".join(lines)


def serialize_pem(blob: BinaryKeyBlob, line_width: int = PEM_LINE_WIDTH) -> bytes:
    """Armor a DER blob with the PEM label matching its structure kind."""
    return PemDocument.for_blob(blob).to_bytes(line_width)
