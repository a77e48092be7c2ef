from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Union

from .curve import curve_for_name
from .encoding import PRIVATE_KEY_ENCODERS

ENV_INPUT = "JWKPEM_INPUT"
ENV_PRIVATE_KEY = "JWKPEM_PRIVATE_KEY"
ENV_PUBLIC_KEY = "JWKPEM_PUBLIC_KEY"
ENV_CURVE = "JWKPEM_CURVE"
ENV_PRIVATE_FORMAT = "JWKPEM_PRIVATE_FORMAT"

DEFAULT_PRIVATE_KEY = "private.pem"
DEFAULT_PUBLIC_KEY = "public.pem"
DEFAULT_CURVE = "P-256"
DEFAULT_PRIVATE_FORMAT = "sec1"

PathLike = Union[str, os.PathLike]


@dataclass(frozen=True)
class ConversionConfig:
    """
    Explicit settings for one file-to-file conversion run.

    Attributes:
        input_path: Key document to read.
        private_key_path: Destination of the private key PEM.
        public_key_path: Destination of the public key PEM.
        curve_name: Curve the document must use (only "P-256" is supported).
        private_key_format: "sec1" (EC PRIVATE KEY) or "pkcs8" (PRIVATE KEY).
        embed_public_key: Include the public point in the private key structure.
        verify_public_key: Require the document's x/y to match d * G.
        overwrite: Replace existing output files.
    """

    input_path: Path
    private_key_path: Path = Path(DEFAULT_PRIVATE_KEY)
    public_key_path: Path = Path(DEFAULT_PUBLIC_KEY)
    curve_name: str = DEFAULT_CURVE
    private_key_format: str = DEFAULT_PRIVATE_FORMAT
    embed_public_key: bool = True
    verify_public_key: bool = True
    overwrite: bool = True

    def __post_init__(self) -> None:
        for name in ("input_path", "private_key_path", "public_key_path"):
            object.__setattr__(self, name, Path(getattr(self, name)).expanduser())

        if self.private_key_format not in PRIVATE_KEY_ENCODERS:
            raise ValueError(
                f"private_key_format must be one of {sorted(PRIVATE_KEY_ENCODERS)}, "
                f"got {self.private_key_format!r}"
            )
        if self.private_key_path.resolve() == self.public_key_path.resolve():
            raise ValueError("private and public key destinations must differ")

        # raises UnsupportedKeyTypeError for anything but P-256
        curve_for_name(self.curve_name)

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        **overrides,
    ) -> "ConversionConfig":
        """
        Build a config from JWKPEM_* environment variables.

        Keyword overrides that are not None win over the environment.

        Raises:
            ValueError: If no input path is configured or a value is invalid.
        """
        env = os.environ if environ is None else environ

        values = {
            "input_path": env.get(ENV_INPUT),
            "private_key_path": env.get(ENV_PRIVATE_KEY, DEFAULT_PRIVATE_KEY),
            "public_key_path": env.get(ENV_PUBLIC_KEY, DEFAULT_PUBLIC_KEY),
            "curve_name": env.get(ENV_CURVE, DEFAULT_CURVE),
            "private_key_format": env.get(
                ENV_PRIVATE_FORMAT, DEFAULT_PRIVATE_FORMAT
            ).lower(),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})

        if not values["input_path"]:
            raise ValueError(f"No key document given (argument or ${ENV_INPUT})")

        return cls(**values)
