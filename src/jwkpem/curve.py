from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple

from ecdsa import NIST256p
from ecdsa.curves import Curve
from ecdsa.ellipticcurve import INFINITY, PointJacobi
from ecdsa.util import orderlen

from .errors import UnsupportedKeyTypeError


@dataclass(frozen=True)
class PublicPoint:
    """
    Affine point on a short Weierstrass curve.

    Attributes:
        x: Affine x coordinate.
        y: Affine y coordinate.
    """

    x: int
    y: int


@dataclass(frozen=True)
class CurveParameters:
    """
    Immutable constant table for a supported curve.

    The arithmetic methods delegate to the ``ecdsa`` implementation of the
    curve; nothing here does modular arithmetic by hand.

    Attributes:
        name: Standard curve name (e.g. "prime256v1").
        jwk_name: The ``crv`` value used in key documents (e.g. "P-256").
        prime_modulus: Field prime p.
        order: Order n of the generator.
        coefficient_a: Curve coefficient a.
        coefficient_b: Curve coefficient b.
        generator: Base point G.
        coordinate_size: Byte length of a coordinate or scalar.
        oid: Named-curve object identifier.
        backend: The ``ecdsa`` curve object.
    """

    name: str
    jwk_name: str
    prime_modulus: int
    order: int
    coefficient_a: int
    coefficient_b: int
    generator: PublicPoint
    coordinate_size: int
    oid: Tuple[int, ...]
    backend: Curve = field(repr=False, compare=False)

    @classmethod
    def from_ecdsa(cls, curve: Curve, jwk_name: str) -> "CurveParameters":
        fp = curve.curve
        g = curve.generator
        return cls(
            name=curve.openssl_name or curve.name,
            jwk_name=jwk_name,
            prime_modulus=fp.p(),
            order=curve.order,
            coefficient_a=fp.a() % fp.p(),
            coefficient_b=fp.b() % fp.p(),
            generator=PublicPoint(x=g.x(), y=g.y()),
            coordinate_size=orderlen(fp.p()),
            oid=tuple(curve.oid),
            backend=curve,
        )

    def is_valid_scalar(self, value: int) -> bool:
        """Return True if value is a usable private scalar, i.e. 1 <= value < order."""
        return isinstance(value, int) and 1 <= value < self.order

    def is_on_curve(self, point: PublicPoint) -> bool:
        """
        Check that an affine point is a finite point of this curve.

        Coordinates must be reduced field elements and satisfy
        y^2 = x^3 + a*x + b (mod p).
        """
        p = self.prime_modulus
        if not (0 <= point.x < p and 0 <= point.y < p):
            return False
        return self.backend.curve.contains_point(point.x, point.y)

    def scalar_multiply(self, base: PublicPoint, scalar: int) -> PublicPoint:
        """
        Compute scalar * base on this curve.

        Args:
            base: Affine point on the curve (usually the generator).
            scalar: Non-negative multiplier.

        Returns:
            The resulting affine point.

        Raises:
            ValueError: If base is not on the curve or the result is the point
                        at infinity.
        """
        if not self.is_on_curve(base):
            raise ValueError("Base point is not on the curve")

        if base == self.generator:
            jacobi = self.backend.generator
        else:
            jacobi = PointJacobi(
                self.backend.curve, base.x, base.y, 1, self.order
            )

        result = jacobi * scalar
        if result == INFINITY:
            raise ValueError("Scalar multiplication produced the point at infinity")

        affine = result.to_affine()
        return PublicPoint(x=affine.x(), y=affine.y())

    def derive_public_point(self, scalar: int) -> PublicPoint:
        """Return scalar * G."""
        return self.scalar_multiply(self.generator, scalar)


P256 = CurveParameters.from_ecdsa(NIST256p, "P-256")

SUPPORTED_CURVES: Dict[str, CurveParameters] = {P256.jwk_name: P256}


def curve_for_name(name: str) -> CurveParameters:
    """
    Look up a supported curve by its key-document name.

    Raises:
        UnsupportedKeyTypeError: If the curve is not supported.
    """
    try:
        return SUPPORTED_CURVES[name]
    except (KeyError, TypeError):
        raise UnsupportedKeyTypeError(
            f"Unsupported curve {name!r}; supported: {sorted(SUPPORTED_CURVES)}"
        ) from None


def scalar_multiply(
    base: PublicPoint, scalar: int, curve: CurveParameters = P256
) -> PublicPoint:
    return curve.scalar_multiply(base, scalar)


def is_on_curve(point: PublicPoint, curve: CurveParameters = P256) -> bool:
    return curve.is_on_curve(point)


def is_valid_scalar(value: int, curve: CurveParameters = P256) -> bool:
    return curve.is_valid_scalar(value)
