"""String-keyed views for consumers that cannot carry composite dictionary keys."""

from __future__ import annotations

from typing import Dict, Optional

from .keys import TripletKey


def check_separator(separator: str) -> str:
    """Return ``separator`` if tokens built with it can be split back unambiguously."""
    if not isinstance(separator, str) or not separator:
        raise ValueError("key separator must be a non-empty string.")
    if any(ch.isdigit() for ch in separator):
        raise ValueError(f"key separator {separator!r} would be ambiguous with atom indices.")
    return separator


def encode_triplet_key(key: TripletKey, separator: str = ",") -> str:
    """Render ``(i, j, k)`` as ``"i<sep>j<sep>k"``."""
    check_separator(separator)
    return separator.join(str(int(index)) for index in key)


def decode_triplet_key(token: str, separator: str = ",") -> TripletKey:
    """Parse a token produced by :func:`encode_triplet_key`."""
    check_separator(separator)
    parts = token.split(separator)
    if len(parts) != 3:
        raise ValueError(f"Expected three indices separated by {separator!r}, got {token!r}.")
    try:
        key = TripletKey(*(int(part) for part in parts))
    except ValueError as exc:
        raise ValueError(f"Triplet key {token!r} contains a non-integer index.") from exc
    # int() tolerates signs, padding and leading zeros
    if min(key) < 0 or encode_triplet_key(key, separator) != token:
        raise ValueError(f"Triplet key {token!r} is not in canonical 'i{separator}j{separator}k' form.")
    return key


def angle_cosines_string_keyed(kernel, separator: Optional[str] = None) -> Dict[str, float]:
    """Angle cosines of ``kernel`` with string keys.

    Parameters
    ----------
    kernel : GeometryKernel
        Kernel whose :meth:`~GeometryKernel.angle_cosines` are re-keyed.
    separator : str, optional
        Index separator. Defaults to ``kernel.config.key_separator``.
    """
    if separator is None:
        separator = kernel.config.key_separator
    check_separator(separator)
    return {
        encode_triplet_key(key, separator): value
        for key, value in kernel.angle_cosines().items()
    }
