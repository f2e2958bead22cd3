"""Plot mode inference from the set of definition targets."""

from __future__ import annotations

from enum import Enum
from typing import Iterable

from .nodes import Definition


class Mode(str, Enum):
    AUTO = "auto"
    PARAM_CURVE = "curve"
    COMPLEX_CURVE = "complex"
    SURFACE = "surface"


class ComplexMapping(str, Enum):
    """How ``f(t)`` is laid out in 3D: A ``(t, Re, Im)``, B ``(Re, Im, t)``, C ``(Re, Im, |f|)``."""

    A = "A"
    B = "B"
    C = "C"


def detect_mode(definitions: Iterable[Definition]) -> Mode:
    """Pick the plot mode; the first matching rule wins.

    Falls back to :attr:`Mode.PARAM_CURVE` when nothing matches.
    """

    by_target = {definition.target: definition for definition in definitions}

    vector = by_target.get("r")
    if vector is not None and vector.is_vector:
        return Mode.PARAM_CURVE
    if {"x", "y", "z"} <= by_target.keys():
        return Mode.PARAM_CURVE
    if "f" in by_target:
        return Mode.COMPLEX_CURVE
    height = by_target.get("z")
    if (
        height is not None
        and set(height.params) == {"x", "y"}
        and not {"x", "y"} <= by_target.keys()
    ):
        return Mode.SURFACE
    return Mode.PARAM_CURVE


__all__ = ["Mode", "ComplexMapping", "detect_mode"]
