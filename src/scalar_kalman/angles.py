"""
Angle normalisation helpers.

Angles are stored in radians and wrapped to ``[-pi, pi)``. The wrapping
functions accept scalars or numpy arrays; :class:`Angle` wraps scalars.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from collections.abc import Callable

LOGGER = logging.getLogger(__name__)

FULL_TURN = 2.0 * np.pi


def mod_2pi(t: float | np.ndarray) -> float | np.ndarray:
    """Wrap ``t`` into ``[0, 2*pi)``."""
    signed_mod = np.fmod(t, FULL_TURN)
    wrapped = np.where(signed_mod < 0.0, FULL_TURN + signed_mod, signed_mod)
    # a tiny negative remainder rounds up to exactly one full turn
    wrapped = np.where(wrapped >= FULL_TURN, 0.0, wrapped)
    if np.ndim(wrapped) == 0:
        return float(wrapped)
    return wrapped


def wrap_to_pi(t: float | np.ndarray) -> float | np.ndarray:
    """Wrap ``t`` into ``[-pi, pi)``."""
    return mod_2pi(np.add(t, np.pi)) - np.pi


@dataclass(frozen=True)
class Angle:
    """An angle in radians, always held wrapped to ``[-pi, pi)``."""

    value: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "value", float(wrap_to_pi(float(self.value))))

    def __add__(self, other: Angle) -> Angle:
        if not isinstance(other, Angle):
            return NotImplemented
        return Angle(self.value + other.value)

    def __sub__(self, other: Angle) -> Angle:
        if not isinstance(other, Angle):
            return NotImplemented
        return Angle(self.value - other.value)


def angle_from_degrees(deg: float) -> Angle:
    return Angle(np.pi * deg / 180.0)


def degrees_from_angle(angle: Angle) -> float:
    return 180.0 * angle.value / np.pi


def distance(alpha: Angle, beta: Angle) -> float:
    """Absolute angular separation of two angles, in ``[0, pi]``."""
    return abs((beta - alpha).value)


def operate_as_angle(op: Callable[..., Angle], *values: float) -> float:
    """
    Apply an angle operation to raw floats.

    Each value is wrapped into an :class:`Angle` before ``op`` is called, and
    the wrapped value of the result is returned.

    Example:
        >>> operate_as_angle(lambda a, b: a - b, 3.0, -3.0)  # doctest: +ELLIPSIS
        -0.283...
    """
    result = op(*(Angle(v) for v in values))
    LOGGER.debug(f"operate_as_angle{values} -> {result.value}")
    return result.value
