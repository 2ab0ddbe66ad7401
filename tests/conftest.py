"""
Common pytest fixtures for the scalar Kalman filter tests.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from scalar_kalman.gaussian import Gaussian

if TYPE_CHECKING:
    from pathlib import Path

# Keep numba's compiler chatter out of captured logs
logging.getLogger("numba").setLevel(logging.WARNING)


@pytest.fixture
def uninformative_prior() -> Gaussian:
    """Starting belief used by the driving loop."""
    return Gaussian(0.0, 1000.0)


@pytest.fixture
def measurement() -> Gaussian:
    return Gaussian(5.0, 4.0)


@pytest.fixture
def motion() -> Gaussian:
    return Gaussian(1.0, 2.0)


@pytest.fixture
def measurement_file(tmp_path: Path) -> Path:
    """A small measurement file with pairs split across lines."""
    path = tmp_path / "measurements.txt"
    path.write_text("5 4\n6 4\n7\n4\n9 4\n10 4\n")
    return path
