from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import pandas as pd

from scalar_kalman.gaussian import Gaussian

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from scalar_kalman.filtering.kalman_filtering import FilterStep

LOGGER = logging.getLogger(__name__)

STEP_COLUMNS = [
    "step",
    "meas_mean",
    "meas_var",
    "prior_mean",
    "prior_var",
    "updated_mean",
    "updated_var",
    "predicted_mean",
    "predicted_var",
]


def _tokens(lines: Iterable[str]) -> Iterator[str]:
    for line in lines:
        yield from line.split()


def parse_measurements(lines: Iterable[str]) -> Iterator[Gaussian]:
    """
    Parse measurement beliefs from a whitespace-separated text stream.

    Numbers are read pairwise as ``mean variance`` regardless of line breaks.
    Reading stops at the end of the input, at the first token that is not a
    number, or at a trailing unpaired value.

    Args:
        lines: Any iterable of text lines, e.g. an open file or ``sys.stdin``.

    Yields:
        One :class:`Gaussian` per complete pair.

    Raises:
        InvalidDistribution: If a well-formed pair has a non-positive variance.
    """
    tokens = _tokens(lines)
    n_read = 0
    for mean_tok in tokens:
        var_tok = next(tokens, None)
        if var_tok is None:
            LOGGER.warning(f"Ignoring unpaired trailing value {mean_tok!r}")
            break
        try:
            mean, variance = float(mean_tok), float(var_tok)
        except ValueError:
            LOGGER.warning(
                f"Stopping at malformed measurement {mean_tok!r} {var_tok!r} "
                f"after {n_read} measurements"
            )
            break
        n_read += 1
        yield Gaussian(mean, variance)
    LOGGER.debug(f"Parsed {n_read} measurements")


def read_measurements(path: str | Path) -> list[Gaussian]:
    """
    Read all measurement beliefs from a text file.

    Args:
        path: File holding ``mean variance`` pairs.

    Returns:
        The measurements in file order.
    """
    LOGGER.info(f"Reading measurements from {path}")
    with Path(path).open("r") as f:
        measurements = list(parse_measurements(f))
    LOGGER.debug(f"Read {len(measurements)} measurements from {path}")
    return measurements


def format_belief(belief: Gaussian) -> str:
    """Two-line human-readable form of a belief."""
    return f"Estimated value: {belief.mean:g}\nVariance: {belief.variance:g}\n"


def format_step(step: FilterStep) -> str:
    """Console block reporting one Update-then-Predict cycle."""
    return (
        f"------- Step {step.step} -------\n"
        "Initial state:\n"
        f"{format_belief(step.initial)}"
        "Measurement updated:\n"
        f"{format_belief(step.updated)}"
        "State predicted:\n"
        f"{format_belief(step.predicted)}\n"
    )


def steps_to_dataframe(steps: Iterable[FilterStep]) -> pd.DataFrame:
    """
    Tabulate filter steps.

    Args:
        steps: Steps as produced by ``run_filter``.

    Returns:
        A DataFrame with one row per step and the columns in ``STEP_COLUMNS``.
    """
    rows = [
        (
            s.step,
            s.measurement.mean,
            s.measurement.variance,
            s.initial.mean,
            s.initial.variance,
            s.updated.mean,
            s.updated.variance,
            s.predicted.mean,
            s.predicted.variance,
        )
        for s in steps
    ]
    df = pd.DataFrame(rows, columns=STEP_COLUMNS)
    return df.astype({"step": "int64"})


def save_steps(steps: Iterable[FilterStep], output_path: str | Path) -> pd.DataFrame:
    """
    Save filter steps to a tab-separated file.

    Args:
        steps: Steps as produced by ``run_filter``.
        output_path: Destination file.

    Returns:
        The DataFrame that was written.
    """
    df = steps_to_dataframe(steps)
    df.to_csv(output_path, sep="\t", index=False, float_format="%.15e")
    LOGGER.info(f"Saved {len(df)} filter steps to {output_path}")
    return df
