"""Public interface for the scalar Kalman filter package.

The package bundles the Gaussian belief type, the measurement update and
motion prediction transitions, a numba batch filter, and the command-line
driving loop that feeds measurements through them.
"""

# Importing * is a bad practice and you should be punished for using it
__all__: list[str] = []
