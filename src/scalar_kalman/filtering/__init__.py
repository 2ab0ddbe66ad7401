"""Filtering routines for scalar Gaussian beliefs.

Modules cover the pure measurement update and motion prediction transitions,
the lazy driving recursion built on them, and a numba batch variant for
measurement arrays.
"""

# Importing * is a bad practice and you should be punished for using it
__all__: list[str] = []
