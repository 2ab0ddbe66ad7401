"""Input/output utilities for :mod:`scalar_kalman`.

Modules in this package parse measurement streams, format beliefs for the
console, and tabulate filter runs with pandas. None of this is needed by the
filter transitions themselves.
"""

# Importing * is a bad practice and you should be punished for using it
__all__: list[str] = []
