"""ulpcheck: oracle-based ULP correctness verifier for float64 elementary functions."""

__version__ = "0.1.0"
