"""FEA log converter — normalizes FEA, Assimilation and Native client logs."""

__version__ = "1.0.0"
