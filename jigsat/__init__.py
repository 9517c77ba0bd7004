"""Components of a CDCL SAT solver and a small exhaustive reference solver."""

__version__ = "0.1.0"
__all__ = ["__version__"]