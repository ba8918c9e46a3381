"""tpol - an interactive sub-shell for a single wrapped command."""

__version__ = "0.1.0"
