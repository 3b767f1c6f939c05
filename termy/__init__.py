"""termy - runtime configuration engine for the termy terminal."""

__version__ = "0.1.0"
