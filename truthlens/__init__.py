"""TruthLens AI: authenticity analysis gateway and client core."""

__version__ = "0.1.0"
