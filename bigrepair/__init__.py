"""RePair grammar compression, decompression, dictionary preparation and grammar merging."""

__version__ = "0.1.0"

__all__ = ["__version__"]