"""pkgcollection - generate, sign, validate and diff package collections."""

__version__ = "0.1.0"
