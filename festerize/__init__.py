"""Festerize: upload CSV manifests to the Fester IIIF service."""

__version__ = "0.4.2"

__all__ = ["__version__"]
