"""Camera models for primary ray generation."""

from .pinhole import Camera

__all__ = ["Camera"]
