"""A pygame top-down sandbox with Perlin-noise chunked terrain and a build grid."""

__version__ = "0.1.0"
__all__ = ["__version__"]