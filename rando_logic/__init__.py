"""Pure preset logic package for the map randomizer web service.

This package compiles difficulty presets against the tech and notable catalogs.
It operates on in-memory inputs and returns immutable DTOs. It must not import
Django or perform any file I/O.
"""

from .compiler import compile_presets

__all__ = ["compile_presets"]
