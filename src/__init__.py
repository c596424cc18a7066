# src/__init__.py — v1
"""voxrelay — staged voice pipeline: transcribe, respond, synthesize."""

from voxrelay.version import __version__

__all__ = ["__version__"]
