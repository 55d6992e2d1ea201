"""Diagnostic visualization of animation outputs."""

from .matplotlib_backend import render_matplotlib_bundle

__all__ = ["render_matplotlib_bundle"]
