"""
core/errors.py

What can go wrong, named.

A probe that falls off the edge of the world is not an error - it is
just a missing reading (see FieldSample). The exceptions here are the
failures that stop something from happening at all.
"""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Invalid construction parameters. Fatal at initialization."""


class RenderConversionError(ValueError):
    """A field could not be turned into a pixel buffer for display."""
