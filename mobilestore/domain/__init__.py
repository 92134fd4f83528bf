"""Domain values shared by repositories and services."""

from .device import Device, IdentifierMatch

__all__ = ["Device", "IdentifierMatch"]
