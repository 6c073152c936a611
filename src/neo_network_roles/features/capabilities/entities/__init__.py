"""Capability entities."""

from .resolved import ResolvedCapabilities
from .protocols import CapabilitySetFactory

__all__ = ["ResolvedCapabilities", "CapabilitySetFactory"]
