"""Shared core entities."""

from .context import TenantContext

__all__ = ["TenantContext"]
