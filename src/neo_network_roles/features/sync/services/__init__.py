"""Sync services."""

from .legacy_super_admin_sync import LegacySuperAdminSync
from .membership_sync import MembershipSync

__all__ = ["LegacySuperAdminSync", "MembershipSync"]
