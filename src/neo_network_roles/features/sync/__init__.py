"""Sync feature for neo-network-roles.

Event handlers that keep network roles in line with the legacy super admin
list and with site membership.
"""

from .services import LegacySuperAdminSync, MembershipSync

__all__ = ["LegacySuperAdminSync", "MembershipSync"]
