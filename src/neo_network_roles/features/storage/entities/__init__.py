"""Storage entities and protocols."""

from .protocols import OptionStore, UserMetaStore, UserDirectory

__all__ = ["OptionStore", "UserMetaStore", "UserDirectory"]
