"""Capability repositories."""

from .capability_record_repository import CapabilityRecordRepository

__all__ = ["CapabilityRecordRepository"]
