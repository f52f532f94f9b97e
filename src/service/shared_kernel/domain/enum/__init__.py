"""Shared Kernel Enums"""

from src.service.shared_kernel.domain.enum.event_type import EventType


__all__ = ['EventType']
