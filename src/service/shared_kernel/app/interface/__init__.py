"""Shared Kernel Interfaces"""

from src.service.shared_kernel.app.interface.i_chat_adapter import IChatAdapter


__all__ = ['IChatAdapter']
