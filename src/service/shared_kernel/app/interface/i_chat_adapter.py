"""
Chat Adapter Interface

Outbound side of the chat platform: every response action is applied
through this port.
"""

from typing import Protocol

from src.service.shared_kernel.domain.modal import Modal


class IChatAdapter(Protocol):
    async def open_view(self, *, trigger_id: str, modal: Modal) -> None: ...

    async def update_view(self, *, view_id: str, modal: Modal, error_txt: str = '') -> None: ...

    async def push_view(self, *, trigger_id: str, modal: Modal) -> None: ...

    async def post_message(self, *, channel_id: str, text: str) -> None: ...

    async def post_ephemeral(self, *, channel_id: str, user_id: str, text: str) -> None: ...
