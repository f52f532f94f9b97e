from src.platform.logging.loguru_io import Logger
from src.service.shared_kernel.domain.modal import Modal


class LoggingChatAdapter:
    """
    Chat adapter that only logs what it would send

    Stands in for the chat platform client when the bot runs without
    credentials (local runs, dry runs).
    """

    async def open_view(self, *, trigger_id: str, modal: Modal) -> None:
        Logger.base.info(f'💬 [CHAT] open_view trigger={trigger_id} title={modal.title!r}')

    async def update_view(self, *, view_id: str, modal: Modal, error_txt: str = '') -> None:
        Logger.base.info(
            f'💬 [CHAT] update_view view={view_id} title={modal.title!r}'
            + (f' error={error_txt!r}' if error_txt else '')
        )

    async def push_view(self, *, trigger_id: str, modal: Modal) -> None:
        Logger.base.info(f'💬 [CHAT] push_view trigger={trigger_id} title={modal.title!r}')

    async def post_message(self, *, channel_id: str, text: str) -> None:
        Logger.base.info(f'💬 [CHAT] post channel={channel_id} text={text!r}')

    async def post_ephemeral(self, *, channel_id: str, user_id: str, text: str) -> None:
        Logger.base.info(f'💬 [CHAT] ephemeral channel={channel_id} user={user_id} text={text!r}')
