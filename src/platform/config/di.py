"""
https://python-dependency-injector.ets-labs.org/index.html

Every stateful component is a Singleton: one roster, one lot per kind, one
bus. Loading a snapshot happens the first time its provider is called.
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.event.event_bus import EventBus
from src.platform.event.event_logger import EventLogger
from src.platform.event.scheduler import Scheduler
from src.service.admin.driving_adapter.spaces_editor_manager import (
    PARKING_EDITOR,
    WORKSPACE_EDITOR,
    SpacesEditorManager,
)
from src.service.admin.driving_adapter.users_manager import UsersManager
from src.service.parking.driving_adapter.parking_manager import ParkingManager
from src.service.roll.driving_adapter.roll_manager import RollManager
from src.service.shared_kernel.domain.slash_command import SlashCmd
from src.service.shared_kernel.driven_adapter.logging_chat_adapter import LoggingChatAdapter
from src.service.shared_kernel.driving_adapter.response_dispatcher import ResponseDispatcher
from src.service.spaces.driven_adapter.json_lot_snapshot_store import JsonLotSnapshotStore
from src.service.user.driven_adapter.json_user_roster_store import JsonUserRosterStore
from src.service.workspaces.driving_adapter.workspaces_manager import WorkspacesManager


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Snapshot stores
    user_roster_store = providers.Singleton(
        JsonUserRosterStore, filename=config_service.provided.USERS_FILENAME
    )
    parking_lot_store = providers.Singleton(
        JsonLotSnapshotStore, filename=config_service.provided.PARKING_FILENAME
    )
    workspaces_lot_store = providers.Singleton(
        JsonLotSnapshotStore, filename=config_service.provided.WORKSPACES_FILENAME
    )

    # Loaded state (raises StorageError on a broken snapshot)
    user_roster = providers.Singleton(JsonUserRosterStore.load, user_roster_store)
    parking_lot = providers.Singleton(JsonLotSnapshotStore.load, parking_lot_store)
    workspaces_lot = providers.Singleton(JsonLotSnapshotStore.load, workspaces_lot_store)

    # Event plumbing
    event_bus = providers.Singleton(
        EventBus, max_buffer_size=config_service.provided.EVENT_QUEUE_SIZE
    )
    scheduler = providers.Singleton(
        Scheduler, event_bus, tick_seconds=config_service.provided.SCHEDULER_TICK_SECONDS
    )
    event_logger = providers.Singleton(EventLogger)

    # Outbound chat side
    chat_adapter = providers.Singleton(LoggingChatAdapter)
    response_dispatcher = providers.Singleton(ResponseDispatcher, chat_adapter=chat_adapter)

    # Managers
    parking_manager = providers.Singleton(
        ParkingManager, lot=parking_lot, user_rights=user_roster, event_bus=event_bus
    )
    workspaces_manager = providers.Singleton(
        WorkspacesManager, lot=workspaces_lot, user_rights=user_roster, event_bus=event_bus
    )
    users_manager = providers.Singleton(
        UsersManager,
        roster=user_roster,
        event_bus=event_bus,
        testing_active=config_service.provided.TESTING_ACTIVE,
    )
    parking_editor_manager = providers.Singleton(
        SpacesEditorManager,
        identifier=PARKING_EDITOR,
        command=SlashCmd.SPACES_PARKING,
        lot=parking_lot,
        user_rights=user_roster,
        event_bus=event_bus,
        testing_active=config_service.provided.TESTING_ACTIVE,
    )
    workspaces_editor_manager = providers.Singleton(
        SpacesEditorManager,
        identifier=WORKSPACE_EDITOR,
        command=SlashCmd.SPACES_WORKSPACE,
        lot=workspaces_lot,
        user_rights=user_roster,
        event_bus=event_bus,
        testing_active=config_service.provided.TESTING_ACTIVE,
    )
    roll_manager = providers.Singleton(
        RollManager,
        event_bus=event_bus,
        testing_active=config_service.provided.TESTING_ACTIVE,
    )


container = Container()


def setup() -> None:
    """Load every snapshot eagerly so a broken file fails at startup"""
    container.config_service()
    container.user_roster()
    container.parking_lot()
    container.workspaces_lot()


def cleanup() -> None:
    container.reset_singletons()
