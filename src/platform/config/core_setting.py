from pathlib import Path

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.platform.constant.path import DATA_DIR


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Space Reservation Bot'
    VERSION: str = '0.1.0'
    DEBUG: bool = False

    # Chat platform credentials (consumed by the external adapter)
    SLACK_AUTH_TOKEN: SecretStr = SecretStr('')
    SLACK_APP_TOKEN: SecretStr = SecretStr('')
    SLACK_TA_CHANNEL_ID: str = ''

    # Snapshot files
    DEVICES_FILENAME: str = str(DATA_DIR / 'devices.json')
    USERS_FILENAME: str = str(DATA_DIR / 'users.json')
    PARKING_FILENAME: str = str(DATA_DIR / 'parking.json')
    WORKSPACES_FILENAME: str = str(DATA_DIR / 'workspaces.json')
    VACATIONS_HASH_FILENAME: str = str(DATA_DIR / 'vacations_hash.txt')

    REPORT_PERSON_ID: str = ''

    # /test-* slash command aliases replace the real ones while enabled
    TESTING_ACTIVE: bool = False

    # Daily cutoff per lot
    PARKING_RESET_HOUR: int = 17
    PARKING_RESET_MIN: int = 0
    WORKSPACES_RESET_HOUR: int = 17
    WORKSPACES_RESET_MIN: int = 0

    # Event bus / scheduler
    EVENT_QUEUE_SIZE: int = 100
    SCHEDULER_TICK_SECONDS: float = 60.0

    @field_validator('PARKING_RESET_HOUR', 'WORKSPACES_RESET_HOUR')
    @classmethod
    def validate_hour(cls, v: int) -> int:
        if not 0 <= v <= 23:
            raise ValueError(f'reset hour must be within 0..23, got {v}')
        return v

    @field_validator('PARKING_RESET_MIN', 'WORKSPACES_RESET_MIN')
    @classmethod
    def validate_minute(cls, v: int) -> int:
        if not 0 <= v <= 59:
            raise ValueError(f'reset minute must be within 0..59, got {v}')
        return v


settings = Settings()  # type: ignore
