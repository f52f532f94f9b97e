from pathlib import Path


# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent.parent.parent

# Log directory
LOG_DIR = BASE_DIR / 'logs'

# Default location of the lot and roster snapshots
DATA_DIR = BASE_DIR / 'data'
