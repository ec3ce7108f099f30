import os
import sys
from dataclasses import dataclass
from pathlib import Path, PureWindowsPath
from typing import Optional
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Directory where config.py lives (src/)
SRC_DIR = Path(__file__).resolve().parent


def default_steam_log_path() -> str:
    if sys.platform == "win32":
        return str(PureWindowsPath("C:/Program Files (x86)", "Steam", "steamapps", "common",
                                   "Path of Exile", "logs", "Client.txt"))
    return str(Path.home() / ".steam" / "steam" / "steamapps" / "common"
               / "Path of Exile" / "logs" / "Client.txt")


def default_stand_alone_log_path() -> str:
    if sys.platform == "win32":
        return str(PureWindowsPath("C:/Program Files (x86)", "Grinding Gear Games",
                                   "Path of Exile", "logs", "Client.txt"))
    return str(Path.home() / "Games" / "path-of-exile" / "drive_c" / "Program Files (x86)"
               / "Grinding Gear Games" / "Path of Exile" / "logs" / "Client.txt")


def _env_path(name: str) -> Optional[str]:
    value = os.getenv(name)
    return value if value else None


@dataclass(frozen=True)
class Config:
    # Server
    HOST: str = os.getenv('OVERLAY_HOST', '127.0.0.1')
    PORT: int = int(os.getenv('OVERLAY_PORT', '3232'))

    # Files
    STATIC_DIR: str = os.getenv('OVERLAY_STATIC_DIR', str(SRC_DIR / 'static'))
    NOTES_DIR: str = os.getenv('OVERLAY_NOTES_DIR', os.path.join(STATIC_DIR, 'notes'))
    LOG_FILE: str = os.getenv('OVERLAY_LOG_FILE', 'poe_overlay.log')

    # Game client logs (explicit override wins over the platform default)
    STEAM_LOG_PATH: str = _env_path('POE_STEAM_LOG_PATH') or default_steam_log_path()
    STAND_ALONE_LOG_PATH: str = _env_path('POE_STAND_ALONE_LOG_PATH') or default_stand_alone_log_path()

    # Session
    STARTING_ZONE: str = os.getenv('OVERLAY_STARTING_ZONE', 'The Twilight Strand')

    # Polling
    WATCH_INTERVAL: float = float(os.getenv('OVERLAY_WATCH_INTERVAL', '0.5'))
    EVENT_INTERVAL: float = float(os.getenv('OVERLAY_EVENT_INTERVAL', '2'))
    EVENT_LIMIT: int = int(os.getenv('OVERLAY_EVENT_LIMIT', '300'))

    def client_log_paths(self):
        """Profile name -> log file path for every monitored client."""
        return {
            'stand_alone': self.STAND_ALONE_LOG_PATH,
            'steam': self.STEAM_LOG_PATH,
        }

# Global config instance
config = Config()
