"""Shared test fixtures for the overlay."""

import pytest

from models import ClientProfile
from monitor_state import ProfileRegistry

HEADER = "2024/05/01 10:00:00 ***** LOG FILE OPENING *****\n"


def zone_line(zone):
    return f"2024/05/01 10:01:00 1234 cffb0719 [INFO Client 4321] : You have entered {zone}.\n"


def level_line(level):
    return f"2024/05/01 10:02:00 1235 cffb0719 [INFO Client 4321] : Nick (Witch) is now level {level}\n"


def append(path, text):
    with open(path, "ab") as f:
        f.write(text.encode("utf-8"))


@pytest.fixture
def log_file(tmp_path):
    """A client log holding only its opening header line."""
    path = tmp_path / "Client.txt"
    path.write_bytes(HEADER.encode("utf-8"))
    return path


@pytest.fixture
def registry(log_file, tmp_path):
    """Registry with a live `stand_alone` log and a `steam` log that does not exist yet."""
    return ProfileRegistry([
        ClientProfile(name="stand_alone", log_path=str(log_file)),
        ClientProfile(name="steam", log_path=str(tmp_path / "missing" / "Client.txt")),
    ])
