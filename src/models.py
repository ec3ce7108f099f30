from dataclasses import dataclass, field
from typing import Optional, Tuple

LOADING_ZONE = "Loading"


@dataclass
class ClientProfile:
    """One monitored game installation and its read cursor."""
    name: str
    log_path: str
    first_line: bytes = b""
    byte_offset: int = 0


@dataclass
class ZoneLevelState:
    """Zone, level and rendered note derived from a client's log."""
    zone: str = LOADING_ZONE
    level: int = 0
    html_note: str = ""
    updated_at: Optional[str] = None

    def to_dict(self):
        return {
            "zone": self.zone,
            "level": self.level,
            "htmlNote": self.html_note,
            "updatedAt": self.updated_at,
        }


@dataclass(frozen=True)
class NoteRule:
    """Markdown note shown while in one of `zones` within [min_level, max_level]."""
    zones: Tuple[str, ...]
    min_level: int
    max_level: int
    md_note: str = field(repr=False)

    def matches(self, zone: str, level: int) -> bool:
        return self.min_level <= level <= self.max_level and zone in self.zones
