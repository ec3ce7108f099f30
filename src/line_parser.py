import logging
import re

from models import ZoneLevelState

log = logging.getLogger(__name__)

ZONE_MARKER = "You have entered "
LEVEL_MARKER = "is now level "
LEVEL_RE = re.compile(r"[+-]?[0-9]+")


def parse_zone(line: str) -> str:
    zone = line.split(ZONE_MARKER)[1].strip()
    if zone.endswith("."):
        zone = zone[:-1]
    return zone


def parse_line(line: str, state: ZoneLevelState) -> bool:
    """
    Classify one complete log line and fold it into `state`.

    A zone line wins over a level line. Returns True if the state changed.
    """
    if ZONE_MARKER in line:
        zone = parse_zone(line)
        changed = zone != state.zone
        state.zone = zone
        return changed

    if LEVEL_MARKER in line:
        raw = line.split(LEVEL_MARKER)[1].strip()
        if not LEVEL_RE.fullmatch(raw):
            log.warning("Could not parse level from %r", raw)
            return False
        level = int(raw)
        changed = level != state.level
        state.level = level
        return changed

    return False
