# monitor_state.py

import dataclasses
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, Sequence

from config import Config, config
from log_tracker import tail_log
from models import ClientProfile, NoteRule, ZoneLevelState
from notes import NOTE_RULES, apply_notes

log = logging.getLogger(__name__)


class ProfileNotFoundError(KeyError):
    """No client profile is registered under the given name."""
    pass


@dataclass
class ProfileRecord:
    profile: ClientProfile
    state: ZoneLevelState = field(default_factory=ZoneLevelState)
    # Held for the whole of a tail pass or reset
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


class ProfileRegistry:
    """
    Owns every client profile with its read cursor and derived state.

    All mutation goes through update() and reset(), which serialise on the
    profile's lock, whether triggered by an HTTP request or by the watcher.
    """

    def __init__(self, profiles: Iterable[ClientProfile],
                 note_rules: Sequence[NoteRule] = NOTE_RULES,
                 starting_zone: str = "The Twilight Strand"):
        self.note_rules = list(note_rules)
        self.starting_zone = starting_zone
        self._records: Dict[str, ProfileRecord] = {
            profile.name: ProfileRecord(profile) for profile in profiles
        }

    def names(self):
        return list(self._records)

    def record(self, name: str) -> ProfileRecord:
        try:
            return self._records[name]
        except KeyError:
            raise ProfileNotFoundError(name) from None

    def state(self, name: str) -> ZoneLevelState:
        return dataclasses.replace(self.record(name).state)

    def snapshot(self):
        return {name: record.state.to_dict() for name, record in self._records.items()}

    def update(self, name: str) -> bool:
        """
        Run one tail pass for a profile.

        Returns False without scanning if a pass for the same profile is
        already running; that pass will pick up the same lines. Raises
        ProfileNotFoundError or log_tracker.LogUnavailableError.
        """
        record = self.record(name)
        if not record.lock.acquire(blocking=False):
            log.debug("Update for %s already in flight, skipping", name)
            return False
        try:
            result = tail_log(record.profile, record.state)
            apply_notes(result.state, self.note_rules)
            record.state = result.state
        finally:
            record.lock.release()
        if result.lines_read:
            log.info("%s: %s (level %d)", name, result.state.zone, result.state.level)
        return True

    def reset(self, name: str) -> ZoneLevelState:
        """Put a profile back at the starting zone and level 1."""
        record = self.record(name)
        with record.lock:
            state = dataclasses.replace(
                record.state,
                zone=self.starting_zone,
                level=1,
                updated_at=datetime.now().isoformat(timespec="seconds"),
            )
            apply_notes(state, self.note_rules)
            record.state = state
        log.info("Reset %s to %s (level 1)", name, self.starting_zone)
        return dataclasses.replace(state)


def build_registry(cfg: Config = config) -> ProfileRegistry:
    profiles = [ClientProfile(name=name, log_path=path)
                for name, path in cfg.client_log_paths().items()]
    return ProfileRegistry(profiles, starting_zone=cfg.STARTING_ZONE)
