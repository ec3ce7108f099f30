"""
Incremental tailing of a game client log.

The client appends to Client.txt for as long as the game runs and starts a
fresh file on reinstall or manual clear. A profile remembers the file's
first line and how many bytes of complete lines it has already consumed;
each pass re-opens the file, decides from the first line whether it is
still the same file, and parses only the lines appended since the last
pass.

Only newline-terminated lines are consumed. A trailing line the game is
still writing is left for the next pass, so the stored offset always
points just past the last complete line.
"""

import dataclasses
import logging
import os
from dataclasses import dataclass
from datetime import datetime

from line_parser import parse_line
from models import ClientProfile, ZoneLevelState

log = logging.getLogger(__name__)


class LogUnavailableError(Exception):
    """The log file cannot be read yet. Retry on the next trigger."""
    pass


@dataclass
class TailResult:
    state: ZoneLevelState
    lines_read: int
    new_file: bool


def tail_log(profile: ClientProfile, state: ZoneLevelState) -> TailResult:
    """
    Read the complete lines appended to the profile's log since the last pass.

    On success the profile's cursor (first line, byte offset) is advanced and
    a new state with the classified lines applied is returned; `state` itself
    is not modified. On LogUnavailableError nothing is changed.
    """
    try:
        f = open(profile.log_path, "rb")
    except OSError as e:
        raise LogUnavailableError(f"Cannot open {profile.log_path}: {e}") from e

    with f:
        try:
            first_line = f.readline()
            size = os.fstat(f.fileno()).st_size
        except OSError as e:
            raise LogUnavailableError(f"Cannot read {profile.log_path}: {e}") from e

        if not first_line.endswith(b"\n"):
            raise LogUnavailableError(f"{profile.log_path} has no complete line yet")

        offset = profile.byte_offset
        new_file = first_line != profile.first_line
        if new_file:
            log.info("New log file detected for %s: %s", profile.name, profile.log_path)
            offset = 0
        elif offset > size:
            # Same header but shorter than what we consumed: truncated and rewritten
            log.info("Log for %s shrank below offset %d, rescanning", profile.name, offset)
            new_file = True
            offset = 0

        f.seek(offset)
        working = dataclasses.replace(state)
        changed = False
        lines_read = 0
        while True:
            try:
                raw = f.readline()
            except OSError as e:
                log.error("Error reading %s at offset %d: %s", profile.log_path, offset, e)
                break
            if not raw.endswith(b"\n"):
                # EOF, or a partial line still being written
                break
            offset += len(raw)
            lines_read += 1
            if parse_line(raw.decode("utf-8", errors="replace"), working):
                changed = True

    if changed:
        working.updated_at = datetime.now().isoformat(timespec="seconds")

    profile.first_line = first_line
    profile.byte_offset = offset
    log.debug("Read %d line(s) for %s, offset now %d", lines_read, profile.name, offset)
    return TailResult(state=working, lines_read=lines_read, new_file=new_file)
