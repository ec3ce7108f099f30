import logging
import os
import threading
from typing import Dict, Optional, Tuple

from log_tracker import LogUnavailableError
from monitor_state import ProfileRegistry

log = logging.getLogger(__name__)


class LogWatcher:
    """
    Background thread that notices when a client log changes and triggers
    an update for that profile.

    Change detection is a (size, mtime) comparison per poll rather than OS
    file notifications, which the game's buffered writes make unreliable.
    """

    def __init__(self, registry: ProfileRegistry, interval: float = 0.5):
        self.registry = registry
        self.interval = interval
        self._seen: Dict[str, Tuple[int, int]] = {}
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def _signature(self, name: str):
        path = self.registry.record(name).profile.log_path
        try:
            st = os.stat(path)
        except OSError:
            return None
        return st.st_size, st.st_mtime_ns

    def check_once(self):
        """Poll every profile once. Returns the names that were updated."""
        updated = []
        for name in self.registry.names():
            signature = self._signature(name)
            if signature is None or signature == self._seen.get(name):
                continue
            try:
                if not self.registry.update(name):
                    continue
            except LogUnavailableError as e:
                log.debug("Log for %s not ready: %s", name, e)
                continue
            self._seen[name] = signature
            updated.append(name)
        return updated

    def _run(self):
        log.info("Watching %d client log(s) every %.2fs", len(self.registry.names()), self.interval)
        while not self._stop.is_set():
            try:
                self.check_once()
            except Exception:
                log.exception("Unexpected error in log watcher")
            self._stop.wait(self.interval)

    def start(self):
        if self._thread and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="log-watcher", daemon=True)
        self._thread.start()

    def stop(self):
        self._stop.set()
        if self._thread:
            self._thread.join(timeout=2.0)
            self._thread = None
