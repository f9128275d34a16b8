"""
File system watcher driving debounced recomputes.

This module provides:
- Watchdog-based monitoring of tracked documents
- A thread-safe queue between the observer thread and the watch loop
- A single-threaded loop that debounces events into recomputes
"""

import logging
import queue
import time
from pathlib import Path
from typing import Callable

from watchdog.events import (
    FileCreatedEvent,
    FileDeletedEvent,
    FileModifiedEvent,
    FileMovedEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

from .events import ChangeEvent, ChangeKind
from .tracker import LevelTracker

logger = logging.getLogger(__name__)


class VaultEventHandler(FileSystemEventHandler):
    """
    Converts file system events into ChangeEvents on a queue.

    Runs on the observer thread and does nothing but filter and enqueue;
    all recompute work happens on the thread draining the queue.
    """

    def __init__(
        self,
        vault_path: Path,
        events: queue.Queue,
        extension: str = ".md",
    ):
        super().__init__()
        self.vault_path = vault_path
        self.events = events
        self.extension = extension.lower()

    def _is_relevant(self, path: str) -> bool:
        """Check if the file is a tracked document."""
        p = Path(path)

        try:
            parts = p.relative_to(self.vault_path).parts
        except ValueError:
            parts = p.parts

        # Skip hidden files and directories (.obsidian, state dir, ...)
        if any(part.startswith(".") for part in parts):
            return False

        return p.suffix.lower() == self.extension

    def _put(self, kind: ChangeKind, path: str, rename_from: str | None = None) -> None:
        event = ChangeEvent(
            kind=kind,
            path=Path(path),
            rename_from=Path(rename_from) if rename_from else None,
        )
        self.events.put(event)

    def on_created(self, event: FileCreatedEvent) -> None:
        if event.is_directory or not self._is_relevant(event.src_path):
            return
        self._put(ChangeKind.CREATED, event.src_path)

    def on_modified(self, event: FileModifiedEvent) -> None:
        if event.is_directory or not self._is_relevant(event.src_path):
            return
        self._put(ChangeKind.MODIFIED, event.src_path)

    def on_deleted(self, event: FileDeletedEvent) -> None:
        if event.is_directory or not self._is_relevant(event.src_path):
            return
        self._put(ChangeKind.DELETED, event.src_path)

    def on_moved(self, event: FileMovedEvent) -> None:
        """Handle file rename/move."""
        if event.is_directory:
            return

        src_relevant = self._is_relevant(event.src_path)
        dest_relevant = self._is_relevant(event.dest_path)

        if src_relevant and dest_relevant:
            self._put(ChangeKind.RENAMED, event.dest_path, rename_from=event.src_path)
        elif src_relevant:
            # Moved out of the tracked set
            self._put(ChangeKind.DELETED, event.src_path)
        elif dest_relevant:
            # Moved into the tracked set
            self._put(ChangeKind.CREATED, event.dest_path)


def drain_events(
    events: queue.Queue,
    tracker: LevelTracker,
    on_change: Callable[[ChangeEvent], None] | None = None,
) -> int:
    """Move every queued event into the tracker's scheduler.

    Returns the number of events drained.
    """
    count = 0
    while True:
        try:
            event = events.get_nowait()
        except queue.Empty:
            return count
        count += 1
        tracker.schedule_update(event)
        if on_change:
            on_change(event)


def watch_vault(
    tracker: LevelTracker,
    events: queue.Queue,
    recursive: bool = True,
) -> tuple[Observer, VaultEventHandler]:
    """
    Start watching a tracker's vault for document changes.

    Returns:
        Tuple of (observer, handler) - caller should call observer.stop() to stop watching
    """
    handler = VaultEventHandler(
        vault_path=tracker.vault_path,
        events=events,
        extension=tracker.config.extension,
    )

    observer = Observer()
    observer.schedule(handler, str(tracker.vault_path), recursive=recursive)
    observer.start()

    return observer, handler


def run_watch_loop(
    tracker: LevelTracker,
    on_change: Callable[[ChangeEvent], None] | None = None,
    should_stop: Callable[[], bool] | None = None,
) -> None:
    """
    Run the watch loop until interrupted.

    This is a blocking function that drains change events, debounces them,
    and runs at most one recompute per quiet period.
    """
    events: queue.Queue = queue.Queue()
    observer, _ = watch_vault(tracker, events)
    logger.info("Watching %s", tracker.vault_path)

    try:
        while not (should_stop and should_stop()):
            drain_events(events, tracker, on_change)
            try:
                tracker.poll()
            except OSError:
                logger.exception("Recompute of %s failed", tracker.vault_path)
            time.sleep(tracker.config.poll_interval)
    except KeyboardInterrupt:
        logger.info("Watch interrupted")
    finally:
        observer.stop()
        observer.join()
