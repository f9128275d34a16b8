import queue
from pathlib import Path

from watchdog.events import (
    DirCreatedEvent,
    FileCreatedEvent,
    FileDeletedEvent,
    FileModifiedEvent,
    FileMovedEvent,
)

from vaultlevel import watcher
from vaultlevel.events import ChangeEvent, ChangeKind, format_change
from vaultlevel.watcher import VaultEventHandler, drain_events, run_watch_loop


def _handler(vault_path: Path) -> tuple[VaultEventHandler, queue.Queue]:
    events: queue.Queue = queue.Queue()
    return VaultEventHandler(vault_path, events), events


def _drain(events: queue.Queue) -> list[ChangeEvent]:
    out = []
    while not events.empty():
        out.append(events.get_nowait())
    return out


def test_tracked_events_are_queued(vault_path: Path) -> None:
    handler, events = _handler(vault_path)
    note = str(vault_path / "note.md")

    handler.on_created(FileCreatedEvent(note))
    handler.on_modified(FileModifiedEvent(note))
    handler.on_deleted(FileDeletedEvent(note))

    assert [e.kind for e in _drain(events)] == [
        ChangeKind.CREATED,
        ChangeKind.MODIFIED,
        ChangeKind.DELETED,
    ]


def test_untracked_hidden_and_directory_events_are_ignored(vault_path: Path) -> None:
    handler, events = _handler(vault_path)

    handler.on_modified(FileModifiedEvent(str(vault_path / "image.png")))
    handler.on_modified(FileModifiedEvent(str(vault_path / ".obsidian" / "workspace.md")))
    handler.on_modified(FileModifiedEvent(str(vault_path / ".vaultlevel" / "state.json")))
    handler.on_created(DirCreatedEvent(str(vault_path / "folder.md")))

    assert events.empty()


def test_moves(vault_path: Path) -> None:
    handler, events = _handler(vault_path)
    a = str(vault_path / "a.md")
    b = str(vault_path / "b.md")
    hidden = str(vault_path / ".trash" / "a.md")

    handler.on_moved(FileMovedEvent(a, b))
    handler.on_moved(FileMovedEvent(b, hidden))
    handler.on_moved(FileMovedEvent(hidden, a))
    handler.on_moved(FileMovedEvent(str(vault_path / "x.txt"), str(vault_path / "y.txt")))

    drained = _drain(events)
    assert [e.kind for e in drained] == [ChangeKind.RENAMED, ChangeKind.DELETED, ChangeKind.CREATED]
    assert drained[0].rename_from == Path(a)
    assert drained[0].path == Path(b)


def test_drain_events_feeds_scheduler(make_tracker, write_note, fake_clock, vault_path: Path) -> None:
    tracker = make_tracker()
    handler = VaultEventHandler(vault_path, queue.Queue())
    seen = []

    write_note("one.md", "a b c")
    handler.on_created(FileCreatedEvent(str(vault_path / "one.md")))
    handler.on_modified(FileModifiedEvent(str(vault_path / "one.md")))

    assert drain_events(handler.events, tracker, on_change=seen.append) == 2
    assert len(seen) == 2
    assert tracker.scheduler.pending
    assert tracker.poll() is False

    fake_clock.advance(tracker.config.quiet_period)
    assert tracker.poll() is True
    assert tracker.current_state.stats.total_words == 3
    assert drain_events(handler.events, tracker) == 0


def test_format_change() -> None:
    event = ChangeEvent(ChangeKind.RENAMED, Path("b.md"), rename_from=Path("a.md"))
    assert format_change(event) == "> b.md (from a.md)"
    assert format_change(ChangeEvent(ChangeKind.CREATED, Path("n.md"))) == "+ n.md"


class _StubObserver:
    def __init__(self):
        self.stopped = False

    def stop(self) -> None:
        self.stopped = True

    def join(self) -> None:
        pass


def test_watch_loop_survives_failed_recompute(make_tracker, monkeypatch) -> None:
    tracker = make_tracker()
    observer = _StubObserver()
    monkeypatch.setattr(watcher, "watch_vault", lambda tracker, events: (observer, None))

    calls = []

    def failing_poll() -> bool:
        calls.append(1)
        raise PermissionError("state dir is read-only")

    monkeypatch.setattr(tracker, "poll", failing_poll)

    run_watch_loop(tracker, should_stop=lambda: len(calls) >= 3)

    assert len(calls) == 3
    assert observer.stopped
