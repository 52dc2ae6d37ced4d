"""Tests historique — undo/redo bornés, sauvegardes versionnées."""
import logging
import threading

import pytest

from email_builder.blocks import TextBlock
from email_builder.core.schemas import GlobalSettings, HistorySnapshot
from email_builder.errors import HistoryError
from email_builder.history import EditHistory, PersistenceTracker, SaveStatus


def _snap(label: str) -> HistorySnapshot:
    return HistorySnapshot(blocks=[TextBlock(id="t", content={"text": label})])


def _label(snapshot: HistorySnapshot) -> str:
    return snapshot.blocks[0].content.text


@pytest.fixture
def history():
    h = EditHistory()
    h.initialize(_snap("S0"))
    return h


# ── Transitions ──────────────────────────────────────────────────────────────

def test_undo_redo_sequence(history):
    history.update(_snap("S1"))
    history.update({"blocks": _snap("S2").blocks})
    assert _label(history.undo()) == "S1"
    assert _label(history.undo()) == "S0"
    assert _label(history.redo()) == "S1"
    assert _label(history.redo()) == "S2"
    assert not history.can_redo()


def test_undo_beyond_start_is_noop(history):
    assert not history.can_undo()
    assert _label(history.undo()) == "S0"
    assert _label(history.current) == "S0"


def test_update_clears_redo(history):
    history.update(_snap("S1"))
    history.undo()
    assert history.can_redo()
    history.update(_snap("S1bis"))
    assert not history.can_redo()
    assert _label(history.redo()) == "S1bis"


def test_partial_update_keeps_other_fields(history):
    settings = GlobalSettings(max_width=640)
    history.update({"global_settings": settings})
    assert history.current.global_settings == settings
    assert _label(history.current) == "S0"


def test_version_increments_only_on_update(history):
    history.update(_snap("S1"))
    history.update(_snap("S2"))
    history.undo()
    history.redo()
    assert history.version == 2


def test_undo_stack_bounded():
    h = EditHistory(limit=3)
    h.initialize(_snap("S0"))
    for i in range(1, 6):
        h.update(_snap(f"S{i}"))
    labels = []
    while h.can_undo():
        labels.append(_label(h.undo()))
    assert labels == ["S4", "S3", "S2"]


def test_clear_keeps_current(history):
    history.update(_snap("S1"))
    history.clear()
    assert not history.can_undo()
    assert _label(history.current) == "S1"


# ── Erreurs ──────────────────────────────────────────────────────────────────

def test_current_before_initialize():
    with pytest.raises(HistoryError):
        EditHistory().current


def test_initialize_twice(history):
    with pytest.raises(HistoryError):
        history.initialize(_snap("X"))


def test_unknown_update_field(history):
    with pytest.raises(HistoryError):
        history.update({"title": "x"})
    assert history.version == 0


def test_invalid_update_leaves_state(history):
    duplicated = [TextBlock(id="t"), TextBlock(id="t", position=1)]
    with pytest.raises(ValueError):
        history.update({"blocks": duplicated})
    assert _label(history.current) == "S0"
    assert not history.can_undo()


def test_limit_must_be_positive():
    with pytest.raises(ValueError):
        EditHistory(limit=0)


# ── Sauvegarde ───────────────────────────────────────────────────────────────

def test_sync_persistence(sync_spawn):
    saved = []
    h = EditHistory(lambda snapshot, version: saved.append((_label(snapshot), version)), spawn=sync_spawn)
    h.initialize(_snap("S0"))
    h.update(_snap("S1"))
    h.update(_snap("S2"))
    h.undo()
    assert saved == [("S1", 1), ("S2", 2)]
    assert h.persistence.status == SaveStatus.SUCCEEDED
    assert not h.persistence.unsaved


def test_initialize_does_not_persist(sync_spawn):
    saved = []
    h = EditHistory(lambda s, v: saved.append(v), spawn=sync_spawn)
    h.initialize(_snap("S0"))
    assert saved == []
    assert h.persistence.status == SaveStatus.IDLE


def test_older_version_ignored(sync_spawn, caplog):
    saved = []
    tracker = PersistenceTracker(lambda s, v: saved.append(v), sync_spawn)
    tracker.submit(_snap("S2"), 2)
    with caplog.at_level(logging.WARNING):
        tracker.submit(_snap("S1"), 1)
    assert saved == [2]
    assert tracker.status == SaveStatus.SUCCEEDED
    assert "ignorée" in caplog.text


def test_superseded_pending_write_dropped(deferred_spawn):
    saved = []
    tracker = PersistenceTracker(lambda s, v: saved.append((_label(s), v)), deferred_spawn)
    tracker.submit(_snap("S1"), 1)
    tracker.submit(_snap("S2"), 2)
    tracker.submit(_snap("S3"), 3)
    assert len(deferred_spawn.tasks) == 1
    assert tracker.status == SaveStatus.PENDING
    deferred_spawn.run(0)
    assert saved == [("S3", 3)]
    assert tracker.status == SaveStatus.SUCCEEDED
    assert not tracker.unsaved


def test_worker_restarts_after_draining(deferred_spawn):
    saved = []
    tracker = PersistenceTracker(lambda s, v: saved.append(v), deferred_spawn)
    tracker.submit(_snap("S1"), 1)
    deferred_spawn.run(0)
    tracker.submit(_snap("S2"), 2)
    assert len(deferred_spawn.tasks) == 2
    deferred_spawn.run(1)
    assert saved == [1, 2]


def test_intermediate_ack_does_not_change_status(sync_spawn):
    seen = []
    tracker = None

    def persist(snapshot, version):
        if version == 1:
            tracker.submit(_snap("S2"), 2)
        else:
            seen.append((tracker.status, tracker.latest_acked))

    tracker = PersistenceTracker(persist, sync_spawn)
    tracker.submit(_snap("S1"), 1)
    # v1 confirmée pendant que v2 attend : toujours PENDING
    assert seen == [(SaveStatus.PENDING, 1)]
    assert tracker.status == SaveStatus.SUCCEEDED
    assert tracker.latest_acked == 2


def test_failed_write(sync_spawn, caplog):
    def failing(snapshot, version):
        raise ConnectionError("base indisponible")

    tracker = PersistenceTracker(failing, sync_spawn)
    with caplog.at_level(logging.WARNING):
        tracker.submit(_snap("S1"), 1)
    assert tracker.status == SaveStatus.FAILED
    assert isinstance(tracker.last_error, ConnectionError)
    assert tracker.unsaved
    assert "Échec de sauvegarde v1" in caplog.text


def test_intermediate_failure_ignored(sync_spawn):
    calls = []
    tracker = None

    def persist(snapshot, version):
        calls.append(version)
        if version == 1:
            tracker.submit(_snap("S2"), 2)
            raise ConnectionError("timeout")

    tracker = PersistenceTracker(persist, sync_spawn)
    tracker.submit(_snap("S1"), 1)
    assert calls == [1, 2]
    assert tracker.status == SaveStatus.SUCCEEDED
    assert tracker.last_error is None


def test_slow_write_never_overwrites_later_version():
    in_flight = threading.Event()
    release = threading.Event()
    stored = {}
    workers = []

    def persist(snapshot, version):
        if version == 1:
            in_flight.set()
            release.wait(5)
        stored["version"] = version
        stored["label"] = _label(snapshot)

    def spawn(task):
        worker = threading.Thread(target=task, daemon=True)
        workers.append(worker)
        worker.start()

    h = EditHistory(persist, spawn=spawn)
    h.initialize(_snap("S0"))
    h.update(_snap("S1"))
    assert in_flight.wait(5)
    h.update(_snap("S2"))
    # v2 attend la fin de v1 : jamais deux écritures simultanées
    assert h.persistence.latest_acked == 0
    release.set()
    for worker in workers:
        worker.join(5)
    assert len(workers) == 1
    assert stored == {"version": 2, "label": "S2"}
    assert h.persistence.status == SaveStatus.SUCCEEDED
    assert not h.persistence.unsaved


def test_update_does_not_wait_for_persistence():
    release = threading.Event()
    done = threading.Event()

    def slow(snapshot, version):
        release.wait(5)
        done.set()

    h = EditHistory(slow)
    h.initialize(_snap("S0"))
    h.update(_snap("S1"))
    assert _label(h.current) == "S1"
    assert h.persistence.status == SaveStatus.PENDING
    release.set()
    assert done.wait(5)
