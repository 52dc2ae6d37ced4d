"""
Historique d'édition — undo/redo bornés sur des snapshots immuables.

Seul `update` crée un nouvel état ; chaque update validé est transmis au
collaborateur de persistance avec un numéro de version.
"""
import logging
from collections import deque
from typing import Any, Deque, Mapping, Optional, Union

from .. import config
from ..core.schemas import HistorySnapshot
from ..errors import HistoryError
from .persistence import PersistFn, PersistenceTracker, SpawnFn

log = logging.getLogger(__name__)

SnapshotUpdate = Union[HistorySnapshot, Mapping[str, Any]]


class EditHistory:
    def __init__(self, persist: Optional[PersistFn] = None, *, limit: int = config.HISTORY_LIMIT,
                 spawn: Optional[SpawnFn] = None):
        if limit < 1:
            raise ValueError("limit doit être >= 1")
        self.limit = limit
        self._past: Deque[HistorySnapshot] = deque(maxlen=limit)
        self._future: Deque[HistorySnapshot] = deque(maxlen=limit)
        self._current: Optional[HistorySnapshot] = None
        self._version = 0
        self.persistence: Optional[PersistenceTracker] = (
            PersistenceTracker(persist, spawn) if persist is not None else None
        )

    # ── État ────────────────────────────────────────────────────────────────

    @property
    def initialized(self) -> bool:
        return self._current is not None

    @property
    def current(self) -> HistorySnapshot:
        if self._current is None:
            raise HistoryError("Historique non initialisé")
        return self._current

    @property
    def version(self) -> int:
        return self._version

    def can_undo(self) -> bool:
        return bool(self._past)

    def can_redo(self) -> bool:
        return bool(self._future)

    # ── Transitions ─────────────────────────────────────────────────────────

    def initialize(self, snapshot: SnapshotUpdate) -> HistorySnapshot:
        if self._current is not None:
            raise HistoryError("Historique déjà initialisé")
        self._current = _as_snapshot(snapshot)
        log.debug("Historique initialisé (%d blocs)", len(self._current.blocks))
        return self._current

    def update(self, partial: SnapshotUpdate) -> HistorySnapshot:
        """
        Nouvel état = état courant + champs fournis (blocks et/ou global_settings).
        Vide la pile redo. Le snapshot fusionné est re-validé.
        """
        current = self.current
        if isinstance(partial, HistorySnapshot):
            new = partial
        else:
            unknown = set(partial) - {"blocks", "global_settings"}
            if unknown:
                raise HistoryError(f"Champs inconnus dans la mise à jour : {sorted(unknown)}")
            new = HistorySnapshot(
                blocks=partial.get("blocks", current.blocks),
                global_settings=partial.get("global_settings", current.global_settings),
            )
        self._past.append(current)
        self._future.clear()
        self._current = new
        self._version += 1
        log.debug("Historique v%d (%d états annulables)", self._version, len(self._past))
        if self.persistence is not None:
            self.persistence.submit(new, self._version)
        return new

    def undo(self) -> HistorySnapshot:
        current = self.current
        if not self._past:
            return current
        self._future.append(current)
        self._current = self._past.pop()
        log.debug("Undo (%d restants)", len(self._past))
        return self._current

    def redo(self) -> HistorySnapshot:
        current = self.current
        if not self._future:
            return current
        self._past.append(current)
        self._current = self._future.pop()
        log.debug("Redo (%d restants)", len(self._future))
        return self._current

    def clear(self) -> None:
        """Vide les piles undo/redo sans toucher à l'état courant."""
        self._past.clear()
        self._future.clear()


def _as_snapshot(value: SnapshotUpdate) -> HistorySnapshot:
    if isinstance(value, HistorySnapshot):
        return value
    return HistorySnapshot.model_validate(dict(value))
