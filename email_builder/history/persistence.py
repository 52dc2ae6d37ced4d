"""
Suivi des sauvegardes — appels fire-and-forget au collaborateur de persistance.

Un seul worker écrit à la fois. Pendant une écriture, seule la dernière
version soumise est gardée en attente : les versions intermédiaires sont
abandonnées, et une version plus récente n'est jamais écrasée par une plus
ancienne. Une confirmation qui n'est pas celle de la dernière version
demandée ne modifie jamais le statut observable.
"""
import logging
import threading
from enum import Enum
from typing import Callable, Optional, Tuple

from ..core.schemas import HistorySnapshot

log = logging.getLogger(__name__)

PersistFn = Callable[[HistorySnapshot, int], None]
SpawnFn = Callable[[Callable[[], None]], None]


class SaveStatus(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


def spawn_daemon(task: Callable[[], None]) -> None:
    """Lance la tâche dans un thread daemon (stratégie par défaut)."""
    threading.Thread(target=task, daemon=True, name="email-builder-persist").start()


class PersistenceTracker:
    def __init__(self, persist: PersistFn, spawn: Optional[SpawnFn] = None):
        self._persist = persist
        self._spawn = spawn or spawn_daemon
        self._lock = threading.Lock()
        self._pending: Optional[Tuple[HistorySnapshot, int]] = None
        self._running = False
        self._latest_requested = 0
        self._latest_acked = 0
        self._status = SaveStatus.IDLE
        self._last_error: Optional[BaseException] = None

    @property
    def status(self) -> SaveStatus:
        with self._lock:
            return self._status

    @property
    def last_error(self) -> Optional[BaseException]:
        with self._lock:
            return self._last_error

    @property
    def latest_acked(self) -> int:
        with self._lock:
            return self._latest_acked

    @property
    def unsaved(self) -> bool:
        """Vrai tant que la dernière version demandée n'est pas confirmée."""
        with self._lock:
            return self._latest_acked < self._latest_requested

    def submit(self, snapshot: HistorySnapshot, version: int) -> None:
        with self._lock:
            if version <= self._latest_requested:
                log.warning("Sauvegarde v%d ignorée (v%d déjà demandée)", version, self._latest_requested)
                return
            if self._pending is not None:
                log.debug("Sauvegarde v%d remplacée par v%d", self._pending[1], version)
            self._latest_requested = version
            self._pending = (snapshot, version)
            self._status = SaveStatus.PENDING
            start = not self._running
            self._running = True
        if start:
            self._spawn(self._drain)

    def _drain(self) -> None:
        """Boucle du worker : écrit la dernière version en attente jusqu'à épuisement."""
        while True:
            with self._lock:
                if self._pending is None:
                    self._running = False
                    return
                snapshot, version = self._pending
                self._pending = None
            self._write(snapshot, version)

    def _write(self, snapshot: HistorySnapshot, version: int) -> None:
        try:
            self._persist(snapshot, version)
        except Exception as exc:
            # le collaborateur est opaque : tout échec devient un statut « non sauvegardé »
            log.warning("Échec de sauvegarde v%d : %s", version, exc, exc_info=True)
            with self._lock:
                if version == self._latest_requested:
                    self._status = SaveStatus.FAILED
                    self._last_error = exc
            return
        with self._lock:
            self._latest_acked = version
            if version == self._latest_requested:
                self._status = SaveStatus.SUCCEEDED
                self._last_error = None
            else:
                log.debug("Sauvegarde v%d confirmée (v%d en attente)", version, self._latest_requested)
