"""
Historique — undo/redo + sauvegarde versionnée.
"""
from .manager import EditHistory
from .persistence import PersistenceTracker, SaveStatus, spawn_daemon

__all__ = ["EditHistory", "PersistenceTracker", "SaveStatus", "spawn_daemon"]
