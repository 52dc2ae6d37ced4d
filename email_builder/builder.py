"""
API publique de l'éditeur d'emails — une session par document ouvert.
"""
import logging
import threading
from contextlib import contextmanager
from typing import Any, Iterator, List, Mapping, Optional, Sequence, Union

from . import config
from .blocks import BaseBlock
from .composition.engine import CompositionEngine, default_engine
from .composition.scoring import QualityScore
from .core.schemas import (
    DocumentChange, EmailDocument, GlobalSettings, HistorySnapshot, RuleViolation,
)
from .errors import MutationInFlightError, RequestClosedError
from .history.manager import EditHistory
from .history.persistence import PersistFn, SpawnFn
from .renderer.html import RenderedEmail, render
from .sections import editing, inserter
from .sections.inserter import InsertMode, InsertResult, TemplateRef

log = logging.getLogger(__name__)

class EditorSession:
    """
    Session d'édition d'un document email.

    Toutes les mutations passent par l'historique (undo/redo + sauvegarde).

    Usage:
        >>> session = EditorSession(EmailDocument(), persist=save_to_db)
        >>> session.insert_section("hero-with-cta")
        >>> session.auto_fix_all()
        >>> email = session.render()
    """

    def __init__(
        self,
        document: Union[EmailDocument, HistorySnapshot, None] = None,
        persist: Optional[PersistFn] = None,
        *,
        engine: Optional[CompositionEngine] = None,
        history_limit: int = config.HISTORY_LIMIT,
        spawn: Optional[SpawnFn] = None,
    ):
        """
        Args:
            document: Document initial (document vide si None)
            persist: Collaborateur de sauvegarde, appelé avec (snapshot, version)
            engine: Moteur de composition (moteur par défaut si None)
            history_limit: Profondeur maximale des piles undo/redo
            spawn: Stratégie d'exécution des sauvegardes (thread daemon par défaut)
        """
        document = document or EmailDocument()
        self.engine = engine or default_engine
        self.history = EditHistory(persist, limit=history_limit, spawn=spawn)
        self.history.initialize(HistorySnapshot(
            blocks=document.blocks, global_settings=document.global_settings,
        ))
        self._gate = threading.Lock()

    # ── Lecture ─────────────────────────────────────────────────────────────

    @property
    def snapshot(self) -> HistorySnapshot:
        return self.history.current

    @property
    def blocks(self) -> List[BaseBlock]:
        return list(self.history.current.blocks)

    @property
    def global_settings(self) -> GlobalSettings:
        return self.history.current.global_settings

    def to_document(self) -> EmailDocument:
        return self.history.current.to_document()

    # ── Mutations structurelles ─────────────────────────────────────────────

    def _commit(self, result: InsertResult) -> InsertResult:
        if result.success:
            self.history.update({"blocks": result.blocks})
        return result

    def insert_section(self, template: TemplateRef, mode: InsertMode = "append", *,
                       index: Optional[int] = None, target_id: Optional[str] = None) -> InsertResult:
        """Insère une section (template ou id de section) selon le mode demandé."""
        return self._commit(inserter.insert_section(template, self.blocks, mode, index=index, target_id=target_id))

    def add_block(self, block: Union[BaseBlock, str], index: Optional[int] = None) -> InsertResult:
        return self._commit(editing.add_block(self.blocks, block, index))

    def remove_block(self, block_id: str) -> InsertResult:
        return self._commit(editing.remove_block(self.blocks, block_id))

    def move_block(self, block_id: str, new_index: int) -> InsertResult:
        return self._commit(editing.move_block(self.blocks, block_id, new_index))

    def update_block(self, block_id: str, *, content: Optional[Mapping[str, Any]] = None,
                     settings: Optional[Mapping[str, Any]] = None) -> InsertResult:
        return self._commit(editing.update_block(self.blocks, block_id, content=content, settings=settings))

    def update_global_settings(self, **changes: Any) -> GlobalSettings:
        settings = GlobalSettings.model_validate({**self.global_settings.model_dump(), **changes})
        self.history.update({"global_settings": settings})
        return settings

    # ── Composition ─────────────────────────────────────────────────────────

    def validate(self) -> List[RuleViolation]:
        return self.engine.validate(self.blocks)

    def score(self) -> QualityScore:
        return self.engine.score(self.blocks)

    def auto_fix(self, block_id: str, rule_id: str) -> bool:
        """Corrige une violation. Renvoie False (sans entrée d'historique) si rien n'a changé."""
        blocks = self.blocks
        fixed = self.engine.auto_fix(blocks, block_id, rule_id)
        if fixed == blocks:
            return False
        self.history.update({"blocks": fixed})
        return True

    def auto_fix_all(self) -> bool:
        blocks = self.blocks
        fixed = self.engine.auto_fix_all(blocks)
        if fixed == blocks:
            return False
        self.history.update({"blocks": fixed})
        return True

    # ── Rendu ───────────────────────────────────────────────────────────────

    def render(self, *, assets: Optional[Mapping[str, str]] = None,
               merge_tags: Optional[Mapping[str, str]] = None) -> RenderedEmail:
        return render(self.blocks, self.global_settings, assets=assets, merge_tags=merge_tags)

    # ── Historique ──────────────────────────────────────────────────────────

    def undo(self) -> HistorySnapshot:
        return self.history.undo()

    def redo(self) -> HistorySnapshot:
        return self.history.redo()

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def can_redo(self) -> bool:
        return self.history.can_redo()

    # ── Collaborateurs externes ─────────────────────────────────────────────

    @contextmanager
    def collaborator_request(self) -> Iterator["CollaboratorRequest"]:
        """
        Réserve le document pendant toute la durée d'une requête collaborateur
        (envoi, attente de réponse, application). Une seule à la fois par session.
        """
        if not self._gate.acquire(blocking=False):
            log.warning("Mutation collaborateur refusée : une autre est en cours")
            raise MutationInFlightError("Une mutation est déjà en cours sur ce document")
        request = CollaboratorRequest(self)
        try:
            yield request
        finally:
            request.close()
            self._gate.release()

    def apply_change(self, change: Union[DocumentChange, Mapping[str, Any]]) -> InsertResult:
        """Applique un changement collaborateur en une seule entrée d'historique."""
        with self.collaborator_request() as request:
            return request.apply(change)

    def _apply_change(self, change: Union[DocumentChange, Mapping[str, Any]]) -> InsertResult:
        if not isinstance(change, DocumentChange):
            change = DocumentChange.model_validate(change)
        if change.document is not None:
            doc = change.document
            self.history.update({"blocks": doc.blocks, "global_settings": doc.global_settings})
            return InsertResult.ok(doc.blocks, (b.id for b in doc.blocks))
        blocks: Sequence[BaseBlock] = self.blocks
        for patch in change.patches:
            result = editing.update_block(blocks, patch.block_id,
                                          content=patch.content, settings=patch.settings)
            if not result.success:
                return InsertResult(success=False, blocks=self.blocks,
                                    error=result.error, error_code=result.error_code)
            blocks = result.blocks
        self.history.update({"blocks": blocks})
        return InsertResult.ok(blocks, (p.block_id for p in change.patches))


class CollaboratorRequest:
    """Jeton remis pendant une requête collaborateur : seule voie d'application du changement."""

    def __init__(self, session: EditorSession):
        self._session: Optional[EditorSession] = session
        self.applied = False

    @property
    def closed(self) -> bool:
        return self._session is None

    def close(self) -> None:
        self._session = None

    def _open_session(self) -> EditorSession:
        if self._session is None:
            raise RequestClosedError("Requête collaborateur terminée : le document n'est plus réservé")
        return self._session

    @property
    def snapshot(self) -> HistorySnapshot:
        """État envoyé au collaborateur."""
        return self._open_session().snapshot

    def apply(self, change: Union[DocumentChange, Mapping[str, Any]]) -> InsertResult:
        if self.applied:
            raise MutationInFlightError("Changement déjà appliqué pour cette requête")
        result = self._open_session()._apply_change(change)
        self.applied = result.success
        return result
