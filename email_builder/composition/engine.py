"""
Moteur de composition — valide une liste de blocs, applique les corrections.
"""
import logging
from typing import Iterable, List, Optional, Sequence

from .. import config
from ..blocks import BaseBlock
from ..core.schemas import RuleViolation
from .rules import CompositionRule, default_rules
from .scoring import QualityScore, score_from_violations

log = logging.getLogger(__name__)


class CompositionEngine:
    """Ensemble ordonné de règles. Sans état entre deux appels."""

    def __init__(self, rules: Optional[Iterable[CompositionRule]] = None,
                 max_passes: int = config.AUTO_FIX_MAX_PASSES):
        self._rules: List[CompositionRule] = list(rules) if rules is not None else default_rules()
        self.max_passes = max_passes
        ids = [rule.id for rule in self._rules]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Identifiants de règles dupliqués : {ids}")

    @property
    def rules(self) -> tuple:
        return tuple(self._rules)

    def get_rule(self, rule_id: str) -> Optional[CompositionRule]:
        return next((rule for rule in self._rules if rule.id == rule_id), None)

    def validate(self, blocks: Sequence[BaseBlock]) -> List[RuleViolation]:
        """Violations triées par position du bloc, puis par ordre des règles."""
        positions = {block.id: index for index, block in enumerate(blocks)}
        order = {rule.id: index for index, rule in enumerate(self._rules)}
        violations = [v for rule in self._rules for v in rule.detect(blocks)]
        return sorted(violations, key=lambda v: (positions.get(v.block_id, len(blocks)), order[v.rule_id]))

    def auto_fix(self, blocks: Sequence[BaseBlock], block_id: str, rule_id: str) -> List[BaseBlock]:
        """
        Corrige une violation précise. La violation est re-détectée d'abord :
        si elle a déjà disparu, la liste est renvoyée inchangée.
        """
        rule = self.get_rule(rule_id)
        if rule is None:
            raise KeyError(f"Règle inconnue : {rule_id!r}")
        if not any(v.block_id == block_id and v.auto_fixable for v in rule.detect(blocks)):
            log.debug("auto_fix %s/%s : rien à corriger", rule_id, block_id)
            return list(blocks)
        return rule.fix(blocks, block_id)

    def auto_fix_all(self, blocks: Sequence[BaseBlock]) -> List[BaseBlock]:
        """
        Applique toutes les corrections, règle par règle, jusqu'au point fixe.
        Une correction d'une règle peut en déclencher une autre : on repasse
        tant qu'une passe a modifié quelque chose (max_passes au plus).
        """
        current = list(blocks)
        for _ in range(self.max_passes):
            changed = False
            for rule in self._rules:
                if not rule.auto_fixable:
                    continue
                current, rule_changed = self._fix_rule(rule, current)
                changed = changed or rule_changed
            if not changed:
                return current
        log.warning("auto_fix_all : point fixe non atteint après %d passes", self.max_passes)
        return current

    @staticmethod
    def _fix_rule(rule: CompositionRule, blocks: List[BaseBlock]) -> tuple[List[BaseBlock], bool]:
        changed = False
        for _ in range(2 * len(blocks) + 2):
            pending = [v for v in rule.detect(blocks) if v.auto_fixable]
            if not pending:
                break
            fixed = rule.fix(blocks, pending[0].block_id)
            if fixed == blocks:
                log.warning("Règle %s : correction sans effet sur %s", rule.id, pending[0].block_id)
                break
            blocks, changed = fixed, True
        return blocks, changed

    def score(self, blocks: Sequence[BaseBlock]) -> QualityScore:
        return score_from_violations(blocks, self.validate(blocks))


default_engine = CompositionEngine()


def validate(blocks: Sequence[BaseBlock]) -> List[RuleViolation]:
    return default_engine.validate(blocks)


def auto_fix(blocks: Sequence[BaseBlock], block_id: str, rule_id: str) -> List[BaseBlock]:
    return default_engine.auto_fix(blocks, block_id, rule_id)


def auto_fix_all(blocks: Sequence[BaseBlock]) -> List[BaseBlock]:
    return default_engine.auto_fix_all(blocks)


def score_composition(blocks: Sequence[BaseBlock]) -> QualityScore:
    return default_engine.score(blocks)
