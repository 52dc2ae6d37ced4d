"""Fixtures partagées — construction de listes de blocs, stratégies de spawn."""
import pytest

from email_builder.sections import create_block, renumber


def build_blocks(*items):
    """Types (str) ou blocs → liste renumérotée, ids uniques."""
    blocks = []
    for item in items:
        taken = {b.id for b in blocks}
        blocks.append(create_block(item, taken) if isinstance(item, str) else item)
    return renumber(blocks)


class DeferredSpawn:
    """Collecte les tâches de sauvegarde ; le test choisit l'ordre d'exécution."""

    def __init__(self):
        self.tasks = []

    def __call__(self, task):
        self.tasks.append(task)

    def run(self, index):
        self.tasks[index]()


@pytest.fixture
def build():
    return build_blocks


@pytest.fixture
def sync_spawn():
    return lambda task: task()


@pytest.fixture
def deferred_spawn():
    return DeferredSpawn()
