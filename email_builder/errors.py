"""
Exceptions email_builder.

Les erreurs structurelles portent un `code` stable (out_of_range, not_found)
repris tel quel dans InsertResult.error_code.
"""


class EmailBuilderError(Exception):
    """Erreur de base du package."""


class StructuralError(EmailBuilderError):
    """Opération impossible sur la liste de blocs (position, identifiant)."""
    code = "structural"


class BlockNotFoundError(StructuralError, LookupError):
    code = "not_found"

    def __init__(self, block_id: str):
        self.block_id = block_id
        super().__init__(f"Bloc introuvable : {block_id!r}")


class PositionOutOfRangeError(StructuralError, IndexError):
    code = "out_of_range"

    def __init__(self, index: int, length: int):
        self.index = index
        self.length = length
        super().__init__(f"Position {index} hors limites (0..{length})")


class UnknownSectionError(StructuralError, LookupError):
    code = "not_found"

    def __init__(self, section_id: str):
        self.section_id = section_id
        super().__init__(f"Section inconnue : {section_id!r}")


class RenderError(EmailBuilderError):
    """Un bloc ne peut pas être rendu."""


class HistoryError(EmailBuilderError):
    """Usage invalide de l'historique (double initialize, update avant initialize)."""


class MutationInFlightError(EmailBuilderError):
    """Une mutation collaborateur est déjà en cours sur ce document."""


class SchemaVersionError(EmailBuilderError):
    """Payload persisté dans une version de schéma non supportée."""


class RequestClosedError(EmailBuilderError):
    """Requête collaborateur utilisée après la fin de son bloc `with`."""
