"""
Blocs de base pour email_builder.
Content/Settings séparés + BaseBlock discriminé par `type`.

Tous les modèles sont figés : une modification produit toujours une nouvelle instance.
Un champ de settings à None signifie « hérité » (défauts du type puis réglages globaux).
"""
from typing import Annotated, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

HexColor = Annotated[str, Field(pattern=r"^#[0-9a-fA-F]{6}$")]
Alignment = Literal["left", "center", "right"]


class Padding(BaseModel):
    """Padding en pixels, dans l'ordre CSS."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    top: int = Field(default=0, ge=0)
    right: int = Field(default=0, ge=0)
    bottom: int = Field(default=0, ge=0)
    left: int = Field(default=0, ge=0)

    def css(self) -> str:
        return f"{self.top}px {self.right}px {self.bottom}px {self.left}px"

    def values(self) -> tuple[int, int, int, int]:
        return (self.top, self.right, self.bottom, self.left)


class BlockContent(BaseModel):
    """Contenu d'un bloc (textes, URLs, données)."""
    model_config = ConfigDict(frozen=True, extra="forbid")


class BlockSettings(BaseModel):
    """Style d'un bloc. Tous les champs sont optionnels."""
    model_config = ConfigDict(frozen=True, extra="forbid")


class BaseBlock(BaseModel):
    """Bloc de base (classe parente de tous les blocs)."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(..., min_length=1)
    type: str
    position: int = Field(default=0, ge=0)
