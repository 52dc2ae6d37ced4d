"""
Router FastAPI — endpoints email_builder.

POST /email-builder/render        → EmailDocument → {html, plain_text}
POST /email-builder/validate      → EmailDocument → {violations, score}
POST /email-builder/autofix       → {document, block_id, rule_id} → EmailDocument
POST /email-builder/autofix-all   → EmailDocument → EmailDocument
GET  /email-builder/catalog       → blocs disponibles + leurs JSON schemas
GET  /email-builder/sections      → sections prédéfinies
POST /email-builder/sections/{id}/insert → {document, mode, ...} → InsertResult
"""
from typing import Dict, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from .blocks import BLOCK_CLASSES, BLOCK_SPECS, TYPE_STYLE_DEFAULTS
from .composition.engine import default_engine
from .core.schemas import EmailDocument
from .renderer.html import RenderedEmail, render as render_email
from .sections import inserter
from .sections.inserter import InsertMode, InsertResult
from .sections.registry import get_section, list_sections
from .errors import UnknownSectionError

router = APIRouter(prefix="/email-builder", tags=["email_builder"])


class AutoFixRequest(BaseModel):
    document: EmailDocument
    block_id: str
    rule_id: str


class InsertRequest(BaseModel):
    document: EmailDocument
    mode: InsertMode = "append"
    index: Optional[int] = None
    target_id: Optional[str] = None


class RenderRequest(BaseModel):
    document: EmailDocument
    assets: Dict[str, str] = {}
    merge_tags: Dict[str, str] = {}


def _with_blocks(document: EmailDocument, blocks) -> EmailDocument:
    return EmailDocument(blocks=blocks, global_settings=document.global_settings)


@router.post("/render", summary="Rend un document en HTML email + texte brut")
def render(request: RenderRequest) -> RenderedEmail:
    """Reçoit un document (+ assets et merge tags optionnels), retourne le HTML et le texte brut."""
    doc = request.document
    return render_email(doc.blocks, doc.global_settings, assets=request.assets, merge_tags=request.merge_tags)


@router.post("/validate", summary="Valide la composition d'un document")
def validate(document: EmailDocument) -> dict:
    violations = default_engine.validate(document.blocks)
    return {
        "violations": [v.model_dump() for v in violations],
        "score": default_engine.score(document.blocks).model_dump(),
    }


@router.post("/autofix", summary="Corrige une violation précise")
def autofix(request: AutoFixRequest) -> EmailDocument:
    if default_engine.get_rule(request.rule_id) is None:
        raise HTTPException(status_code=404, detail=f"Règle inconnue : {request.rule_id}")
    blocks = default_engine.auto_fix(request.document.blocks, request.block_id, request.rule_id)
    return _with_blocks(request.document, blocks)


@router.post("/autofix-all", summary="Applique toutes les corrections automatiques")
def autofix_all(document: EmailDocument) -> EmailDocument:
    return _with_blocks(document, default_engine.auto_fix_all(document.blocks))


@router.get("/catalog", summary="Liste les blocs disponibles et leurs schemas")
def catalog() -> dict:
    """Retourne le catalogue des blocs avec métadonnées, styles par défaut et JSON schemas Pydantic."""
    catalog_data = []
    for block_type, cls in BLOCK_CLASSES.items():
        spec = BLOCK_SPECS[block_type]
        defaults = {
            k: (v.model_dump() if isinstance(v, BaseModel) else v)
            for k, v in TYPE_STYLE_DEFAULTS.get(block_type, {}).items()
        }
        catalog_data.append({
            **spec.model_dump(),
            "style_defaults": defaults,
            "schema": cls.model_json_schema(),
        })
    return {"blocks": catalog_data}


@router.get("/sections", summary="Liste les sections prédéfinies")
def sections(category: Optional[str] = None) -> dict:
    return {"sections": [
        {
            "id": t.id, "name": t.name, "category": t.category, "description": t.description,
            "tags": list(t.tags), "block_types": [b.type for b in t.blocks],
        }
        for t in list_sections(category)
    ]}


@router.post("/sections/{section_id}/insert", summary="Insère une section dans un document")
def insert_section(section_id: str, request: InsertRequest) -> InsertResult:
    try:
        template = get_section(section_id)
    except UnknownSectionError as e:
        raise HTTPException(status_code=404, detail=str(e))

    result = inserter.insert_section(template, request.document.blocks, request.mode,
                                     index=request.index, target_id=request.target_id)
    if not result.success:
        status = 404 if result.error_code == "not_found" else 422
        raise HTTPException(status_code=status, detail={"error": result.error, "error_code": result.error_code})
    return result
