"""
Styles email — fusion des réglages et sérialisation en styles inline.

Ordre de fusion (le dernier gagne, None = hérité) :
    réglages globaux < défauts du type < settings du bloc
"""
from typing import Any, Dict, Optional

from ..blocks import BaseBlock, Padding, TYPE_STYLE_DEFAULTS
from ..core.schemas import GlobalSettings

_UNITLESS = {"font_weight", "line_height", "opacity", "z_index"}


def effective_style(block: BaseBlock, global_settings: Optional[GlobalSettings] = None) -> Dict[str, Any]:
    """Style effectif d'un bloc après fusion des trois niveaux."""
    gs = global_settings or GlobalSettings()
    style: Dict[str, Any] = {
        "font_family": gs.font_family,
        "background_color": gs.content_background_color,
    }
    style.update(TYPE_STYLE_DEFAULTS.get(block.type, {}))
    settings = getattr(block, "settings", None)
    if settings is not None:
        style.update({key: value for key, value in settings if value is not None})
    return style


def inline_style(**props: Any) -> str:
    """
    font_size=16, color="#111" → "font-size: 16px; color: #111;"
    Les entiers reçoivent l'unité px, les valeurs None sont ignorées.
    """
    parts = []
    for key, value in props.items():
        if value is None:
            continue
        if isinstance(value, Padding):
            value = value.css()
        elif isinstance(value, int) and not isinstance(value, bool) and key not in _UNITLESS:
            value = f"{value}px"
        parts.append(f"{key.replace('_', '-')}: {value};")
    return " ".join(parts)


def padding_of(style: Dict[str, Any], key: str = "padding") -> Padding:
    return style.get(key) or Padding()


def responsive_css(global_settings: GlobalSettings) -> str:
    """Règles mobile embarquées — ciblent les classes posées sur les éléments inline."""
    bp = global_settings.mobile_breakpoint
    return f"""
    body {{ margin: 0; padding: 0; -webkit-text-size-adjust: 100%; -ms-text-size-adjust: 100%; }}
    table, td {{ mso-table-lspace: 0pt; mso-table-rspace: 0pt; }}
    img {{ border: 0; line-height: 100%; outline: none; text-decoration: none; -ms-interpolation-mode: bicubic; }}
    @media only screen and (max-width: {bp}px) {{
      .eb-container {{ width: 100% !important; max-width: 100% !important; }}
      .eb-column {{ display: block !important; width: 100% !important; max-width: 100% !important; }}
      .eb-pad {{ padding-left: 16px !important; padding-right: 16px !important; }}
      .eb-fluid {{ width: 100% !important; height: auto !important; }}
      .eb-hero-title {{ font-size: 32px !important; line-height: 1.15 !important; }}
      .eb-button {{ display: block !important; width: 100% !important; }}
    }}"""
