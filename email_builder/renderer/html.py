"""
Renderer HTML email — tables + styles inline, compatible Outlook.

Dispatch exhaustif par type de bloc. Un bloc inconnu, invalide ou en échec de
rendu devient une ligne placeholder visible (data-render-error) : le reste du
document est rendu normalement.
"""
import html as _html
import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from ..blocks import (
    BLOCK_CLASSES, BaseBlock, Block,
    ButtonBlock, ComparisonBlock, DividerBlock, FeatureGridBlock, FooterBlock,
    HeadingBlock, HeroBlock, ImageBlock, LogoBlock, SocialLinksBlock,
    SpacerBlock, StatsBlock, TestimonialBlock, TextBlock,
)
from .. import config
from ..core.design_tokens import BUTTON_LINE_HEIGHT
from ..core.merge_tags import resolve_merge_tags
from ..core.schemas import GlobalSettings
from ..errors import RenderError
from .assets import resolve_image_url
from .styles import effective_style, inline_style, padding_of, responsive_css
from .text import render_plain_text

log = logging.getLogger(__name__)

_BLOCK_ADAPTER = TypeAdapter(Block)

BlockInput = Union[BaseBlock, Mapping[str, Any]]


class RenderedEmail(BaseModel):
    model_config = ConfigDict(frozen=True)

    html: str
    plain_text: str


class RenderContext(BaseModel):
    """Dépendances explicites du rendu (aucun cache global)."""
    model_config = ConfigDict(frozen=True)

    global_settings: GlobalSettings = GlobalSettings()
    assets: Dict[str, str] = Field(default_factory=dict)
    merge_tags: Dict[str, str] = Field(default_factory=dict)

    def style(self, block: BaseBlock) -> Dict[str, Any]:
        return effective_style(block, self.global_settings)

    def image_url(self, ref: Optional[str]) -> str:
        return resolve_image_url(ref, self.assets)

    def link(self, url: Optional[str]) -> str:
        return resolve_merge_tags(url or "#", self.merge_tags)


def _e(value: Any) -> str:
    return _html.escape("" if value is None else str(value), quote=True)


def _style(**props: Any) -> str:
    return _e(inline_style(**props))


def _multiline(text: str) -> str:
    return "<br>".join(_e(line) for line in text.split("\n"))


def _content_width(ctx: RenderContext, style: Dict[str, Any]) -> int:
    pad = padding_of(style)
    return max(1, ctx.global_settings.max_width - pad.left - pad.right)


def _block_row(block: BaseBlock, inner: str, *, padding=None, background=None,
               align: Optional[str] = None, extra: Optional[Dict[str, Any]] = None) -> str:
    """Ligne <tr> d'un bloc dans le conteneur principal."""
    cell_style = _style(padding=padding, background_color=background, **(extra or {}))
    align_attr = f' align="{_e(align)}"' if align else ""
    return (
        f'<tr>\n<td class="eb-block eb-pad" data-block-id="{_e(block.id)}" '
        f'data-block-type="{_e(block.type)}"{align_attr} style="{cell_style}">\n'
        f"{inner}\n</td>\n</tr>"
    )


def _columns_table(cells: List[str], per_row: int, align: str) -> str:
    """Grille de colonnes empilables sur mobile (classe eb-column)."""
    width = 100 // per_row
    rows = []
    for start in range(0, len(cells), per_row):
        chunk = cells[start:start + per_row]
        tds = "".join(
            f'<td class="eb-column" width="{width}%" valign="top" align="{_e(align)}" '
            f'style="{_style(width=f"{width}%", padding="8px")}">{cell}</td>'
            for cell in chunk
        )
        rows.append(f"<tr>{tds}</tr>")
    return (
        '<table role="presentation" width="100%" cellpadding="0" cellspacing="0" border="0">'
        + "".join(rows) + "</table>"
    )


# ── Layout ──────────────────────────────────────────────────────────────────

def _render_logo(block: LogoBlock, ctx: RenderContext) -> str:
    s = ctx.style(block)
    height = f' height="{s["height"]}"' if s.get("height") else ""
    img = (
        f'<img src="{_e(ctx.image_url(block.content.image_url))}" alt="{_e(block.content.alt_text)}" '
        f'width="{s["width"]}"{height} class="eb-fluid" '
        f'style="{_style(display="inline-block", max_width="100%", height="auto", border=0)}">'
    )
    if block.content.link_url:
        img = f'<a href="{_e(ctx.link(block.content.link_url))}" target="_blank">{img}</a>'
    return _block_row(block, img, padding=s.get("padding"), background=s.get("background_color"),
                      align=s["align"])


def _render_spacer(block: SpacerBlock, ctx: RenderContext) -> str:
    s = ctx.style(block)
    height = s["height"]
    return _block_row(
        block, "&nbsp;", background=s.get("background_color"),
        extra={"height": height, "line_height": f"{height}px", "font_size": "0"},
    )


def _render_divider(block: DividerBlock, ctx: RenderContext) -> str:
    s = ctx.style(block)
    if s["style"] == "decorative":
        ornament = block.content.decorative_element or "&#8226; &#8226; &#8226;"
        if block.content.decorative_element:
            ornament = _e(ornament)
        inner = (
            f'<p style="{_style(margin=0, color=s["color"], font_size=18, letter_spacing="8px", text_align="center")}">'
            f"{ornament}</p>"
        )
    else:
        rule = f'{s["thickness"]}px {s["style"]} {s["color"]}'
        inner = (
            f'<table role="presentation" width="{s["width"]}%" align="{_e(s["align"])}" '
            f'cellpadding="0" cellspacing="0" border="0"><tr>'
            f'<td style="{_style(border_top=rule, font_size="0", line_height="0")}">&nbsp;</td>'
            f"</tr></table>"
        )
    return _block_row(block, inner, padding=s.get("padding"), background=s.get("background_color"),
                      align=s["align"])


def _render_footer(block: FooterBlock, ctx: RenderContext) -> str:
    s = ctx.style(block)
    c = block.content
    text_style = _style(margin="0 0 8px", font_family=s["font_family"], font_size=s["font_size"],
                        line_height=s["line_height"], color=s["text_color"], text_align=s["align"])
    link_style = _style(color=s["link_color"], text_decoration="underline")
    parts = []
    if c.company_name:
        parts.append(f'<p style="{text_style}"><strong>{_e(c.company_name)}</strong></p>')
    if c.company_address:
        parts.append(f'<p style="{text_style}">{_multiline(c.company_address)}</p>')
    if c.custom_text:
        parts.append(f'<p style="{text_style}">{_multiline(c.custom_text)}</p>')
    links = [f'<a href="{_e(ctx.link(c.unsubscribe_url))}" style="{link_style}">Se désinscrire</a>']
    if c.preferences_url:
        links.append(f'<a href="{_e(ctx.link(c.preferences_url))}" style="{link_style}">Gérer mes préférences</a>')
    parts.append(f'<p style="{text_style}">{" &middot; ".join(links)}</p>')
    return _block_row(block, "\n".join(parts), padding=s.get("padding"),
                      background=s["background_color"], align=s["align"])


# ── Contenu ─────────────────────────────────────────────────────────────────

def _render_heading(block: HeadingBlock, ctx: RenderContext) -> str:
    s = ctx.style(block)
    level = block.content.level
    h_style = _style(
        margin=0, font_family=s["font_family"], font_size=s["font_size"], font_weight=s["font_weight"],
        line_height=s["line_height"], letter_spacing=s.get("letter_spacing"), color=s["color"],
        text_align=s["align"],
    )
    inner = f'<h{level} class="eb-heading" style="{h_style}">{_e(block.content.text)}</h{level}>'
    return _block_row(block, inner, padding=s.get("padding"), background=s.get("background_color"),
                      align=s["align"])


def _render_text(block: TextBlock, ctx: RenderContext) -> str:
    s = ctx.style(block)
    p_style = _style(
        margin=0, font_family=s["font_family"], font_size=s["font_size"], font_weight=s["font_weight"],
        line_height=s["line_height"], color=s["color"], text_align=s["align"],
    )
    inner = f'<p style="{p_style}">{_multiline(block.content.text)}</p>'
    return _block_row(block, inner, padding=s.get("padding"), background=s.get("background_color"),
                      align=s["align"])


def _render_hero(block: HeroBlock, ctx: RenderContext) -> str:
    s = ctx.style(block)
    c = block.content
    extra: Dict[str, Any] = {}
    background = s["background_color"]
    gradient = s.get("background_gradient")
    if gradient is not None:
        direction = {"to-right": "to right", "to-bottom": "to bottom", "diagonal": "135deg"}[gradient.direction]
        background = gradient.start
        extra["background_image"] = f"linear-gradient({direction}, {gradient.start}, {gradient.end})"
    parts = [
        f'<h1 class="eb-hero-title" style="'
        f'{_style(margin=0, font_family=s["font_family"], font_size=s["headline_font_size"], font_weight=s["headline_font_weight"], line_height=1.2, color=s["headline_color"], text_align=s["align"])}">'
        f"{_e(c.headline)}</h1>"
    ]
    if c.subheadline:
        parts.append(
            f'<p style="{_style(margin="16px 0 0", font_family=s["font_family"], font_size=s["subheadline_font_size"], line_height=1.5, color=s["subheadline_color"], text_align=s["align"])}">'
            f"{_e(c.subheadline)}</p>"
        )
    if c.image_url:
        width = _content_width(ctx, s)
        parts.append(
            f'<img src="{_e(ctx.image_url(c.image_url))}" alt="" width="{width}" class="eb-fluid" '
            f'style="{_style(display="block", margin="24px auto 0", max_width="100%", height="auto", border=0)}">'
        )
    return _block_row(block, "\n".join(parts), padding=s.get("padding"), background=background,
                      align=s["align"], extra=extra)


def _render_stats(block: StatsBlock, ctx: RenderContext) -> str:
    s = ctx.style(block)
    cells = [
        f'<p style="{_style(margin=0, font_family=s["font_family"], font_size=s["value_font_size"], font_weight=800, line_height=1.1, color=s["value_color"])}">{_e(item.value)}</p>'
        f'<p style="{_style(margin="8px 0 0", font_family=s["font_family"], font_size=s["label_font_size"], line_height=1.4, color=s["label_color"])}">{_e(item.label)}</p>'
        for item in block.content.stats
    ]
    per_row = int(s["layout"].split("-")[0])
    return _block_row(block, _columns_table(cells, per_row, s["align"]), padding=s.get("padding"),
                      background=s.get("background_color"), align=s["align"])


def _render_testimonial(block: TestimonialBlock, ctx: RenderContext) -> str:
    s = ctx.style(block)
    c = block.content
    parts = []
    if c.avatar_url:
        parts.append(
            f'<img src="{_e(ctx.image_url(c.avatar_url))}" alt="{_e(c.author)}" width="48" height="48" '
            f'style="{_style(display="block", border_radius="24px", margin="0 0 16px", border=0)}">'
        )
    parts.append(
        f'<p style="{_style(margin=0, font_family=s["font_family"], font_size=s["quote_font_size"], font_style="italic", line_height=1.6, color=s["quote_color"])}">'
        f"&ldquo;{_e(c.quote)}&rdquo;</p>"
    )
    byline = f"<strong>{_e(c.author)}</strong>"
    details = ", ".join(_e(v) for v in (c.role, c.company) if v)
    if details:
        byline += f" &middot; {details}"
    parts.append(
        f'<p style="{_style(margin="16px 0 0", font_family=s["font_family"], font_size=14, color=s["author_color"])}">{byline}</p>'
    )
    border = f'{s["border_width"]}px solid {s["border_color"]}'
    card = (
        f'<table role="presentation" width="100%" cellpadding="0" cellspacing="0" border="0"><tr>'
        f'<td style="{_style(padding=s.get("padding"), background_color=s["background_color"], border=border, border_radius=s["border_radius"])}">'
        + "\n".join(parts) + "</td></tr></table>"
    )
    return _block_row(block, card, padding="8px 24px")


def _render_feature_grid(block: FeatureGridBlock, ctx: RenderContext) -> str:
    s = ctx.style(block)
    cells = []
    for feature in block.content.features:
        icon = (
            f'<p style="{_style(margin="0 0 8px", font_size=24, line_height=1)}">{_e(feature.icon)}</p>'
            if feature.icon else ""
        )
        cells.append(
            icon
            + f'<p style="{_style(margin=0, font_family=s["font_family"], font_size=s["title_font_size"], font_weight=700, color=s["title_color"])}">{_e(feature.title)}</p>'
            + f'<p style="{_style(margin="8px 0 0", font_family=s["font_family"], font_size=s["description_font_size"], line_height=1.5, color=s["description_color"])}">{_e(feature.description)}</p>'
        )
    per_row = 1 if s["layout"] == "single-col" else int(s["layout"].split("-")[0])
    return _block_row(block, _columns_table(cells, per_row, s["align"]), padding=s.get("padding"),
                      background=s.get("background_color"), align=s["align"])


def _render_comparison(block: ComparisonBlock, ctx: RenderContext) -> str:
    s = ctx.style(block)
    cells = []
    for side, background in ((block.content.before, s["before_background_color"]),
                             (block.content.after, s["after_background_color"])):
        cells.append(
            f'<table role="presentation" width="100%" cellpadding="0" cellspacing="0" border="0"><tr>'
            f'<td style="{_style(padding="24px", background_color=background, border_radius=s["border_radius"])}">'
            f'<p style="{_style(margin="0 0 8px", font_family=s["font_family"], font_size=12, font_weight=700, text_transform="uppercase", letter_spacing="1px", color=s["label_color"])}">{_e(side.label)}</p>'
            f'<p style="{_style(margin=0, font_family=s["font_family"], font_size=s["content_font_size"], line_height=1.5, color=s["content_color"])}">{_multiline(side.text)}</p>'
            f"</td></tr></table>"
        )
    return _block_row(block, _columns_table(cells, 2, "left"), padding=s.get("padding"),
                      background=s.get("background_color"))


# ── Média / action ──────────────────────────────────────────────────────────

def _render_image(block: ImageBlock, ctx: RenderContext) -> str:
    s = ctx.style(block)
    c = block.content
    width = s.get("width") or _content_width(ctx, s)
    height = f' height="{s["height"]}"' if s.get("height") else ""
    img = (
        f'<img src="{_e(ctx.image_url(c.image_url))}" alt="{_e(c.alt_text)}" width="{width}"{height} '
        f'class="eb-fluid" style="{_style(display="block", max_width="100%", height="auto", border=0, border_radius=s.get("border_radius") or None)}">'
    )
    if c.link_url:
        img = f'<a href="{_e(ctx.link(c.link_url))}" target="_blank">{img}</a>'
    parts = [img]
    if c.caption:
        parts.append(
            f'<p style="{_style(margin="8px 0 0", font_family=s["font_family"], font_size=13, line_height=1.4, color="#6b7280", text_align=s["align"])}">{_e(c.caption)}</p>'
        )
    return _block_row(block, "\n".join(parts), padding=s.get("padding"),
                      background=s.get("background_color"), align=s["align"])


def _render_button(block: ButtonBlock, ctx: RenderContext) -> str:
    s = ctx.style(block)
    c = block.content
    href = _e(ctx.link(c.url))
    pad = padding_of(s)
    font_size = s["font_size"]
    if s["style"] == "solid":
        background, color, border = s["color"], s["text_color"], f'2px solid {s["color"]}'
    elif s["style"] == "outline":
        background, color, border = "transparent", s["color"], f'2px solid {s["color"]}'
    else:
        background, color, border = "transparent", s["color"], "none"
    link = (
        f'<a href="{href}" class="eb-button" target="_blank" style="'
        f'{_style(display="inline-block", background_color=background, color=color, border=border, border_radius=s["border_radius"], padding=pad, font_family=s["font_family"], font_size=font_size, font_weight=s["font_weight"], line_height=BUTTON_LINE_HEIGHT, text_decoration="none", text_align="center")}">'
        f"{_e(c.text)}</a>"
    )
    if s["style"] == "solid":
        # Outlook ignore padding/border-radius sur <a> : bouton VML équivalent
        height = round(font_size * BUTTON_LINE_HEIGHT) + pad.top + pad.bottom
        width = max(120, round(len(c.text) * font_size * 0.6) + pad.left + pad.right)
        arcsize = min(50, round(s["border_radius"] * 100 / height))
        vml_text_style = (
            f"color:{color};font-family:{s['font_family']};"
            f"font-size:{font_size}px;font-weight:{s['font_weight']};"
        )
        inner = (
            f"<!--[if mso]>\n"
            f'<v:roundrect xmlns:v="urn:schemas-microsoft-com:vml" xmlns:w="urn:schemas-microsoft-com:office:word" '
            f'href="{href}" style="height:{height}px;v-text-anchor:middle;width:{width}px;" '
            f'arcsize="{arcsize}%" stroke="f" fillcolor="{s["color"]}">\n'
            f"<w:anchorlock/>\n"
            f'<center style="{_e(vml_text_style)}">{_e(c.text)}</center>\n'
            f"</v:roundrect>\n"
            f"<![endif]-->\n"
            f"<!--[if !mso]><!-->{link}<!--<![endif]-->"
        )
    else:
        inner = link
    return _block_row(block, inner, padding=s.get("container_padding"),
                      background=s.get("background_color"), align=s["align"])


def _render_social_links(block: SocialLinksBlock, ctx: RenderContext) -> str:
    s = ctx.style(block)
    size = s["icon_size"]
    half = s["spacing"] // 2
    cells = "".join(
        f'<td style="{_style(padding=f"0 {half}px")}">'
        f'<a href="{_e(ctx.link(link.url))}" target="_blank">'
        f'<img src="{_e(config.SOCIAL_ICON_BASE_URL + link.platform)}" alt="{_e(link.platform)}" '
        f'width="{size}" height="{size}" style="{_style(display="block", border=0)}"></a></td>'
        for link in block.content.links
    )
    inner = (
        f'<table role="presentation" align="{_e(s["align"])}" cellpadding="0" cellspacing="0" border="0">'
        f"<tr>{cells}</tr></table>"
    )
    return _block_row(block, inner, padding=s.get("padding"), background=s.get("background_color"),
                      align=s["align"])


# ── Dispatch ────────────────────────────────────────────────────────────────

def render_block(block: BaseBlock, ctx: Optional[RenderContext] = None) -> str:
    """Rend un bloc en ligne <tr>. RenderError si le type n'a pas de renderer."""
    ctx = ctx or RenderContext()
    match block:
        case LogoBlock():
            return _render_logo(block, ctx)
        case SpacerBlock():
            return _render_spacer(block, ctx)
        case HeadingBlock():
            return _render_heading(block, ctx)
        case TextBlock():
            return _render_text(block, ctx)
        case ImageBlock():
            return _render_image(block, ctx)
        case ButtonBlock():
            return _render_button(block, ctx)
        case DividerBlock():
            return _render_divider(block, ctx)
        case HeroBlock():
            return _render_hero(block, ctx)
        case StatsBlock():
            return _render_stats(block, ctx)
        case TestimonialBlock():
            return _render_testimonial(block, ctx)
        case FeatureGridBlock():
            return _render_feature_grid(block, ctx)
        case ComparisonBlock():
            return _render_comparison(block, ctx)
        case SocialLinksBlock():
            return _render_social_links(block, ctx)
        case FooterBlock():
            return _render_footer(block, ctx)
        case _:
            raise RenderError(f"Aucun renderer pour le type {block.type!r}")


def render_placeholder(block_id: str, block_type: str, reason: str, ctx: RenderContext) -> str:
    """Ligne visible à la place d'un bloc non rendu."""
    cell_style = _style(
        padding="16px 24px", background_color="#fef2f2", border="1px dashed #f87171",
        font_family=ctx.global_settings.font_family, font_size=13, color="#991b1b",
    )
    return (
        f'<tr>\n<td class="eb-block eb-pad" data-block-id="{_e(block_id)}" '
        f'data-render-error="{_e(reason)}" style="{cell_style}">\n'
        f"Bloc &laquo; {_e(block_type)} &raquo; non affiché\n</td>\n</tr>"
    )


def _describe(item: Any, index: int) -> Tuple[str, str]:
    if isinstance(item, Mapping):
        return str(item.get("id") or f"block-{index}"), str(item.get("type") or "inconnu")
    return str(getattr(item, "id", None) or f"block-{index}"), str(getattr(item, "type", None) or "inconnu")


def _coerce(item: BlockInput) -> BaseBlock:
    if isinstance(item, BaseBlock):
        return item
    return _BLOCK_ADAPTER.validate_python(item)


def render_rows(blocks: Sequence[BlockInput], ctx: RenderContext) -> Tuple[List[str], List[BaseBlock]]:
    """Lignes HTML de chaque bloc + blocs effectivement rendus (pour le texte brut)."""
    rows: List[str] = []
    rendered: List[BaseBlock] = []
    for index, item in enumerate(blocks):
        try:
            block = _coerce(item)
        except ValidationError as exc:
            block_id, block_type = _describe(item, index)
            reason = "unknown-type" if block_type not in BLOCK_CLASSES else "invalid"
            log.warning("Bloc %s (%s) non rendu : %s", block_id, block_type, exc.errors()[0]["msg"])
            rows.append(render_placeholder(block_id, block_type, reason, ctx))
            continue
        try:
            rows.append(render_block(block, ctx))
        except RenderError as exc:
            log.warning("Bloc %s (%s) non rendu : %s", block.id, block.type, exc)
            rows.append(render_placeholder(block.id, block.type, "render-error", ctx))
            continue
        rendered.append(block)
    return rows, rendered


def wrap_email(rows: Sequence[str], global_settings: GlobalSettings) -> str:
    """Squelette email : conteneur centré à largeur fixe (table MSO pour Outlook)."""
    gs = global_settings
    container_style = _style(
        max_width=gs.max_width, width="100%", background_color=gs.content_background_color,
        font_family=gs.font_family,
    )
    body = "\n".join(rows)
    return f"""<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.0 Transitional//EN" "http://www.w3.org/TR/xhtml1/DTD/xhtml1-transitional.dtd">
<html xmlns="http://www.w3.org/1999/xhtml" xmlns:v="urn:schemas-microsoft-com:vml" xmlns:o="urn:schemas-microsoft-com:office:office">
<head>
  <meta http-equiv="Content-Type" content="text/html; charset=UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <meta http-equiv="X-UA-Compatible" content="IE=edge">
  <meta name="x-apple-disable-message-reformatting">
  <title></title>
  <!--[if mso]>
  <noscript><xml><o:OfficeDocumentSettings><o:PixelsPerInch>96</o:PixelsPerInch></o:OfficeDocumentSettings></xml></noscript>
  <![endif]-->
  <style type="text/css">{responsive_css(gs)}
  </style>
</head>
<body style="{_style(margin=0, padding=0, background_color=gs.background_color)}">
<table role="presentation" width="100%" cellpadding="0" cellspacing="0" border="0" style="{_style(background_color=gs.background_color)}">
<tr>
<td align="center" style="{_style(padding="24px 0")}">
<!--[if mso]><table role="presentation" width="{gs.max_width}" align="center" cellpadding="0" cellspacing="0" border="0"><tr><td><![endif]-->
<table role="presentation" class="eb-container" width="100%" cellpadding="0" cellspacing="0" border="0" style="{container_style}">
{body}
</table>
<!--[if mso]></td></tr></table><![endif]-->
</td>
</tr>
</table>
</body>
</html>
"""


# ── Point d'entrée public ───────────────────────────────────────────────────

def render(blocks: Sequence[BlockInput], settings: Optional[GlobalSettings] = None, *,
           assets: Optional[Mapping[str, str]] = None,
           merge_tags: Optional[Mapping[str, str]] = None) -> RenderedEmail:
    """
    Rend un document en HTML email + texte brut. Fonction pure : mêmes entrées,
    même sortie octet pour octet.

    Args:
        blocks: blocs validés ou dicts bruts (les dicts invalides deviennent des placeholders)
        settings: réglages globaux (défauts si None)
        assets: table référence d'asset → URL absolue (cf. resolve_assets)
        merge_tags: valeurs des jetons {{clé}} dans les URLs de boutons et du footer
    """
    ctx = RenderContext(
        global_settings=settings or GlobalSettings(),
        assets=dict(assets or {}),
        merge_tags=dict(merge_tags or {}),
    )
    rows, rendered = render_rows(blocks, ctx)
    return RenderedEmail(html=wrap_email(rows, ctx.global_settings), plain_text=render_plain_text(rendered))
