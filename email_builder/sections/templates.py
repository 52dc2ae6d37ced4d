"""
Sections prédéfinies — groupes de blocs prêts à insérer.
Les ids sont des placeholders : ils sont remplacés à chaque insertion.
"""
from ..blocks import (
    ButtonBlock, ButtonContent,
    ComparisonBlock, ComparisonContent, ComparisonSide,
    FeatureGridBlock, FeatureGridContent, FeatureItem,
    HeadingBlock, HeadingContent,
    HeroBlock, HeroContent,
    SpacerBlock,
    StatsBlock, StatsContent, StatItem,
    TestimonialBlock, TestimonialContent,
    TextBlock, TextContent,
)
from ..core.schemas import SectionTemplate


HERO_WITH_CTA = SectionTemplate(
    id="hero-with-cta",
    name="Hero + CTA",
    category="hero",
    description="Accroche principale, paragraphe d'appui et bouton d'action",
    tags=("hero", "cta", "ouverture"),
    blocks=(
        HeroBlock(id="tpl-hero", content=HeroContent(
            headline="Lancez votre prochaine campagne",
            subheadline="Tout ce qu'il faut pour écrire des emails qui convertissent.",
        )),
        TextBlock(id="tpl-text", content=TextContent(
            text="Découvrez comment nos clients gagnent du temps à chaque envoi.",
        )),
        ButtonBlock(id="tpl-button", content=ButtonContent(
            text="Commencer", url="https://example.com/start",
        )),
    ),
)

SOCIAL_PROOF = SectionTemplate(
    id="social-proof",
    name="Preuve sociale",
    category="social-proof",
    description="Chiffres clés suivis d'un témoignage client",
    tags=("stats", "témoignage", "confiance"),
    blocks=(
        StatsBlock(id="tpl-stats", content=StatsContent(stats=[
            StatItem(value="10 000+", label="Clients"),
            StatItem(value="4,9/5", label="Note moyenne"),
            StatItem(value="99,9%", label="Disponibilité"),
        ])),
        SpacerBlock(id="tpl-spacer"),
        TestimonialBlock(id="tpl-testimonial", content=TestimonialContent(
            quote="Nous avons doublé notre taux d'ouverture en un trimestre.",
            author="Julien Moreau",
            role="Responsable CRM",
            company="Atelier Nord",
        )),
    ),
)

FEATURE_SHOWCASE = SectionTemplate(
    id="feature-showcase",
    name="Fonctionnalités",
    category="features",
    description="Titre de section et grille de fonctionnalités",
    tags=("fonctionnalités", "produit", "grille"),
    blocks=(
        HeadingBlock(id="tpl-heading", content=HeadingContent(text="Pourquoi nous choisir", level=2)),
        FeatureGridBlock(id="tpl-features", content=FeatureGridContent(features=[
            FeatureItem(icon="⚡", title="Rapide", description="Un email prêt en quelques minutes."),
            FeatureItem(icon="🎯", title="Ciblé", description="Des contenus adaptés à chaque segment."),
            FeatureItem(icon="📈", title="Mesurable", description="Suivez chaque clic et chaque conversion."),
            FeatureItem(icon="🔒", title="Fiable", description="Un rendu testé sur les principaux clients mail."),
        ])),
    ),
)

BEFORE_AFTER = SectionTemplate(
    id="before-after",
    name="Avant / Après",
    category="comparison",
    description="Titre et comparaison avant / après",
    tags=("comparaison", "transformation"),
    blocks=(
        HeadingBlock(id="tpl-heading", content=HeadingContent(text="Ce qui change pour vous", level=2)),
        ComparisonBlock(id="tpl-comparison", content=ComparisonContent(
            before=ComparisonSide(label="Avant", text="Des heures passées à ajuster la mise en page."),
            after=ComparisonSide(label="Après", text="Une mise en page cohérente, générée en un clic."),
        )),
    ),
)

BUILTIN_SECTIONS = (HERO_WITH_CTA, SOCIAL_PROOF, FEATURE_SHOWCASE, BEFORE_AFTER)
