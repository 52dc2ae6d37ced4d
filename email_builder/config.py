"""
Configuration email_builder — constantes lues depuis l'environnement.
"""
import os

HISTORY_LIMIT = int(os.getenv("EMAIL_BUILDER_HISTORY_LIMIT", "50"))

PLACEHOLDER_IMAGE_URL = os.getenv(
    "EMAIL_BUILDER_PLACEHOLDER_IMAGE_URL",
    "https://placehold.co/600x300/e5e7eb/6b7280.png?text=Image",
)

SOCIAL_ICON_BASE_URL = os.getenv(
    "EMAIL_BUILDER_SOCIAL_ICON_BASE_URL",
    "https://placehold.co/64x64/png?text=",
)

MOBILE_BREAKPOINT = int(os.getenv("EMAIL_BUILDER_MOBILE_BREAKPOINT", "480"))
MAX_WIDTH = int(os.getenv("EMAIL_BUILDER_MAX_WIDTH", "600"))

# Nombre maximal de passes d'auto_fix_all avant abandon
AUTO_FIX_MAX_PASSES = int(os.getenv("EMAIL_BUILDER_AUTO_FIX_MAX_PASSES", "10"))

# Application autonome (email_builder.app)
LOG_LEVEL = os.getenv("EMAIL_BUILDER_LOG_LEVEL", "INFO")
CORS_ORIGINS = os.getenv("EMAIL_BUILDER_CORS_ORIGINS", "*").split(",")
