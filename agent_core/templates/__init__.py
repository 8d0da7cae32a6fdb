"""
Templates Module
================
Built-in email templates and social platform profiles.
"""

from agent_core.templates.base import (
    # Models
    PlatformProfile,
    # Rendering
    PlaceholderUndefined,
    compile_template,
    placeholder_context,
    # Catalog
    TemplateCatalog,
    # Constants
    DEFAULT_EMAIL_TEMPLATE_ID,
    TEMPLATES_DIR,
)

__all__ = [
    # Models
    "PlatformProfile",
    # Rendering
    "PlaceholderUndefined",
    "compile_template",
    "placeholder_context",
    # Catalog
    "TemplateCatalog",
    # Constants
    "DEFAULT_EMAIL_TEMPLATE_ID",
    "TEMPLATES_DIR",
]
