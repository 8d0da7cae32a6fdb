"""
Template Catalog
================
Built-in campaign templates and platform profiles, kept as YAML data, plus
Jinja2 rendering for `{{placeholder}}` personalization.

Features:
- External catalog files (YAML) for the default email template and the
  per-platform posting constraints
- Sandboxed placeholder substitution; listed variables without a value
  render as `[name]`, unlisted placeholders are left as written
- Singleton catalog shared by every agent instance (read-only)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Literal

import yaml
from jinja2 import Template, Undefined
from jinja2.exceptions import SecurityError
from jinja2.sandbox import SandboxedEnvironment
from pydantic import Field

from agent_core.app.schemas.agent_config import EmailTemplate
from agent_core.app.schemas.base import CamelSchema

logger = logging.getLogger(__name__)

# Base path for catalog files
TEMPLATES_DIR = Path(__file__).parent
EMAIL_TEMPLATES_DIR = TEMPLATES_DIR / "email"
SOCIAL_TEMPLATES_DIR = TEMPLATES_DIR / "social"

DEFAULT_EMAIL_TEMPLATE_ID = "default_template"


# =============================================================================
# CATALOG MODELS
# =============================================================================

class PlatformProfile(CamelSchema):
    """Posting constraints of one social platform."""
    name: str
    max_length: int = Field(ge=4)
    hashtag_style: Literal["inline", "end", "minimal"]
    hashtag_limit: int = Field(default=5, ge=0)
    mention_style: str = "@"
    professional: bool = False
    requires_image: bool = False


# =============================================================================
# RENDERING
# =============================================================================

class PlaceholderUndefined(Undefined):
    """
    Placeholders without a value are left in the text verbatim.

    Attribute lookups the sandbox refuses still raise SecurityError.
    """

    def __str__(self) -> str:
        if issubclass(self._undefined_exception, SecurityError):
            self._fail_with_undefined_error()
        return f"{{{{{self._undefined_name}}}}}"


# Sandboxed: template sources arrive in request payloads
_jinja_env = SandboxedEnvironment(
    undefined=PlaceholderUndefined,
    autoescape=False,
    keep_trailing_newline=True,
)


def compile_template(source: str) -> Template:
    """Compile a placeholder template (raises jinja2.TemplateSyntaxError)."""
    return _jinja_env.from_string(source)


def placeholder_context(
    values: dict[str, Any],
    variables: list[str] | None = None,
) -> dict[str, Any]:
    """
    Build the rendering context for one recipient.

    When `variables` is given only those names are filled, and a listed
    name without a value renders as `[name]`. Without `variables` every
    non-empty field is available. Any other placeholder stays as written.
    """
    if variables:
        return {
            name: values[name] if values.get(name) not in (None, "") else f"[{name}]"
            for name in variables
        }
    return {
        name: value
        for name, value in values.items()
        if value not in (None, "")
    }


# =============================================================================
# TEMPLATE CATALOG
# =============================================================================

class TemplateCatalog:
    """
    Loads and caches built-in templates from the YAML catalog files.

    Usage:
        >>> catalog = TemplateCatalog.get_instance()
        >>> template = catalog.default_email_template()
        >>> profile = catalog.platform_profile("twitter")
    """

    _instance: TemplateCatalog | None = None

    def __init__(self, templates_dir: Path | None = None):
        self.templates_dir = templates_dir or TEMPLATES_DIR
        self._email_templates: dict[str, EmailTemplate] = {}
        self._platforms: dict[str, PlatformProfile] = {}
        self._default_platform = "twitter"

        self._load_email_templates()
        self._load_platforms()

        logger.info(
            f"TemplateCatalog initialized with {len(self._email_templates)} email templates "
            f"and {len(self._platforms)} platform profiles"
        )

    @classmethod
    def get_instance(cls) -> TemplateCatalog:
        """Get singleton instance of TemplateCatalog."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def _load_yaml(self, file_path: Path) -> Any:
        with open(file_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)

    def _load_email_templates(self) -> None:
        """Load all YAML email templates."""
        email_dir = self.templates_dir / "email"
        if not email_dir.exists():
            logger.warning(f"Email templates directory not found: {email_dir}")
            return

        for yaml_file in sorted(email_dir.glob("*.yaml")):
            try:
                data = self._load_yaml(yaml_file)
                entries = data if isinstance(data, list) else [data]
                for entry in entries:
                    template = EmailTemplate.model_validate(entry)
                    self._email_templates[template.id] = template
                    logger.debug(f"Loaded email template: {template.id}")
            except Exception as e:
                logger.error(f"Failed to load email template {yaml_file}: {e}")

    def _load_platforms(self) -> None:
        """Load social platform profiles."""
        platforms_file = self.templates_dir / "social" / "platforms.yaml"
        if not platforms_file.exists():
            logger.warning(f"Platform catalog not found: {platforms_file}")
            return

        data = self._load_yaml(platforms_file) or {}
        self._default_platform = data.get("default_platform", self._default_platform)
        for name, profile in (data.get("platforms") or {}).items():
            self._platforms[name] = PlatformProfile.model_validate({"name": name, **profile})

    def email_template(self, template_id: str) -> EmailTemplate:
        """
        Get an email template by id.

        Raises:
            KeyError: If the template is not in the catalog
        """
        if template_id not in self._email_templates:
            raise KeyError(f"Email template not found: {template_id}")
        return self._email_templates[template_id]

    def default_email_template(self) -> EmailTemplate:
        return self.email_template(DEFAULT_EMAIL_TEMPLATE_ID)

    def platform_profile(self, platform: str) -> PlatformProfile:
        """Profile for `platform`; unknown platforms use the default profile."""
        profile = self._platforms.get(platform.lower())
        if profile is None:
            profile = self._platforms[self._default_platform]
        return profile

    def list_platforms(self) -> list[str]:
        return list(self._platforms)


__all__ = [
    "PlatformProfile",
    "PlaceholderUndefined",
    "TemplateCatalog",
    "compile_template",
    "placeholder_context",
    "DEFAULT_EMAIL_TEMPLATE_ID",
    "TEMPLATES_DIR",
]
