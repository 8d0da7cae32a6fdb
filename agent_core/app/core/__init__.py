"""
Core application modules.

Dependencies live in `agent_core.app.core.dependencies` and are imported
from there; they pull in the agent layer, which itself reads config.
"""

from agent_core.app.core.config import Settings, get_settings
from agent_core.app.core.logging_config import configure_logging

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Logging
    "configure_logging",
]
