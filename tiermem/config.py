"""Host-side settings loaded from environment variables.

The engine itself never reads the environment; these settings are for the
process that owns it.
"""

from __future__ import annotations

import os

from tiermem.engine import MemoryEngine
from tiermem.logger import setup_logging
from tiermem.models import MemoryCapabilities
from tiermem.profiles import get_profile


class MemorySettings:
    """Configuration for a process hosting memory engines.

    Prefix: TIERMEM_ for all settings.
    """

    log_level: str
    log_service: str
    profile: str

    def __init__(self) -> None:
        self.log_level = os.environ.get("TIERMEM_LOG_LEVEL", "info")
        self.log_service = os.environ.get("TIERMEM_LOG_SERVICE", "tiermem")
        self.profile = os.environ.get("TIERMEM_PROFILE", "default")

    def capabilities(self) -> MemoryCapabilities:
        return get_profile(self.profile)


def build_engine(settings: MemorySettings | None = None) -> MemoryEngine:
    """Configure logging from *settings* and return an engine for its profile.

    Must be called once at host startup, before any other engine logs.
    """
    settings = settings or MemorySettings()
    setup_logging(service=settings.log_service, level=settings.log_level)
    return MemoryEngine(settings.capabilities())
