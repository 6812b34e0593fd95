"""Core services that connect storage to the guidance engine."""

from venture_guide.core.guidance_service import GuidanceService

__all__ = ["GuidanceService"]
