"""
Venture Guide - Diagnosis & Next-Step Guidance Engine

Given a fixed, ordered curriculum of assets organized into stages and a
project's completion record, this package:
- Determines which assets are currently workable
- Ranks them into a prioritized action list with justification
- Detects assets whose prerequisites are unmet
- Estimates completion velocity and forecasts a completion date

Main Modules:
- curriculum: Static stage/asset definitions and loading
- engine: The pure diagnosis engine
- storage: Project stores for requirement overrides and completion history
- core: GuidanceService connecting storage to the engine
- config: Environment-based settings

Usage:
    from venture_guide.core import GuidanceService
    from venture_guide.storage import ProjectStore

    service = GuidanceService(ProjectStore())
    result = service.diagnose("my-venture")
"""

__version__ = "0.1.0"
__author__ = "Venture Guide Team"

__all__ = ["__version__", "__author__"]
