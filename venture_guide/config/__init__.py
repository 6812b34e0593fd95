"""
Configuration package for Venture Guide.

Usage:
    from venture_guide.config import settings as config
    config.NEXT_STEP_LIMIT
"""
