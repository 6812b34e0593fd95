"""
Configuration module for Venture Guide.

Values are read from environment variables (optionally loaded from a .env file).
The diagnosis engine itself never reads this module directly; callers pass the
relevant values in so the engine stays a pure function of its inputs.
"""
import os

# Load environment variables from .env file (if present)
# This must happen before any os.getenv() calls
try:
    from dotenv import load_dotenv
    load_dotenv()
except ImportError:
    # python-dotenv not installed, skip .env loading
    pass

# --- Storage Configuration ---
PROJECT_STORE_PATH = os.getenv("PROJECT_STORE_PATH", "project_store")

# --- Curriculum Configuration ---
# Optional JSON file replacing the built-in Co-Build curriculum
CURRICULUM_PATH = os.getenv("CURRICULUM_PATH")

# --- Recommendation Configuration ---
NEXT_STEP_LIMIT = int(os.getenv("NEXT_STEP_LIMIT", "5"))
DIAGNOSIS_ACTION_LIMIT = int(os.getenv("DIAGNOSIS_ACTION_LIMIT", "3"))
DEFAULT_ASSET_DAYS = int(os.getenv("DEFAULT_ASSET_DAYS", "5"))

# --- Velocity Configuration ---
MIN_ITEMS_PER_WEEK = float(os.getenv("MIN_ITEMS_PER_WEEK", "0.1"))
