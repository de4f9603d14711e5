"""
tminvert Configuration
Loads environment variables and defines project-wide constants.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

# ── Tape ─────────────────────────────────────────────────────────────
DEFAULT_SYMBOL: str = os.getenv("TM_DEFAULT_SYMBOL", "_")
WINDOW_PADDING: int = int(os.getenv("TM_WINDOW_PADDING", "2"))

# ── Rule Tables ──────────────────────────────────────────────────────
# Lines starting with this marker are ignored by MachineSpec.parse.
COMMENT_MARKER: str = os.getenv("TM_COMMENT_MARKER", "#")

# ── Exploration ──────────────────────────────────────────────────────
MAX_STEPS: int = int(os.getenv("TM_MAX_STEPS", "1000"))
MAX_DEPTH: int = int(os.getenv("TM_MAX_DEPTH", "3"))

# ── Logging ──────────────────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("TM_LOG_LEVEL", "INFO")

# ── Paths ────────────────────────────────────────────────────────────
PROJECT_ROOT: Path = Path(__file__).resolve().parent
