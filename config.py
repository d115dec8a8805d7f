"""
Configuration constants for pathtrace.

All tunables live here.  Anything secret or deployment-specific comes from
the environment (a local .env is loaded if present) — never hardcode keys.
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# Playback
# =============================================================================

# Delay between steps, in milliseconds (the UI slider range)
DEFAULT_DELAY_MS = int(os.environ.get("PATHTRACE_DELAY_MS", 400))
MIN_DELAY_MS = 50
MAX_DELAY_MS = 1000

# =============================================================================
# Canvas / layout
# =============================================================================

CANVAS_WIDTH = 900
CANVAS_HEIGHT = 600

# "spring" (force-directed) or "circle"
DEFAULT_LAYOUT = os.environ.get("PATHTRACE_LAYOUT", "spring")
LAYOUT_SEED = int(os.environ.get("PATHTRACE_LAYOUT_SEED", 42))

# =============================================================================
# Graph defaults
# =============================================================================

DEFAULT_ALGORITHM = "dijkstra"

DEFAULT_EDGE_LIST = """A B 4
A D 2
B C 3
B E 1
C F 2
D E 5
E F 3
F G 6"""

# =============================================================================
# Generative graph assistant (Gemini)
# =============================================================================

GEMINI_API_KEY = os.environ.get("GEMINI_API_KEY")
GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"
GEMINI_MODEL = os.environ.get("GEMINI_MODEL", "gemini-2.0-flash")
GEMINI_TIMEOUT = int(os.environ.get("GEMINI_TIMEOUT", 30))

# =============================================================================
# Web app / logging
# =============================================================================

FLASK_SECRET_KEY = os.environ.get("FLASK_SECRET_KEY")
LOG_LEVEL = getattr(logging, os.environ.get("PATHTRACE_LOG_LEVEL", "INFO").upper(), logging.INFO)
