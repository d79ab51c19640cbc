"""
Configuration for assignment capture.

Defaults live here as module constants. Deployment-specific values can be
overridden with environment variables.
"""

import os
from pathlib import Path

from .models import FALLBACK_TITLE

# Timezone used to interpret dates and times found on pages
DEFAULT_TIMEZONE = os.getenv("CAPTURE_TIMEZONE", "America/Toronto")

# Remote task API
PROD_ORIGIN = "https://polychrome.appwrite.network"
DEV_ORIGIN = "http://localhost:3000"
API_TASKS_PATH = "/api/tasks"

# 'prod', 'dev' or a custom http(s) origin
DEFAULT_ORIGIN_MODE = os.getenv("CAPTURE_API_MODE", "prod")

# Settings key for the stored origin mode
ORIGIN_MODE_KEY = "apiOriginMode"

# Local data directory (settings database)
DATA_DIR = Path(os.getenv("CAPTURE_DATA_DIR", str(Path.home() / ".assignment_capture")))

# Network timeout for HTTP requests (seconds)
REQUEST_TIMEOUT = 10

# User-Agent string sent when fetching pages and posting tasks
USER_AGENT = "AssignmentCapture/0.1"

# Candidate text length window (characters, after trimming)
MIN_BLOCK_LENGTH = 8
MAX_BLOCK_LENGTH = 1000

# Title used when a page offers no heading or title at all
DEFAULT_TITLE = FALLBACK_TITLE
