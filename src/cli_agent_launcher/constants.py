"""Constants for CLI Agent Launcher."""

import os
from pathlib import Path

# Home directory for all launcher state (profiles overlay, settings, logs)
CAL_HOME_DIR = Path(os.environ.get("CAL_HOME_DIR", Path.home() / ".cli-agent-launcher"))

# User-editable profiles overlay; bundled defaults live in the agent_store package
PROFILES_FILE = CAL_HOME_DIR / "profiles.json"
DEFAULT_PROFILES_RESOURCE = "default_profiles.json"

# Persisted application settings
SETTINGS_FILE = CAL_HOME_DIR / "config.json"
CURRENT_SETTINGS_VERSION = "v4"
DEFAULT_PROFILE = "claude-code"

# Logging
LOG_DIR = CAL_HOME_DIR / "logs"

# Server configuration
SERVER_HOST = "localhost"
SERVER_PORT = 9890
SERVER_VERSION = "0.1.0"
API_BASE_URL = f"http://{SERVER_HOST}:{SERVER_PORT}"
CORS_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]

# Environment passed to every spawned agent process
AGENT_ENV = {"NODE_NO_WARNINGS": "1"}
