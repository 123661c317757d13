"""
Configuration
=============
Loads environment variables from .env file using python-dotenv.

Environment Variables:
    BUILD_SERVER_URL       - Base URL of the build server REST API (required by /build-finished)
    BUILD_SERVER_TOKEN     - Bearer token for the build server (optional)
    BUILD_SERVER_TIMEOUT   - HTTP timeout in seconds for build server calls (default: 20)
    CULPRIT_SETTINGS_FILE  - YAML file with per-build-type culprit finding settings
                             (default: culprit_settings.yml)
    LOG_LEVEL              - Root log level (default: INFO)
    LOG_DIR                - Directory for the daily log file (default: logs)

Settings vs Configuration:
    Values here describe the deployment (where the build server lives, where
    logs go). Per-build-type behaviour (sensitivity, tag names) is NOT read
    from the environment; it arrives with each event or from the settings
    file and is parsed by core/settings.py.
"""
import os
from dotenv import load_dotenv

load_dotenv()

BUILD_SERVER_URL = os.getenv("BUILD_SERVER_URL", "")
BUILD_SERVER_TOKEN = os.getenv("BUILD_SERVER_TOKEN", "")
BUILD_SERVER_TIMEOUT = float(os.getenv("BUILD_SERVER_TIMEOUT", 20.0))

CULPRIT_SETTINGS_FILE = os.getenv("CULPRIT_SETTINGS_FILE", "culprit_settings.yml")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = os.getenv("LOG_DIR", "logs")
