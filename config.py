import os

# Logging
LOG_LEVEL = os.getenv("VITALS_LOG_LEVEL", "INFO").upper()

# Defaults
DEFAULT_STRATEGY = os.getenv("VITALS_DEFAULT_STRATEGY", "mobile").lower()
