"""Application-wide constants."""

MAX_FILE_SIZE_MB = 10
MAX_FILE_SIZE_BYTES = MAX_FILE_SIZE_MB * 1024 * 1024

# (model id, label) pairs offered by the settings command
AVAILABLE_MODELS = [
    ("gemini-1.5-flash-latest", "Gemini 1.5 Flash"),
    ("gemini-pro", "Gemini Pro"),
]

DEFAULT_MODEL = "gemini-1.5-flash-latest"
FALLBACK_MODEL = "gemini-pro"

# Name of the single persisted record
STATE_KEY = "raginfo-state"

DEFAULT_TARGET_SIZE = 1500
DEFAULT_OVERLAP = 200
