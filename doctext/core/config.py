import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables (only in development)
# In containers, environment variables are set directly
if os.getenv("ENVIRONMENT") != "production":
    load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent.parent

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_TO_FILE = os.getenv("LOG_TO_FILE", "false").lower() == "true"
LOG_DIR = Path(os.getenv("LOG_DIR", "logs"))

# Heuristic plain-text sniff for buffers no hint could classify
SNIFF_SAMPLE_SIZE = int(os.getenv("SNIFF_SAMPLE_SIZE", "4096"))
SNIFF_PRINTABLE_RATIO = float(os.getenv("SNIFF_PRINTABLE_RATIO", "0.8"))

# Raw byte scan used as the last resort for legacy Word (.doc) files
LEGACY_DOC_MIN_RUN_LENGTH = int(os.getenv("LEGACY_DOC_MIN_RUN_LENGTH", "5"))
LEGACY_DOC_MIN_UNIQUE_RATIO = float(os.getenv("LEGACY_DOC_MIN_UNIQUE_RATIO", "0.3"))
LEGACY_DOC_MAX_CHAR_REPEAT = int(os.getenv("LEGACY_DOC_MAX_CHAR_REPEAT", "5"))

# Size of the raw-text sample attached to exhaustion errors for logging
DIAGNOSTIC_SAMPLE_CHARS = int(os.getenv("DIAGNOSTIC_SAMPLE_CHARS", "200"))
