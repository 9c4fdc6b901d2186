"""Global settings and configuration."""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Directories
DATA_DIR = PROJECT_ROOT / "data"
LOGS_DIR = PROJECT_ROOT / "logs"

# NLU provider: gemini, anthropic, openai or none (offline heuristics only)
NLU_PROVIDER = os.getenv("NLU_PROVIDER", "gemini").lower()

# API Keys
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY", "")
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")

# Models
GEMINI_API_URL = os.getenv(
    "GEMINI_API_URL",
    "https://generativelanguage.googleapis.com/v1beta"
)
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-1.5-flash")
ANTHROPIC_MODEL = os.getenv("ANTHROPIC_MODEL", "claude-3-5-haiku-20241022")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")

# Interpretation settings
NLU_TIMEOUT_SECONDS = float(os.getenv("NLU_TIMEOUT_SECONDS", "10"))
FALLBACK_CONFIDENCE = 0.6
DEFAULT_NLU_CONFIDENCE = 0.5

# Ledger storage
LEDGER_FILE = Path(os.getenv("LEDGER_FILE", str(DATA_DIR / "transactions.json")))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = Path(os.getenv("LOG_FILE", str(LOGS_DIR / "voice_ledger.log")))

# Currency settings (single currency, Indonesian Rupiah)
CURRENCY_SYMBOL = os.getenv("CURRENCY_SYMBOL", "Rp")
MAX_AMOUNT = 1_000_000_000
