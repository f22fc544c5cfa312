import os

from utils.logging_setup import setup_logging

# --- Core settings ---
OUTPUT_DIR: str = "output"
STATE_FILE: str = os.environ.get(
    "CONSISTENCY_STATE", os.path.join(OUTPUT_DIR, "consistency_state.json")
)

# --- Payout program rules (sync met RuleProfile defaults) ---
MIN_WITHDRAWAL_PROFIT: float = 35.0   # minimum net profit before a payout
PROFIT_SPLIT: float = 0.80            # trader keeps 80%
VALID_DAY_PCT: float = 0.005          # 0.5% of account size counts as a trading day
RISKY_PCT_OF_HIGH: float = 0.95       # daily target this close to the high day is flagged

# --- Input bounds ---
MIN_DAYS: int = 1
MAX_DAYS: int = 100
MIN_PLANNED_DAYS: int = 3
MAX_PLANNED_DAYS: int = 30

# --- Defaults for a fresh snapshot ---
DEFAULT_PROGRAM: str = "15_promo"
DEFAULT_ACCOUNT_SIZE: int = 1_000
DEFAULT_NUM_DAYS: int = 5
DEFAULT_PLANNED_DAYS: int = 5
DEFAULT_PAYOUT_GOAL: float = MIN_WITHDRAWAL_PROFIT * PROFIT_SPLIT  # $28

# --- Display ---
FX_URL: str = "https://api.exchangerate-api.com/v4/latest/USD"
FX_CURRENCY: str = "INR"
DEFAULT_EXCHANGE_RATE: float = 86.0
FX_TIMEOUT: float = 5.0

# --- Logging ---
LOG_LEVEL: str = os.environ.get("CONSISTENCY_LOG_LEVEL", "WARNING")
LOG_FILE: str | None = os.environ.get("CONSISTENCY_LOG_FILE")

logger = setup_logging(LOG_LEVEL, LOG_FILE)
