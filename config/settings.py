"""Central configuration for the HR KPI dashboard."""

from pathlib import Path
from dotenv import load_dotenv
import os

load_dotenv()

# Project root
PROJECT_ROOT = Path(__file__).parent.parent

# Data paths (created on first write, not at import)
DATA_DIR = Path(os.getenv("HR_DASHBOARD_DATA_DIR", PROJECT_ROOT / "data"))
RAW_DATA_DIR = DATA_DIR / "raw"
EXPORTS_DIR = DATA_DIR / "exports"
STATE_DIR = DATA_DIR / "state"
STATE_FILE = STATE_DIR / "dashboard_state.json"

# Dataset size
EMPLOYEE_COUNT = 250
EXPENSE_COUNT = 500

# Optional seed; unset means every session draws a fresh dataset
_seed = os.getenv("HR_DASHBOARD_SEED", "").strip()
RANDOM_SEED = int(_seed) if _seed else None

# Randomized trends instead of prior-period recomputation
DEMO_MODE = os.getenv("HR_DASHBOARD_DEMO_MODE", "false").lower() in ("1", "true", "yes")
