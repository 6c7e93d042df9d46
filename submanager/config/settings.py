"""
Configuration management - loads and validates environment variables
"""
import os
import sys
from pathlib import Path
from typing import Set
from dotenv import load_dotenv

env_path = Path(__file__).resolve().parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

# ============================================
# Bot Configuration
# ============================================

# Checked at startup in bot.py so the package imports without a token.
BOT_TOKEN = os.getenv("BOT_TOKEN", "")

ADMINS_STR = os.getenv("ADMINS", "")
ADMINS: Set[int] = set()

if ADMINS_STR:
    try:
        ADMINS = {int(x.strip()) for x in ADMINS_STR.split(",") if x.strip()}
    except ValueError:
        print("❌ Error: ADMINS must be comma-separated integers!")
        sys.exit(1)

# ============================================
# Renewal Defaults
# ============================================

try:
    DEFAULT_RENEWAL_MONTHS = int(os.getenv("DEFAULT_RENEWAL_MONTHS", "1"))
    DEFAULT_TOTAL_SLOTS = int(os.getenv("DEFAULT_TOTAL_SLOTS", "5"))
except ValueError:
    print("❌ Error: Renewal defaults must be integers!")
    sys.exit(1)

if DEFAULT_RENEWAL_MONTHS < 1:
    print(f"⚠️  Warning: Invalid DEFAULT_RENEWAL_MONTHS ({DEFAULT_RENEWAL_MONTHS}), using 1")
    DEFAULT_RENEWAL_MONTHS = 1

if DEFAULT_TOTAL_SLOTS < 1:
    print(f"⚠️  Warning: Invalid DEFAULT_TOTAL_SLOTS ({DEFAULT_TOTAL_SLOTS}), using 5")
    DEFAULT_TOTAL_SLOTS = 5

# ============================================
# Scheduler Configuration
# ============================================

try:
    DAILY_REPORT_HOUR = int(os.getenv("DAILY_REPORT_HOUR", "9"))
    DAILY_REPORT_MINUTE = int(os.getenv("DAILY_REPORT_MINUTE", "0"))
except ValueError:
    print("❌ Error: Scheduler values must be integers!")
    sys.exit(1)

if not (0 <= DAILY_REPORT_HOUR <= 23):
    print(f"⚠️  Warning: Invalid DAILY_REPORT_HOUR ({DAILY_REPORT_HOUR}), using 9")
    DAILY_REPORT_HOUR = 9

if not (0 <= DAILY_REPORT_MINUTE <= 59):
    print(f"⚠️  Warning: Invalid DAILY_REPORT_MINUTE ({DAILY_REPORT_MINUTE}), using 0")
    DAILY_REPORT_MINUTE = 0

# ============================================
# Gemini Configuration
# ============================================

GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

try:
    GEMINI_TIMEOUT_SECONDS = float(os.getenv("GEMINI_TIMEOUT_SECONDS", "30"))
except ValueError:
    print("❌ Error: GEMINI_TIMEOUT_SECONDS must be a number!")
    sys.exit(1)

# ============================================
# Database Configuration
# ============================================

DATABASE_PATH = os.getenv("DATABASE_PATH", "data.db")

# ============================================
# Timezone
# ============================================

TIMEZONE = os.getenv("TIMEZONE", "UTC")

# ============================================
# Export all settings
# ============================================

__all__ = [
    'BOT_TOKEN',
    'ADMINS',
    'DEFAULT_RENEWAL_MONTHS',
    'DEFAULT_TOTAL_SLOTS',
    'DAILY_REPORT_HOUR',
    'DAILY_REPORT_MINUTE',
    'GEMINI_API_KEY',
    'GEMINI_MODEL',
    'GEMINI_TIMEOUT_SECONDS',
    'DATABASE_PATH',
    'TIMEZONE'
]
