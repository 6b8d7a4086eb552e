import os

from config.config import db_config_from_env, payroll_rates_from_env

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = db_config_from_env()

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also load seed.sql (default labor law version, demo contracts)
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

PAYROLL_RATES = payroll_rates_from_env()
PAYROLL_WORK_DAY_POLICY = os.getenv("PAYROLL_WORK_DAY_POLICY", "COUNT_ALL_RECORDS")
PAGE_LIMIT = int(os.getenv("PAGE_LIMIT", "20"))
