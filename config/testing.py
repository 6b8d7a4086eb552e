import os

from config.config import db_config_from_env

SECRET_KEY = "test-secret"

DB_CONFIG = db_config_from_env(default_password="12345")

DEBUG = False
TESTING = True

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

# Tests pass their own rates; environment overrides are ignored here.
PAYROLL_RATES = {}
PAYROLL_WORK_DAY_POLICY = "COUNT_ALL_RECORDS"
PAGE_LIMIT = 20
