import os

from config.config import db_config_from_env, payroll_rates_from_env

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = db_config_from_env()

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

PAYROLL_RATES = payroll_rates_from_env()
PAYROLL_WORK_DAY_POLICY = os.getenv("PAYROLL_WORK_DAY_POLICY", "COUNT_ALL_RECORDS")
PAGE_LIMIT = int(os.getenv("PAGE_LIMIT", "20"))
