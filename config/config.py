"""Settings shared by every environment module."""

import os

# env var -> PayrollRates field
PAYROLL_RATE_ENV = {
    "PAYROLL_MINIMUM_WAGE": "minimum_wage",
    "PAYROLL_MONTHLY_WORK_HOURS": "monthly_work_hours",
    "PAYROLL_STANDARD_DAILY_HOURS": "standard_daily_hours",
    "PAYROLL_OVERTIME_MULTIPLIER": "overtime_multiplier",
    "PAYROLL_NIGHT_MULTIPLIER": "night_multiplier",
    "PAYROLL_NATIONAL_PENSION_RATE": "national_pension_rate",
    "PAYROLL_HEALTH_INSURANCE_RATE": "health_insurance_rate",
    "PAYROLL_LONG_TERM_CARE_RATE": "long_term_care_rate",
    "PAYROLL_EMPLOYMENT_INSURANCE_RATE": "employment_insurance_rate",
    "PAYROLL_INCOME_TAX_RATE": "income_tax_rate",
    "PAYROLL_LOCAL_INCOME_TAX_RATE": "local_income_tax_rate",
}


def payroll_rates_from_env() -> dict:
    """Only the rates set in the environment; the rest keep code defaults."""
    return {field: os.environ[name] for name, field in PAYROLL_RATE_ENV.items() if os.environ.get(name)}


def db_config_from_env(default_password: str = "") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "payroll_db"),
    }
