"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
Statutory rates are only defaults for ``PayrollRates``; services receive
rates explicitly.
"""

# 2025 minimum hourly wage (KRW)
DEFAULT_MINIMUM_WAGE = 10030

# 40h/week x 4.345 weeks, rounded as the labor ministry does
MONTHLY_WORK_HOURS = 209
DAILY_WORK_HOURS = 8

FULL_DAY_HOURS = 8
HALF_DAY_HOURS = 4
FULL_DAY_BREAK_HOURS = 1
HALF_DAY_BREAK_HOURS = 0.5

OVERTIME_MULTIPLIER = 1.5
NIGHT_MULTIPLIER = 0.5

NATIONAL_PENSION_RATE = 0.045
HEALTH_INSURANCE_RATE = 0.03545
# share of the health insurance premium, not of gross pay
LONG_TERM_CARE_RATE = 0.1281
EMPLOYMENT_INSURANCE_RATE = 0.009
# flat approximation of the simplified withholding table
INCOME_TAX_RATE = 0.03
LOCAL_INCOME_TAX_RATE = 0.1

DEFAULT_PAGE_LIMIT = 20
MAX_PAGE_LIMIT = 100

RATES_CACHE_SECONDS = 60 * 60
