"""Workforce payroll package.

Organized by feature modules (attendance, contracts, payroll) with a thin
Flask controller layer over service/repository layers.
"""
