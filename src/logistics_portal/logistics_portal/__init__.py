"""Logistics Portal core package.

Feature modules (layout, attendance, payroll, storage, ...) keep the business
rules in plain services; Flask controllers stay a thin layer on top.
"""
