"""Worksite Ledger package.

Construction-site labor, payroll, expense and checklist bookkeeping, organized
by feature modules (sites, workers, worklogs, ...) on top of a single
in-memory snapshot that is kept in sync with a remote row store.
"""
