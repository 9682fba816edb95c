"""Punch Ledger package.

Reconciles raw clock-in/clock-out punches into per-employee ledgers of
bucketed worked hours, absence totals, annual credits and anomalies.
Organised by feature modules (punches, shifts, intervals, buckets, ...)
with a thin Flask controller layer on top of pure services.
"""
