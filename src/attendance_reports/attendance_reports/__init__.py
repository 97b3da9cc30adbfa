"""Attendance Reports package.

Punch-log uploads are reconciled into per-day attendance records, scheduled
against department shift rules and summarised. Organized by feature modules
(punches, attendance, shifts, delays, summary, reports, overrides) with a thin
Flask controller layer over service/repository layers.
"""
