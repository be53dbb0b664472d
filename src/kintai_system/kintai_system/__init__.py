"""Kintai System package.

Attendance (clock in/out) and daily effort reports, organized by feature
modules (users, attendance, reports, tags, analytics, ...) with a thin Flask
controller layer over service and repository layers.
"""
