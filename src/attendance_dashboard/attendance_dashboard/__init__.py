"""Attendance Dashboard package.

Organized by feature modules (users, members, courses, sessions, attendance)
around a single in-memory entity store, with read-only query and reporting
layers and a thin Flask controller layer on top.
"""
