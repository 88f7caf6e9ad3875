"""Attendify package.

This package is organized by feature modules (timetable, attendance, students,
faculty, users, dashboard) with a thin Flask controller layer on top of
service/repository layers.
"""
