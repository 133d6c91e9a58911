"""Timeclock package.

Organized by feature modules (attendance, summaries, reports, ...) with a thin
Flask controller layer on top of service/repository layers.
"""
