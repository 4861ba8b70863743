"""Attendance ledger package.

Organized by feature modules (attendance, notifications, reports, users, ...)
with a thin Flask controller layer over service/repository layers. All state
lives behind a key/value storage port shared by every open session.
"""
