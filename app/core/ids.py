# app/core/ids.py

"""Bounds shared by every integer identifier (all primary keys are 32-bit INTEGER columns)."""

MIN_ID = 1
MAX_ID = 2**31 - 1
