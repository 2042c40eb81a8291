"""Offset bounds, timestamp layout and platform command definitions.

Centralized constants shared by the offset model, the resolver and the formatter.
"""

from __future__ import annotations

import re

# ============================================================================
# Offset Bounds
# ============================================================================

OFFSET_HOURS_MIN = -12
OFFSET_HOURS_MAX = 14
OFFSET_MINUTES_MIN = 0
OFFSET_MINUTES_MAX = 59

# Signed total minutes covered by the hour/minute bounds (-12:59 .. +14:59)
OFFSET_TOTAL_MINUTES_MIN = OFFSET_HOURS_MIN * 60 - OFFSET_MINUTES_MAX
OFFSET_TOTAL_MINUTES_MAX = OFFSET_HOURS_MAX * 60 + OFFSET_MINUTES_MAX

# ============================================================================
# Grammar and Layout
# ============================================================================

# [+|-]HH[:]MM, sign optional
OFFSET_STRING_PATTERN = re.compile(r"^(?P<sign>[+-])?(?P<hours>[0-9]{2}):?(?P<minutes>[0-9]{2})$")

# YYYY-MM-DDTHH:MM:SS±HH:MM
TIMESTAMP_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}[+-]\d{2}:\d{2}$", re.ASCII)

# ============================================================================
# Platform Commands
# ============================================================================

# Windows prints the offset as ±HH:MM
WINDOWS_OFFSET_COMMAND = ("powershell", "Get-Date", "-Format", "K")
# POSIX date prints the offset as ±HHMM
POSIX_OFFSET_COMMAND = ("date", "+%z")

# ============================================================================
# Environment Variables
# ============================================================================

ENV_OFFSET = "LOCALSTAMP_OFFSET"
ENV_COMMAND_FALLBACK = "LOCALSTAMP_COMMAND_FALLBACK"
ENV_LOG_LEVEL = "LOCALSTAMP_LOG_LEVEL"
