"""Regex patterns for optional schema parameters worth keeping.

Kept in a standalone module so config.py and core/tools.py can share them
without importing each other. Matching is case-insensitive ``re.search``.
"""

DEFAULT_IMPORTANT_PARAM_PATTERNS: list[str] = [
    r"filter",
    r"search",
    r"query",
    r"level",
    r"status",
    r"type",
    r"id",
    r"code",
    r"name",
    r"location",
    r"date",
    r"time",
    # Contaminant-specific filters
    r"explosive",
    r"hcl",
    r"so2",
]
