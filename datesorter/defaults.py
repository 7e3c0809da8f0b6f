from .models import FileDateType

# Simple, opinionated defaults.
DEFAULT_FILE_DATE_TYPES = "created,modified"

FILE_DATE_TYPE_ALIASES = {
    "c": FileDateType.CREATED, "created": FileDateType.CREATED,
    "m": FileDateType.MODIFIED, "modified": FileDateType.MODIFIED,
    "a": FileDateType.ACCESSED, "accessed": FileDateType.ACCESSED,
}
FILE_DATE_TYPE_CHOICES = ["created (c)", "modified (m)", "accessed (a)"]

# Folder name examples shown in --help
GROUP_BY_EXAMPLES = {
    "week": "2025-W49", "biweekly": "2025-BW01 .. 2025-BW26", "month": "2025-11",
    "trimester": "2025-Q1 .. 2025-Q4", "quadrimester": "2025-QD1 .. 2025-QD3",
    "semester": "2025-H1, 2025-H2", "year": "2025",
}
