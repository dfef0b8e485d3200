"""Constants for civicfix."""

from __future__ import annotations

# Collection names, one JSON file each under the data directory
ISSUES_COLLECTION = "issues"
DEPARTMENTS_COLLECTION = "departments"
ARCHIVE_COLLECTION = "archive"


# Default data directory name and the env var that overrides it
DATA_DIR_NAME = ".civicfix"
DATA_DIR_ENV_VAR = "CIVICFIX_DATA_DIR"

# Issue IDs look like ISS-7K2QZ0
ISSUE_ID_PREFIX = "ISS-"
ISSUE_ID_LENGTH = 6
ISSUE_ID_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
ISSUE_ID_PATTERN = r"^ISS-[A-Z0-9]{6}$"

# Default values
DEFAULT_PRIORITY = "medium"
DEFAULT_REPORTER = "Citizen User"
DEFAULT_AUTHORITY = "Authority"

# Prefix for the note appended to updates when an assignment carries instructions
ASSIGNMENT_NOTE_PREFIX = "Assignment note: "

# Seeded once on first initialization, in this order
DEFAULT_DEPARTMENTS: tuple[dict[str, str], ...] = (
    {"id": "electrical", "name": "Electrical Department"},
    {"id": "sanitation", "name": "Sanitation Department"},
    {"id": "public-works", "name": "Public Works Department"},
    {"id": "water-supply", "name": "Water Supply Department"},
    {"id": "traffic", "name": "Traffic Management"},
)

# Color mappings for CLI display
STATUS_COLORS = {
    "pending": "bright_yellow",
    "in-progress": "bright_blue",
    "resolved": "bright_green",
}

PRIORITY_COLORS = {
    "high": "bright_red",
    "medium": "white",
    "low": "bright_black",
}

STATUS_SYMBOLS = {
    "pending": "●",
    "in-progress": "◐",
    "resolved": "✓",
}
