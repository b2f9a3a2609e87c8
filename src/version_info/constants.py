"""!
@brief Static data shared by the version metadata reporter.
@details Centralises the compiled-in license and author constants, marker and
manifest file names, record keys, soft-degradation placeholders, and the name
tables used to format dates independently of the host locale.
"""
from __future__ import annotations

import re
from typing import Dict, Final, Tuple

VALUE_LICENSE: Final[str] = "Copyright (c) 2022 Björn Hempel"

VALUE_AUTHORS: Final[Tuple[str, ...]] = ("Björn Hempel <bjoern@hempel.li>",)

PATH_VERSION: Final[str] = "VERSION"
"""!
@brief Marker file holding the authoritative version string.
"""

PATH_MANIFEST: Final[str] = "composer.json"
"""!
@brief Structured metadata document consulted for name and description.
"""

ROOT_ENV_VAR: Final[str] = "VERSION_INFO_ROOT"

INDEX_NAME = "name"
INDEX_DESCRIPTION = "description"
INDEX_VERSION = "version"
INDEX_DATE = "date"
INDEX_LICENSE = "license"
INDEX_AUTHORS = "authors"
INDEX_RUNTIME = "python-version"
INDEX_PACKAGE_MANAGER = "package-manager-version"
INDEX_DEPENDENCY = "dependency-version"

RECORD_KEYS: Tuple[str, ...] = (
    INDEX_NAME,
    INDEX_DESCRIPTION,
    INDEX_VERSION,
    INDEX_DATE,
    INDEX_LICENSE,
    INDEX_AUTHORS,
    INDEX_RUNTIME,
    INDEX_PACKAGE_MANAGER,
    INDEX_DEPENDENCY,
)

REQUIRED_KEYS: Tuple[str, ...] = (INDEX_VERSION, INDEX_DATE, INDEX_LICENSE, INDEX_AUTHORS)

PROFILE_FULL = "full"
PROFILE_MINIMAL = "minimal"

PROFILES: Dict[str, Tuple[str, ...]] = {
    PROFILE_FULL: RECORD_KEYS,
    PROFILE_MINIMAL: REQUIRED_KEYS,
}

DEFAULT_PROFILE = PROFILE_FULL
DEFAULT_PACKAGE_MANAGER = "composer"
DEFAULT_DEPENDENCY = "ixnode/php-exception"
DEFAULT_TIMEOUT = 30.0

VERSION_PATTERN: Final[re.Pattern[str]] = re.compile(r"[0-9]+\.[0-9]+\.[0-9]+")

NOT_AVAILABLE_TEMPLATE = "{tool} is not available"
UNPARSEABLE_TEMPLATE = "Unable to get {tool} version."

# Equivalent of PHP's ``l, F d, Y - H:i:s`` with English names regardless of locale.
WEEKDAY_NAMES: Tuple[str, ...] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

MONTH_NAMES: Tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

DATE_TEMPLATE = "{weekday}, {month} {day:02d}, {year:04d} - {hour:02d}:{minute:02d}:{second:02d}"
