"""Configuration constants.

Values here are defaults or fixed formats, not user settings.
For configurable values, see models.py.
"""

# =============================================================================
# Defaults
# =============================================================================

DEFAULT_CURRENT_VERSION = "1.0.0"
"""Version assumed for the old snapshot when none is given."""

DEFAULT_OUTPUT_FILE = "CHANGELOG.md"

DEFAULT_EXTENSIONS = (".php",)

DEFAULT_IGNORE_PATTERNS = ("*/vendor/*", "*/tests/*", "*/test/*")
"""Dependencies and test suites are not public API."""

# =============================================================================
# Discovery
# =============================================================================

PRUNED_DIRS = frozenset({".git", ".hg", ".svn", "node_modules"})
"""Directories never descended into, regardless of ignore patterns."""

PROJECT_CONFIG_NAME = ".apichangelog.yaml"

# =============================================================================
# Rendering
# =============================================================================

CHANGELOG_HEADING = "# Changelog"
DATE_FORMAT = "%Y-%m-%d"
