"""Version management for pitchwatch report schema and package."""

# Schema version follows semver: MAJOR.MINOR.PATCH
# MAJOR: Breaking changes to report structure
# MINOR: New fields added (backward compatible)
# PATCH: Bug fixes and clarifications
SCHEMA_VERSION = "1.0.0"

# Package version
PACKAGE_VERSION = "0.1.0"


def get_schema_version() -> str:
    """Get the current report schema version."""
    return SCHEMA_VERSION


def get_package_version() -> str:
    """Get the current package version."""
    return PACKAGE_VERSION


def is_schema_compatible(version: str) -> bool:
    """Check if a report schema version can be read by this package.

    Args:
        version: Schema version to check (e.g., "1.0.0")

    Returns:
        True if compatible (same major version)
    """
    parts = version.split(".")
    current_parts = SCHEMA_VERSION.split(".")
    if len(parts) != 3 or not all(p.isdigit() for p in parts):
        return False
    return parts[0] == current_parts[0]
