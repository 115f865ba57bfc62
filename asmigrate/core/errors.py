"""Error taxonomy for the migration settings pipeline.

Every fatal condition raised by the pipeline derives from
MigrationSettingsError so the CLI can map it to a distinct exit code.
Soft failures (e.g. the PremiumV3 availability check) are caught inside the
tier resolver and never escape as exceptions.
"""


class MigrationSettingsError(Exception):
    """Base class for all pipeline failures."""


class ValidationError(MigrationSettingsError):
    """Bad or missing required input."""


class AlreadyExistsError(ValidationError):
    """Output file exists and overwrite was not requested."""

    def __init__(self, path) -> None:
        self.path = path
        super().__init__(
            f"Output file already exists: {path}. Use --force to overwrite it."
        )


class ParseError(MigrationSettingsError):
    """Package-results file is missing, unreadable or malformed."""


class EmptyInputError(MigrationSettingsError):
    """Package-results file holds no site with a package path."""


class ResourceLookupError(MigrationSettingsError):
    """An Azure resource lookup failed."""


class ResourceNotFoundError(ResourceLookupError):
    """A required Azure resource does not exist."""


class AuthenticationError(MigrationSettingsError):
    """No access token could be acquired for Azure Resource Manager."""


class SettingsWriteError(MigrationSettingsError):
    """The settings document could not be persisted."""
