"""Custom exceptions for changelog-md."""


class ChangelogError(Exception):
    """Base exception for changelog-md operations."""


class MissingSectionError(ChangelogError):
    """Requested section does not exist in the changelog."""


class StructuralPreconditionError(ChangelogError):
    """Changelog lacks structure an operation depends on."""


class VersionResolutionError(ChangelogError):
    """Version selector could not be resolved to a concrete version."""


class InvalidVersionError(VersionResolutionError, ValueError):
    """Version string is not a valid semantic version."""


class OutOfOrderVersionError(VersionResolutionError):
    """Version is not greater than the latest released version."""


class CollaboratorError(ChangelogError):
    """Error reported by an external tool or service."""


class FetchError(CollaboratorError):
    """Error during content fetching."""


class LinkResolutionError(CollaboratorError):
    """Link does not match a supported GitHub reference."""


class GitError(CollaboratorError):
    """git command failed."""


class NpmError(CollaboratorError):
    """npm command or package.json handling failed."""
