"""Exception types raised by the acceptance runner."""


class RepositoryError(Exception):
    """Base class for failures while resolving documents."""


class NotFoundError(RepositoryError):
    """Requested page does not exist in the wiki."""

    def __init__(self, name: str):
        super().__init__(f"Page {name} not found")
        self.name = name


class NotASuiteError(RepositoryError):
    """A suite run was requested against a page not marked as a suite."""

    def __init__(self, name: str):
        super().__init__(f"Page {name} is not a suite")
        self.name = name


class ContentFormatError(RepositoryError):
    """Page markup could not be rendered (e.g. unbalanced table tags)."""


class ConfigError(ValueError):
    """Invalid run configuration."""


class FixtureError(Exception):
    """A fixture named in a table could not be loaded."""
