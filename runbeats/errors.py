"""Exception types raised by RunBeats."""


class RunBeatsError(Exception):
    """Base class for errors the CLI reports to the user."""


class InvalidPaceError(RunBeatsError, ValueError):
    """Pace or cadence that cannot describe a run."""


class CatalogError(RunBeatsError, RuntimeError):
    """Unrecoverable failure talking to the music catalog."""
