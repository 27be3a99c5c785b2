"""Exception hierarchy for devpulse."""


class DevpulseError(Exception):
    """Base class for all devpulse errors."""


class StoreUnavailable(DevpulseError):
    """The backing database could not be opened or is already closed."""


class QueryError(DevpulseError):
    """A single SQL statement failed.

    Attributes:
        message: The driver's error message.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InitializationError(DevpulseError):
    """Schema creation or seeding failed.

    Attributes:
        failed_tables: Tables whose seeding did not complete.
    """

    def __init__(self, message: str, failed_tables: list[str] | None = None) -> None:
        super().__init__(message)
        self.failed_tables = failed_tables or []


class ValidationError(DevpulseError):
    """A request body or query parameter has the wrong shape.

    Attributes:
        details: Human readable descriptions of each problem found.
    """

    def __init__(self, details: list[str]) -> None:
        super().__init__("; ".join(details))
        self.details = details
