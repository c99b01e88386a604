"""Fatal errors raised while loading a tickets file."""


class TicketReportError(Exception):
    """Base class for errors that abort the whole report."""

    pass


class TicketFileNotFound(TicketReportError):
    """Raised when the input path does not point to an existing file."""

    pass


class UnreadableInput(TicketReportError):
    """Raised when the input file exists but cannot be read or decoded."""

    pass


class MalformedInput(TicketReportError):
    """Raised when the document is not JSON or has no tickets array."""

    pass
