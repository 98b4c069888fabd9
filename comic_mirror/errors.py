class ComicError(Exception):
    """Base class for errors that abort the update of a single comic."""


class FetchError(ComicError):
    pass


class NavigationError(ComicError):
    pass


class ExtractionError(ComicError):
    pass


class DownloadError(ComicError):
    pass


class Interrupted(ComicError):
    """Raised when the user interrupts the search for new pages."""
