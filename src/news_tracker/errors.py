"""Exception types for News Tracker."""


class NewsTrackerError(Exception):
    """Base class for News Tracker errors."""


class SearchError(NewsTrackerError):
    """A request to the news-search API failed.

    The message is meant for display: it is the server's ``error`` string
    when one was returned, otherwise a generic description.
    """


class ExportError(NewsTrackerError):
    """The export collaborator could not produce a file from the records."""
