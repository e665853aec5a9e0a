class FeedError(Exception):
    """Base exception for static feed refresh failures."""


class FeedFetchError(FeedError):
    """Raised when the feed archive cannot be downloaded or opened."""


class FeedParseError(FeedError):
    """Raised when a required feed table is missing or unreadable."""
