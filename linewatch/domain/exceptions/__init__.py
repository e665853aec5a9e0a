from .feed import FeedError, FeedFetchError, FeedParseError

__all__ = ["FeedError", "FeedFetchError", "FeedParseError"]
