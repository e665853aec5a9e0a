from .http_zip_feed_source import HttpZipFeedSource
from .local_feed_source import LocalFeedSource

__all__ = [
    "HttpZipFeedSource",
    "LocalFeedSource",
]
