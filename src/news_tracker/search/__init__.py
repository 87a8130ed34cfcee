from news_tracker.search.api import DEFAULT_ERROR_MESSAGE, NewsApiClient
from news_tracker.search.base import NewsSearchClient

__all__ = [
    "DEFAULT_ERROR_MESSAGE",
    "NewsApiClient",
    "NewsSearchClient",
]
