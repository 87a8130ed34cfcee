from news_tracker.query.state import DEFAULT_TIME_RANGE, DEFAULT_TIME_RANGES, QueryState

__all__ = ["DEFAULT_TIME_RANGE", "DEFAULT_TIME_RANGES", "QueryState"]
