from news_tracker.session.controller import ErrorPolicy, SearchSession

__all__ = ["ErrorPolicy", "SearchSession"]
