"""Immutable query state and its transitions."""

from dataclasses import dataclass, replace

from news_tracker.data import DEFAULT_PAGE_SIZE, SearchRequest

DEFAULT_TIME_RANGES: tuple[int, ...] = (7, 14, 21, 30)
DEFAULT_TIME_RANGE = 7


@dataclass(frozen=True)
class QueryState:
    """The parameters sent with every search.

    Every transition returns a new state. A rejected or no-op transition
    returns ``self`` unchanged.

    Attributes:
        companies: Tracked company names in insertion order.
        time_range_days: Selected look-back window in days.
        selected_sources: Source names to keep; empty means all sources.
        selected_domains: Canonical domain values to restrict the search to.
        time_range_options: Allowed values for ``time_range_days``.
    """

    companies: tuple[str, ...] = ()
    time_range_days: int = DEFAULT_TIME_RANGE
    selected_sources: frozenset[str] = frozenset()
    selected_domains: frozenset[str] = frozenset()
    time_range_options: tuple[int, ...] = DEFAULT_TIME_RANGES

    def add_company(self, name: str) -> "QueryState":
        name = name.strip()
        if not name or name in self.companies:
            return self
        return replace(self, companies=(*self.companies, name))

    def remove_company(self, name: str) -> "QueryState":
        if name not in self.companies:
            return self
        companies = list(self.companies)
        companies.remove(name)
        return replace(self, companies=tuple(companies))

    def toggle_source(self, name: str) -> "QueryState":
        return replace(self, selected_sources=self.selected_sources ^ {name})

    def toggle_domain(self, value: str) -> "QueryState":
        return replace(self, selected_domains=self.selected_domains ^ {value})

    def set_time_range(self, days: int) -> "QueryState":
        if days not in self.time_range_options or days == self.time_range_days:
            return self
        return replace(self, time_range_days=days)

    @property
    def has_companies(self) -> bool:
        return bool(self.companies)

    def to_request(self, *, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> SearchRequest:
        """Build the wire request for one page of this query.

        Selections are sorted so identical queries produce identical payloads.
        """
        return SearchRequest(
            companies=self.companies,
            time_range_days=self.time_range_days,
            sources=tuple(sorted(self.selected_sources)),
            domains=tuple(sorted(self.selected_domains)),
            page=page,
            page_size=page_size,
        )
