"""Client-side filtering of the fetched page."""

from collections.abc import Collection, Sequence

from news_tracker.data import Article


def filter_by_sources(
    articles: Sequence[Article],
    selected_sources: Collection[str],
) -> Sequence[Article]:
    """Narrow the current page to articles from the selected sources.

    Only the already-fetched page is filtered; pagination totals still
    describe the unfiltered server-side result set.

    Args:
        articles: Articles of the currently held page.
        selected_sources: Source names to keep.

    Returns:
        ``articles`` itself when the selection is empty, otherwise a new list
        of the matching articles in their original order.
    """
    if not selected_sources:
        return articles
    return [a for a in articles if a.source_name is not None and a.source_name in selected_sources]
