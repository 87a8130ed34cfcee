"""Page-window calculation for pagination controls."""

from news_tracker.data import PageToken, PageTokenKind

# Up to this many pages are always shown in full.
FULL_RUN_LIMIT = 7
# Interior pages shown around the current page when the run is elided.
WINDOW_SIZE = 5


def _number(page: int) -> PageToken:
    return PageToken(value=page, label=str(page))


def _ellipsis(start: int, end: int) -> PageToken:
    return PageToken(value=(start + end) // 2, label="...", kind=PageTokenKind.ELLIPSIS)


def compute_window(current_page: int, total_pages: int) -> list[PageToken]:
    """Compute the page tokens to render for a pagination control.

    With ``total_pages <= 7`` every page is listed. Otherwise the result is
    page 1, a window of up to five pages centred on ``current_page`` and kept
    inside ``[2, total_pages - 1]``, and the last page, with an ellipsis
    wherever pages are skipped. A window that hits the upper bound slides left
    instead of shrinking.

    Args:
        current_page: The page being displayed.
        total_pages: Total number of pages reported by the server.

    Returns:
        Tokens in display order.
    """
    if total_pages <= FULL_RUN_LIMIT:
        return [_number(page) for page in range(1, total_pages + 1)]

    start = max(2, current_page - WINDOW_SIZE // 2)
    end = min(total_pages - 1, start + WINDOW_SIZE - 1)
    if end - start < WINDOW_SIZE - 1:
        start = max(2, end - WINDOW_SIZE + 1)

    tokens = [_number(1)]
    if start > 2:
        tokens.append(_ellipsis(1, start))
    tokens.extend(_number(page) for page in range(start, end + 1))
    if end < total_pages - 1:
        tokens.append(_ellipsis(end, total_pages))
    tokens.append(_number(total_pages))
    return tokens
