"""Pure functions for page navigation and rollback rules."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PageButton:
    """Immutable numbered page button state."""

    number: int
    active: bool
    disabled: bool


def max_page(last_page: int) -> int:
    """Highest valid page number (an empty dataset still has page 1)."""
    return max(last_page, 1)


def clamp_page(page: int, last_page: int) -> int:
    """Clamp a requested page into [1, max(last_page, 1)]."""
    return min(max(page, 1), max_page(last_page))


def can_go_previous(current_page: int, is_loading: bool = False) -> bool:
    """Check whether the previous-page control is enabled."""
    return current_page > 1 and not is_loading


def can_go_next(current_page: int, last_page: int, is_loading: bool = False) -> bool:
    """Check whether the next-page control is enabled."""
    return current_page < last_page and not is_loading


def page_buttons(current_page: int, last_page: int, is_loading: bool = False) -> list[PageButton]:
    """Build numbered page buttons.

    Args:
        current_page: Page currently displayed.
        last_page: Last page reported by the backend.
        is_loading: Whether a fetch is outstanding.

    Returns:
        One button per page from 1 to last_page.
    """
    return [
        PageButton(number=number, active=number == current_page, disabled=is_loading)
        for number in range(1, last_page + 1)
    ]


def should_show_pagination(last_page: int) -> bool:
    """Pagination controls are only shown when there is more than one page."""
    return last_page > 1


def page_after_delete(current_page: int, filtered_count: int) -> int | None:
    """Decide whether deleting from the current page should roll back a page.

    Args:
        current_page: Page the deletion happened on.
        filtered_count: Visible records on the page before the deletion.

    Returns:
        The previous page number if the deletion empties the visible page
        and we are past page 1, otherwise None (refresh the same page).
    """
    if filtered_count == 1 and current_page > 1:
        return current_page - 1
    return None
