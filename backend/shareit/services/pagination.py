"""Offset/limit paging shared by the booking and request listings."""

from dataclasses import dataclass

from sqlalchemy import Select

from shareit.exceptions import InvalidArgumentError


@dataclass(frozen=True)
class Page:
    """A window ``[offset, offset + limit)`` over an ordered result set."""

    offset: int
    limit: int

    def apply(self, query: Select) -> Select:
        return query.offset(self.offset).limit(self.limit)


def page_request(from_: int, size: int) -> Page:
    """Validate ``from``/``size`` request parameters.

    ``from_`` is an exact zero-based offset, not a page index, so
    ``from_=3, size=2`` returns rows 3 and 4.

    Raises:
        InvalidArgumentError: If ``from_`` is negative or ``size`` is not positive.
    """
    if from_ < 0:
        raise InvalidArgumentError(f"Parameter 'from' must be zero or positive, got {from_}")
    if size <= 0:
        raise InvalidArgumentError(f"Parameter 'size' must be positive, got {size}")
    return Page(offset=from_, limit=size)
