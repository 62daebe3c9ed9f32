"""Zones of territories for shipping or tax rules.

A :class:`Zone` is a list of :class:`Territory` rules. An address is in the
zone when any territory contains it. Territories match on country,
subdivision and post code; post codes are matched with pluggable matchers.

Example:
    >>> zone = Zone([
    ...     Territory(country="AU", administrative_area="VIC"),
    ...     Territory(
    ...         country="AU",
    ...         administrative_area="NSW",
    ...         included_post_codes=ExactMatcher(ranges=[(2000, 2234)]),
    ...     ),
    ... ])
    >>> zone.contains(address)
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ryandata_intl_address.protocols import PostCodeMatcherProtocol

if TYPE_CHECKING:
    from ryandata_intl_address.models import Address

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class PostCodeRange:
    """Inclusive range of numeric post codes."""

    start: int
    end: int

    def __contains__(self, value: int) -> bool:
        return self.start <= value <= self.end


def _parse_integer(post_code: str) -> int | None:
    """Parse a post code as a plain decimal integer, or None."""
    if not _INTEGER_RE.fullmatch(post_code):
        return None
    return int(post_code)


@dataclass(frozen=True)
class ExactMatcher:
    """Matches post codes listed exactly, or numeric post codes within ranges.

    Ranges may be given as PostCodeRange instances or ``(start, end)`` pairs.
    """

    matches: tuple[str, ...] = ()
    ranges: tuple[PostCodeRange, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "matches", tuple(self.matches))
        object.__setattr__(
            self,
            "ranges",
            tuple(r if isinstance(r, PostCodeRange) else PostCodeRange(*r) for r in self.ranges),
        )

    def match(self, post_code: str) -> bool:
        """Check for a literal match, then for a numeric range match."""
        if post_code in self.matches:
            return True

        value = _parse_integer(post_code)
        if value is None:
            return False
        return any(value in post_code_range for post_code_range in self.ranges)


@dataclass(frozen=True)
class RegexMatcher:
    """Matches post codes against a regular expression (unanchored search)."""

    pattern: str
    _compiled: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_compiled", re.compile(self.pattern))

    def match(self, post_code: str) -> bool:
        return self._compiled.search(post_code) is not None


def _same_text(rule: str, value: str) -> bool:
    return rule.casefold() == value.casefold()


@dataclass(frozen=True)
class Territory:
    """A rule within a zone.

    Blank fields match anything. The country is compared exactly; the
    subdivision fields are compared without case. Use subdivision IDs for
    countries with pre-defined subdivisions.

    Attributes:
        country: ISO 3166-1 country code.
        administrative_area: Administrative area ID or name.
        locality: Locality ID or name.
        dependent_locality: Dependent locality ID or name.
        included_post_codes: When set, the post code must match it.
        excluded_post_codes: When set, the post code must not match it.
    """

    country: str = ""
    administrative_area: str = ""
    locality: str = ""
    dependent_locality: str = ""
    included_post_codes: PostCodeMatcherProtocol | None = None
    excluded_post_codes: PostCodeMatcherProtocol | None = None

    def contains(self, address: Address) -> bool:
        """Check whether the territory contains an address."""
        if self.country and address.country != self.country:
            return False
        if self.administrative_area and not _same_text(
            self.administrative_area, address.administrative_area
        ):
            return False
        if self.locality and not _same_text(self.locality, address.locality):
            return False
        if self.dependent_locality and not _same_text(
            self.dependent_locality, address.dependent_locality
        ):
            return False

        included = (
            self.included_post_codes.match(address.post_code)
            if self.included_post_codes is not None
            else True
        )
        excluded = (
            self.excluded_post_codes.match(address.post_code)
            if self.excluded_post_codes is not None
            else False
        )
        return included and not excluded


@dataclass(frozen=True)
class Zone:
    """A list of territories. An address is in the zone if any territory contains it."""

    territories: tuple[Territory, ...] = ()

    def __init__(self, territories: Iterable[Territory] = ()) -> None:
        object.__setattr__(self, "territories", tuple(territories))

    def contains(self, address: Address) -> bool:
        return any(territory.contains(address) for territory in self.territories)

    def __iter__(self) -> Iterator[Territory]:
        return iter(self.territories)

    def __len__(self) -> int:
        return len(self.territories)
