"""
Search criteria parsing.

Turns user-facing criteria into a store QueryPlan plus an optional
compiled name pattern for post-filtering.

Malformed size or date expressions drop only their own criterion. An
invalid regular expression is an error for the whole search.
"""

import logging
import math
import re
from datetime import datetime, timezone
from typing import List, Optional, Pattern, Tuple

from ..config import DEFAULT_LIMIT
from ..domain.enums import Comparison
from ..domain.models import SearchCriteria, valid_text
from ..domain.query import (
    ExtensionEquals, KindIs, ModifiedSince, NameContains, PathPrefix,
    Predicate, QueryPlan, SizeCompare,
)
from ..errors import InvalidPatternError

logger = logging.getLogger(__name__)

SIZE_UNITS = (
    ("GB", 1024 ** 3),
    ("MB", 1024 ** 2),
    ("KB", 1024),
)

_DATE_RE = re.compile(r"^([0-9]{4})-([0-9]{2})-([0-9]{2})$")


def parse_size_expression(expr: str) -> Optional[Tuple[Comparison, int]]:
    """
    Parse a single-sided size comparison.

    Accepts an optional leading '>' or '<' (none means equality) and a
    number with an optional KB/MB/GB suffix (1024-based, any case).

    Examples:
        ">1MB"  -> (Comparison.GT, 1048576)
        "<1KB"  -> (Comparison.LT, 1024)
        "1.5KB" -> (Comparison.EQ, 1536)

    Returns:
        (operator, bytes), or None if the expression is not understood
    """
    expr = expr.strip()
    if expr.startswith(">"):
        op, value = Comparison.GT, expr[1:]
    elif expr.startswith("<"):
        op, value = Comparison.LT, expr[1:]
    else:
        op, value = Comparison.EQ, expr

    value = value.strip()
    multiplier = 1
    for suffix, factor in SIZE_UNITS:
        if value.upper().endswith(suffix):
            value, multiplier = value[:-len(suffix)], factor
            break

    try:
        number = float(value)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None

    return op, int(number * multiplier)


def parse_date_expression(expr: str) -> Optional[int]:
    """
    Parse a YYYY-MM-DD date into a UTC-midnight epoch timestamp.

    Anything other than a real calendar date in exactly that shape gives None.
    """
    match = _DATE_RE.match(expr.strip())
    if not match:
        return None
    year, month, day = (int(part) for part in match.groups())
    try:
        dt = datetime(year, month, day, tzinfo=timezone.utc)
    except ValueError:
        return None
    return int(dt.timestamp())


def normalize_extension(ext: str) -> str:
    return ext.strip().lstrip(".").lower()


def compile_name_pattern(regex: Optional[str], case_sensitive: bool = False) -> Optional[Pattern]:
    """
    Compile the name regex once per search.

    Raises:
        InvalidPatternError: If the pattern does not compile
    """
    if regex is None:
        return None
    flags = 0 if case_sensitive else re.IGNORECASE
    try:
        return re.compile(valid_text(regex), flags)
    except re.error as e:
        raise InvalidPatternError(regex, str(e)) from e


def build_predicates(criteria: SearchCriteria) -> List[Predicate]:
    """
    Collect the criteria the store can evaluate, dropping malformed ones.

    Text criteria get the same undecodable-byte replacement as indexed
    paths, so a name or path taken from raw argv still matches.
    """
    predicates: List[Predicate] = []

    if criteria.name:
        predicates.append(NameContains(valid_text(criteria.name), criteria.case_sensitive))

    if criteria.extension:
        predicates.append(ExtensionEquals(normalize_extension(valid_text(criteria.extension))))

    if criteria.path:
        predicates.append(PathPrefix(valid_text(criteria.path)))

    if criteria.kind is not None:
        predicates.append(KindIs(criteria.kind))

    if criteria.size:
        parsed = parse_size_expression(criteria.size)
        if parsed:
            predicates.append(SizeCompare(*parsed))
        else:
            logger.debug("Ignoring unparseable size expression %r", criteria.size)

    if criteria.modified_after:
        timestamp = parse_date_expression(criteria.modified_after)
        if timestamp is not None:
            predicates.append(ModifiedSince(timestamp))
        else:
            logger.debug("Ignoring unparseable date expression %r", criteria.modified_after)

    return predicates


def build_plan(criteria: SearchCriteria, default_limit: int = DEFAULT_LIMIT) -> QueryPlan:
    """Build the store query plan (predicates, sort, cap) for a search."""
    return QueryPlan(
        predicates=tuple(build_predicates(criteria)),
        sort=criteria.sort,
        descending=criteria.reverse,
        limit=criteria.limit if criteria.limit is not None else default_limit,
    )
