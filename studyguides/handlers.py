"""Handlers for each classified chat operation, producing the reply text."""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Mapping, Protocol, Sequence

from .formatting import (
    FormatType,
    build_filter_description,
    build_limit_message,
    format_from_params,
    format_tags,
    tag_as_formatted,
    user_as_formatted,
)
from .models import Tag, User

log = logging.getLogger(__name__)

_MONTH_NAMES = {
    "1": "January",
    "2": "February",
    "3": "March",
    "4": "April",
    "5": "May",
    "6": "June",
    "7": "July",
    "8": "August",
    "9": "September",
    "10": "October",
    "11": "November",
    "12": "December",
}

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

_UNKNOWN_REPLY = (
    "I'm not sure how to help with that request. "
    "Could you please rephrase or ask about something else?"
)


class TagStore(Protocol):
    """Read access to tags."""

    def get_tag_by_id(self, tag_id: str) -> Tag | None: ...

    def list_root_tags(self, params: Mapping[str, str]) -> Sequence[Tag]: ...

    def list_tags_with_filters(self, params: Mapping[str, str]) -> Sequence[Tag]: ...

    def count_tags(self, params: Mapping[str, str]) -> int: ...

    def unique_tag_types(self) -> Sequence[str]: ...

    def unique_context_types(self) -> Sequence[str]: ...


class UserStore(Protocol):
    """Read access to users."""

    def user_by_email(self, email: str) -> User | None: ...

    def user_count(self, params: Mapping[str, str]) -> int: ...


class Store(Protocol):
    """The data stores the handlers read from."""

    @property
    def tag_store(self) -> TagStore: ...

    @property
    def user_store(self) -> UserStore: ...


def _tag_filters(params: Mapping[str, str]) -> tuple[bool, bool, bool, bool]:
    return (
        bool(params.get("type")),
        bool(params.get("contextType")),
        bool(params.get("name")),
        bool(params.get("public")),
    )


def _scan_int(text: str) -> int | None:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else None


def handle_get_tag(store: Store, params: Mapping[str, str]) -> str:
    tag_id = params.get("tagId", "")
    if not tag_id:
        return "Please provide a tag ID to retrieve."
    try:
        tag = store.tag_store.get_tag_by_id(tag_id)
    except Exception as err:
        return f"Error retrieving tag: {err}"
    if tag is None:
        return f"Tag with ID '{tag_id}' not found."
    return tag_as_formatted(tag, format_from_params(params))


def handle_get_user(store: Store, params: Mapping[str, str]) -> str:
    email = params.get("userEmail", "")
    if not email:
        return "Please provide a user email to retrieve."
    try:
        user = store.user_store.user_by_email(email)
    except Exception as err:
        return f"Error retrieving user: {err}"
    if user is None:
        return f"User with email '{email}' not found."
    return user_as_formatted(user, format_from_params(params))


def handle_list_root_tags(store: Store, params: Mapping[str, str]) -> str:
    fmt = format_from_params(params)
    try:
        tags = store.tag_store.list_root_tags(params)
    except Exception as err:
        return f"Error retrieving root tags: {err}"
    if not tags:
        return "No root tags found."
    if fmt in (FormatType.JSON, FormatType.CSV):
        return format_tags(tags, fmt)
    response = (
        f"Found {len(tags)} root tags"
        + build_filter_description(params, *_tag_filters(params))
        + build_limit_message(params)
        + ":\n\n"
    )
    return response + format_tags(tags, fmt)


def handle_list_tags(store: Store, params: Mapping[str, str]) -> str:
    log.debug("list tags called with params: %s", params)
    fmt = format_from_params(params)
    filters = _tag_filters(params)
    has_type = filters[0]

    if any(filters):
        if has_type:
            available = [str(t) for t in store.tag_store.unique_tag_types()]
            requested = params["type"]
            if requested not in available:
                return f"Invalid tag type '{requested}'. Available types: [{' '.join(available)}]"

        tags = store.tag_store.list_tags_with_filters(params)
        description = build_filter_description(params, *filters)
        if not tags:
            return f"No tags found{description}."
        if fmt == FormatType.LIST:
            header = f"Found {len(tags)} tags{description}{build_limit_message(params)}:\n"
            return header + format_tags(tags, fmt)
        return format_tags(tags, fmt)

    tags = store.tag_store.list_root_tags(params)
    if not tags:
        return "No root tags found."
    if fmt == FormatType.LIST:
        header = f"Found {len(tags)} root tags{build_limit_message(params)}:\n"
        return header + format_tags(tags, fmt)
    return format_tags(tags, fmt)


def handle_tag_count(store: Store, params: Mapping[str, str]) -> str:
    count = store.tag_store.count_tags(params)
    filters = _tag_filters(params)
    if any(filters):
        return f"Found {count} tags{build_filter_description(params, *filters)}."
    return f"Found {count} tags total."


def handle_unique_context_types(store: Store, params: Mapping[str, str]) -> str:
    context_types = store.tag_store.unique_context_types()
    if not context_types:
        return "No context types found."
    return "Available context types:\n" + "".join(f"- {c}\n" for c in context_types)


def handle_unique_tag_types(store: Store, params: Mapping[str, str]) -> str:
    tag_types = store.tag_store.unique_tag_types()
    if not tag_types:
        return "No tag types found in the system."
    lines = [f"Found {len(tag_types)} unique tag types:\n"]
    lines.extend(f"{number}. {tag_type}\n" for number, tag_type in enumerate(tag_types, start=1))
    return "".join(lines)


def handle_unknown(store: Store, params: Mapping[str, str]) -> str:
    """Reply to a request that matched no operation, recording what was asked."""
    log.info("no operation matched the request; params: %s", dict(params))
    return _UNKNOWN_REPLY


def _month_name(month: str) -> str:
    return _MONTH_NAMES.get(month) or f"month {month}"


def handle_user_count(
    store: Store, params: Mapping[str, str], now: datetime | None = None
) -> str:
    """Count users, correcting month and year values that look stale."""
    if now is None:
        now = datetime.now()
    params = dict(params)
    log.debug("user count called with params: %s", params)

    month = params.get("month", "")
    if month:
        month_int = _scan_int(month)
        if month_int is not None and abs(now.month - month_int) > 1:
            params["month"] = str(now.month)
            log.debug("correcting month from %s to %d", month, now.month)

    if "year" in params:
        year_int = _scan_int(params["year"])
        if year_int is not None and now.year - year_int > 1:
            params["year"] = str(now.year)
            log.debug("overriding outdated year %d with %d", year_int, now.year)
    elif "month" in params:
        params["year"] = str(now.year)

    count = store.user_store.user_count(params)

    since = params.get("since", "")
    until = params.get("until", "")
    days = params.get("days", "")
    months = params.get("months", "")
    years = params.get("years", "")
    month = params.get("month", "")
    year = params.get("year", "")

    if since and until:
        description = f" created between {since} and {until}"
    elif since:
        description = f" created since {since}"
    elif until:
        description = f" created until {until}"
    elif days:
        description = f" created in the last {days} days"
    elif months:
        description = f" created in the last {months} months"
    elif years:
        description = f" created in the last {years} years"
    elif month and year:
        description = f" created in {_month_name(month)} {year}"
    elif month:
        description = f" created in {_month_name(month)}"
    elif year:
        description = f" created in {year}"
    else:
        description = " in total"

    return f"You have {count} users{description}."