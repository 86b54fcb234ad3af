"""Records for tags and users as the formatters and handlers see them."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping, TypeVar

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_T = TypeVar("_T")


def _parse_datetime(value: Any) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, str):
        return datetime.fromisoformat(value)
    raise ValueError(f"cannot read {value!r} as a timestamp")


def _from_mapping(cls: type[_T], data: Mapping[str, Any], datetime_fields: frozenset[str]) -> _T:
    names = {f.name for f in dataclasses.fields(cls)}
    unknown = set(data) - names
    if unknown:
        raise ValueError(f"unknown fields for {cls.__name__}: {', '.join(sorted(unknown))}")
    values = {
        key: _parse_datetime(value) if key in datetime_fields else value
        for key, value in data.items()
    }
    try:
        return cls(**values)
    except TypeError as err:
        raise ValueError(str(err)) from err


def _to_mapping(record: Any) -> dict[str, Any]:
    return {
        key: value.isoformat() if isinstance(value, datetime) else value
        for key, value in dataclasses.asdict(record).items()
    }


@dataclass
class Tag:
    """A study tag: a node in the content hierarchy."""

    id: str
    name: str
    type: str = ""
    context: str = ""
    description: str | None = None
    parent_tag_id: str | None = None
    content_rating: str = ""
    content_descriptors: list[str] = field(default_factory=list)
    meta_tags: list[str] = field(default_factory=list)
    public: bool = False
    access_count: int = 0
    metadata: dict[str, str] = field(default_factory=dict)
    batch_id: str | None = None
    hash: str = ""
    has_questions: bool = False
    has_children: bool = False
    owner_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    _DATETIME_FIELDS = frozenset({"created_at", "updated_at"})

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Tag:
        """Build a tag from a mapping of field names; timestamps may be ISO strings."""
        return _from_mapping(cls, data, cls._DATETIME_FIELDS)

    def to_dict(self) -> dict[str, Any]:
        """All fields, with timestamps as ISO strings."""
        return _to_mapping(self)


@dataclass
class User:
    """A registered user."""

    id: str
    name: str | None = None
    gamer_tag: str | None = None
    email: str | None = None
    email_verified: datetime | None = None
    image: str | None = None
    content_tag_id: str | None = None

    _DATETIME_FIELDS = frozenset({"email_verified"})

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> User:
        """Build a user from a mapping of field names; timestamps may be ISO strings."""
        return _from_mapping(cls, data, cls._DATETIME_FIELDS)

    def to_dict(self) -> dict[str, Any]:
        """All fields, with timestamps as ISO strings."""
        return _to_mapping(self)