"""Render tags and users as text, JSON, CSV or markdown tables."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Iterable, Mapping, Sequence

from .models import EPOCH, Tag, User

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

_HTML_ESCAPES = (
    ("<", "\\u003c"),
    (">", "\\u003e"),
    ("&", "\\u0026"),
    ("\u2028", "\\u2028"),
    ("\u2029", "\\u2029"),
)


class FormatType(str, Enum):
    LIST = "list"
    JSON = "json"
    CSV = "csv"
    TABLE = "table"


def format_from_params(params: Mapping[str, str]) -> FormatType | str:
    """The requested format; unrecognised names are passed through as given."""
    requested = params.get("format", "")
    if not requested:
        return FormatType.LIST
    try:
        return FormatType(requested)
    except ValueError:
        return requested


def public_description(public: str) -> str:
    return {"true": "public", "false": "private"}.get(public, "unknown status")


def _join_phrases(phrases: Sequence[str]) -> str:
    if len(phrases) == 1:
        return phrases[0]
    if len(phrases) == 2:
        return f"{phrases[0]} and {phrases[1]}"
    return ", ".join(phrases[:-1]) + f", and {phrases[-1]}"


def build_filter_description(
    params: Mapping[str, str],
    has_type: bool,
    has_context: bool,
    has_name: bool,
    has_public: bool,
) -> str:
    """Describe the active tag filters, e.g. " for type 'Course' and context 'DoD'"."""
    phrases = []
    if has_type:
        phrases.append(f"type '{params.get('type', '')}'")
    if has_context:
        phrases.append(f"context '{params.get('contextType', '')}'")
    if has_name:
        phrases.append(f"name containing '{params.get('name', '')}'")
    if has_public:
        phrases.append(public_description(params.get("public", "")))
    if not phrases:
        return ""
    if phrases == [public_description(params.get("public", ""))] and has_public:
        return f" that are {phrases[0]}"
    lead = "with" if not (has_type or has_context) else "for"
    return f" {lead} {_join_phrases(phrases)}"


def build_limit_message(params: Mapping[str, str]) -> str:
    limit = params.get("limit", "")
    return f" (limited to first {limit} results)" if limit else ""


def _timestamp(value: datetime | None) -> str:
    if value is None:
        value = EPOCH
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime(TIME_FORMAT)


def _text(value: str | None) -> str:
    return value or ""


def _dump_json(value: Any) -> str:
    text = json.dumps(value, indent=2, ensure_ascii=False)
    for char, escape in _HTML_ESCAPES:
        text = text.replace(char, escape)
    return text


def _quoted_row(values: Iterable[str]) -> str:
    return ",".join(f'"{value}"' for value in values)


# Tag lists


def tags_as_numbered_list(tags: Sequence[Tag]) -> str:
    lines = []
    for number, tag in enumerate(tags, start=1):
        line = f"{number}. {tag.name} (ID: {tag.id})"
        if tag.description:
            line += f" - {tag.description}"
        lines.append(line + "\n")
    return "".join(lines)


def tags_as_json(tags: Sequence[Tag]) -> str:
    if not tags:
        return "[]"
    output = []
    for tag in tags:
        entry: dict[str, Any] = {"name": tag.name}
        if tag.description:
            entry["description"] = tag.description
        entry["type"] = tag.type
        entry["id"] = tag.id
        output.append(entry)
    return _dump_json(output)


def tags_as_csv(tags: Sequence[Tag]) -> str:
    rows = ["name,description,type,id\n"]
    rows.extend(
        _quoted_row((tag.name, _text(tag.description), tag.type, tag.id)) + "\n" for tag in tags
    )
    return "".join(rows)


def tags_as_table(tags: Sequence[Tag]) -> str:
    if not tags:
        return "No tags found."
    rows = ["| Name | Description | Type | ID |\n", "|------|-------------|------|----|\n"]
    rows.extend(
        f"| {tag.name} | {_text(tag.description)} | {tag.type} | {tag.id} |\n" for tag in tags
    )
    return "".join(rows)


def format_tags(tags: Sequence[Tag], format: FormatType | str) -> str:
    if format == FormatType.JSON:
        return tags_as_json(tags)
    if format == FormatType.CSV:
        return tags_as_csv(tags)
    if format == FormatType.TABLE:
        return tags_as_table(tags)
    return tags_as_numbered_list(tags)


# Single tag


def tag_as_formatted(tag: Tag, format: FormatType | str) -> str:
    if format == FormatType.JSON:
        return tag_as_json(tag)
    if format == FormatType.CSV:
        return tag_as_csv(tag)
    if format == FormatType.TABLE:
        return tag_as_table(tag)
    return tag_as_detailed_text(tag)


def tag_as_json(tag: Tag) -> str:
    output: dict[str, Any] = {"id": tag.id, "name": tag.name}
    if tag.description:
        output["description"] = tag.description
    output["type"] = tag.type
    output["context"] = tag.context
    if tag.parent_tag_id:
        output["parent_tag_id"] = tag.parent_tag_id
    output["content_rating"] = tag.content_rating
    if tag.content_descriptors:
        output["content_descriptors"] = list(tag.content_descriptors)
    if tag.meta_tags:
        output["meta_tags"] = list(tag.meta_tags)
    output["public"] = tag.public
    output["access_count"] = tag.access_count
    if tag.metadata:
        output["metadata"] = dict(sorted(tag.metadata.items()))
    if tag.batch_id:
        output["batch_id"] = tag.batch_id
    output["hash"] = tag.hash
    output["has_questions"] = tag.has_questions
    output["has_children"] = tag.has_children
    if tag.owner_id:
        output["owner_id"] = tag.owner_id
    output["created_at"] = _timestamp(tag.created_at)
    output["updated_at"] = _timestamp(tag.updated_at)
    return _dump_json(output)


def tag_as_csv(tag: Tag) -> str:
    header = (
        "id,name,description,type,context,parent_tag_id,content_rating,content_descriptors,"
        "meta_tags,public,access_count,metadata,batch_id,hash,has_questions,has_children,"
        "owner_id,created_at,updated_at\n"
    )
    metadata = ";".join(f"{key}:{value}" for key, value in tag.metadata.items())
    row = ",".join(
        (
            _quoted_row(
                (
                    tag.id,
                    tag.name,
                    _text(tag.description),
                    tag.type,
                    tag.context,
                    _text(tag.parent_tag_id),
                    tag.content_rating,
                    ";".join(tag.content_descriptors),
                    ";".join(tag.meta_tags),
                )
            ),
            str(bool(tag.public)).lower(),
            str(tag.access_count),
            _quoted_row((metadata, _text(tag.batch_id), tag.hash)),
            str(bool(tag.has_questions)).lower(),
            str(bool(tag.has_children)).lower(),
            _quoted_row(
                (_text(tag.owner_id), _timestamp(tag.created_at), _timestamp(tag.updated_at))
            ),
        )
    )
    return header + row + "\n"


def _table(rows: Iterable[tuple[str, str]]) -> str:
    lines = ["| Field | Value |\n", "|-------|-------|\n"]
    lines.extend(f"| {label} | {value} |\n" for label, value in rows)
    return "".join(lines)


def tag_as_table(tag: Tag) -> str:
    metadata = "; ".join(f"{key}: {value}" for key, value in tag.metadata.items())
    rows: list[tuple[str, str]] = [("ID", tag.id), ("Name", tag.name)]
    if tag.description:
        rows.append(("Description", tag.description))
    rows.append(("Type", tag.type))
    rows.append(("Context", tag.context))
    if tag.parent_tag_id:
        rows.append(("Parent Tag ID", tag.parent_tag_id))
    rows.append(("Content Rating", tag.content_rating))
    if tag.content_descriptors:
        rows.append(("Content Descriptors", ", ".join(tag.content_descriptors)))
    if tag.meta_tags:
        rows.append(("Meta Tags", ", ".join(tag.meta_tags)))
    rows.append(("Public", str(bool(tag.public)).lower()))
    rows.append(("Access Count", str(tag.access_count)))
    if metadata:
        rows.append(("Metadata", metadata))
    if tag.batch_id:
        rows.append(("Batch ID", tag.batch_id))
    rows.append(("Hash", tag.hash))
    rows.append(("Has Questions", str(bool(tag.has_questions)).lower()))
    rows.append(("Has Children", str(bool(tag.has_children)).lower()))
    if tag.owner_id:
        rows.append(("Owner ID", tag.owner_id))
    rows.append(("Created", _timestamp(tag.created_at)))
    rows.append(("Updated", _timestamp(tag.updated_at)))
    return _table(rows)


def tag_as_detailed_text(tag: Tag) -> str:
    lines = [f"**Tag Details for ID: {tag.id}**\n\n", f"**Name:** {tag.name}\n"]
    if tag.description:
        lines.append(f"**Description:** {tag.description}\n")
    lines.append(f"**Type:** {tag.type}\n")
    lines.append(f"**Context:** {tag.context}\n")
    if tag.parent_tag_id:
        lines.append(f"**Parent Tag ID:** {tag.parent_tag_id}\n")
    lines.append(f"**Content Rating:** {tag.content_rating}\n")
    if tag.content_descriptors:
        lines.append(f"**Content Descriptors:** {', '.join(tag.content_descriptors)}\n")
    if tag.meta_tags:
        lines.append(f"**Meta Tags:** {', '.join(tag.meta_tags)}\n")
    lines.append(f"**Public:** {str(bool(tag.public)).lower()}\n")
    lines.append(f"**Access Count:** {tag.access_count}\n")
    if tag.metadata:
        lines.append("**Metadata:**\n")
        lines.extend(f"  - {key}: {value}\n" for key, value in tag.metadata.items())
    if tag.batch_id:
        lines.append(f"**Batch ID:** {tag.batch_id}\n")
    lines.append(f"**Hash:** {tag.hash}\n")
    lines.append(f"**Has Questions:** {str(bool(tag.has_questions)).lower()}\n")
    lines.append(f"**Has Children:** {str(bool(tag.has_children)).lower()}\n")
    if tag.owner_id:
        lines.append(f"**Owner ID:** {tag.owner_id}\n")
    lines.append(f"**Created:** {_timestamp(tag.created_at)}\n")
    lines.append(f"**Updated:** {_timestamp(tag.updated_at)}\n")
    return "".join(lines)


# Users


def _user_fields(user: User) -> list[tuple[str, str, str]]:
    """(json key, label, value) for every optional user field that is set."""
    verified = _timestamp(user.email_verified) if user.email_verified is not None else ""
    candidates = (
        ("name", "Name", _text(user.name)),
        ("gamer_tag", "Gamer Tag", _text(user.gamer_tag)),
        ("email", "Email", _text(user.email)),
        ("email_verified", "Email Verified", verified),
        ("image", "Image", _text(user.image)),
        ("content_tag_id", "Content Tag ID", _text(user.content_tag_id)),
    )
    return [entry for entry in candidates if entry[2]]


def user_as_formatted(user: User, format: FormatType | str) -> str:
    if format == FormatType.JSON:
        return user_as_json(user)
    if format == FormatType.CSV:
        return user_as_csv(user)
    if format == FormatType.TABLE:
        return user_as_table(user)
    return user_as_detailed_text(user)


def user_as_json(user: User) -> str:
    output = {"id": user.id}
    output.update((key, value) for key, _, value in _user_fields(user))
    return _dump_json(output)


def user_as_csv(user: User) -> str:
    header = "id,name,gamer_tag,email,email_verified,image,content_tag_id\n"
    present = {key: value for key, _, value in _user_fields(user)}
    keys = ("name", "gamer_tag", "email", "email_verified", "image", "content_tag_id")
    return header + _quoted_row((user.id, *(present.get(key, "") for key in keys))) + "\n"


def user_as_table(user: User) -> str:
    rows = [("ID", user.id)]
    rows.extend((label, value) for _, label, value in _user_fields(user))
    return _table(rows)


def user_as_detailed_text(user: User) -> str:
    lines = [f"**User Details for ID: {user.id}**\n\n"]
    lines.extend(f"**{label}:** {value}\n" for _, label, value in _user_fields(user))
    return "".join(lines)