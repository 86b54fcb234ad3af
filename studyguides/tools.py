"""Function-calling tool definitions used to classify chat requests."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

NO_REQUIRED_PARAMS: tuple[str, ...] = ()


class ToolName(str, Enum):
    TAG_COUNT = "TagCount"
    LIST_TAGS = "ListTags"
    LIST_ROOT_TAGS = "ListRootTags"
    GET_TAG = "GetTag"
    UNIQUE_TAG_TYPES = "UniqueTagTypes"
    UNIQUE_CONTEXT_TYPES = "UniqueContextTypes"
    USER_COUNT = "UserCount"
    GET_USER = "GetUser"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class PropertyValue:
    """Type and description of a single parameter."""

    type: str
    description: str

    def to_dict(self) -> dict[str, str]:
        return {"type": self.type, "description": self.description}


@dataclass(frozen=True)
class Property:
    """A named parameter."""

    name: str
    value: PropertyValue

    def to_map_entry(self) -> tuple[str, PropertyValue]:
        return self.name, self.value


def _property(name: str, property_type: str, description: str) -> Property:
    return Property(name, PropertyValue(property_type, description))


def build_properties(*props: Property) -> dict[str, PropertyValue]:
    """Map property names to their values; later duplicates win."""
    return dict(prop.to_map_entry() for prop in props)


@dataclass(frozen=True)
class ParameterSchema:
    """JSON schema describing a function's parameters."""

    properties: dict[str, PropertyValue] = field(default_factory=dict)
    required: list[str] = field(default_factory=list)
    type: str = "object"

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "properties": {name: value.to_dict() for name, value in self.properties.items()},
            "required": list(self.required),
        }


def build_parameter_schema(properties: dict[str, PropertyValue], required) -> ParameterSchema:
    return ParameterSchema(properties=dict(properties), required=list(required))


def build_parameter_schema_from_props(required, *props: Property) -> ParameterSchema:
    return build_parameter_schema(build_properties(*props), required)


@dataclass(frozen=True)
class ToolDefinition:
    """A tool with its name, description and parameters."""

    name: str
    description: str
    parameters: tuple[Property, ...] = ()
    required: tuple[str, ...] = ()

    def with_parameters(self, required, *params: Property) -> ToolDefinition:
        return dataclasses.replace(self, parameters=tuple(params), required=tuple(required))

    def as_tool(self) -> dict[str, Any]:
        schema = build_parameter_schema_from_props(self.required, *self.parameters)
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": schema.to_dict(),
            },
        }


_CONTEXT = _property(
    "contextType",
    "string",
    "Filter by the context/organization where the tag is used (e.g. 'College', 'DoD', 'University', 'Company'). This is different from tag type - context refers to the organizational context.",
)
_TYPE = _property(
    "type",
    "string",
    "Filter by the tag's category/classification (e.g. 'Course', 'Subject', 'Topic', 'Department'). This is the tag's inherent type, not its organizational context.",
)
_NAME = _property(
    "name",
    "string",
    "Search for tags by name using partial matching (e.g. 'math' will find 'Mathematics', 'Math 101', etc.)",
)
_PUBLIC = _property(
    "public",
    "string",
    "Filter by public status: 'true' for public tags, 'false' for private tags",
)
_FORMAT = _property(
    "format",
    "string",
    "Output format: 'list' (default, human-readable), 'json' (machine-readable), 'csv' (spreadsheet), or 'table' (markdown table)",
)
_LIMIT = _property(
    "limit",
    "integer",
    "Maximum number of tags to return (e.g. 10 for first 10 results)",
)
_SINCE = _property(
    "since",
    "string",
    "Count users created since this date (ISO format: YYYY-MM-DD or YYYY-MM-DDTHH:MM:SS)",
)
_UNTIL = _property(
    "until",
    "string",
    "Count users created until this date (ISO format: YYYY-MM-DD or YYYY-MM-DDTHH:MM:SS)",
)
_DAYS = _property(
    "days",
    "string",
    "Count users created in the last N days (e.g. '7' for last week, '30' for last month)",
)
_MONTHS = _property(
    "months",
    "string",
    "Count users created in the last N months (e.g. '3' for last quarter, '12' for last year)",
)
_YEARS = _property(
    "years",
    "string",
    "Count users created in the last N years (e.g. '1' for last year, '5' for last 5 years)",
)
_MONTH = _property(
    "month",
    "string",
    "Count users created in a specific month (1-12, e.g. '7' for July)",
)
_YEAR = _property(
    "year",
    "string",
    "Count users created in a specific year (e.g. '2023' for year 2023)",
)
_USER_EMAIL = _property(
    "userEmail",
    "string",
    "The email address of the user to retrieve (e.g. 'user@example.com')",
)

CLASSIFICATION_TOOL_DEFINITIONS: tuple[ToolDefinition, ...] = (
    ToolDefinition(
        ToolName.TAG_COUNT.value,
        "Returns the number of tags. Use 'type' for tag categories (Course, Subject, etc.) and 'contextType' for organizational contexts (College, DoD, etc.). Use 'name' for partial name searches. Optional filters: type, contextType, name, and public status.",
    ).with_parameters(NO_REQUIRED_PARAMS, _TYPE, _CONTEXT, _NAME, _PUBLIC, _FORMAT),
    ToolDefinition(
        ToolName.LIST_TAGS.value,
        "Returns a list of tags. Use 'type' for tag categories (Course, Subject, etc.) and 'contextType' for organizational contexts (College, DoD, etc.). Use 'name' for partial name searches. Optional filters: type, contextType, name, and public status. Choose format based on user intent: 'list' for human reading, 'json' for data/API use, 'csv' for spreadsheets, 'table' for markdown.",
    ).with_parameters(NO_REQUIRED_PARAMS, _TYPE, _CONTEXT, _NAME, _PUBLIC, _FORMAT, _LIMIT),
    ToolDefinition(
        ToolName.LIST_ROOT_TAGS.value,
        "Returns a list of root tags (tags with no parent). Optional filters: name and public status. Choose format based on user intent: 'list' for human reading, 'json' for data/API use, 'csv' for spreadsheets, 'table' for markdown.",
    ).with_parameters(NO_REQUIRED_PARAMS, _NAME, _PUBLIC, _FORMAT, _LIMIT),
    ToolDefinition(
        ToolName.GET_TAG.value,
        "Returns detailed information about a specific tag by its ID. When user refers to 'tag number X', first use ListTags to get a list of tags with their IDs, then use the actual tag ID from that list. Tag IDs are CUIDs (25-character alphanumeric strings like 'cmav63fwp03ef1jmtqkh9wnvv'). The tagId parameter must be the actual CUID, not a number. Choose format based on user intent: 'list' for human reading, 'json' for data/API use, 'csv' for spreadsheets, 'table' for markdown.",
    ).with_parameters(
        ("tagId",),
        _property(
            "tagId",
            "string",
            "The actual CUID of the tag to retrieve (25-character alphanumeric string like 'cmav63fwp03ef1jmtqkh9wnvv'). Use ListTags first to get the CUID if user refers to a tag by number.",
        ),
        _FORMAT,
    ),
    ToolDefinition(
        ToolName.UNIQUE_TAG_TYPES.value,
        "Returns a list of all unique tag types available in the system.",
    ).with_parameters(NO_REQUIRED_PARAMS),
    ToolDefinition(
        ToolName.UNIQUE_CONTEXT_TYPES.value,
        "Returns a list of all unique context types (organizational contexts) available in the system.",
    ).with_parameters(NO_REQUIRED_PARAMS),
    ToolDefinition(
        ToolName.USER_COUNT.value,
        "Returns the number of users. The system uses intelligent date parsing to handle relative time expressions. For 'this month', 'last year', '3 months ago', etc., extract the appropriate time parameters. The system will automatically correct outdated cached dates. Examples: 'this month' should use current month and year, 'last year' should use previous year, 'last week' should use days=7. Use time-based filters: 'days' for recent users, 'months' for quarterly/annual counts, 'month' and 'year' for specific time periods, or 'since'/'until' for custom date ranges.",
    ).with_parameters(NO_REQUIRED_PARAMS, _SINCE, _UNTIL, _DAYS, _MONTHS, _YEARS, _MONTH, _YEAR),
    ToolDefinition(
        ToolName.GET_USER.value,
        "Returns detailed information about a specific user by their email address. The userEmail parameter must be a valid email address. Choose format based on user intent: 'list' for human reading, 'json' for data/API use, 'csv' for spreadsheets, 'table' for markdown.",
    ).with_parameters(("userEmail",), _USER_EMAIL, _FORMAT),
    ToolDefinition(
        ToolName.UNKNOWN.value,
        "Use when the user's request doesn't match any other available operations.",
    ).with_parameters(NO_REQUIRED_PARAMS),
)

CLASSIFICATION_TOOL_MAP: dict[str, dict[str, Any]] = {
    definition.name: definition.as_tool() for definition in CLASSIFICATION_TOOL_DEFINITIONS
}


def classification_definitions() -> list[ToolDefinition]:
    """All tool definitions available for classification."""
    return list(CLASSIFICATION_TOOL_DEFINITIONS)


def classification_tools() -> list[dict[str, Any]]:
    """All classification tools in the function-calling wire shape."""
    return [definition.as_tool() for definition in CLASSIFICATION_TOOL_DEFINITIONS]