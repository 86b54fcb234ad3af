# studyguides

The pieces behind a chat service for a study guides API. A model picks one
of a fixed set of operations, such as counting tags, listing tags, or looking
up a tag or a user. This package holds the tool definitions offered to the
model, a router that sends the chosen operation to its handler, the handlers,
and formatters. The formatters render the answer as plain text, JSON, CSV or
a markdown table.

The package uses only the standard library.

## Installing

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Modules

- `studyguides.tools`: the function-calling tool definitions.
  - `ToolName` lists the operation names: `TagCount`, `ListTags`,
    `ListRootTags`, `GetTag`, `UniqueTagTypes`, `UniqueContextTypes`,
    `UserCount`, `GetUser` and `Unknown`.
  - `classification_definitions()` returns the `ToolDefinition` values.
  - `classification_tools()` returns them as dictionaries in the
    function-calling shape, with `type`, `function.name`,
    `function.description` and `function.parameters`.
  - `Property`, `PropertyValue`, `ParameterSchema`, `build_properties`,
    `build_parameter_schema` and `build_parameter_schema_from_props` build
    parameter schemas.
- `studyguides.models`: the `Tag` and `User` dataclasses.
  - Each has `from_dict`, which accepts ISO strings for timestamps and raises
    `ValueError` on unknown fields.
  - Each has `to_dict`, which writes timestamps as ISO strings.
- `studyguides.formatting`: rendering of tags and users.
  - `FormatType` holds the output formats: `list`, `json`, `csv` and `table`.
  - `format_tags` and `tag_as_formatted` render tags. `user_as_formatted`
    renders a user.
  - `format_from_params(params)` reads the `format` parameter. It defaults to
    `list`.
  - `build_filter_description` and `build_limit_message` write the phrases
    used in replies.
  - Timestamps are written in UTC as `YYYY-MM-DD HH:MM:SS`.
- `studyguides.handlers`: one `handle_*` function per operation. Each takes
  a store and the operation's parameters and returns the reply text.
  - A store is any object that meets the `Store` protocol. It needs a
    `tag_store` (`TagStore`) and a `user_store` (`UserStore`).
  - `handle_user_count` also takes an optional `now`. It replaces a month
    more than one month from the current one, or a year more than one year
    in the past, with the current value. If a month is given without a year,
    it adds the current year.
- `studyguides.router`: `OperationRouter(store)` binds every handler to a
  store. `route(op, params)` returns the handler's reply. An operation name
  it does not know goes to the `Unknown` handler.

## Example

```python
from types import SimpleNamespace

from studyguides.formatting import FormatType, build_filter_description, format_tags
from studyguides.models import Tag
from studyguides.router import OperationRouter
from studyguides.tools import classification_tools

print(sorted(tool["function"]["name"] for tool in classification_tools()))

params = {"type": "Course", "public": "true"}
print(build_filter_description(params, True, False, False, True))
# " for type 'Course' and public"
print(format_tags([], FormatType.CSV))
# "name,description,type,id\n"

tags = [Tag(id="t1", name="Algebra"), Tag(id="t2", name="Biology")]
tag_store = SimpleNamespace(
    count_tags=lambda params: len(tags),
    list_root_tags=lambda params: tags,
)
router = OperationRouter(SimpleNamespace(tag_store=tag_store, user_store=None))
print(router.route("TagCount", {}))
# "Found 2 tags total."
print(router.route("ListRootTags", {}))
# "Found 2 root tags:\n\n1. Algebra (ID: t1)\n2. Biology (ID: t2)\n"
```

## What this package does not do

- It has no server and no command to start one.
- It does not check tokens and does not limit request rates.
- It has no client for a chat completion service and no chat service that
  keeps a conversation history. Choosing the operation is left to the caller.
- It has no storage. The handlers read only through the `Store` protocol,
  and the caller supplies the implementation.