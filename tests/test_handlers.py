from datetime import datetime

import pytest

from studyguides import handlers
from studyguides.formatting import (
    FormatType,
    build_filter_description,
    format_tags,
    tag_as_json,
    user_as_detailed_text,
)
from studyguides.models import Tag, User


class FakeTagStore:
    def __init__(self, tags=(), types=(), contexts=(), count=0, fail=False):
        self.tags = list(tags)
        self.types = list(types)
        self.contexts = list(contexts)
        self.count = count
        self.fail = fail
        self.calls = []

    def get_tag_by_id(self, tag_id):
        if self.fail:
            raise RuntimeError("boom")
        return next((t for t in self.tags if t.id == tag_id), None)

    def list_root_tags(self, params):
        self.calls.append(("root", dict(params)))
        return self.tags

    def list_tags_with_filters(self, params):
        self.calls.append(("filtered", dict(params)))
        return self.tags

    def count_tags(self, params):
        self.calls.append(("count", dict(params)))
        return self.count

    def unique_tag_types(self):
        if self.fail:
            raise RuntimeError("boom")
        return self.types

    def unique_context_types(self):
        return self.contexts


class FakeUserStore:
    def __init__(self, users=(), count=0, fail=False):
        self.users = list(users)
        self.count = count
        self.fail = fail
        self.params = None

    def user_by_email(self, email):
        if self.fail:
            raise RuntimeError("boom")
        return next((u for u in self.users if u.email == email), None)

    def user_count(self, params):
        self.params = dict(params)
        return self.count


class FakeStore:
    def __init__(self, tag_store=None, user_store=None):
        self.tag_store = tag_store or FakeTagStore()
        self.user_store = user_store or FakeUserStore()


TAGS = [
    Tag(id="t1", name="Algebra", type="Course"),
    Tag(id="t2", name="Biology", type="Course", description="Life"),
]

NOW = datetime(2024, 7, 15)


def test_get_tag_requires_id():
    assert handlers.handle_get_tag(FakeStore(), {}) == "Please provide a tag ID to retrieve."


def test_get_tag_not_found():
    store = FakeStore(FakeTagStore(TAGS))
    assert handlers.handle_get_tag(store, {"tagId": "zz"}) == "Tag with ID 'zz' not found."


def test_get_tag_error_is_reported_as_text():
    store = FakeStore(FakeTagStore(TAGS, fail=True))
    assert handlers.handle_get_tag(store, {"tagId": "t1"}).startswith("Error retrieving tag: ")


def test_get_tag_json_format():
    store = FakeStore(FakeTagStore(TAGS))
    result = handlers.handle_get_tag(store, {"tagId": "t1", "format": "json"})
    assert result == tag_as_json(TAGS[0])


def test_get_user_paths():
    user = User(id="u1", email="user@example.com", name="Someone")
    store = FakeStore(user_store=FakeUserStore([user]))
    assert handlers.handle_get_user(store, {}) == "Please provide a user email to retrieve."
    assert (
        handlers.handle_get_user(store, {"userEmail": "other@example.com"})
        == "User with email 'other@example.com' not found."
    )
    assert handlers.handle_get_user(store, {"userEmail": "user@example.com"}) == user_as_detailed_text(user)


def test_get_user_error():
    store = FakeStore(user_store=FakeUserStore(fail=True))
    result = handlers.handle_get_user(store, {"userEmail": "user@example.com"})
    assert result.startswith("Error retrieving user: ")


def test_list_root_tags_empty():
    assert handlers.handle_list_root_tags(FakeStore(), {}) == "No root tags found."


def test_list_root_tags_csv_returns_data_only():
    store = FakeStore(FakeTagStore(TAGS))
    assert handlers.handle_list_root_tags(store, {"format": "csv"}) == format_tags(TAGS, FormatType.CSV)


def test_list_root_tags_list_has_header():
    store = FakeStore(FakeTagStore(TAGS))
    result = handlers.handle_list_root_tags(store, {})
    body = format_tags(TAGS, FormatType.LIST)
    assert result.endswith(":\n\n" + body)
    assert result.startswith(f"Found {len(TAGS)} root tags")


def test_list_tags_invalid_type():
    store = FakeStore(FakeTagStore(TAGS, types=["Course", "Topic"]))
    result = handlers.handle_list_tags(store, {"type": "Bogus"})
    assert result == "Invalid tag type 'Bogus'. Available types: [Course Topic]"


def test_list_tags_type_lookup_error_propagates():
    store = FakeStore(FakeTagStore(TAGS, fail=True))
    with pytest.raises(RuntimeError):
        handlers.handle_list_tags(store, {"type": "Course"})


def test_list_tags_filtered_empty():
    store = FakeStore(FakeTagStore([], types=["Course"]))
    params = {"type": "Course", "name": "alg"}
    expected = "No tags found" + build_filter_description(params, True, False, True, False) + "."
    assert handlers.handle_list_tags(store, params) == expected


def test_list_tags_filtered_uses_filter_query():
    tag_store = FakeTagStore(TAGS, types=["Course"])
    result = handlers.handle_list_tags(FakeStore(tag_store), {"type": "Course", "format": "json"})
    assert result == format_tags(TAGS, FormatType.JSON)
    assert tag_store.calls[0][0] == "filtered"


def test_list_tags_without_filters_lists_roots():
    tag_store = FakeTagStore(TAGS)
    result = handlers.handle_list_tags(FakeStore(tag_store), {})
    assert tag_store.calls[0][0] == "root"
    assert result.endswith(format_tags(TAGS, FormatType.LIST))


def test_tag_count_total():
    store = FakeStore(FakeTagStore(count=5))
    assert handlers.handle_tag_count(store, {}) == "Found 5 tags total."


def test_tag_count_with_filter():
    store = FakeStore(FakeTagStore(count=3))
    params = {"contextType": "DoD", "public": "true"}
    expected = f"Found 3 tags{build_filter_description(params, False, True, False, True)}."
    assert handlers.handle_tag_count(store, params) == expected


def test_unique_tag_types():
    assert handlers.handle_unique_tag_types(FakeStore(), {}) == "No tag types found in the system."
    store = FakeStore(FakeTagStore(types=["Course", "Topic"]))
    result = handlers.handle_unique_tag_types(store, {})
    assert result.count("\n") == 3
    assert "2. Topic\n" in result


def test_unique_context_types():
    assert handlers.handle_unique_context_types(FakeStore(), {}) == "No context types found."
    store = FakeStore(FakeTagStore(contexts=["Colleges", "DoD"]))
    result = handlers.handle_unique_context_types(store, {})
    assert result.startswith("Available context types:\n")
    assert "- DoD\n" in result


def test_unknown():
    assert handlers.handle_unknown(FakeStore(), {}).startswith("I'm not sure how to help")


def test_user_count_corrects_stale_month_and_adds_year():
    user_store = FakeUserStore(count=4)
    params = {"month": "3"}
    result = handlers.handle_user_count(FakeStore(user_store=user_store), params, NOW)
    assert user_store.params == {"month": "7", "year": "2024"}
    assert result == "You have 4 users created in July 2024."
    assert params == {"month": "3"}


def test_user_count_keeps_recent_values():
    user_store = FakeUserStore(count=2)
    handlers.handle_user_count(FakeStore(user_store=user_store), {"month": "6", "year": "2023"}, NOW)
    assert user_store.params == {"month": "6", "year": "2023"}


def test_user_count_overrides_old_year():
    user_store = FakeUserStore(count=1)
    handlers.handle_user_count(FakeStore(user_store=user_store), {"year": "2020"}, NOW)
    assert user_store.params["year"] == str(NOW.year)


def test_user_count_total():
    store = FakeStore(user_store=FakeUserStore(count=9))
    assert handlers.handle_user_count(store, {}, NOW).endswith(" in total.")