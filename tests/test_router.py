from studyguides.handlers import handle_unknown
from studyguides.router import OperationRouter
from studyguides.tools import ToolName


class FakeTagStore:
    def __init__(self):
        self.root_params = None

    def get_tag_by_id(self, tag_id):
        return None

    def list_root_tags(self, params):
        self.root_params = dict(params)
        return []

    def list_tags_with_filters(self, params):
        return []

    def count_tags(self, params):
        return 5

    def unique_tag_types(self):
        return []

    def unique_context_types(self):
        return []


class FakeUserStore:
    def user_by_email(self, email):
        return None

    def user_count(self, params):
        return 0


class FakeStore:
    def __init__(self):
        self.tag_store = FakeTagStore()
        self.user_store = FakeUserStore()


def test_every_tool_has_a_handler():
    router = OperationRouter(FakeStore())
    assert set(router.handlers) == {name.value for name in ToolName}


def test_routes_known_operation():
    router = OperationRouter(FakeStore())
    assert router.route("TagCount", {}) == "Found 5 tags total."


def test_unknown_operation_falls_back():
    store = FakeStore()
    router = OperationRouter(store)
    assert router.route("DoSomethingElse", {}) == handle_unknown(store, {})


def test_params_are_passed_through():
    store = FakeStore()
    router = OperationRouter(store)
    result = router.route("ListRootTags", {"name": "bio"})
    assert result == "No root tags found."
    assert store.tag_store.root_params == {"name": "bio"}


def test_get_tag_via_router():
    router = OperationRouter(FakeStore())
    assert router.route("GetTag", {}) == "Please provide a tag ID to retrieve."