"""Dispatch a classified operation name to its handler."""

from __future__ import annotations

from typing import Callable, Mapping, Protocol

from . import handlers
from .handlers import Store
from .tools import ToolName

OperationHandler = Callable[[Mapping[str, str]], str]


class Router(Protocol):
    """Anything that can answer an operation with its parameters."""

    def route(self, op: str, params: Mapping[str, str]) -> str: ...


_HANDLERS: dict[ToolName, Callable[[Store, Mapping[str, str]], str]] = {
    ToolName.TAG_COUNT: handlers.handle_tag_count,
    ToolName.LIST_TAGS: handlers.handle_list_tags,
    ToolName.LIST_ROOT_TAGS: handlers.handle_list_root_tags,
    ToolName.GET_TAG: handlers.handle_get_tag,
    ToolName.UNIQUE_TAG_TYPES: handlers.handle_unique_tag_types,
    ToolName.UNIQUE_CONTEXT_TYPES: handlers.handle_unique_context_types,
    ToolName.USER_COUNT: handlers.handle_user_count,
    ToolName.GET_USER: handlers.handle_get_user,
    ToolName.UNKNOWN: handlers.handle_unknown,
}


def _bind(handler: Callable[[Store, Mapping[str, str]], str], store: Store) -> OperationHandler:
    return lambda params: handler(store, params)


class OperationRouter:
    """Routes operations to handlers bound to a store; unknown names go to Unknown."""

    def __init__(self, store: Store) -> None:
        self.handlers: dict[str, OperationHandler] = {
            name.value: _bind(handler, store) for name, handler in _HANDLERS.items()
        }

    def route(self, op: str, params: Mapping[str, str]) -> str:
        handler = self.handlers.get(op, self.handlers[ToolName.UNKNOWN.value])
        return handler(params)