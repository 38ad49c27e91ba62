"""ToolDescriptor: name, description, input shape and handler of one tool."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel

ContentItem = dict[str, str]
ToolHandler = Callable[[Any], Awaitable[list[ContentItem]]]


@dataclass(frozen=True)
class ToolAnnotations:
    """Behavior hints advertised to clients. Defaults describe a read-only lookup."""

    readonly: bool = True
    destructive: bool = False
    idempotent: bool = True
    open_world: bool = True


@dataclass(frozen=True)
class ToolDescriptor:
    name: str
    description: str
    input_model: type[BaseModel]
    handler: ToolHandler
    title: str | None = None
    annotations: ToolAnnotations = field(default_factory=ToolAnnotations)

    @property
    def input_schema(self) -> dict[str, Any]:
        return self.input_model.model_json_schema(by_alias=True)
