"""OpenAIConverter: the Gravatar tools as OpenAI function-calling definitions."""

from __future__ import annotations

import copy
import re
from typing import Any

from gravatar_mcp.adapters.annotations import AnnotationMapper
from gravatar_mcp.adapters.schema import SchemaConverter

OPENAI_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9_-]{1,64}$")


def _nullable(prop: dict[str, Any]) -> dict[str, Any]:
    """Allow ``null`` for an optional property, in ``type`` and ``enum`` alike."""
    kind = prop.get("type")
    if isinstance(kind, str) and kind != "null":
        prop["type"] = [kind, "null"]
    elif isinstance(kind, list) and "null" not in kind:
        prop["type"] = [*kind, "null"]
    if "enum" in prop and None not in prop["enum"]:
        prop["enum"] = [*prop["enum"], None]
    return prop


class OpenAIConverter:
    """Builds ``{"type": "function", "function": {...}}`` entries from tool descriptors.

    Parameters are the same flattened schemas served as MCP ``inputSchema``.
    In strict mode every property becomes required and the optional ones
    nullable, which is what OpenAI's structured outputs expect.
    """

    def __init__(self) -> None:
        self._schema_converter = SchemaConverter()
        self._annotation_mapper = AnnotationMapper()

    def convert_registry(
        self,
        registry: Any,
        embed_annotations: bool = False,
        strict: bool = False,
        prefix: str | None = None,
    ) -> list[dict[str, Any]]:
        definitions = (registry.get_definition(name) for name in registry.list(prefix=prefix))
        return [
            self.convert_descriptor(descriptor, embed_annotations=embed_annotations, strict=strict)
            for descriptor in definitions
            if descriptor is not None
        ]

    def convert_descriptor(
        self,
        descriptor: Any,
        embed_annotations: bool = False,
        strict: bool = False,
    ) -> dict[str, Any]:
        """Convert one ToolDescriptor.

        Raises:
            ValueError: If the tool name is not a valid OpenAI function name.
        """
        if not OPENAI_NAME_PATTERN.match(descriptor.name):
            raise ValueError(f"Tool name {descriptor.name!r} is not a valid OpenAI function name")

        description = descriptor.description
        if embed_annotations:
            description += self._annotation_mapper.to_description_suffix(descriptor.annotations)

        parameters = self._schema_converter.convert_input_schema(descriptor)
        function: dict[str, Any] = {"name": descriptor.name, "description": description}
        if strict:
            function["parameters"] = self.strict_parameters(parameters)
            function["strict"] = True
        else:
            function["parameters"] = parameters
        return {"type": "function", "function": function}

    def strict_parameters(self, schema: dict[str, Any]) -> dict[str, Any]:
        """Return a strict-mode copy of an object schema; the input is left untouched."""
        schema = copy.deepcopy(schema)
        properties: dict[str, Any] = schema.get("properties", {})
        required = set(schema.get("required", []))
        for name, prop in properties.items():
            prop.pop("default", None)
            if name not in required:
                _nullable(prop)
            if prop.get("type") == "object":
                properties[name] = self.strict_parameters(prop)
        schema["additionalProperties"] = False
        schema["required"] = list(properties)
        return schema
