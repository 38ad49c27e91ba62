"""SchemaConverter: pydantic input models → MCP inputSchema / OpenAI parameters."""

from __future__ import annotations

import copy
from typing import Any

_DEFS_PREFIX = "#/$defs/"
_NULL = {"type": "null"}


class SchemaConverter:
    """Flattens pydantic's JSON Schema output into what MCP clients expect.

    pydantic describes enums through ``$defs``/``$ref`` and optional fields as
    ``anyOf [X, null]`` with a null default; clients work better with plain
    inline types. The converter:

    - inlines every ``#/$defs/...`` reference and removes ``$defs``
    - collapses optional properties to their non-null branch
    - drops generated ``title`` keys (a property that is *named* title stays)
    - forces ``"type": "object"`` at the root; an empty schema becomes an
      empty object schema

    Input schemas are never modified.
    """

    def convert_input_schema(self, descriptor: Any) -> dict[str, Any]:
        return self.convert_schema(descriptor.input_schema)

    def convert_schema(self, schema: dict[str, Any]) -> dict[str, Any]:
        """Return the flattened copy of *schema*.

        Raises:
            ValueError: On a circular, malformed or dangling ``$ref``.
        """
        if not schema:
            return {"type": "object", "properties": {}}

        schema = copy.deepcopy(schema)
        defs = schema.pop("$defs", None)
        if defs is not None:
            schema = self._inline_refs(schema, defs, frozenset())

        schema = self._strip_titles(schema)
        properties = schema.get("properties", {})
        for name in properties:
            properties[name] = self._collapse_optional(properties[name])

        if "type" not in schema or "properties" in schema:
            schema["type"] = "object"
        return schema

    def _inline_refs(self, node: Any, defs: dict[str, Any], seen: frozenset[str]) -> Any:
        if isinstance(node, list):
            return [self._inline_refs(item, defs, seen) for item in node]
        if not isinstance(node, dict):
            return node

        ref = node.get("$ref")
        if ref is None:
            return {key: self._inline_refs(value, defs, seen) for key, value in node.items() if key != "$defs"}

        if ref in seen:
            raise ValueError(f"Circular $ref detected: {ref}")
        target = self._inline_refs(self._lookup(ref, defs), defs, seen | {ref})
        # keys next to $ref (description, default) take precedence
        return {**target, **{key: value for key, value in node.items() if key != "$ref"}}

    @staticmethod
    def _lookup(ref: str, defs: dict[str, Any]) -> dict[str, Any]:
        if not ref.startswith(_DEFS_PREFIX):
            raise ValueError(f"Unsupported $ref format: {ref}")
        name = ref[len(_DEFS_PREFIX) :]
        try:
            return copy.deepcopy(defs[name])
        except KeyError:
            raise ValueError(f"Definition not found: {name}") from None

    def _strip_titles(self, node: Any) -> Any:
        if isinstance(node, list):
            return [self._strip_titles(item) for item in node]
        if not isinstance(node, dict):
            return node
        stripped: dict[str, Any] = {}
        for key, value in node.items():
            if key == "title" and isinstance(value, str):
                continue
            if key == "properties" and isinstance(value, dict):
                stripped[key] = {name: self._strip_titles(prop) for name, prop in value.items()}
            else:
                stripped[key] = self._strip_titles(value)
        return stripped

    @staticmethod
    def _collapse_optional(prop: dict[str, Any]) -> dict[str, Any]:
        variants = prop.get("anyOf")
        if not isinstance(variants, list) or len(variants) != 2:
            return prop
        kept = [v for v in variants if v != _NULL]
        if len(kept) != 1:
            return prop
        collapsed = {**kept[0], **{k: v for k, v in prop.items() if k != "anyOf"}}
        if "default" in collapsed and collapsed["default"] is None:
            del collapsed["default"]
        return collapsed
