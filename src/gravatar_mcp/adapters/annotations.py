"""AnnotationMapper: ToolAnnotations → MCP ToolAnnotations hints."""

from __future__ import annotations

from typing import Any

from mcp import types as mcp_types

DEFAULT_ANNOTATIONS = {
    "readonly": False,
    "destructive": False,
    "idempotent": False,
    "open_world": True,
}


class AnnotationMapper:
    """Maps tool annotations to MCP's hint fields and to plain-text suffixes.

    MCP's own defaults (no annotations at all) describe a non-idempotent,
    possibly-destructive, open-world tool.
    """

    def to_mcp_annotations(self, annotations: Any | None, title: str | None = None) -> mcp_types.ToolAnnotations:
        """Convert ToolAnnotations (or None) to an MCP ToolAnnotations object."""
        if annotations is None:
            return mcp_types.ToolAnnotations(
                title=title,
                readOnlyHint=DEFAULT_ANNOTATIONS["readonly"],
                destructiveHint=DEFAULT_ANNOTATIONS["destructive"],
                idempotentHint=DEFAULT_ANNOTATIONS["idempotent"],
                openWorldHint=DEFAULT_ANNOTATIONS["open_world"],
            )

        return mcp_types.ToolAnnotations(
            title=title,
            readOnlyHint=annotations.readonly,
            destructiveHint=annotations.destructive,
            idempotentHint=annotations.idempotent,
            openWorldHint=annotations.open_world,
        )

    def to_description_suffix(self, annotations: Any | None) -> str:
        """Text appended to an OpenAI description, e.g. ``"\\n\\n[Annotations: readonly=true]"``.

        Only hints that differ from the MCP defaults are listed; with none
        the suffix is empty.
        """
        if annotations is None:
            return ""

        parts = []
        for key, default in DEFAULT_ANNOTATIONS.items():
            value = getattr(annotations, key)
            if value != default:
                parts.append(f"{key}={str(value).lower()}")

        if not parts:
            return ""

        return f"\n\n[Annotations: {', '.join(parts)}]"
