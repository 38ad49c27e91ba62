"""Tool facade: declared input shapes, descriptors and the tool registry."""

from gravatar_mcp.tools.descriptors import ToolAnnotations, ToolDescriptor
from gravatar_mcp.tools.registry import ToolRegistry, image_content, text_content

__all__ = ["ToolAnnotations", "ToolDescriptor", "ToolRegistry", "image_content", "text_content"]
