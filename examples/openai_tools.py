"""Print the Gravatar tools as OpenAI function-calling definitions.

Usage (from the project root):
    python examples/openai_tools.py
"""

import json

from gravatar_mcp import to_openai_tools

print(json.dumps(to_openai_tools(strict=True, embed_annotations=True), indent=2))
