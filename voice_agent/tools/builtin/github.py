"""GitHub tool — stubbed issue creation."""
from ..registry import register_tool, input_text, ToolParam


@register_tool(
    "create_github_issue",
    description="Create an issue on GitHub",
    params=[
        ToolParam("owner", description="Repository owner"),
        ToolParam("repo", description="Repository name"),
        ToolParam("title", description="Issue title"),
        ToolParam("body", description="Issue body", required=False),
    ],
)
async def create_github_issue(args: dict) -> str:
    return f"GitHub issue created: {input_text(args, 'title')}"
