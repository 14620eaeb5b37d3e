"""Notion tool — stubbed page creation in a database."""
import logging

from ..registry import register_tool, input_text, ToolParam

logger = logging.getLogger(__name__)


@register_tool(
    "create_notion_page",
    description="Create a page in Notion",
    params=[
        ToolParam("databaseId", description="Notion database ID"),
        ToolParam("title", description="Page title"),
        ToolParam("properties", type="object", description="Additional page properties", required=False),
    ],
)
async def create_notion_page(args: dict) -> str:
    database_id = input_text(args, "databaseId")
    logger.info(f"Notion: (stub) creating page in database {database_id[:8] or '<none>'}...")
    return f'Notion page "{input_text(args, "title")}" created'
