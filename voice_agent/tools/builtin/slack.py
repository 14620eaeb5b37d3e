"""Slack tool — stubbed channel message."""
from ..registry import register_tool, input_text, ToolParam


@register_tool(
    "send_slack_message",
    description="Send a message to Slack",
    params=[
        ToolParam("channel", description="Slack channel ID or name"),
        ToolParam("message", description="Message text"),
    ],
)
async def send_slack_message(args: dict) -> str:
    return f"Message sent to {input_text(args, 'channel')}"
