"""Email tool — stubbed Gmail send."""
import logging

from ..registry import register_tool, input_text, ToolParam

logger = logging.getLogger(__name__)


@register_tool(
    "send_email",
    description="Send an email via Gmail",
    params=[
        ToolParam("to", description="Recipient email address"),
        ToolParam("subject", description="Email subject"),
        ToolParam("body", description="Email body"),
    ],
)
async def send_email(args: dict) -> str:
    to = input_text(args, "to")
    logger.info(f"Gmail: (stub) sending to {to or '<missing recipient>'}")
    return f'Email sent to {to} with subject "{input_text(args, "subject")}"'
