"""Calendar tool — stubbed Google Calendar event creation."""
from ..registry import register_tool, input_text, ToolParam


@register_tool(
    "create_calendar_event",
    description="Create an event in Google Calendar",
    params=[
        ToolParam("title", description="Event title"),
        ToolParam("startTime", description="Event start time (ISO 8601)"),
        ToolParam("endTime", description="Event end time (ISO 8601)"),
        ToolParam("description", description="Event description", required=False),
    ],
)
async def create_calendar_event(args: dict) -> str:
    return f'Calendar event "{input_text(args, "title")}" created for {input_text(args, "startTime")}'
