"""Keyword intent dispatcher — classifies an utterance and runs the matching tool.

Rules are checked in order and the first match wins, so an utterance that
mentions both email and Slack always resolves to send_email.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from .tools.executor import Executor
from .tools.registry import ToolInvocation, ToolRegistry

logger = logging.getLogger(__name__)


class InvalidRequest(ValueError):
    """The dispatch request is unusable (e.g. empty user input)."""


@dataclass(frozen=True)
class IntentRule:
    keywords: Tuple[str, ...]
    tool: str
    action_phrase: str

    def matches(self, text: str) -> bool:
        lowered = text.lower()
        return any(k in lowered for k in self.keywords)


DEFAULT_RULES: Tuple[IntentRule, ...] = (
    IntentRule(("email",), "send_email", "send an email"),
    IntentRule(("calendar", "meeting"), "create_calendar_event", "create a calendar event"),
    IntentRule(("slack",), "send_slack_message", "send a Slack message"),
    IntentRule(("github",), "create_github_issue", "create a GitHub issue"),
    IntentRule(("notion",), "create_notion_page", "create a Notion page"),
)


def classify(text: str, rules: Sequence[IntentRule] = DEFAULT_RULES) -> Optional[IntentRule]:
    """Return the first rule whose keywords occur in text, or None."""
    for rule in rules:
        if rule.matches(text):
            return rule
    return None


def confirmation_text(user_input: str, rule: Optional[IntentRule]) -> str:
    if rule is None:
        return f'I understood your request: "{user_input}". How can I help you with that?'
    return (f'I\'ll help you {rule.action_phrase}. Based on your request: "{user_input}", '
            f"I'll execute the {rule.tool} tool.")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class DispatchResponse:
    response: str
    context: Dict[str, Any]
    tools_used: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"response": self.response, "context": self.context, "toolsUsed": self.tools_used}


@dataclass
class DispatcherConfig:
    registry: ToolRegistry
    executor: Executor
    rules: Sequence[IntentRule] = DEFAULT_RULES
    clock: Callable[[], datetime] = _utcnow


class Dispatcher:
    def __init__(self, config: DispatcherConfig):
        self.registry = config.registry
        self.executor = config.executor
        self.rules = tuple(config.rules)
        self.clock = config.clock

    def select_tools(self, user_input: str, allowed_tools: Optional[Iterable[str]] = None) -> Tuple[Optional[IntentRule], List[str]]:
        """Classify user_input against the candidate tools.

        A rule whose tool is filtered out by allowed_tools selects nothing;
        later rules are not consulted.
        """
        candidates = {t.name for t in self.registry.filter(allowed_tools)}
        rule = classify(user_input, self.rules)
        if rule is None:
            return None, []
        if rule.tool not in candidates:
            logger.info(f"Dispatcher: '{rule.tool}' matched but not in allowed tools")
            return None, []
        return rule, [rule.tool]

    async def process(self, user_input: str, context: Optional[Dict[str, Any]] = None,
                      allowed_tools: Optional[Iterable[str]] = None) -> DispatchResponse:
        if not user_input or not isinstance(user_input, str):
            raise InvalidRequest("userInput is required")

        rule, tools_used = self.select_tools(user_input, allowed_tools)
        text = confirmation_text(user_input, rule)
        logger.info(f"Dispatcher: '{user_input}' -> {tools_used or 'no tool'}")

        # Execution outcome is logged only; the reply text is already fixed.
        for tool_name in tools_used:
            try:
                result = await self.executor.execute(ToolInvocation(tool_name, {"request": user_input}))
            except Exception as e:
                logger.error(f"Executor raised for {tool_name}: {e}", exc_info=True)
                continue
            if result.success:
                logger.info(f"Executed tool {tool_name}: {result.result}")
            else:
                logger.warning(f"Tool {tool_name} failed: {result.error}")

        out_context = dict(context or {})
        out_context["timestamp"] = self.clock().isoformat()
        return DispatchResponse(response=text, context=out_context, tools_used=tools_used)
