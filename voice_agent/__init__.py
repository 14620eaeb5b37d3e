"""Voice agent — keyword intent dispatch onto stubbed integration tools."""
from .dispatcher import Dispatcher, DispatcherConfig, DispatchResponse, InvalidRequest, classify
from .tools import ToolInvocation, ToolNotFound, ToolRegistry, ToolResult, builtin_registry

__version__ = "0.1.0"
