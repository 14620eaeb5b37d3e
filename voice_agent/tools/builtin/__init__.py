"""Auto-import builtin tool modules to trigger @register_tool decorators."""
from . import gmail
from . import google_calendar
from . import slack
from . import github
from . import notion
