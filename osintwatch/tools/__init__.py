# Source adapters
from .gdelt_tool import GDELTTool
from .rss_tool import RSSTool
from .event_sources import EventSourcesTool

__all__ = [
    "GDELTTool",
    "RSSTool",
    "EventSourcesTool",
]
