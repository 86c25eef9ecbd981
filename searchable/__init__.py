"""Live query filtering with debounced recomputation and render callbacks."""

__version__ = "0.1.0"

from .config import DebounceConfig, Settings, get_settings
from .scheduler import Debouncer, build_scheduler, debounce
from .filtering import apply_query, filter_items
from .render import PresentationConflictError, PresentationMode, RenderContext, RenderDispatcher
from .searchable import Searchable
from .state import QueryState

__all__ = [
    "DebounceConfig",
    "Debouncer",
    "PresentationConflictError",
    "PresentationMode",
    "QueryState",
    "RenderContext",
    "RenderDispatcher",
    "Searchable",
    "Settings",
    "apply_query",
    "build_scheduler",
    "debounce",
    "filter_items",
    "get_settings",
]
