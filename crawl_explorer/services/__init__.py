from .explorer_service import ExplorerService, PageModel
from .view_state import ROUTES, NavigationAddress, ViewState

__all__ = [
    "ExplorerService",
    "PageModel",
    "ROUTES",
    "NavigationAddress",
    "ViewState",
]
