"""
Streamlit UI helpers: theme, formatting and the generic resource page.
"""

from .formatting import format_date
from .resource_page import (
    CONTROLLER_KEY_PREFIX,
    ResourcePageController,
    get_controller,
    render_form_fields,
    render_resource_page,
)
from .theme import apply_css, card_header

__all__ = [
    "format_date",
    "CONTROLLER_KEY_PREFIX",
    "ResourcePageController",
    "get_controller",
    "render_form_fields",
    "render_resource_page",
    "apply_css",
    "card_header",
]
