"""
Streamlit session wiring (settings, API client, session store).
"""

from .session import (
    get_settings,
    get_token_storage,
    get_api_client,
    get_session_store,
    reset_session_objects,
)

__all__ = [
    "get_settings",
    "get_token_storage",
    "get_api_client",
    "get_session_store",
    "reset_session_objects",
]
