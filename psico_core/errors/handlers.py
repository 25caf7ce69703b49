# =============================================================================
# psico_core/errors/handlers.py
# Turning exceptions into messages on the page
# =============================================================================

from __future__ import annotations
import functools
from typing import Any, Callable, Optional

import streamlit as st

from psico_core.logging import get_logger
from .exceptions import (
    AuthenticationError,
    NetworkError,
    NotFoundError,
    PsicoError,
    ValidationError,
)

logger = get_logger(__name__)

DEBUG_FLAG = "debug_mode"

# Most specific class first
USER_MESSAGES = (
    (NetworkError, "Não foi possível conectar à API. Verifique sua conexão e tente novamente."),
    (AuthenticationError, "Sessão inválida ou expirada. Faça login novamente."),
    (NotFoundError, "Registro não encontrado."),
)


def user_message_for(error: Exception) -> str:
    """Portuguese text shown to the user for ``error``"""
    if isinstance(error, ValidationError):
        return error.message
    for error_type, message in USER_MESSAGES:
        if isinstance(error, error_type):
            return message
    if isinstance(error, PsicoError):
        return error.message
    return "Ocorreu um erro inesperado."


def handle_error(error: Exception, user_message: Optional[str] = None, log_error: bool = True) -> None:
    """
    Log ``error`` and show it with st.error.

    Unrecoverable errors (bad configuration) ask the user to contact
    support. With ``st.session_state["debug_mode"]`` set, the error
    details are shown in an expander.
    """
    message = user_message or user_message_for(error)
    recoverable = error.recoverable if isinstance(error, PsicoError) else True

    if log_error:
        code = error.code if isinstance(error, PsicoError) else type(error).__name__
        logger.error(f"[{code}] {message}", exc_info=error)

    if recoverable:
        st.error(message)
    else:
        st.error(f"Erro crítico: {message}. Contate o suporte.")

    if st.session_state.get(DEBUG_FLAG, False):
        details = error.to_dict() if isinstance(error, PsicoError) else {"error": repr(error)}
        with st.expander("Detalhes do erro", expanded=False):
            st.json(details)


def error_boundary(default_return: Any = None, error_message: Optional[str] = None):
    """
    Decorator for render functions: any exception is reported on the page
    and ``default_return`` is returned instead.

    Usage:
        @error_boundary(error_message="Falha ao desenhar o gráfico")
        def render_chart(stats):
            ...
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                handle_error(e, user_message=error_message)
                return default_return

        return wrapper

    return decorator
