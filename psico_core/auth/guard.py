# =============================================================================
# psico_core/auth/guard.py
# Route guard for authenticated-only views
# =============================================================================

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Dict

import streamlit as st

from psico_core.logging import get_logger

if TYPE_CHECKING:
    from .session import SessionStore

logger = get_logger(__name__)


class Route(Enum):
    LOGIN = "login"
    HOME = "home"
    ALUNOS = "alunos"
    PACIENTES = "pacientes"
    PARECERES = "pareceres"
    SETORES = "setores"
    DADOS = "dados"
    COORDENACAO = "coordenacao"
    FORM_ALUNO = "formaluno"
    FORM_PACIENTE = "formpaciente"
    FORM_PARECER = "formparecer"


PUBLIC_ROUTES = frozenset({
    Route.FORM_ALUNO,
    Route.FORM_PACIENTE,
    Route.FORM_PARECER,
})

# Streamlit page file for each route
PAGE_FILES: Dict[Route, str] = {
    Route.LOGIN: "Welcome.py",
    Route.HOME: "Welcome.py",
    Route.ALUNOS: "pages/01_Alunos.py",
    Route.PACIENTES: "pages/02_Pacientes.py",
    Route.PARECERES: "pages/03_Pareceres.py",
    Route.SETORES: "pages/04_Setores.py",
    Route.DADOS: "pages/05_Dados.py",
    Route.COORDENACAO: "pages/06_Coordenacao.py",
    Route.FORM_ALUNO: "pages/10_Formulario_Aluno.py",
    Route.FORM_PACIENTE: "pages/11_Formulario_Paciente.py",
    Route.FORM_PARECER: "pages/12_Formulario_Parecer.py",
}


@dataclass(frozen=True)
class RouteDecision:
    view: Route
    redirected: bool


def resolve_route(requested: Route, authenticated: bool) -> RouteDecision:
    """
    Decide which view renders for a navigation.

    Public forms always render. Every other view requires a session and
    falls back to the login view without one. The login view itself,
    reached with a session, resolves to the landing view.
    """
    if requested in PUBLIC_ROUTES:
        return RouteDecision(requested, False)

    if not authenticated:
        if requested is Route.LOGIN:
            return RouteDecision(Route.LOGIN, False)
        return RouteDecision(Route.LOGIN, True)

    if requested is Route.LOGIN:
        return RouteDecision(Route.HOME, True)
    return RouteDecision(requested, False)


def require_authentication(store: "SessionStore", route: Route) -> None:
    """
    Apply the guard to the current Streamlit page.

    Call at the top of every authenticated page; redirects to the login
    view and stops the script when there is no session.
    """
    decision = resolve_route(route, store.is_authenticated)
    if decision.redirected and decision.view is Route.LOGIN:
        logger.info(f"Unauthenticated access to '{route.value}', redirecting")
        st.switch_page(PAGE_FILES[Route.LOGIN])
        st.stop()
