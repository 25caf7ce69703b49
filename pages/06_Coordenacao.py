# =============================================================================
# pages/06_Coordenacao.py - Coordenações
# =============================================================================
from __future__ import annotations
import streamlit as st

from psico_core.auth import Route, require_authentication
from psico_core.resources import COORDENACOES
from psico_core.services import ResourceService
from psico_core.state import get_api_client, get_session_store
from psico_core.ui import apply_css, render_resource_page

st.set_page_config(page_title="PSICO - Coordenações", page_icon="🏥", layout="wide")
apply_css()

require_authentication(get_session_store(), Route.COORDENACAO)

render_resource_page(COORDENACOES, lambda: ResourceService(get_api_client(), COORDENACOES))
