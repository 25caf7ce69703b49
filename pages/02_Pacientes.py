# =============================================================================
# pages/02_Pacientes.py - Pacientes
# =============================================================================
from __future__ import annotations
import streamlit as st

from psico_core.auth import Route, require_authentication
from psico_core.resources import PACIENTES
from psico_core.services import ResourceService
from psico_core.state import get_api_client, get_session_store
from psico_core.ui import apply_css, render_resource_page

st.set_page_config(page_title="PSICO - Pacientes", page_icon="🏥", layout="wide")
apply_css()

require_authentication(get_session_store(), Route.PACIENTES)

render_resource_page(PACIENTES, lambda: ResourceService(get_api_client(), PACIENTES))
