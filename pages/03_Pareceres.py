# =============================================================================
# pages/03_Pareceres.py - Pareceres
# Generic resource page plus a viewer for the selected parecer's notes.
# =============================================================================
from __future__ import annotations
import streamlit as st

from psico_core.auth import Route, require_authentication
from psico_core.errors import error_boundary
from psico_core.resources import PARECERES
from psico_core.services import ResourceService
from psico_core.state import get_api_client, get_session_store
from psico_core.ui import apply_css, format_date, render_resource_page

st.set_page_config(page_title="PSICO - Pareceres", page_icon="🏥", layout="wide")
apply_css()

require_authentication(get_session_store(), Route.PARECERES)


@error_boundary(error_message="Não foi possível exibir o parecer selecionado.")
def render_parecer_detail(parecer: dict) -> None:
    with st.expander(f"Parecer #{parecer.get('id')}", expanded=True):
        st.markdown(
            f"**Aluno:** {parecer.get('aluno_name', 'N/A')}  \n"
            f"**Paciente:** {parecer.get('paciente_name', 'N/A')}  \n"
            f"**Setor:** {parecer.get('setor_name', 'N/A')}  \n"
            f"**Solicitação:** {format_date(parecer.get('solicitation_date'))}  \n"
            f"**Resposta:** {format_date(parecer.get('answer_date'))}"
        )
        st.markdown("**Observações**")
        st.write(parecer.get("obs") or "Sem observações.")


render_resource_page(
    PARECERES,
    lambda: ResourceService(get_api_client(), PARECERES),
    row_detail=render_parecer_detail,
)
