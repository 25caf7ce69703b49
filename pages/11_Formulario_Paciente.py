# =============================================================================
# pages/11_Formulario_Paciente.py - Public patient registration
# =============================================================================
from __future__ import annotations
import streamlit as st

from psico_core.resources import PACIENTES
from psico_core.services import IntakeService
from psico_core.state import get_api_client, get_settings
from psico_core.ui import apply_css, card_header, render_form_fields

st.set_page_config(page_title="PSICO - Cadastro de Paciente", page_icon="🏥", layout="centered")
apply_css()

st.markdown(card_header("Cadastro de Paciente"), unsafe_allow_html=True)

service = IntakeService(get_api_client(), get_settings().public_coordenacao_id)

with st.form("public_paciente_form", clear_on_submit=True):
    values = render_form_fields(PACIENTES, {}, {}, key_prefix="public_paciente")
    submitted = st.form_submit_button("Cadastrar", type="primary", use_container_width=True)

if submitted:
    with st.spinner("Enviando..."):
        result = service.register_patient(values)
    if result:
        st.success("Cadastro realizado com sucesso!")
    else:
        st.error(f"Ocorreu um erro: {result.error}. Por favor, verifique os dados e tente novamente.")
