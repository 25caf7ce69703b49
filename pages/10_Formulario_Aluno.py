# =============================================================================
# pages/10_Formulario_Aluno.py - Public student self-registration
# =============================================================================
from __future__ import annotations
import streamlit as st

from psico_core.services import IntakeService
from psico_core.state import get_api_client, get_settings
from psico_core.ui import apply_css, card_header

st.set_page_config(page_title="PSICO - Cadastro de Aluno", page_icon="🎓", layout="centered")
apply_css()

st.markdown(card_header("Cadastro de Aluno"), unsafe_allow_html=True)

service = IntakeService(get_api_client(), get_settings().public_coordenacao_id)

with st.form("public_aluno_form", clear_on_submit=True):
    name = st.text_input("Nome *")
    submitted = st.form_submit_button("Cadastrar", type="primary", use_container_width=True)

if submitted:
    with st.spinner("Cadastrando..."):
        result = service.register_student(name)
    if result:
        st.success(
            f"Aluno de id {result.data} cadastrado com sucesso! "
            "Guarde esse id para o registro de pareceres no futuro!"
        )
    else:
        st.error(f"Erro ao cadastrar: {result.error}. Verifique os dados e tente novamente.")
