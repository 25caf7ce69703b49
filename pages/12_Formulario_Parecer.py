# =============================================================================
# pages/12_Formulario_Parecer.py - Public parecer submission
# Two steps: the student proves their id, then fills the parecer.
# =============================================================================
from __future__ import annotations
from datetime import date

import streamlit as st

from psico_core.resources import PARECERES, options_from_records
from psico_core.services import ErrorKind, IntakeService
from psico_core.state import get_api_client, get_settings
from psico_core.ui import apply_css, card_header, render_form_fields

st.set_page_config(page_title="PSICO - Novo Parecer", page_icon="📝", layout="centered")
apply_css()

STUDENT_KEY = "_public_parecer_student"
OPTIONS_KEY = "_public_parecer_options"

service = IntakeService(get_api_client(), get_settings().public_coordenacao_id)
student = st.session_state.get(STUDENT_KEY)

st.markdown(card_header("Criar Novo Parecer"), unsafe_allow_html=True)

if student is None:
    st.info("Por favor, insira seu ID de aluno para prosseguir.")
    with st.form("verify_student_form"):
        raw_id = st.text_input("ID do aluno")
        submitted = st.form_submit_button("Continuar", type="primary", use_container_width=True)

    if submitted:
        with st.spinner("Verificando..."):
            result = service.verify_student(raw_id)
        if result:
            st.session_state[STUDENT_KEY] = result.data
            st.rerun()
        elif result.error_kind is ErrorKind.VALIDATION:
            st.error(result.error)
        elif result.error_kind is ErrorKind.NOT_FOUND:
            st.error("Aluno não encontrado. Verifique o ID e tente novamente.")
        else:
            st.error("Erro ao verificar ID do aluno. Tente novamente mais tarde.")
    st.stop()

st.markdown(f"Aluno: **{student.get('name')}** (ID {student.get('id')})")

if OPTIONS_KEY not in st.session_state:
    options_result = service.load_report_options()
    if not options_result:
        st.error("Erro ao carregar opções de pacientes ou setores.")
        st.stop()
    st.session_state[OPTIONS_KEY] = {
        "paciente_id": options_from_records(options_result.data["pacientes"]),
        "setor_id": options_from_records(options_result.data["setores"]),
    }

with st.form("public_parecer_form"):
    values = render_form_fields(
        PARECERES,
        {"solicitation_date": date.today().isoformat()},
        st.session_state[OPTIONS_KEY],
        key_prefix="public_parecer",
        skip=("aluno_id",),
    )
    col_send, col_cancel = st.columns(2)
    submitted = col_send.form_submit_button("Criar parecer", type="primary", use_container_width=True)
    cancelled = col_cancel.form_submit_button("Cancelar", use_container_width=True)

if cancelled:
    st.session_state.pop(STUDENT_KEY, None)
    st.switch_page("Welcome.py")

if submitted:
    with st.spinner("Enviando..."):
        result = service.submit_report(student["id"], values)
    if result:
        st.success("Parecer criado com sucesso!")
        st.session_state.pop(STUDENT_KEY, None)
        st.session_state.pop(OPTIONS_KEY, None)
    else:
        st.error(f"Erro ao criar parecer: {result.error}. Verifique os dados e tente novamente.")
