from __future__ import annotations
import streamlit as st

from psico_core.auth import PAGE_FILES, Route, resolve_route
from psico_core.errors import AuthenticationError, ConfigurationError, handle_error
from psico_core.state import get_session_store, reset_session_objects
from psico_core.ui import apply_css, card_header

# ============================================================================
# PAGE CONFIGURATION
# ============================================================================
st.set_page_config(
    page_title="PSICO - Login",
    page_icon="🏥",
    layout="centered",
    initial_sidebar_state="collapsed",
)

apply_css()

try:
    store = get_session_store()
except ConfigurationError as e:
    handle_error(e)
    st.stop()

decision = resolve_route(Route.LOGIN, store.is_authenticated)

NAV_BUTTONS = [
    ("Pacientes", Route.PACIENTES),
    ("Alunos", Route.ALUNOS),
    ("Pareceres", Route.PARECERES),
    ("Setores", Route.SETORES),
    ("Dados", Route.DADOS),
    ("Coordenações", Route.COORDENACAO),
]


def render_login():
    st.markdown(card_header("Login"), unsafe_allow_html=True)

    with st.form("login_form"):
        name = st.text_input("Nome", placeholder="Name")
        pwd = st.text_input("Senha", type="password", placeholder="Password")
        submitted = st.form_submit_button("Entrar", type="primary", use_container_width=True)

    if submitted:
        with st.spinner("Entrando..."):
            try:
                # On success the store navigates to the landing view
                store.login(name, pwd)
            except AuthenticationError:
                st.error("Login failed: Invalid credentials")

    st.markdown("---")
    st.caption("Formulários públicos")
    col1, col2, col3 = st.columns(3)
    with col1:
        st.page_link(PAGE_FILES[Route.FORM_ALUNO], label="Cadastro de aluno")
    with col2:
        st.page_link(PAGE_FILES[Route.FORM_PACIENTE], label="Cadastro de paciente")
    with col3:
        st.page_link(PAGE_FILES[Route.FORM_PARECER], label="Novo parecer")


def render_home():
    _, logout_col = st.columns([4, 1])
    with logout_col:
        if st.button("Logout", use_container_width=True):
            store.logout()
            reset_session_objects()
            st.rerun()

    st.markdown(card_header("Bem-vindo"), unsafe_allow_html=True)
    for label, route in NAV_BUTTONS:
        if st.button(label, type="primary", use_container_width=True, key=f"nav_{label}"):
            st.switch_page(PAGE_FILES[route])


if decision.view is Route.HOME:
    render_home()
else:
    render_login()
