# =============================================================================
# pages/05_Dados.py - Distribution of pareceres per setor
# =============================================================================
from __future__ import annotations
import pandas as pd
import plotly.express as px
import streamlit as st

from psico_core.auth import Route, require_authentication
from psico_core.errors import error_boundary
from psico_core.services import ReportStatsService
from psico_core.state import get_api_client, get_session_store
from psico_core.ui import apply_css
from psico_core.ui.theme import PRIMARY_COLOR

st.set_page_config(page_title="PSICO - Dados", page_icon="📊", layout="wide")
apply_css()

require_authentication(get_session_store(), Route.DADOS)


def render_percentages(stats: pd.DataFrame) -> None:
    for row in stats.itertuples(index=False):
        st.markdown(
            f"<p class='psico-stat'><strong>{row.setor}:</strong> {row.percentage}%</p>",
            unsafe_allow_html=True,
        )


@error_boundary(error_message="Falha ao desenhar o gráfico.")
def render_chart(stats: pd.DataFrame) -> None:
    fig = px.bar(
        stats,
        x="setor",
        y="percentage",
        text="percentage",
        labels={"setor": "Setor", "percentage": "% dos pareceres"},
        color_discrete_sequence=[PRIMARY_COLOR],
    )
    fig.update_traces(texttemplate="%{text}%", textposition="outside")
    fig.update_layout(yaxis_range=[0, 105], margin=dict(t=20, b=20))
    st.plotly_chart(fig, use_container_width=True)


header_left, header_right = st.columns([3, 1])
with header_left:
    st.title("Distribuição de Pareceres por Setor")
with header_right:
    if st.button("Voltar", use_container_width=True):
        st.switch_page("Welcome.py")

with st.spinner("Carregando pareceres..."):
    result = ReportStatsService(get_api_client()).sector_percentages()

if not result:
    st.error(f"Erro ao buscar pareceres: {result.error}")
elif result.data.empty:
    st.info("Nenhum parecer cadastrado.")
else:
    st.caption(f"Total de pareceres: {result.metadata['total']}")
    col_list, col_chart = st.columns([1, 2])
    with col_list:
        render_percentages(result.data)
    with col_chart:
        render_chart(result.data)
