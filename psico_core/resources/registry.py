# =============================================================================
# psico_core/resources/registry.py
# Schemas for every resource the dashboard manages
# =============================================================================

from typing import Dict

from .schema import FieldSpec, ResourceSchema

SEX_OPTIONS = (("M", "Masculino"), ("F", "Feminino"), ("Outro", "Outro"))


COORDENACOES = ResourceSchema(
    key="coordenacao",
    endpoint="/coordenacao",
    title="Coordenações",
    singular="Coordenação",
    fields=(
        FieldSpec("name", "Nome"),
    ),
    columns=(("id", "ID"), ("name", "Nome")),
)

ALUNOS = ResourceSchema(
    key="alunos",
    endpoint="/alunos",
    title="Alunos",
    singular="Aluno",
    fields=(
        FieldSpec("name", "Nome"),
        FieldSpec(
            "coordenacao_id",
            "Coordenação",
            kind="select",
            options_endpoint=COORDENACOES.endpoint,
            numeric=True,
        ),
    ),
    columns=(("id", "ID"), ("name", "Nome"), ("coordenacao_name", "Coordenação")),
)

PACIENTES = ResourceSchema(
    key="pacientes",
    endpoint="/pacientes",
    title="Pacientes",
    singular="Paciente",
    fields=(
        FieldSpec("name", "Nome"),
        FieldSpec("birth", "Data de nascimento", kind="date"),
        FieldSpec("sex", "Sexo", kind="select", options=SEX_OPTIONS),
        FieldSpec("address", "Endereço"),
    ),
    columns=(
        ("id", "ID"),
        ("name", "Nome"),
        ("birth", "Nascimento"),
        ("sex", "Sexo"),
        ("address", "Endereço"),
    ),
)

SETORES = ResourceSchema(
    key="setores",
    endpoint="/setores",
    title="Setores",
    singular="Setor",
    fields=(
        FieldSpec("name", "Nome"),
    ),
    columns=(("id", "ID"), ("name", "Nome")),
)

PARECERES = ResourceSchema(
    key="pareceres",
    endpoint="/pareceres",
    title="Pareceres",
    singular="Parecer",
    fields=(
        FieldSpec("aluno_id", "ID do aluno", kind="int"),
        FieldSpec(
            "paciente_id",
            "Paciente",
            kind="select",
            options_endpoint=PACIENTES.endpoint,
            numeric=True,
        ),
        FieldSpec(
            "setor_id",
            "Setor",
            kind="select",
            options_endpoint=SETORES.endpoint,
            numeric=True,
        ),
        FieldSpec("num_port", "Número do prontuário", kind="int"),
        FieldSpec("solicitation_date", "Data de solicitação", kind="date"),
        FieldSpec("answer_date", "Data de resposta", kind="date", required=False),
        FieldSpec("enter_date", "Data de entrada", kind="date", required=False),
        FieldSpec("leave_date", "Data de saída", kind="date", required=False),
        FieldSpec("obs", "Observações", kind="textarea", required=False),
    ),
    columns=(
        ("id", "ID"),
        ("aluno_name", "Aluno"),
        ("paciente_name", "Paciente"),
        ("setor_name", "Setor"),
        ("num_port", "Prontuário"),
        ("solicitation_date", "Solicitação"),
        ("answer_date", "Resposta"),
        ("enter_date", "Entrada"),
        ("leave_date", "Saída"),
    ),
)

SCHEMAS: Dict[str, ResourceSchema] = {
    schema.key: schema
    for schema in (ALUNOS, PACIENTES, PARECERES, SETORES, COORDENACOES)
}
