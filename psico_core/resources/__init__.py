"""
Resource schemas: endpoint, form fields and table columns per entity.
"""

from .schema import FieldSpec, ResourceSchema, options_from_records, to_iso_date
from .registry import (
    ALUNOS,
    PACIENTES,
    PARECERES,
    SETORES,
    COORDENACOES,
    SEX_OPTIONS,
    SCHEMAS,
)

__all__ = [
    "FieldSpec",
    "ResourceSchema",
    "options_from_records",
    "to_iso_date",
    "ALUNOS",
    "PACIENTES",
    "PARECERES",
    "SETORES",
    "COORDENACOES",
    "SEX_OPTIONS",
    "SCHEMAS",
]
