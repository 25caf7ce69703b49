# =============================================================================
# psico_core/services/intake_service.py
# Unauthenticated submission flows (public forms)
# =============================================================================
"""
Public intake.

Students register themselves (always under the configured coordination),
patients register themselves, and a registered student files a parecer
after proving their id exists.
"""

from __future__ import annotations
from typing import Any, Dict

from psico_core.api import ApiClient, unwrap_data
from psico_core.errors import ApiError, ValidationError
from psico_core.resources import ALUNOS, PACIENTES, PARECERES, SETORES
from .base_service import BaseService, ServiceResult
from .resource_service import ResourceService


class IntakeService(BaseService):

    def __init__(self, client: ApiClient, public_coordenacao_id: int = 2):
        super().__init__()
        self.client = client
        self.public_coordenacao_id = public_coordenacao_id
        self.alunos = ResourceService(client, ALUNOS)
        self.pacientes = ResourceService(client, PACIENTES)
        self.pareceres = ResourceService(client, PARECERES)

    def register_student(self, name: str) -> ServiceResult:
        """
        Create an aluno under the fixed public coordination.

        ``data`` is the new student's id, which they must keep to file
        pareceres later.
        """
        def _register():
            payload = ALUNOS.build_payload({
                "name": name,
                "coordenacao_id": self.public_coordenacao_id,
            })
            created = unwrap_data(self.client.post(ALUNOS.endpoint, payload))
            if not isinstance(created, dict) or created.get("id") is None:
                raise ApiError("A API não retornou o id do aluno", endpoint=ALUNOS.endpoint)
            return created["id"]

        return self.safe_execute("Registering public aluno", _register)

    def register_patient(self, values: Dict[str, Any]) -> ServiceResult:
        return self.pacientes.create_record(values)

    def verify_student(self, raw_id: Any) -> ServiceResult:
        """
        Look up the student filing a parecer.

        A non-numeric id fails with a validation error before any request.
        """
        try:
            student_id = int(str(raw_id).strip())
        except ValueError:
            return ServiceResult.from_exception(ValidationError(
                "ID do aluno inválido. Por favor, digite um número.",
                field="aluno_id",
                expected="int",
            ))
        return self.alunos.get_record(student_id)

    def load_report_options(self) -> ServiceResult:
        """
        Fetch pacientes and setores concurrently for the parecer dropdowns.

        ``data`` maps "pacientes" and "setores" to their record lists.
        """
        def _load():
            collections = self.pareceres.fetch_many([PACIENTES.endpoint, SETORES.endpoint])
            return {
                "pacientes": collections[PACIENTES.endpoint],
                "setores": collections[SETORES.endpoint],
            }

        return self.safe_execute("Loading parecer form options", _load)

    def submit_report(self, student_id: int, values: Dict[str, Any]) -> ServiceResult:
        return self.pareceres.create_record({**values, "aluno_id": student_id})
