# =============================================================================
# psico_core/resources/schema.py
# Data-driven descriptions of the API resources and their form fields
# =============================================================================

from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple

from psico_core.errors import ValidationError

FIELD_KINDS = ("text", "textarea", "int", "date", "select")


@dataclass(frozen=True)
class FieldSpec:
    """
    One form field.

    ``select`` fields either carry static ``options`` as (value, label)
    pairs or name an ``options_endpoint`` whose records supply them
    (value from ``id``, label from ``name``).
    """
    name: str
    label: str
    kind: str = "text"
    required: bool = True
    options_endpoint: Optional[str] = None
    options: Tuple[Tuple[Any, str], ...] = ()
    numeric: bool = False  # select whose value is sent as int

    def __post_init__(self):
        if self.kind not in FIELD_KINDS:
            raise ValueError(f"Unknown field kind: {self.kind}")

    def coerce(self, raw: Any) -> Any:
        """
        Convert a raw form value to its wire representation.

        Blank optional values become None; blank required values raise.
        """
        if isinstance(raw, str):
            raw = raw.strip()
        if raw is None or raw == "":
            if self.required:
                raise ValidationError(
                    f"O campo '{self.label}' é obrigatório",
                    field=self.name,
                )
            return None

        if self.kind == "int" or (self.kind == "select" and self.numeric):
            try:
                return int(raw)
            except (TypeError, ValueError):
                raise ValidationError(
                    f"O campo '{self.label}' deve ser um número",
                    field=self.name,
                    expected="int",
                )

        if self.kind == "date":
            return to_iso_date(raw, self)

        return raw


def to_iso_date(raw: Any, spec: Optional[FieldSpec] = None) -> str:
    """Normalize a date/datetime/string to YYYY-MM-DD"""
    if isinstance(raw, datetime):
        return raw.date().isoformat()
    if isinstance(raw, date):
        return raw.isoformat()
    text = str(raw)
    try:
        # Accepts both plain dates and API timestamps ("2024-03-01T00:00:00.000Z")
        return date.fromisoformat(text[:10]).isoformat()
    except ValueError:
        name = spec.name if spec else None
        label = spec.label if spec else "data"
        raise ValidationError(
            f"O campo '{label}' deve ser uma data válida",
            field=name,
            expected="YYYY-MM-DD",
        )


@dataclass(frozen=True)
class ResourceSchema:
    """
    A REST resource and how it is listed and edited.

    Attributes:
        key: short identifier used for session-state keys
        endpoint: collection path, e.g. "/setores"
        title: page title (plural)
        singular: label used in form titles
        fields: editable fields, in form order
        columns: (record key, header) pairs shown in the table
    """
    key: str
    endpoint: str
    title: str
    singular: str
    fields: Tuple[FieldSpec, ...]
    columns: Tuple[Tuple[str, str], ...] = ()

    def get_field(self, name: str) -> FieldSpec:
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise KeyError(name)

    def record_endpoint(self, record_id: Any) -> str:
        return f"{self.endpoint}/{record_id}"

    @property
    def option_endpoints(self) -> List[str]:
        return [f.options_endpoint for f in self.fields if f.options_endpoint]

    def build_payload(self, values: Dict[str, Any]) -> Dict[str, Any]:
        """
        Coerce form values into a request body.

        Raises:
            ValidationError: for the first missing or malformed field
        """
        return {spec.name: spec.coerce(values.get(spec.name)) for spec in self.fields}

    def form_defaults(self, record: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Initial form values; dates trimmed to YYYY-MM-DD for editing"""
        record = record or {}
        defaults = {}
        for spec in self.fields:
            value = record.get(spec.name)
            if spec.kind == "date" and value:
                try:
                    value = to_iso_date(value)
                except ValidationError:
                    value = None
            defaults[spec.name] = value
        return defaults


def options_from_records(records: Sequence[Dict[str, Any]]) -> List[Tuple[Any, str]]:
    """(id, name) pairs for a select field"""
    return [(r.get("id"), str(r.get("name", r.get("id")))) for r in records]
