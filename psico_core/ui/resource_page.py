# =============================================================================
# psico_core/ui/resource_page.py
# One generic "table + modal form" page for every resource
# =============================================================================

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

import pandas as pd
import streamlit as st

from psico_core.logging import get_logger
from psico_core.resources import FieldSpec, ResourceSchema
from psico_core.services import ResourceService, ServiceResult
from .formatting import format_date

logger = get_logger(__name__)

CONTROLLER_KEY_PREFIX = "_resource_page_"


# =============================================================================
# PAGE STATE (framework-free)
# =============================================================================

@dataclass
class ResourcePageController:
    """
    State of a resource page: the list, the modal and the last error.

    The modal closes only after the write and the list refetch both
    succeed; on failure it stays open with ``form_error`` set so the user can
    fix the form and retry.

    A dialog dismissed with its close button or Escape triggers no rerun,
    so an open modal that was already shown is treated as dismissed on the
    next full page run (dialog interactions rerun only the dialog).
    """
    service: ResourceService
    records: List[Dict[str, Any]] = field(default_factory=list)
    modal_open: bool = False
    modal_shown: bool = False
    editing: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    form_error: Optional[str] = None
    options: Dict[str, List] = field(default_factory=dict)

    @property
    def schema(self) -> ResourceSchema:
        return self.service.schema

    @property
    def is_editing(self) -> bool:
        return self.editing is not None

    def load(self) -> ServiceResult:
        result = self.service.list_records()
        if result:
            self.records = result.data
            self.error = None
        else:
            self.error = f"Erro ao buscar {self.schema.title.lower()}: {result.error}"
        return result

    def load_options(self) -> ServiceResult:
        result = self.service.load_options()
        if result:
            self.options = result.data
        else:
            self.form_error = f"Erro ao carregar opções: {result.error}"
        return result

    def open_create(self) -> None:
        self.editing = None
        self.form_error = None
        self.modal_open = True
        self.modal_shown = False

    def open_edit(self, record: Dict[str, Any]) -> None:
        self.editing = record
        self.form_error = None
        self.modal_open = True
        self.modal_shown = False

    def close(self) -> None:
        self.modal_open = False
        self.modal_shown = False
        self.editing = None
        self.form_error = None

    def mark_shown(self) -> None:
        self.modal_shown = True

    def dismiss_stale_modal(self) -> bool:
        """Close a modal left open by a dismissed dialog. Returns True if closed."""
        if self.modal_open and self.modal_shown:
            logger.debug(f"Dialog for {self.schema.endpoint} was dismissed")
            self.close()
            return True
        return False

    def form_defaults(self) -> Dict[str, Any]:
        return self.schema.form_defaults(self.editing)

    def submit(self, values: Dict[str, Any]) -> ServiceResult:
        record_id = self.editing.get("id") if self.editing else None
        result = self.service.save_and_refresh(values, record_id=record_id)
        if result:
            self.records = result.data
            self.close()
        else:
            logger.warning(f"Save on {self.schema.endpoint} failed, keeping form open")
            self.form_error = (
                f"Erro ao salvar {self.schema.singular.lower()}: {result.error}. "
                "Verifique os dados e tente novamente."
            )
        return result

    def table(self) -> pd.DataFrame:
        """Records as a DataFrame with display headers and formatted dates"""
        columns = self.schema.columns or tuple((f.name, f.label) for f in self.schema.fields)
        date_keys = {f.name for f in self.schema.fields if f.kind == "date"}
        rows = []
        for record in self.records:
            row = {}
            for key, header in columns:
                value = record.get(key)
                if key in date_keys:
                    value = format_date(value)
                row[header] = value
            rows.append(row)
        return pd.DataFrame(rows, columns=[header for _, header in columns])


def get_controller(service_factory: Callable[[], ResourceService], schema: ResourceSchema) -> ResourcePageController:
    """Controller kept in st.session_state across reruns, loaded on first use"""
    key = f"{CONTROLLER_KEY_PREFIX}{schema.key}"
    controller = st.session_state.get(key)
    if controller is None:
        controller = ResourcePageController(service_factory())
        controller.load()
        st.session_state[key] = controller
    return controller


# =============================================================================
# RENDERING
# =============================================================================

def _render_field(spec: FieldSpec, default: Any, options: Dict[str, List], key_prefix: str) -> Any:
    label = f"{spec.label}{' *' if spec.required else ''}"
    key = f"{key_prefix}_{spec.name}"

    if spec.kind == "select":
        choices = list(spec.options) or list(options.get(spec.name, []))
        values = [value for value, _ in choices]
        labels = dict(choices)
        index = values.index(default) if default in values else None
        return st.selectbox(
            label,
            options=values,
            index=index,
            format_func=lambda v: labels.get(v, str(v)),
            placeholder=f"Selecione {spec.label.lower()}",
            key=key,
        )

    if spec.kind == "date":
        value = pd.to_datetime(default).date() if default else None
        return st.date_input(label, value=value, format="DD/MM/YYYY", key=key)

    if spec.kind == "int":
        return st.text_input(label, value="" if default is None else str(default), key=key)

    if spec.kind == "textarea":
        return st.text_area(label, value=default or "", key=key)

    return st.text_input(label, value=default or "", key=key)


def render_form_fields(
    schema: ResourceSchema,
    defaults: Dict[str, Any],
    options: Dict[str, List],
    key_prefix: str,
    skip: tuple = (),
) -> Dict[str, Any]:
    """Draw one input per schema field and return the entered values"""
    return {
        spec.name: _render_field(spec, defaults.get(spec.name), options, key_prefix)
        for spec in schema.fields
        if spec.name not in skip
    }


def _render_modal(controller: ResourcePageController) -> None:
    schema = controller.schema
    title = f"Editar {schema.singular}" if controller.is_editing else f"Novo {schema.singular}"

    @st.dialog(title)
    def _modal():
        if schema.option_endpoints and not controller.options:
            controller.load_options()

        with st.form(f"{schema.key}_form"):
            values = render_form_fields(
                schema,
                controller.form_defaults(),
                controller.options,
                key_prefix=f"{schema.key}_{controller.editing.get('id') if controller.editing else 'new'}",
            )
            col_save, col_cancel = st.columns(2)
            submitted = col_save.form_submit_button("Salvar", type="primary", use_container_width=True)
            cancelled = col_cancel.form_submit_button("Cancelar", use_container_width=True)

        if cancelled:
            controller.close()
            st.rerun()

        if submitted:
            with st.spinner("Salvando..."):
                result = controller.submit(values)
            if result:
                st.rerun()

        if controller.form_error:
            st.error(controller.form_error)

    _modal()
    controller.mark_shown()


def render_resource_page(
    schema: ResourceSchema,
    service_factory: Callable[[], ResourceService],
    row_detail: Optional[Callable[[Dict[str, Any]], None]] = None,
) -> ResourcePageController:
    """
    Render the list/create/edit page for ``schema``.

    Args:
        schema: resource to manage
        service_factory: builds the ResourceService on first visit
        row_detail: optional extra renderer for the selected row
    """
    controller = get_controller(service_factory, schema)
    controller.dismiss_stale_modal()

    header_left, header_right = st.columns([3, 1])
    with header_left:
        st.title(schema.title)
    with header_right:
        if st.button("Voltar", use_container_width=True, key=f"{schema.key}_back"):
            st.switch_page("Welcome.py")
        if st.button(f"Novo {schema.singular}", type="primary", use_container_width=True, key=f"{schema.key}_new"):
            controller.open_create()
        if st.button("Atualizar", use_container_width=True, key=f"{schema.key}_reload"):
            controller.load()

    if controller.error:
        st.error(controller.error)

    if not controller.records:
        st.info(f"Nenhum registro de {schema.title.lower()} encontrado.")
    else:
        selection = st.dataframe(
            controller.table(),
            use_container_width=True,
            hide_index=True,
            on_select="rerun",
            selection_mode="single-row",
            key=f"{schema.key}_table",
        )
        selected_rows = selection.selection.rows if selection else []
        if selected_rows:
            record = controller.records[selected_rows[0]]
            if st.button("Editar selecionado", key=f"{schema.key}_edit"):
                controller.open_edit(record)
            if row_detail is not None:
                row_detail(record)

    if controller.modal_open:
        _render_modal(controller)

    return controller
