# -*- coding: utf-8 -*-
"""
Widget preview endpoint.
Admin configuration screens post option data here and receive the rendered
``<select>`` markup, e.g. to refresh a field after its source list changed.
"""

from typing import Any, Dict, List, Optional, Union

from flask import Blueprint, current_app, jsonify, request
from pydantic import BaseModel, Field, ValidationError, field_validator

from helpdesk_layout.layout import render_selection
from helpdesk_layout.selection import SelectionConfigError

widgets_bp = Blueprint("widgets", __name__, url_prefix="/widgets")


class FilterPayload(BaseModel):
    name: str
    values: Union[Dict[str, Any], List[Any]]
    active: bool = False


class AjaxPayload(BaseModel):
    subaction: str = ""
    depend: List[str] = Field(default_factory=list)
    update: List[str] = Field(default_factory=list)


class SelectionRequest(BaseModel):
    """Body of ``POST /widgets/selection``."""

    data: Union[Dict[str, Any], List[Any]] = Field(default_factory=list)
    name: str
    id: Optional[str] = None
    multiple: bool = False
    size: Optional[int] = None
    css_class: Optional[str] = None
    disabled: bool = False
    on_change: Optional[str] = None
    title: Optional[str] = None
    ajax: Optional[AjaxPayload] = None
    filters: List[FilterPayload] = Field(default_factory=list)
    expand_filters: bool = False
    option_title: bool = False
    sort_mode: Optional[str] = None
    sort_individual: List[str] = Field(default_factory=list)
    reverse: bool = False
    translate: Optional[bool] = None
    include_empty: bool = False
    tree_view: bool = False
    disabled_branches: List[str] = Field(default_factory=list)
    selected_keys: List[str] = Field(default_factory=list)
    selected_values: List[str] = Field(default_factory=list)
    max_display_length: Optional[int] = None

    @field_validator("name")
    @classmethod
    def _name_required(cls, value: str) -> str:
        value = (value or "").strip()
        if not value:
            raise ValueError("name must not be empty")
        return value

    @field_validator("selected_keys", "selected_values", mode="before")
    @classmethod
    def _scalar_to_list(cls, value):
        if value is None:
            return []
        if isinstance(value, (str, int, float)):
            return [str(value)]
        return [str(item) for item in value]

    def to_params(self) -> Dict[str, Any]:
        # Unset optionals are dropped so the app's SELECTION_* defaults apply.
        return self.model_dump(exclude_none=True)


# ───────── Helpers ───────── #
def _error(message: str, status: int = 400):
    return jsonify({"error": message}), status


@widgets_bp.route("/selection", methods=["POST"])
def selection_preview():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return _error("JSON object body required.")
    try:
        body = SelectionRequest.model_validate(payload)
    except ValidationError as exc:
        return _error(f"Invalid arguments: {exc.errors(include_url=False)}")

    params = body.to_params()
    data = params.pop("data")
    try:
        html = render_selection(data, **params)
    except SelectionConfigError as exc:
        current_app.logger.warning("Rejected selection widget %s: %s", body.name, exc)
        return _error(str(exc))
    return jsonify({"html": str(html)})
