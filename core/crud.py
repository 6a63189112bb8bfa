# core/crud.py
# -------------------------------------------------------------------
# Screen controller shared by every management screen.
# State lives in a mutable mapping (st.session_state in the app) under
# keys namespaced by entity, so each screen owns disjoint state.
# -------------------------------------------------------------------
from __future__ import annotations

import logging
from typing import Any, Dict, List, MutableMapping, Optional

from core.api import ApiError, ResourceGateway
from core.entities import ENTITIES, EntitySpec, resolve_derived
from core.settings import load_settings

log = logging.getLogger(__name__)

ACTIVE_SCREEN_KEY = "_active_screen"


def entered_screen(state: MutableMapping[str, Any], screen_key: str) -> bool:
    """True on the first render after the user navigates to `screen_key`."""
    entered = state.get(ACTIVE_SCREEN_KEY) != screen_key
    state[ACTIVE_SCREEN_KEY] = screen_key
    return entered


class CrudController:
    def __init__(
        self,
        spec: EntitySpec,
        gateway: ResourceGateway,
        state: MutableMapping[str, Any],
        lookup_gateways: Optional[Dict[str, ResourceGateway]] = None,
    ):
        self.spec = spec
        self.gateway = gateway
        self.state = state
        self.lookup_gateways = lookup_gateways or {}
        self._init_state()

    # ── state plumbing ────────────────────────────────────────────────────────

    def _k(self, s: str) -> str:
        return f"{self.spec.key}__{s}"

    def _get(self, name: str) -> Any:
        return self.state[self._k(name)]

    def _set(self, name: str, value: Any) -> None:
        self.state[self._k(name)] = value

    def _init_state(self) -> None:
        defaults = {
            "records": [],
            "form": self.spec.empty_form(),
            "editing": None,
            "loading": False,
            "error": None,
            "error_detail": None,
            "lookups": {name: [] for name in self.spec.lookups},
            "form_version": 0,
        }
        for name, value in defaults.items():
            if self._k(name) not in self.state:
                self._set(name, value)

    @property
    def records(self) -> List[Dict[str, Any]]:
        return self._get("records")

    @property
    def form(self) -> Dict[str, Any]:
        return self._get("form")

    @property
    def editing(self) -> Optional[Dict[str, Any]]:
        return self._get("editing")

    @property
    def is_loading(self) -> bool:
        return self._get("loading")

    @property
    def error(self) -> Optional[str]:
        return self._get("error")

    @property
    def error_detail(self) -> Optional[str]:
        return self._get("error_detail")

    @property
    def form_version(self) -> int:
        return self._get("form_version")

    @property
    def is_editing(self) -> bool:
        return self.editing is not None

    @property
    def form_title(self) -> str:
        return self.spec.form_title(self.is_editing)

    @property
    def submit_label(self) -> str:
        return self.spec.submit_label(self.is_editing)

    def lookup(self, entity_key: str) -> List[Dict[str, Any]]:
        return self._get("lookups").get(entity_key, [])

    def lookup_names(self, entity_key: str) -> List[str]:
        return [r["name"] for r in self.lookup(entity_key) if isinstance(r, dict) and r.get("name")]

    def set_error(self, message: Optional[str], exc: Optional[BaseException] = None) -> None:
        self._set("error", message)
        self._set("error_detail", str(exc) if exc is not None else None)

    def _reset_form(self) -> None:
        self._set("form", self.spec.empty_form())
        self._set("editing", None)
        self._set("form_version", self.form_version + 1)

    # ── operations ────────────────────────────────────────────────────────────

    def mount(self) -> None:
        self.refresh()
        self.load_lookups()

    def refresh(self) -> None:
        self._set("loading", True)
        self.set_error(None)
        try:
            data = self.gateway.list()
            self._set("records", data if isinstance(data, list) else [])
        except ApiError as e:
            log.error(f"Error fetching {self.spec.plural}: {e}", exc_info=True)
            self.set_error(f"Failed to fetch {self.spec.plural}. Please try again later.", e)
            self._set("records", [])
        finally:
            self._set("loading", False)

    def load_lookups(self) -> None:
        lookups = dict(self._get("lookups"))
        for name in self.spec.lookups:
            gateway = self.lookup_gateways.get(name)
            if gateway is None:
                lookups[name] = []
                continue
            try:
                data = gateway.list()
                lookups[name] = data if isinstance(data, list) else []
            except ApiError as e:
                # Lookups only populate dropdowns; degrade without a page error.
                log.error(f"Error fetching {ENTITIES[name].plural}: {e}", exc_info=True)
                lookups[name] = []
        self._set("lookups", lookups)

    def set_field(self, key: str, value: Any) -> None:
        form = dict(self.form)
        form[key] = value
        for f in self.spec.fields:
            if f.derived is not None and f.derived.source == key:
                form[f.key] = resolve_derived(f.derived, value, self._get("lookups"))
        self._set("form", form)

    def submit(self, form: Optional[Dict[str, Any]] = None) -> bool:
        if form is not None:
            self._set("form", dict(form))
        self.set_error(None)
        payload = dict(self.form)
        editing = self.editing
        try:
            if editing is not None:
                self.gateway.update(editing["id"], payload)
            else:
                self.gateway.create(payload)
        except ApiError as e:
            log.error(f"Error saving {self.spec.singular}: {e}", exc_info=True)
            self.set_error(f"Failed to save {self.spec.singular}. Please try again.", e)
            return False
        self.refresh()
        self._reset_form()
        return True

    def edit(self, record: Dict[str, Any]) -> None:
        self._set("editing", dict(record))
        self._set("form", self.spec.form_from_record(record))
        self._set("form_version", self.form_version + 1)

    def cancel_edit(self) -> None:
        self._reset_form()

    def delete(self, record_id: str) -> bool:
        self.set_error(None)
        try:
            self.gateway.delete(record_id)
        except ApiError as e:
            log.error(f"Error deleting {self.spec.singular}: {e}", exc_info=True)
            self.set_error(f"Failed to delete {self.spec.singular}. Please try again.", e)
            return False
        self.refresh()
        return True


def build_controller(
    spec: EntitySpec,
    state: MutableMapping[str, Any],
    session=None,
    settings=None,
) -> CrudController:
    """Wire gateway, lookup gateways and state for one screen."""
    settings = settings or load_settings()
    gateway = ResourceGateway(spec.resource, session=session, settings=settings)
    lookups = {
        name: ResourceGateway(ENTITIES[name].resource, session=session, settings=settings)
        for name in spec.lookups
    }
    return CrudController(spec, gateway, state, lookups)
