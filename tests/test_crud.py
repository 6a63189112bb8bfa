"""
Screen controller behaviour shared by every management screen.
"""
import pytest

from core.crud import CrudController, entered_screen
from core.entities import COURSES, ENTITIES, LOCATIONS


@pytest.fixture
def locations(fake_gateway):
    return fake_gateway([{"id": "1", "name": "HQ", "address": "1 Main St"}])


@pytest.fixture
def ctrl(locations, state):
    c = CrudController(LOCATIONS, locations, state)
    c.mount()
    return c


def test_initial_state_is_empty_create_mode(fake_gateway, state):
    c = CrudController(LOCATIONS, fake_gateway(), state)
    assert c.records == []
    assert c.form == {"name": "", "address": ""}
    assert c.editing is None
    assert c.error is None
    assert c.submit_label == "Add Location"


def test_mount_mirrors_list_response(ctrl):
    assert ctrl.records == [{"id": "1", "name": "HQ", "address": "1 Main St"}]
    assert ctrl.is_loading is False
    assert ctrl.error is None


@pytest.mark.parametrize("body", [{"items": []}, "ok", None, 42])
def test_non_array_list_body_becomes_empty(fake_gateway, state, body):
    c = CrudController(LOCATIONS, fake_gateway(list_body=body), state)
    c.refresh()
    assert c.records == []
    assert c.error is None


def test_list_failure_sets_message_and_empties_store(ctrl, locations):
    locations.fail.add("list")
    ctrl.refresh()
    assert ctrl.records == []
    assert ctrl.error == "Failed to fetch locations. Please try again later."
    assert ctrl.is_loading is False


def test_create_refetches_and_resets_form(ctrl, locations):
    ctrl.set_field("name", "Annex")
    ctrl.set_field("address", "9 Side Rd")
    version = ctrl.form_version

    assert ctrl.submit() is True
    assert ("create", {"name": "Annex", "address": "9 Side Rd"}) in locations.calls
    assert locations.methods()[-1] == "list"
    # store is exactly the refetched list, ids assigned by the backend
    assert ctrl.records == locations.rows
    assert ctrl.records[-1]["id"] == "101"
    assert ctrl.form == {"name": "", "address": ""}
    assert ctrl.editing is None
    assert ctrl.form_version == version + 1


def test_create_uses_refetch_not_local_merge(ctrl, locations):
    # another session adds a record meanwhile; it shows up after our submit
    locations.rows.append({"id": "55", "name": "Depot", "address": "3 Yard"})
    ctrl.submit({"name": "Annex", "address": "9 Side Rd"})
    assert [r["name"] for r in ctrl.records] == ["HQ", "Depot", "Annex"]


def test_submit_failure_keeps_form_for_retry(ctrl, locations):
    locations.fail.add("create")
    ctrl.set_field("name", "Annex")
    assert ctrl.submit() is False
    assert ctrl.error == "Failed to save location. Please try again."
    assert ctrl.form["name"] == "Annex"
    assert "list" not in locations.methods()[1:]


def test_edit_switches_mode_and_copies_non_id_fields(ctrl):
    rec = ctrl.records[0]
    ctrl.edit(rec)
    assert ctrl.is_editing
    assert ctrl.editing["id"] == "1"
    assert ctrl.form == {"name": "HQ", "address": "1 Main St"}
    assert ctrl.form_title == "Edit Location"
    assert ctrl.submit_label == "Update Location"


def test_unchanged_edit_submits_original_fields(ctrl, locations):
    before = list(ctrl.records)
    ctrl.edit(ctrl.records[0])
    assert ctrl.submit() is True
    assert ("update", "1", {"name": "HQ", "address": "1 Main St"}) in locations.calls
    assert ctrl.records == before
    assert ctrl.editing is None


def test_update_failure_keeps_editing_selection(ctrl, locations):
    locations.fail.add("update")
    ctrl.edit(ctrl.records[0])
    ctrl.set_field("address", "2 Main St")
    assert ctrl.submit() is False
    assert ctrl.editing["id"] == "1"
    assert ctrl.form["address"] == "2 Main St"


def test_cancel_edit_returns_to_create_mode(ctrl, locations):
    calls = len(locations.calls)
    ctrl.edit(ctrl.records[0])
    ctrl.cancel_edit()
    assert ctrl.editing is None
    assert ctrl.form == {"name": "", "address": ""}
    assert len(locations.calls) == calls


def test_delete_removes_record_on_refetch(ctrl, locations):
    assert ctrl.delete("1") is True
    assert ctrl.records == []
    assert locations.methods()[-2:] == ["delete", "list"]


def test_delete_missing_id_keeps_prior_list(ctrl, locations):
    before = list(ctrl.records)
    assert ctrl.delete("nope") is False
    assert ctrl.error == "Failed to delete location. Please try again."
    assert ctrl.records == before
    assert locations.methods()[-1] == "delete"


def test_next_action_clears_previous_error(ctrl, locations):
    ctrl.delete("nope")
    assert ctrl.error
    ctrl.refresh()
    assert ctrl.error is None


def test_lookup_failures_degrade_silently(fake_gateway, state):
    course_types = fake_gateway([{"id": "t1", "name": "Basic"}])
    experts = fake_gateway()
    experts.fail.add("list")
    c = CrudController(COURSES, fake_gateway(), state,
                       {"course_types": course_types, "experts": experts})
    c.mount()
    assert c.lookup_names("course_types") == ["Basic"]
    assert c.lookup("experts") == []
    assert c.error is None


def test_screens_keep_disjoint_state(fake_gateway, state):
    loc = CrudController(LOCATIONS, fake_gateway([{"id": "1", "name": "HQ", "address": "x"}]), state)
    cand = CrudController(ENTITIES["candidates"], fake_gateway(), state)
    loc.refresh()
    cand.refresh()
    assert len(loc.records) == 1
    assert cand.records == []


def test_state_survives_controller_rebuild(ctrl, locations, state):
    ctrl.set_field("name", "Draft")
    again = CrudController(LOCATIONS, locations, state)
    assert again.form["name"] == "Draft"
    assert again.records == ctrl.records


def test_entered_screen_fires_once_per_visit(state):
    assert entered_screen(state, "locations") is True
    assert entered_screen(state, "locations") is False
    assert entered_screen(state, "courses") is True
    assert entered_screen(state, "locations") is True
