import html
import json
import re

import pytest

from helpdesk_layout.selection import AjaxUpdate, SelectionConfigError, SelectionFilter, build_selection


def _attr(markup, name):
    match = re.search(rf' {name}="([^"]*)"', markup)
    assert match, f"{name} missing from {markup}"
    return html.unescape(match.group(1))


def test_flat_list_with_selected_value():
    out = build_selection(["a", "b"], name="Queue", selected_values="b")
    assert out == (
        '<select id="Queue" name="Queue">\n'
        '  <option value="a">a</option>\n'
        '  <option value="b" selected="selected">b</option>\n'
        "</select>"
    )


def test_element_attributes():
    out = build_selection(
        {"1": "One"},
        name="StateIDs",
        id="States",
        multiple=True,
        size=5,
        css_class="Modernize",
        disabled=True,
        auto_complete="off",
        on_click="doSomething();",
        title="Pick <one>",
    )
    assert out.startswith(
        '<select autocomplete="off" class="Modernize" disabled="disabled" id="States" '
        'multiple="multiple" name="StateIDs" onclick="doSomething();" size="5" '
        'title="Pick &lt;one&gt;">'
    )


def test_tree_selection():
    out = build_selection(["Parent::Child"], name="ServiceID", tree_view=True)
    assert out == (
        '<select id="ServiceID" name="ServiceID" data-tree="true">\n'
        '  <option value="Parent_Disabled" disabled="disabled">Parent</option>\n'
        '  <option value="Parent::Child">\xa0\xa0Child</option>\n'
        "</select>"
        ' <a href="#" title="Show Tree Selection" class="ShowTreeSelection">'
        '<span>Show Tree Selection</span><i class="fa fa-sitemap"></i></a>'
    )


def test_possible_none_and_numeric_key():
    out = build_selection({"2": "Two", "1": "One"}, name="P", sort_mode="NumericKey", include_empty=True)
    assert re.findall(r'value="([^"]*)"', out) == ["", "1", "2"]
    assert '<option value="">-</option>' in out


def test_ajax_generates_change_handler():
    out = build_selection(
        ["x"],
        name="TypeID",
        ajax={"subaction": "AJAXUpdate", "depend": ["TypeID"], "update": ["ServiceID", "SLAID"]},
    )
    assert _attr(out, "onchange") == (
        "Core.AJAX.FormUpdate($('#TypeID'), 'AJAXUpdate', 'TypeID', ['ServiceID', 'SLAID']);"
    )


def test_ajax_selector_uses_id():
    out = build_selection(
        ["x"],
        name="TypeID",
        id="NewTypeID",
        ajax=AjaxUpdate(subaction="Update", depend=("TypeID",), update=("QueueID",)),
    )
    assert _attr(out, "onchange").startswith("Core.AJAX.FormUpdate($('#NewTypeID'), 'Update', 'TypeID'")


def test_ajax_and_on_change_are_exclusive(caplog):
    with pytest.raises(SelectionConfigError):
        build_selection(
            ["x"],
            name="TypeID",
            on_change="foo();",
            ajax={"depend": ["TypeID"], "update": ["QueueID"]},
        )
    assert "exclude each other" in caplog.text


@pytest.mark.parametrize(
    "ajax",
    [
        {"subaction": "S", "update": ["QueueID"]},
        {"subaction": "S", "depend": ["TypeID"]},
    ],
)
def test_incomplete_ajax_is_rejected(ajax):
    with pytest.raises(SelectionConfigError):
        build_selection(["x"], name="TypeID", ajax=ajax)


def test_name_is_required():
    with pytest.raises(SelectionConfigError):
        build_selection(["x"], name="")


def test_empty_data_renders_empty_select():
    assert build_selection([], name="Empty") == '<select id="Empty" name="Empty">\n</select>'


def test_filters_sorted_by_name_with_active_index():
    out = build_selection(
        {"1": "Alice", "2": "Bob", "3": "Carol"},
        name="OwnerID",
        filters={
            "LastOwners": {"name": "Last owners", "values": {"2": "Bob"}, "active": True},
            "InvolvedAgents": {"name": "Involved in this ticket", "values": {"1": "Alice", "3": "Carol"}},
        },
        expand_filters=True,
        selected_keys="3",
    )
    payload = json.loads(_attr(out, "data-filters"))
    assert [flt["Name"] for flt in payload["Filters"]] == ["Involved in this ticket", "Last owners"]
    assert payload["Filters"][0]["Data"] == [
        {"Key": "1", "Value": "Alice"},
        {"Key": "3", "Value": "Carol", "Selected": 1},
    ]
    assert _attr(out, "data-filtered") == "2"
    assert _attr(out, "data-expand-filters") == "1"


def test_filter_objects_are_accepted():
    out = build_selection(
        ["a", "b"],
        name="N",
        filters=[SelectionFilter(name="Only b", values=["b"])],
    )
    assert json.loads(_attr(out, "data-filters"))["Filters"][0]["Data"] == [{"Key": "b", "Value": "b"}]
    assert "data-filtered" not in out


def test_filter_without_values_is_rejected():
    with pytest.raises(SelectionConfigError):
        build_selection(["a"], name="N", filters={"Broken": {"name": "Broken"}})


def test_translation_uses_injected_translator(greek):
    out = build_selection(["Open", "Closed"], name="State", translator=greek, sort_mode="AlphanumericValue")
    assert re.findall(r">([^<]+)</option>", out) == ["Ανοιχτό", "Κλειστό"]
    assert re.findall(r'value="([^"]*)"', out) == ["Open", "Closed"]


def test_translation_can_be_switched_off(greek):
    out = build_selection(["Open"], name="State", translator=greek, translate=False)
    assert ">Open</option>" in out


def test_max_display_length_then_escape():
    out = build_selection(["Tom & Jerry & friends"], name="N", max_display_length=12)
    assert ">Tom &amp; J[...]</option>" in out
