from flask import render_template_string

from helpdesk_layout.utils.i18n import BabelTranslator, CatalogTranslator, NullTranslator


def test_selection_endpoint_renders_markup(client):
    response = client.post(
        "/widgets/selection",
        json={
            "data": {"1": "Low", "2": "Medium", "3": "High"},
            "name": "PriorityID",
            "sort_mode": "NumericKey",
            "selected_keys": 2,
            "include_empty": True,
        },
    )
    assert response.status_code == 200
    html_out = response.get_json()["html"]
    assert html_out.startswith('<select id="PriorityID" name="PriorityID">')
    assert '<option value="2" selected="selected">Medium</option>' in html_out
    assert html_out.index('value=""') < html_out.index('value="1"')


def test_selection_endpoint_tree_and_filters(client):
    response = client.post(
        "/widgets/selection",
        json={
            "data": ["IT::Hardware", "IT::Software"],
            "name": "QueueID",
            "tree_view": True,
            "disabled_branches": ["IT::Software"],
            "filters": [{"name": "Mine", "values": ["IT::Hardware"], "active": True}],
        },
    )
    assert response.status_code == 200
    html_out = response.get_json()["html"]
    assert 'data-tree="true"' in html_out
    assert 'data-filtered="1"' in html_out
    assert '<option value="IT::Software" disabled="disabled">\xa0\xa0Software</option>' in html_out


def test_selection_endpoint_rejects_conflicting_handlers(client):
    response = client.post(
        "/widgets/selection",
        json={
            "data": ["a"],
            "name": "TypeID",
            "on_change": "go();",
            "ajax": {"subaction": "S", "depend": ["TypeID"], "update": ["QueueID"]},
        },
    )
    assert response.status_code == 400
    assert "exclude each other" in response.get_json()["error"]


def test_selection_endpoint_validates_body(client):
    response = client.post("/widgets/selection", json={"data": ["a"], "name": "  "})
    assert response.status_code == 400
    assert response.get_json()["error"].startswith("Invalid arguments")

    response = client.post("/widgets/selection", data="not json", content_type="text/plain")
    assert response.status_code == 400


def test_template_global_returns_markup(app):
    with app.test_request_context("/"):
        out = render_template_string("{{ build_selection(['<a>', 'b'], name='X') }}")
    assert '<select id="X" name="X">' in out
    assert '<option value="&lt;a&gt;">&lt;a&gt;</option>' in out


def test_template_global_uses_config_defaults(make_app):
    app = make_app(SELECTION_MAX_DISPLAY_LENGTH=8)
    with app.test_request_context("/?lang=el"):
        out = render_template_string("{{ build_selection(['Extremely long'], name='X') }}")
    assert ">Ext[...]</option>" in out


def test_translators():
    assert NullTranslator().translate("Open") == "Open"
    catalog = CatalogTranslator({"Open": "Ανοιχτό"})
    assert catalog.translate("Open") == "Ανοιχτό"
    assert catalog.translate("Pending") == "Pending"
    # Outside an application context Babel cannot resolve a locale.
    assert BabelTranslator().translate("Open") == "Open"
    assert BabelTranslator().translate("") == ""


def test_babel_translator_falls_back_to_input(app):
    with app.test_request_context("/?lang=el"):
        assert BabelTranslator().translate("Show Tree Selection") == "Show Tree Selection"
