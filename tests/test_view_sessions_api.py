# File: tests/test_view_sessions_api.py | Version: 1.0 | Title: View session + filter editing endpoints, end to end
from adminview.crud.catalog import create_record, upsert_view_content
from adminview.schemas.query import RouteContext

ROUTE = RouteContext(
    tenant_code="acme", product_code="crm", object_code="customer", view_content_code="all"
)
OPEN = "/view-sessions/acme/crm/customer/all"

LAYOUT = {
    "children": [
        {"type": "footer", "props": {"text": "bottom"}},
        {
            "type": "table",
            "class_name": "grid",
            "props": {
                "fields": [
                    {"field_code": "id", "field_name": "ID"},
                    {"field_code": "name", "field_name": "Name"},
                    {"field_code": "status", "field_name": "Status"},
                ]
            },
        },
    ]
}


def _seed(db, count=5):
    upsert_view_content(
        db, ROUTE, name="All", layout=LAYOUT, object_display_name="Customers", tenant_name="Acme"
    )
    for i in range(1, count + 1):
        create_record(
            db,
            tenant_code="acme",
            product_code="crm",
            object_code="customer",
            data={"name": f"User {i}", "status": "active" if i % 2 else "inactive"},
        )


def _open(client, page_size=2):
    r = client.post(OPEN, json={"page_size": page_size})
    assert r.status_code == 200, r.text
    return r.json()


def _table(page):
    [table] = [n for n in page["nodes"] if n["type"] == "table"]
    return table


def _row_names(page):
    return [row[0]["text"] for row in _table(page)["table"]["rows"]]


def test_open_session_renders_layout_and_first_page(client, db_session):
    _seed(db_session)
    page = _open(client)

    assert page["title"] == "Customers (All) - Acme"
    assert page["heading"] == "Customers"
    assert [n["type"] for n in page["nodes"]] == ["table", "footer"]
    table = _table(page)
    assert [c["field_code"] for c in table["table"]["columns"]] == ["name", "status"]
    assert table["table"]["columns"][0]["flex"] is True
    assert _row_names(page) == ["User 1", "User 2"]
    assert page["pagination"] == {
        "current_page": 1,
        "total_pages": 3,
        "page_size": 2,
        "loading": False,
    }
    assert page["errors"] == {}


def test_missing_view_reports_layout_error(client, db_session):
    r = client.post("/view-sessions/acme/crm/customer/ghost", json={})
    assert r.status_code == 200
    page = r.json()
    assert page["nodes"] == []
    assert page["errors"]["layout"] == "Failed to fetch layout: HTTP 404"


def test_page_selection_and_refresh(client, db_session):
    _seed(db_session)
    sid = _open(client)["session_id"]

    page = client.post(f"/view-sessions/{sid}/pages", json={"selected": 2}).json()
    assert page["pagination"]["current_page"] == 3
    assert _row_names(page) == ["User 5"]

    page = client.post(f"/view-sessions/{sid}/refresh").json()
    assert page["pagination"]["current_page"] == 3


def test_empty_result_renders_placeholder(client, db_session):
    _seed(db_session)
    sid = _open(client)["session_id"]

    client.post(f"/view-sessions/{sid}/filters/fields", json={"field_code": "name"})
    r = client.patch(
        f"/view-sessions/{sid}/filters/fields/name", json={"attr": "value", "value": "Nobody"}
    )
    assert r.json()["requeried"] is True

    page = client.get(f"/view-sessions/{sid}").json()
    table = _table(page)["table"]
    assert table["rows"] == []
    assert table["placeholder"] == {"text": "No data available", "colspan": 2}
    assert page["pagination"]["total_pages"] == 1


def test_filter_edits_requery_from_page_one(client, db_session):
    _seed(db_session)
    sid = _open(client)["session_id"]
    client.post(f"/view-sessions/{sid}/pages", json={"selected": 1})

    r = client.post(f"/view-sessions/{sid}/filters/fields", json={"field_code": "status"})
    out = r.json()
    assert out["applied"] is True
    assert out["key"] == "status"
    assert out["filters"]["filter_item"]["status"] == {"value": "", "operator": "equal"}

    client.patch(
        f"/view-sessions/{sid}/filters/fields/status", json={"attr": "value", "value": "active"}
    )
    page = client.get(f"/view-sessions/{sid}").json()
    assert page["pagination"]["current_page"] == 1
    assert page["pagination"]["total_pages"] == 2
    assert _row_names(page) == ["User 1", "User 3"]


def test_nested_group_editing(client, db_session):
    _seed(db_session)
    sid = _open(client, page_size=10)["session_id"]
    base = f"/view-sessions/{sid}/filters"

    group = client.post(f"{base}/groups", json={}).json()["key"]
    assert group == "group_1"
    client.patch(f"{base}/operator", json={"operator": "OR", "group_path": [group]})
    for code, value in (("name", "User 2"), ("status", "active")):
        client.post(f"{base}/fields", json={"field_code": code, "group_path": [group]})
        client.patch(
            f"{base}/fields/{code}",
            json={"attr": "value", "value": value, "group_path": [group]},
        )

    page = client.get(f"/view-sessions/{sid}").json()
    assert _row_names(page) == ["User 1", "User 2", "User 3", "User 5"]
    assert page["filters"]["filter_item"][group]["operator"] == "OR"

    out = client.delete(f"{base}/fields/name", params={"group_path": group}).json()
    assert out["applied"] is True
    assert set(out["filters"]["filter_item"][group]["filter_item"]) == {"status"}

    out = client.delete(f"{base}/groups/{group}").json()
    assert out["filters"] == {"operator": "AND", "filter_item": {}}
    assert len(_row_names(client.get(f"/view-sessions/{sid}").json())) == 5


def test_noop_edits_do_not_requery(client, db_session):
    _seed(db_session)
    sid = _open(client)["session_id"]
    base = f"/view-sessions/{sid}/filters"

    out = client.post(f"{base}/fields", json={"field_code": ""}).json()
    assert out == {
        "applied": False,
        "key": None,
        "filters": {"operator": "AND", "filter_item": {}},
        "requeried": False,
    }
    out = client.delete(f"{base}/groups/group_7").json()
    assert out["applied"] is False


def test_unknown_filter_operator_is_422(client, db_session):
    _seed(db_session)
    sid = _open(client)["session_id"]
    base = f"/view-sessions/{sid}/filters"
    client.post(f"{base}/fields", json={"field_code": "status"})

    r = client.patch(f"{base}/fields/status", json={"attr": "operator", "value": "between"})
    assert r.status_code == 422
    assert client.get(base).json()["filter_item"]["status"]["operator"] == "equal"


def test_orders_update(client, db_session):
    _seed(db_session)
    sid = _open(client)["session_id"]
    page = client.put(
        f"/view-sessions/{sid}/orders",
        json={"orders": [{"field_name": "name", "direction": "DESC"}]},
    ).json()
    assert page["orders"] == [{"field_name": "name", "direction": "desc"}]
    assert _row_names(page) == ["User 5", "User 4"]


def test_html_view(client, db_session):
    _seed(db_session)
    sid = _open(client)["session_id"]
    r = client.get(f"/view-sessions/{sid}/html")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/html")
    assert "<title>Customers (All) - Acme</title>" in r.text
    assert "User 1" in r.text


def test_closed_session_is_404(client, db_session):
    _seed(db_session)
    sid = _open(client)["session_id"]
    assert client.delete(f"/view-sessions/{sid}").json() == {"detail": "View session closed"}
    r = client.get(f"/view-sessions/{sid}")
    assert r.status_code == 404
    assert r.json() == {"detail": f"View session {sid} not found"}
    assert client.delete(f"/view-sessions/{sid}").status_code == 404


def test_paging_without_layout_is_409(client, db_session):
    sid = client.post("/view-sessions/acme/crm/customer/ghost", json={}).json()["session_id"]
    r = client.post(f"/view-sessions/{sid}/pages", json={"selected": 1})
    assert r.status_code == 409
    assert r.json() == {"detail": "Layout has not been loaded for this view"}


def test_odd_route_codes_render_a_layout_error(client, db_session):
    r = client.post("/view-sessions/acme%3Fx/crm/customer%01/all", json={})
    assert r.status_code == 200
    assert r.json()["errors"]["layout"] == "Failed to fetch layout: HTTP 404"
