import pytest


@pytest.fixture()
def catalog(org, other_org, app_line, make_part):
    scoped = make_part(Name="Scoped Gearbox", OrganizationAccess=[{
        "OrganizationID": org.OrganizationID,
        "OrganizationItemNumber": "ACME-GB",
        "UseDefaultPricing": False,
        "PriceType": "fixed",
        "UnitPrice": "80",
        "ApplicationID": app_line.ApplicationID,
    }])
    plain = make_part(Name="Plain Motor", OrganizationAccess=[{"OrganizationID": org.OrganizationID}])
    foreign = make_part(Name="Foreign Shaft", OrganizationAccess=[{"OrganizationID": other_org.OrganizationID}])
    hidden = make_part(Name="Unassigned")
    return {"scoped": scoped, "plain": plain, "foreign": foreign, "hidden": hidden}


def test_catalog_lists_only_parts_of_my_organization(client, user_headers, catalog, app_line):
    r = client.get("/parts", headers=user_headers)

    assert r.status_code == 200
    data = r.json()["data"]
    assert sorted(p["Name"] for p in data["Parts"]) == ["Plain Motor", "Scoped Gearbox"]
    assert data["Applications"] == [{"ApplicationID": app_line.ApplicationID, "Name": "Packaging Line"}]
    assert data["CanViewPricing"] is True
    assert r.json()["meta"]["total"] == 2


def test_catalog_terms_come_from_the_override(client, user_headers, catalog):
    r = client.get(f"/parts/{catalog['scoped'].PartID}", headers=user_headers)

    terms = r.json()["data"]["Terms"]
    assert terms["Source"] == "override"
    assert terms["OrganizationItemNumber"] == "ACME-GB"
    assert terms["UnitPrice"] == 80.0
    assert r.json()["data"]["UnitPrice"] == 99.99


def test_catalog_application_filter(client, user_headers, catalog, app_line):
    r = client.get("/parts", params={"application": app_line.ApplicationID}, headers=user_headers)
    assert [p["Name"] for p in r.json()["data"]["Parts"]] == ["Scoped Gearbox"]

    r = client.get("/parts", params={"application": "__none__"}, headers=user_headers)
    assert len(r.json()["data"]["Parts"]) == 2


def test_catalog_hides_prices_without_permission(client, org, catalog, make_headers):
    headers = make_headers("no-prices", "user", organization_id=org.OrganizationID, can_view_pricing=False)

    r = client.get("/parts", headers=headers)

    data = r.json()["data"]
    assert data["CanViewPricing"] is False
    for p in data["Parts"]:
        assert "UnitPrice" not in p
        assert "RepairPrice" not in p
        assert "UnitPrice" not in p["Terms"]
        assert p["Terms"]["PriceType"] in ("fixed", "non_fixed")


def test_catalog_part_of_other_organization_is_not_found(client, user_headers, catalog):
    r = client.get(f"/parts/{catalog['foreign'].PartID}", headers=user_headers)

    assert r.status_code == 404
    assert r.json()["error"] == "Part not found or access denied"


def test_catalog_requires_an_organization(client, make_headers):
    r = client.get("/parts", headers=make_headers("floating", "user"))

    assert r.status_code == 403
    assert r.json()["error"] == "User has no organization"
