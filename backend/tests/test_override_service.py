import logging
from decimal import Decimal

import pytest

from partcatalog.core.errors import ValidationError
from partcatalog.models import Application, PartApplication, PartOrganizationDetail
from partcatalog.schemas.part import OrganizationAccessIn
from partcatalog.services import override_service, scope_service


def _entry(**kw):
    return OrganizationAccessIn(**kw)


def test_replace_all_swaps_the_whole_set(db, org, other_org, app_line, make_part):
    part = make_part(OrganizationAccess=[
        {"OrganizationID": org.OrganizationID, "ApplicationID": app_line.ApplicationID},
    ])
    assert len(scope_service.list_for_part(db, part.PartID)) == 1

    rows = override_service.replace_all(db, part, [_entry(OrganizationID=other_org.OrganizationID)])

    assert [r.OrganizationID for r in rows] == [other_org.OrganizationID]
    assert scope_service.list_for_part(db, part.PartID) == []


def test_replace_all_with_empty_list_clears_overrides(db, org, make_part):
    part = make_part(OrganizationAccess=[{"OrganizationID": org.OrganizationID}])

    assert override_service.replace_all(db, part, []) == []
    assert db.query(PartOrganizationDetail).count() == 0


def test_same_organization_twice_collapses_to_one_row(db, org, app_line, make_part):
    second_app = Application(OrganizationID=org.OrganizationID, Name="Conveyor")
    db.add(second_app)
    db.commit()
    part = make_part()

    rows = override_service.replace_all(db, part, [
        _entry(OrganizationID=org.OrganizationID, OrganizationItemNumber="FIRST",
               ApplicationID=app_line.ApplicationID),
        _entry(OrganizationID=org.OrganizationID, OrganizationItemNumber="SECOND",
               ApplicationIDs=[second_app.ApplicationID, app_line.ApplicationID]),
    ])

    assert len(rows) == 1
    assert rows[0].OrganizationItemNumber == "SECOND"
    linked = {l.ApplicationID for l in scope_service.list_for_part(db, part.PartID)}
    assert linked == {app_line.ApplicationID, second_app.ApplicationID}


def test_custom_values_are_coerced(db, org, make_part):
    part = make_part()

    rows = override_service.replace_all(db, part, [_entry(
        OrganizationID=org.OrganizationID, UseDefaultPricing=False, UnitPrice="12.5", LeadTimeDays="",
    )])

    row = rows[0]
    assert row.PriceType == "non_fixed"
    assert row.UnitPrice == Decimal("12.50")
    assert row.LeadTimeDays is None
    assert row.IsRepairable is False


def test_unknown_organization_rejects_and_keeps_existing_set(db, org, make_part):
    part = make_part(OrganizationAccess=[{"OrganizationID": org.OrganizationID}])

    with pytest.raises(ValidationError) as exc:
        override_service.replace_all(db, part, [_entry(OrganizationID=9999)])

    assert "Unknown organization" in exc.value.detail
    db.expire_all()
    assert [r.OrganizationID for r in override_service.list_for_part(db, part.PartID)] == [org.OrganizationID]


def test_upsert_override_updates_row_in_place(db, org, app_line, make_part):
    part = make_part()

    first = override_service.upsert_override(db, part, _entry(
        OrganizationID=org.OrganizationID, OrganizationItemNumber="A-1", ApplicationID=app_line.ApplicationID,
    ))
    second = override_service.upsert_override(db, part, _entry(
        OrganizationID=org.OrganizationID, OrganizationItemNumber="A-2", UseDefaultPricing=False,
        PriceType="fixed", UnitPrice="10",
    ))

    assert first.DetailID == second.DetailID
    assert second.OrganizationItemNumber == "A-2"
    assert second.UnitPrice == Decimal("10.00")
    assert db.query(PartOrganizationDetail).count() == 1
    # Bu organizasyonun scope'ları yenilendi (yeni girişte uygulama yok)
    assert db.query(PartApplication).count() == 0


def test_failed_scope_link_is_not_fatal(db, org, other_app, make_part, caplog):
    part = make_part()

    with caplog.at_level(logging.WARNING, logger="partcatalog.services.scope_service"):
        rows = override_service.replace_all(db, part, [
            _entry(OrganizationID=org.OrganizationID, ApplicationID=other_app.ApplicationID),
        ])

    assert len(rows) == 1
    assert scope_service.list_for_part(db, part.PartID) == []
    assert "scope link skipped" in caplog.text


def test_link_applications_ignores_sentinel_and_duplicates(db, org, app_line, make_part):
    part = make_part()

    linked = scope_service.link_applications(
        db, part.PartID, org.OrganizationID,
        ["__none__", "", None, str(app_line.ApplicationID), app_line.ApplicationID],
    )

    assert linked == 1
    assert len(scope_service.list_for_part(db, part.PartID)) == 1
