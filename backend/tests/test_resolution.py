from decimal import Decimal

from partcatalog.schemas.part import OrganizationAccessIn, PartUpdate
from partcatalog.services import override_service, part_service, resolution_service


def test_resolve_without_override_returns_part_defaults(db, org, make_part):
    part = make_part(LeadTimeDays=30, IsRepairable=True, RepairPrice="40")

    terms = resolution_service.resolve(db, part, org.OrganizationID)

    assert terms.Source == "default"
    assert terms.OrganizationItemNumber is None
    assert terms.PriceType == "fixed"
    assert terms.UnitPrice == Decimal("99.99")
    assert terms.LeadTimeDays == 30
    assert terms.IsRepairable is True
    assert terms.RepairPrice == Decimal("40.00")


def test_custom_override_wins_over_defaults(db, org, make_part):
    part = make_part(OrganizationAccess=[{
        "OrganizationID": org.OrganizationID,
        "OrganizationItemNumber": "ORG-7",
        "UseDefaultPricing": False,
        "PriceType": "non_fixed",
        "UnitPrice": "",
        "LeadTimeDays": 10,
    }])

    terms = resolution_service.resolve(db, part, org.OrganizationID)

    assert terms.Source == "override"
    assert terms.OrganizationItemNumber == "ORG-7"
    assert terms.PriceType == "non_fixed"
    assert terms.UnitPrice is None
    assert terms.LeadTimeDays == 10
    assert terms.IsRepairable is False


def test_default_pricing_override_is_a_snapshot(db, org, make_part):
    part = make_part(OrganizationAccess=[{"OrganizationID": org.OrganizationID, "UseDefaultPricing": True}])

    # Varsayılan fiyat değişir, override seti dokunulmaz (OrganizationAccess yok)
    part_service.update_part(db, part.PartID, PartUpdate(
        ManufacturerPartNumber="MPN-1", Name="Gearbox", PriceType="fixed", UnitPrice="120.00", LeadTimeDays=5,
    ))

    terms = resolution_service.resolve(db, part, org.OrganizationID)
    assert terms.Source == "override"
    assert terms.UnitPrice == Decimal("99.99")
    assert terms.LeadTimeDays == 30

    # Yeniden yazınca yeni varsayılanlar kopyalanır
    override_service.upsert_override(db, part, OrganizationAccessIn(OrganizationID=org.OrganizationID))
    terms = resolution_service.resolve(db, part, org.OrganizationID)
    assert terms.UnitPrice == Decimal("120.00")
    assert terms.LeadTimeDays == 5


def test_resolve_many_mixes_sources(db, org, make_part):
    with_override = make_part(OrganizationAccess=[{"OrganizationID": org.OrganizationID}])
    plain = make_part(ManufacturerPartNumber="MPN-2")

    terms = resolution_service.resolve_many(db, [with_override, plain], org.OrganizationID)

    assert terms[with_override.PartID].Source == "override"
    assert terms[plain.PartID].Source == "default"


def test_group_organizations_lists_names_and_applications(db, org, other_org, app_line, make_part):
    part = make_part(OrganizationAccess=[
        {"OrganizationID": org.OrganizationID, "ApplicationID": app_line.ApplicationID},
        {"OrganizationID": other_org.OrganizationID, "ApplicationID": "__none__"},
    ])

    groups = resolution_service.group_organizations(db, part)

    assert [g.Name for g in groups] == ["Acme Plant", "Beta Works"]
    assert [a.Name for a in groups[0].Applications] == ["Packaging Line"]
    assert groups[1].Applications == []
