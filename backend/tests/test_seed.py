from partcatalog.models import Application, AppUser, Organization, Part, PartOrganizationDetail
from partcatalog.scripts import seed


def test_seed_is_idempotent(db):
    seed.run()
    seed.run()

    assert db.query(Organization).count() == 2
    assert db.query(Application).count() == 3
    assert db.query(AppUser).filter_by(Username=seed.ADMIN_USERNAME).count() == 1
    assert db.query(Part).count() == 2
    assert db.query(PartOrganizationDetail).count() == 2
