import pytest

from store_cms import create_app
from store_cms.extensions import db as _db
from store_cms.models.page import Page
from store_cms.models.store import Store
from store_cms.repositories.page import PageRepository
from store_cms.services.store_registry import StoreRegistry

STORES = {
    1: "default",
    2: "french",
    3: "german",
    4: "spanish",
    5: "dutch",
    7: "italian",
}


@pytest.fixture
def app():
    app = create_app("testing")

    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def db(app):
    return _db


@pytest.fixture
def stores(db):
    StoreRegistry().ensure_default_store()

    for store_id, code in STORES.items():
        store = Store()
        store.id = store_id
        store.code = code
        store.name = code.title()
        db.session.add(store)

    db.session.commit()
    return Store.query.order_by(Store.id).all()


@pytest.fixture
def repo(stores):
    return PageRepository()


@pytest.fixture
def make_page(repo):
    def _make(identifier="about-us", title="About us", stores=(0,), **fields):
        page = Page(identifier=identifier, title=title, stores=list(stores), **fields)
        return repo.save(page)

    return _make
