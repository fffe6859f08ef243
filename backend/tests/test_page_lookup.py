import pytest

from store_cms.domain.exceptions import NotFoundError
from store_cms.services import page_lookup


@pytest.fixture
def home_pages(make_page):
    """One 'home' page for every store plus an override for store 5."""
    fallback = make_page(identifier="home", title="Home", stores=(0,))
    dutch = make_page(identifier="home", title="Thuis", stores=(5,))
    return fallback, dutch


def test_scoped_store_ids():
    assert page_lookup.scoped_store_ids() == [0]
    assert page_lookup.scoped_store_ids(0) == [0]
    assert page_lookup.scoped_store_ids(5) == [0, 5]


def test_specific_store_wins_over_default(repo, home_pages):
    fallback, dutch = home_pages

    page = repo.load("home", "identifier", store_id=5)

    assert page.id == dutch.id
    assert page.title == "Thuis"
    assert page.store_ids == [5]


def test_unassigned_store_falls_back_to_default(repo, home_pages):
    fallback, dutch = home_pages

    page = repo.load("home", "identifier", store_id=7)

    assert page.id == fallback.id
    assert page.store_ids == [0]


def test_scoped_load_ignores_inactive_pages(repo, make_page):
    make_page(identifier="promo", title="Promo", stores=(0,))
    make_page(identifier="promo", title="Promo NL", stores=(5,), is_active=False)

    assert repo.load("promo", "identifier", store_id=5).title == "Promo"


def test_load_missing_page(repo, stores):
    with pytest.raises(NotFoundError):
        repo.load(404)

    with pytest.raises(NotFoundError):
        repo.load("missing", "identifier", store_id=5)


def test_load_rejects_unknown_field(repo, stores):
    with pytest.raises(ValueError):
        repo.load("x", "no_such_column")


def test_check_identifier(repo, make_page, home_pages):
    fallback, dutch = home_pages
    make_page(identifier="closed", title="Closed", stores=(2,), is_active=False)

    assert repo.check_identifier("home", 5) == dutch.id
    assert repo.check_identifier("home", 7) == fallback.id
    assert repo.check_identifier("home", "italian") == fallback.id
    assert repo.check_identifier("closed", 2) is None
    assert repo.check_identifier("nowhere", 2) is None


def test_check_identifier_unknown_store_id_falls_back(repo, home_pages):
    fallback, dutch = home_pages

    assert repo.check_identifier("home", 99) == fallback.id
    assert repo.check_identifier("home", "99") == fallback.id


def test_check_identifier_unknown_store_code(repo, home_pages):
    with pytest.raises(NotFoundError):
        repo.check_identifier("home", "martian")


def test_title_by_identifier(repo, home_pages):
    assert repo.get_title_by_identifier("home") == "Home"
    assert repo.get_title_by_identifier("home", 5) == "Thuis"
    assert repo.get_title_by_identifier("home", 3) == "Home"
    assert repo.get_title_by_identifier("nowhere") is None


def test_title_by_identifier_includes_inactive_pages(repo, make_page):
    make_page(identifier="draft", title="Draft", stores=(0,), is_active=False)

    assert repo.get_title_by_identifier("draft") == "Draft"


def test_lookups_by_id(repo, make_page):
    page = make_page(identifier="contact", title="Contact us", stores=(2, 1))

    assert repo.get_title_by_id(page.id) == "Contact us"
    assert repo.get_identifier_by_id(page.id) == "contact"
    assert repo.lookup_store_ids(page.id) == [1, 2]
    assert repo.get_title_by_id(page.id + 100) is None
    assert repo.get_identifier_by_id(page.id + 100) is None
    assert repo.lookup_store_ids(page.id + 100) == []
