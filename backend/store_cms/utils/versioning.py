from flask import g
from store_cms.extensions import db
from store_cms.models.page_version import PageVersion
from store_cms.normalizers.page import normalize_page


def snapshot_page(page, store_ids=None):
    return {
        "page": normalize_page(page, store_ids=store_ids),
    }

def record_version(page, store_ids=None) -> PageVersion:
    """
    Store the page as it is after the current flush, keyed by its row_id.
    """
    version = PageVersion()
    version.page_id = page.id
    version.version = page.row_id
    version.snapshot = snapshot_page(page, store_ids=store_ids)
    version.created_by = g.get("actor_id")

    db.session.add(version)
    return version

def page_versions(page_id):
    return (
        PageVersion.query
        .filter_by(page_id=page_id)
        .order_by(PageVersion.version.asc())
        .all()
    )
