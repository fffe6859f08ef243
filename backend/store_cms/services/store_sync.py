from typing import Iterable
from flask import current_app
from sqlalchemy import delete, insert
from store_cms.extensions import db
from store_cms.models.page_store import PageStore
from store_cms.models.store import resolve_store_ids
from store_cms.services import page_lookup


def desired_store_ids(page) -> list[int]:
    return resolve_store_ids(page.stores, page.store_id)


def diff_store_ids(previous: Iterable[int], desired: Iterable[int]):
    """
    Returns ``(to_insert, to_delete)`` as sorted lists.
    """
    previous = {int(store_id) for store_id in previous}
    desired = {int(store_id) for store_id in desired}

    return sorted(desired - previous), sorted(previous - desired)


def _delete_links(page_id: int, store_ids: list[int]) -> None:
    db.session.execute(
        delete(PageStore).where(
            PageStore.page_id == page_id,
            PageStore.store_id.in_(store_ids),
        )
    )


def _insert_links(page_id: int, store_ids: list[int]) -> None:
    db.session.execute(
        insert(PageStore),
        [{"page_id": page_id, "store_id": store_id} for store_id in store_ids],
    )


def sync_page_stores(page_id: int, desired: Iterable[int]):
    """
    Make cms_page_store hold exactly ``desired`` for the page.
    Must run inside the caller's transaction.
    """
    previous = page_lookup.lookup_store_ids(page_id)
    to_insert, to_delete = diff_store_ids(previous, desired)

    if to_delete:
        _delete_links(page_id, to_delete)

    if to_insert:
        _insert_links(page_id, to_insert)

    current_app.logger.debug(
        "Synced stores for page %s: +%s -%s", page_id, to_insert, to_delete
    )
    return to_insert, to_delete
