"""
Store-scoped page lookups.

Every lookup takes its store context explicitly. A page assigned to a
specific store wins over one assigned to the default store: candidate
rows are ordered by ``store_id`` descending and the first one is used.
"""
from typing import Iterable, Optional

from sqlalchemy import inspect, select
from sqlalchemy.sql import Select

from store_cms.extensions import db
from store_cms.models.page import Page
from store_cms.models.page_store import PageStore
from store_cms.models.store import DEFAULT_STORE_ID


def scoped_store_ids(store_id: Optional[int] = None) -> list[int]:
    store_ids = [DEFAULT_STORE_ID]
    if store_id is not None and int(store_id) != DEFAULT_STORE_ID:
        store_ids.append(int(store_id))
    return store_ids


def load_by_identifier_select(
    identifier: str,
    store_ids: Iterable[int],
    is_active: Optional[bool] = None,
    columns: tuple = (Page,),
) -> Select:
    stmt = (
        select(*columns)
        .select_from(Page)
        .join(PageStore, PageStore.page_id == Page.id)
        .where(
            Page.identifier == identifier,
            PageStore.store_id.in_(list(store_ids)),
        )
        .order_by(PageStore.store_id.desc())
    )

    if is_active is not None:
        stmt = stmt.where(Page.is_active == bool(is_active))

    return stmt


def load_page_select(value, field: Optional[str] = None, store_id: Optional[int] = None) -> Select:
    """
    Select for loading one page by ``field`` (primary key by default).
    A non-default ``store_id`` restricts the result to active pages visible
    in that store, preferring the store's own assignment.
    """
    field = field or "id"
    if field not in inspect(Page).column_attrs:
        raise ValueError(f"Unknown page field: {field}")

    stmt = select(Page).where(getattr(Page, field) == value)

    if store_id:
        stmt = (
            stmt.join(PageStore, PageStore.page_id == Page.id)
            .where(
                Page.is_active == True,  # noqa: E712
                PageStore.store_id.in_(scoped_store_ids(store_id)),
            )
            .order_by(PageStore.store_id.desc())
        )

    return stmt.limit(1)


def check_identifier(identifier: str, store_id: int) -> Optional[int]:
    """Id of the active page answering ``identifier`` in ``store_id``, if any."""
    stmt = load_by_identifier_select(
        identifier,
        scoped_store_ids(store_id),
        is_active=True,
        columns=(Page.id,),
    ).limit(1)
    return db.session.scalar(stmt)


def get_title_by_identifier(identifier: str, store_id: Optional[int] = None) -> Optional[str]:
    stmt = load_by_identifier_select(
        identifier,
        scoped_store_ids(store_id),
        columns=(Page.title,),
    ).limit(1)
    return db.session.scalar(stmt)


def get_title_by_id(page_id: int) -> Optional[str]:
    return db.session.scalar(select(Page.title).where(Page.id == int(page_id)))


def get_identifier_by_id(page_id: int) -> Optional[str]:
    return db.session.scalar(select(Page.identifier).where(Page.id == int(page_id)))


def lookup_store_ids(page_id: int) -> list[int]:
    stmt = (
        select(PageStore.store_id)
        .where(PageStore.page_id == int(page_id))
        .order_by(PageStore.store_id.asc())
    )
    return list(db.session.scalars(stmt))


def find_identifier_conflicts(
    identifier: str,
    store_ids: Iterable[int],
    exclude_page_id: Optional[int] = None,
) -> list[int]:
    """Store ids in which another page already uses ``identifier``."""
    stmt = load_by_identifier_select(
        identifier,
        store_ids,
        columns=(PageStore.store_id,),
    )
    if exclude_page_id is not None:
        stmt = stmt.where(Page.id != exclude_page_id)

    return sorted(set(db.session.scalars(stmt)))
