from typing import Any, Dict, Optional

from flask import current_app
from sqlalchemy import delete, inspect
from sqlalchemy.exc import IntegrityError as DBIntegrityError
from sqlalchemy.orm.exc import StaleDataError

from store_cms.extensions import db
from store_cms.domain.exceptions import ConflictError, IntegrityError, NotFoundError
from store_cms.domain.invariants.page import assert_page, assert_page_identifier
from store_cms.models.base import utc_now
from store_cms.models.page import Page
from store_cms.models.page_store import PageStore
from store_cms.normalizers.page import normalize_theme_window
from store_cms.services import page_lookup, store_sync
from store_cms.services.store_registry import StoreRegistry
from store_cms.utils.audit import log_action
from store_cms.utils.transaction import transactional
from store_cms.utils.versioning import page_versions, record_version

DUPLICATE_IDENTIFIER_MESSAGE = "A page URL key for specified store already exists."


def _pending_changes(page: Page) -> Dict[str, Any]:
    """Column values set on a persistent page but not yet committed."""
    state = inspect(page)
    if not state.persistent:
        return {}

    return {
        attr.key: attr.value
        for attr in state.attrs
        if attr.history.has_changes()
    }


class PageRepository:
    """
    Persists CMS pages and keeps their store assignments in sync.

    All writes of one ``save`` (page row, cms_page_store rows, version
    snapshot, audit entry) share a single transaction.
    """

    def __init__(self, registry: Optional[StoreRegistry] = None):
        self.registry = registry or StoreRegistry()

    # -------------------------------------------------
    # Loading
    # -------------------------------------------------
    def get(self, page_id: int) -> Optional[Page]:
        page = db.session.get(Page, page_id)
        if page is not None:
            self._populate_stores(page)
        return page

    def load(self, value, field: Optional[str] = None, *, store_id: Optional[int] = None) -> Page:
        page = db.session.scalars(
            page_lookup.load_page_select(value, field, store_id)
        ).first()

        if page is None:
            raise NotFoundError(f"CMS page {field or 'id'}={value!r} not found")

        self._populate_stores(page)
        return page

    def _populate_stores(self, page: Page) -> None:
        page.store_ids = page_lookup.lookup_store_ids(page.id)
        page.stores = list(page.store_ids)

    def history(self, page_id: int):
        return page_versions(page_id)

    # -------------------------------------------------
    # Saving
    # -------------------------------------------------
    def save(self, page: Page) -> Page:
        """
        Persist ``page``.

        Unmodified pages only get an audit touch. Any failure rolls back
        the whole transaction, re-applies the caller's pending values,
        marks the page dirty and re-raises.
        """
        if page.is_deleted:
            return self.delete(page)

        pending = _pending_changes(page)
        commit_callbacks = []
        desired = None

        try:
            with transactional():
                if not page.has_data_changes:
                    self._touch(page)
                else:
                    desired = self._save_modified(page)
                    commit_callbacks.append(page.after_commit_callback)

        except DBIntegrityError as exc:
            self._restore_after_rollback(page, pending)
            raise IntegrityError(f"CMS page could not be saved: {exc.orig}") from exc

        except StaleDataError as exc:
            self._restore_after_rollback(page, pending)
            raise ConflictError(
                f"CMS page {inspect(page).identity} was modified by another transaction"
            ) from exc

        except Exception:
            self._restore_after_rollback(page, pending)
            raise

        if desired is not None:
            page.store_ids = sorted(desired)
            page.stores = list(page.store_ids)

        page.mark_clean()

        for callback in commit_callbacks:
            callback()

        return page

    def _touch(self, page: Page) -> None:
        log_action(
            action="page.touch",
            entity_type="cms_page",
            entity_id=page.id,
        )
        current_app.logger.debug("CMS page %s unchanged, touch only", page.id)

    def _save_modified(self, page: Page):
        # Nothing reaches the database before validation passes
        with db.session.no_autoflush:
            page.before_save()
            normalize_theme_window(page)
            assert_page(page)

            if not page.save_allowed:
                current_app.logger.info("Save of CMS page %s skipped", page.id)
                return None

            assert_page_identifier(page)

            desired = store_sync.desired_store_ids(page)
            self._check_unique(page, desired)
            self._check_integrity(desired)

        if page.id is not None:
            # Guarantees an UPDATE, and with it a row_id bump, when only
            # store assignments changed
            page.updated_at = utc_now()

        db.session.add(page)
        db.session.flush()

        self._after_save(page, desired)
        return desired

    def _check_unique(self, page: Page, desired) -> None:
        conflicts = page_lookup.find_identifier_conflicts(
            page.identifier,
            desired,
            exclude_page_id=page.id,
        )
        if conflicts:
            raise IntegrityError(
                f"{DUPLICATE_IDENTIFIER_MESSAGE} (stores: {conflicts})"
            )

    def _check_integrity(self, desired) -> None:
        missing = self.registry.missing_store_ids(desired)
        if missing:
            raise IntegrityError(f"Unknown store ids: {missing}")

    def _after_save(self, page: Page, desired) -> None:
        to_insert, to_delete = store_sync.sync_page_stores(page.id, desired)

        record_version(page, store_ids=desired)

        log_action(
            action="page.save",
            entity_type="cms_page",
            entity_id=page.id,
            payload={
                "identifier": page.identifier,
                "row_id": page.row_id,
                "stores_added": to_insert,
                "stores_removed": to_delete,
            },
        )
        current_app.logger.info(
            "Saved CMS page %s (%r) row_id=%s stores=%s",
            page.id,
            page.identifier,
            page.row_id,
            sorted(desired),
        )

    def _restore_after_rollback(self, page: Page, pending: Dict[str, Any]) -> None:
        for key, value in pending.items():
            setattr(page, key, value)
        page.mark_dirty()

    # -------------------------------------------------
    # Deleting
    # -------------------------------------------------
    def delete(self, page: Page) -> Page:
        state = inspect(page)
        if state.key is None:
            raise NotFoundError("CMS page has not been saved")

        page_id = state.identity[0]

        try:
            with transactional() as session:
                session.execute(delete(PageStore).where(PageStore.page_id == page_id))
                session.delete(page)

                log_action(
                    action="page.delete",
                    entity_type="cms_page",
                    entity_id=page_id,
                    payload={"identifier": page.identifier},
                )
        except Exception:
            page.mark_dirty()
            raise

        page.store_ids = []
        page.stores = []
        current_app.logger.info("Deleted CMS page %s", page_id)
        return page

    # -------------------------------------------------
    # Store-scoped lookups
    # -------------------------------------------------
    def check_identifier(self, identifier: str, store) -> Optional[int]:
        return page_lookup.check_identifier(identifier, self.registry.get_store_id(store))

    def get_title_by_identifier(self, identifier: str, store=None) -> Optional[str]:
        store_id = None if store is None else self.registry.get_store_id(store)
        return page_lookup.get_title_by_identifier(identifier, store_id)

    def get_title_by_id(self, page_id: int) -> Optional[str]:
        return page_lookup.get_title_by_id(page_id)

    def get_identifier_by_id(self, page_id: int) -> Optional[str]:
        return page_lookup.get_identifier_by_id(page_id)

    def lookup_store_ids(self, page_id: int) -> list[int]:
        return page_lookup.lookup_store_ids(page_id)
