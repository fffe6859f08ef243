from flask import current_app
from sqlalchemy import select
from store_cms.extensions import db
from store_cms.domain.exceptions import NotFoundError
from store_cms.models.store import DEFAULT_STORE_ID, Store


class StoreRegistry:
    """
    Resolves store references (id, code or Store) to Store rows and
    provides the default store id used as the universal fallback scope.
    """

    default_store_id = DEFAULT_STORE_ID

    def get_store(self, store) -> Store:
        if isinstance(store, Store):
            return store

        if isinstance(store, int) or (isinstance(store, str) and store.isdigit()):
            found = db.session.get(Store, int(store))
        else:
            found = Store.query.filter_by(code=store).first()

        if found is None:
            raise NotFoundError(f"Store {store!r} does not exist")
        return found

    def get_store_id(self, store) -> int:
        """
        Store id for a scoped lookup. Numeric ids pass through unchecked so
        an unknown store resolves to the default store's pages; codes must
        name an existing store.
        """
        if store is None:
            return self.default_store_id
        if isinstance(store, int) or (isinstance(store, str) and store.isdigit()):
            return int(store)
        return self.get_store(store).id

    def missing_store_ids(self, store_ids) -> list[int]:
        """Ids from ``store_ids`` that have no store row."""
        wanted = {int(store_id) for store_id in store_ids}
        if not wanted:
            return []

        existing = set(
            db.session.scalars(select(Store.id).where(Store.id.in_(wanted)))
        )
        return sorted(wanted - existing)

    def ensure_default_store(self) -> Store:
        store = db.session.get(Store, self.default_store_id)
        if store is None:
            store = Store()
            store.id = self.default_store_id
            store.code = current_app.config["CMS_DEFAULT_STORE_CODE"]
            store.name = "Default Store"
            db.session.add(store)
            db.session.flush()
            current_app.logger.info("Created default store %r", store.code)
        return store
