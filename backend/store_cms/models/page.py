from flask import current_app
from sqlalchemy import inspect, orm
from store_cms.extensions import db
from .base import BaseModel
from .store import resolve_store_ids

class Page(BaseModel):
    __tablename__ = 'cms_page'

    id = db.Column("page_id", db.Integer, primary_key=True)
    identifier = db.Column(db.String(100), nullable=False, index=True)
    title = db.Column(db.String(255), nullable=False)
    page_layout = db.Column(db.String(255))
    meta_title = db.Column(db.String(255))
    meta_keywords = db.Column(db.Text)
    meta_description = db.Column(db.Text)
    content_heading = db.Column(db.String(255))
    content = db.Column(db.Text)
    is_active = db.Column(db.Boolean, nullable=False, default=True, index=True)
    sort_order = db.Column(db.Integer, nullable=False, default=0)

    # Design overrides and the window in which they apply
    custom_theme = db.Column(db.String(100))
    custom_root_template = db.Column(db.String(255))
    custom_theme_from = db.Column(db.Date, nullable=True)
    custom_theme_to = db.Column(db.Date, nullable=True)

    # Row versioning key, bumped by the ORM on every UPDATE
    row_id = db.Column(db.Integer, nullable=False)

    __mapper_args__ = {"version_id_col": row_id}

    def __init__(self, **kwargs):
        stores = kwargs.pop("stores", None)
        store_id = kwargs.pop("store_id", None)
        super().__init__(**kwargs)
        self._init_scope_state()
        self.stores = list(stores or [])
        self.store_id = store_id

    @orm.reconstructor
    def _init_scope_state(self):
        # Store assignments requested by the caller
        self.stores = []
        # Scalar store: fallback assignment and context for scoped loads
        self.store_id = None
        # Store assignments as last read from cms_page_store
        self.store_ids = []
        self.save_allowed = True
        self._deleted = False
        self._force_changes = False

    # -------------------------------------------------
    # State flags
    # -------------------------------------------------
    @property
    def is_deleted(self) -> bool:
        return self._deleted

    def mark_deleted(self):
        self._deleted = True

    @property
    def stores_changed(self) -> bool:
        return set(resolve_store_ids(self.stores, self.store_id)) != set(self.store_ids)

    @property
    def has_data_changes(self) -> bool:
        """
        True when the page needs a full save: explicitly marked dirty,
        not yet persisted, column values changed, or store assignments
        differ from the join table.
        """
        if self._force_changes:
            return True

        # Read instance state only: loading expired attributes would autoflush
        state = inspect(self)
        if state.session is None or state.key is None:
            return True
        if state.session.is_modified(self):
            return True

        return self.stores_changed

    def mark_dirty(self):
        self._force_changes = True

    def mark_clean(self):
        self._force_changes = False

    # -------------------------------------------------
    # Save hooks
    # -------------------------------------------------
    def before_save(self):
        if isinstance(self.identifier, str):
            self.identifier = self.identifier.strip()
        if self.is_active is None:
            self.is_active = True
        if self.sort_order is None:
            self.sort_order = 0

    def after_commit_callback(self):
        current_app.logger.info(
            "CMS page %s committed (row_id=%s, stores=%s)",
            self.id,
            self.row_id,
            self.store_ids,
        )

    def __repr__(self):
        return f"<Page {self.id} {self.identifier!r}>"
