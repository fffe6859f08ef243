from store_cms.extensions import db
from .base import BaseModel

# Universal fallback scope: pages assigned here are visible in every store
DEFAULT_STORE_ID = 0

class Store(BaseModel):
    __tablename__ = "store"

    id = db.Column("store_id", db.Integer, primary_key=True, autoincrement=False)
    code = db.Column(db.String(32), unique=True, nullable=False, index=True)
    name = db.Column(db.String(255), nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    def __repr__(self):
        return f"<Store {self.id} {self.code!r}>"


def resolve_store_ids(stores, store_id=None):
    """
    Store ids a page should be assigned to: the requested list, else the
    scalar store id, else the default store. Duplicates are dropped,
    first occurrence wins.
    """
    requested = list(stores or [])
    if not requested:
        requested = [DEFAULT_STORE_ID if store_id is None else store_id]

    resolved = []
    for value in requested:
        value = int(value)
        if value not in resolved:
            resolved.append(value)
    return resolved
