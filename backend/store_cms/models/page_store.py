from store_cms.extensions import db

class PageStore(db.Model):
    """Join row assigning a page to one store scope."""

    __tablename__ = "cms_page_store"

    page_id = db.Column(
        db.Integer,
        db.ForeignKey("cms_page.page_id", ondelete="CASCADE"),
        primary_key=True,
    )
    store_id = db.Column(
        db.Integer,
        db.ForeignKey("store.store_id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
