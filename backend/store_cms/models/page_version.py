from store_cms.extensions import db
from .base import BaseModel

class PageVersion(BaseModel):
    __tablename__ = "cms_page_version"

    id = db.Column(db.Integer, primary_key=True)
    page_id = db.Column(
        db.Integer,
        db.ForeignKey("cms_page.page_id", ondelete="CASCADE"),
        nullable=False
    )

    # Mirrors cms_page.row_id at the time the snapshot was taken
    version = db.Column(db.Integer, nullable=False)
    snapshot = db.Column(db.JSON, nullable=False)

    created_by = db.Column(db.String(36), nullable=True)

    __table_args__ = (
        db.UniqueConstraint("page_id", "version", name="uq_cms_page_version"),
        db.Index("idx_cms_page_version_page", "page_id"),
    )
