from vsm.extensions import db
from vsm.utils.order import section_sort_key
from .base import BaseModel


class HomepageSection(BaseModel):
    __tablename__ = "homepage_sections"

    homepage_id = db.Column(db.String(36), db.ForeignKey("homepages.id"), nullable=False, index=True)
    name = db.Column(db.String(200), nullable=True)
    component = db.Column(db.String(100), nullable=True)  # registry key, may not resolve
    enabled = db.Column(db.Boolean, nullable=False, default=True)
    order = db.Column(db.Float, nullable=False, default=0)
    type = db.Column(db.String(50), nullable=False, default="content", index=True)  # hero, content, ...
    section_data = db.Column(db.JSON, nullable=False, default=dict)
    author_id = db.Column(db.String(36), nullable=True)

    homepage = db.relationship("Homepage", back_populates="sections")

    __table_args__ = (
        db.Index("idx_section_homepage_order", "homepage_id", "order"),
    )

    @property
    def sort_key(self):
        return section_sort_key(self.order, self.created_at, self.id)
