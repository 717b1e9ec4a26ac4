from vsm.extensions import db
from .base import BaseModel


class Homepage(BaseModel):
    __tablename__ = "homepages"

    name = db.Column(db.String(200), nullable=False)
    is_default = db.Column(db.Boolean, nullable=False, default=False, index=True)

    # Ordered sections; callers sort ties with HomepageSection.sort_key
    sections = db.relationship(
        "HomepageSection",
        back_populates="homepage",
        order_by="HomepageSection.order",
        cascade="all, delete-orphan",
    )

    @classmethod
    def get_or_create_default(cls) -> "Homepage":
        homepage = cls.query.filter_by(is_default=True).first()
        if homepage is None:
            homepage = cls()
            homepage.name = "Trang chủ"
            homepage.is_default = True
            db.session.add(homepage)
            db.session.flush()
        return homepage
