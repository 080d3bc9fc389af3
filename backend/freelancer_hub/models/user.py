from sqlalchemy import Column, Integer, String, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship

from freelancer_hub.models.base import Base, utcnow


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
    )

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    customers = relationship(
        "Customer",
        back_populates="owner",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Customer.id",
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r}>"
