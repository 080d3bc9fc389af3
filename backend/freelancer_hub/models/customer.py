from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from freelancer_hub.models.base import Base, utcnow


class Customer(Base):
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True)
    address = Column(String(500), nullable=True)
    email = Column(String(255), nullable=True, index=True)  # Not unique: two freelancers may share a client
    notes = Column(Text, nullable=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    owner = relationship("User", back_populates="customers")
    projects = relationship(
        "Project",
        back_populates="customer",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Project.id",
    )

    def __repr__(self) -> str:
        return f"<Customer id={self.id} name={self.name!r} user_id={self.user_id}>"
