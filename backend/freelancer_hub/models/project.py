from sqlalchemy import Column, Integer, String, Text, Numeric, DateTime, ForeignKey, JSON
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.ext.mutable import MutableList
from sqlalchemy.orm import relationship

from freelancer_hub.models.base import Base, utcnow


# TEXT[] on PostgreSQL, JSON everywhere else (SQLite in tests)
TodoList = MutableList.as_mutable(JSON().with_variant(ARRAY(Text), "postgresql"))


class Project(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    notes = Column(Text, nullable=True)
    todo_list = Column(TodoList, nullable=False, default=list)
    price = Column(Numeric(10, 2), nullable=True)
    time_spent = Column(Integer, nullable=True)  # Minutes
    customer_id = Column(Integer, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    customer = relationship("Customer", back_populates="projects")

    def __repr__(self) -> str:
        return f"<Project id={self.id} name={self.name!r} customer_id={self.customer_id}>"
