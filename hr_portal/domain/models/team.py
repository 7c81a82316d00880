"""Team domain model."""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from hr_portal.infrastructure.database import Base


class Team(Base):
    __tablename__ = "teams"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), unique=True, nullable=False, index=True)
    manager_name = Column(String(200), nullable=True)
    manager_email = Column(String(255), nullable=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    client = relationship("Client", back_populates="teams")
    employees = relationship("Employee", back_populates="team")

    def __repr__(self):
        return f"<Team {self.name}>"

    @property
    def employee_count(self) -> int:
        return len(self.employees)

    @property
    def active_employees(self):
        return sorted((e for e in self.employees if e.is_active), key=lambda e: e.first_name)
