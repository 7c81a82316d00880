"""Client domain model — maps to the 'clients' table."""

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from hr_portal.infrastructure.database import Base


class Client(Base):
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), unique=True, nullable=False, index=True)

    # Points of contact
    poc_internal_name = Column(String(200), nullable=True)
    poc_internal_email = Column(String(255), nullable=True)
    poc_external_name = Column(String(200), nullable=True)
    poc_external_email = Column(String(255), nullable=True)

    address = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    teams = relationship("Team", back_populates="client", order_by="Team.name")
    employees = relationship("Employee", back_populates="client")

    def __repr__(self):
        return f"<Client {self.id} - {self.name}>"

    @property
    def team_count(self) -> int:
        return len(self.teams)

    @property
    def employee_count(self) -> int:
        return len(self.employees)

    @property
    def active_employees(self):
        return sorted((e for e in self.employees if e.is_active), key=lambda e: e.first_name)
