"""Employee domain model — maps to the 'employees' table."""

from sqlalchemy import Column, Integer, String, Boolean, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from hr_portal.infrastructure.database import Base

GENDERS = ("Male", "Female", "Other", "Prefer not to say")


class Employee(Base):
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, autoincrement=True)
    employee_code = Column(String(50), unique=True, nullable=True, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)

    # Main email: company email when present, personal email otherwise
    email = Column(String(255), unique=True, nullable=False, index=True)
    personal_email = Column(String(255), nullable=True)
    company_email = Column(String(255), nullable=True)
    phone = Column(String(30), nullable=True)

    date_of_birth = Column(Date, nullable=True)
    date_of_joining = Column(Date, nullable=True)
    experience_years_at_joining = Column(Integer, nullable=True)
    experience_months_at_joining = Column(Integer, nullable=True)

    team_name = Column(String(200), nullable=True)  # free-text, independent of team_id
    title = Column(String(200), nullable=True)
    gender = Column(String(30), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    team_id = Column(Integer, ForeignKey("teams.id"), nullable=True, index=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    team = relationship("Team", back_populates="employees")
    client = relationship("Client", back_populates="employees")
    notes = relationship("Note", back_populates="employee", order_by="[Note.created_at.desc(), Note.id.desc()]")

    def __repr__(self):
        return f"<Employee {self.employee_code or self.id} - {self.first_name} {self.last_name}>"

    @property
    def note_count(self) -> int:
        return len(self.notes)
