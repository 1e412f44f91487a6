"""Role-specific profile extensions, keyed by the owning user's id."""

from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base


class Student(Base):
    __tablename__ = "students"

    id = Column(Integer, ForeignKey("users.id"), primary_key=True)
    roll_number = Column(String(20), unique=True, nullable=True)
    department = Column(String(50), nullable=True)
    phone_number = Column(String(15), nullable=True)
    year = Column(String(10), nullable=True)
    college_name = Column(String(100), nullable=True)

    user = relationship("User", back_populates="student")

    def __repr__(self):
        return f"<Student {self.id} - {self.department}>"


class Admin(Base):
    __tablename__ = "admins"

    id = Column(Integer, ForeignKey("users.id"), primary_key=True)
    designation = Column(String(50), nullable=True)
    phone_number = Column(String(15), nullable=True)

    user = relationship("User", back_populates="admin")

    def __repr__(self):
        return f"<Admin {self.id} - {self.designation}>"


class EventManager(Base):
    __tablename__ = "event_managers"

    id = Column(Integer, ForeignKey("users.id"), primary_key=True)
    designation = Column(String(50), nullable=True)
    phone_number = Column(String(15), nullable=True)

    user = relationship("User", back_populates="event_manager")

    def __repr__(self):
        return f"<EventManager {self.id} - {self.designation}>"
