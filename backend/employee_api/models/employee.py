from sqlalchemy import Column, Integer, String

from employee_api.core.database import Base


class Employee(Base):
    # Mirrors the pre-existing table; the service never creates it
    __tablename__ = "employee"

    id = Column(Integer, primary_key=True, autoincrement=True)
    firstname = Column(String(100), nullable=False)
    lastname = Column(String(100), nullable=False)
    age = Column(Integer, nullable=False)
    gender = Column(String(10), nullable=False)  # Male, Female, Other
    role = Column(String(100), nullable=False)
