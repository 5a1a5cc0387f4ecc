"""
Database schema and connection management.

Uses SQLite with SQLAlchemy for candidate profile and job posting storage.
"""

import json
from datetime import datetime
from pathlib import Path
from sqlalchemy import create_engine, Column, String, Float, Text, DateTime, TypeDecorator
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()


class JSONList(TypeDecorator):
    """List column stored as JSON text."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return json.dumps(list(value))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return json.loads(value)


class Profile(Base):
    """Job seeker profile."""

    __tablename__ = "profiles"

    id = Column(String, primary_key=True)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    location = Column(String, nullable=True)
    experience_level = Column(String, nullable=True)  # entry .. executive
    skills = Column(JSONList, nullable=True)  # resume-derived
    technical_skills = Column(JSONList, nullable=True)
    soft_skills = Column(JSONList, nullable=True)
    bio = Column(Text, nullable=True)
    preferred_role = Column(String, nullable=True)
    work_type = Column(JSONList, nullable=True)
    salary_min = Column(Float, nullable=True)
    salary_max = Column(Float, nullable=True)
    availability = Column(String, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)

    SCORED_FIELDS = (
        "location", "experience_level", "skills", "technical_skills", "soft_skills",
        "bio", "preferred_role", "work_type", "salary_min", "salary_max", "availability",
    )

    def to_record(self) -> dict:
        record = {"id": self.id, "first_name": self.first_name, "last_name": self.last_name}
        for f in self.SCORED_FIELDS:
            record[f] = getattr(self, f)
        return record

    @property
    def display_name(self) -> str:
        name = " ".join(p for p in (self.first_name, self.last_name) if p)
        return name or self.id


class Job(Base):
    """Job posting."""

    __tablename__ = "jobs"

    id = Column(String, primary_key=True)
    title = Column(String, nullable=False)
    company = Column(String, nullable=True)
    location = Column(String, nullable=True)
    experience_level = Column(String, nullable=True)
    required_skills = Column(JSONList, nullable=True)
    description = Column(Text, nullable=True)
    work_type = Column(String, nullable=True)  # e.g. "full-time, remote"
    salary_min = Column(Float, nullable=True)
    salary_max = Column(Float, nullable=True)
    availability = Column(String, nullable=True)
    status = Column(String, nullable=False, default="active")  # active, closed
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)

    SCORED_FIELDS = (
        "title", "location", "experience_level", "required_skills", "description",
        "work_type", "salary_min", "salary_max", "availability",
    )

    def to_record(self) -> dict:
        record = {"id": self.id, "company": self.company, "status": self.status}
        for f in self.SCORED_FIELDS:
            record[f] = getattr(self, f)
        return record


def init_database(db_path: Path) -> None:
    """
    Initialize database and create tables.

    Args:
        db_path: Path to SQLite database file
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(engine)


def get_session(db_path: Path):
    """
    Get database session.

    Args:
        db_path: Path to SQLite database file

    Returns:
        SQLAlchemy session
    """
    engine = create_engine(f"sqlite:///{db_path}")
    Session = sessionmaker(bind=engine)
    return Session()
