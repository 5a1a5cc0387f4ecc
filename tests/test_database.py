"""
Tests for database.py - SQLite profile and job tables.
"""

import pytest
from sqlalchemy.exc import IntegrityError

from jobmatch.database import Job, Profile, init_database, get_session
from jobmatch.facets import candidate_from_record, job_from_record


class TestDatabaseInit:
    """Test database initialization."""

    def test_init_creates_database_file(self, tmp_path):
        """Test that init_database creates the database file."""
        db_path = tmp_path / "test.db"
        assert not db_path.exists()

        init_database(db_path)

        assert db_path.exists()

    def test_init_creates_tables(self, tmp_path):
        """Test that init_database creates both tables."""
        db_path = tmp_path / "test.db"
        init_database(db_path)

        session = get_session(db_path)
        assert session.query(Job).count() == 0
        assert session.query(Profile).count() == 0
        session.close()

    def test_init_creates_parent_directories(self, tmp_path):
        """Test that init_database creates parent directories if missing."""
        db_path = tmp_path / "nested" / "dir" / "test.db"

        init_database(db_path)

        assert db_path.exists()


class TestModels:
    """Test model persistence and record export."""

    @pytest.fixture
    def db_session(self, tmp_path):
        """Create a temporary database and return a session."""
        db_path = tmp_path / "test.db"
        init_database(db_path)
        session = get_session(db_path)
        yield session
        session.close()

    def test_list_columns_round_trip(self, db_session):
        """JSON list columns come back as lists."""
        db_session.add(Profile(id="p-1", skills=["Python", "SQL"], work_type=["remote"]))
        db_session.commit()
        db_session.expire_all()

        profile = db_session.get(Profile, "p-1")
        assert profile.skills == ["Python", "SQL"]
        assert profile.technical_skills is None

    def test_job_defaults(self, db_session):
        """New jobs are active and timestamped."""
        db_session.add(Job(id="j-1", title="Engineer"))
        db_session.commit()

        job = db_session.get(Job, "j-1")
        assert job.status == "active"
        assert job.created_at is not None

    def test_job_without_title_fails(self, db_session):
        """Title is mandatory."""
        db_session.add(Job(id="j-2"))
        with pytest.raises(IntegrityError):
            db_session.commit()

    def test_profile_to_record_builds_facet(self, db_session, candidate_record):
        """to_record output is accepted by candidate_from_record."""
        record = dict(candidate_record)
        record["technical_skills"] = ["Docker", "AWS"]
        record["work_type"] = ["Remote", "Full-time"]
        db_session.add(Profile(**record))
        db_session.commit()

        stored = db_session.get(Profile, "p-1")
        assert candidate_from_record(stored.to_record()) == candidate_from_record(record)
        assert stored.display_name == "Ana Reyes"

    def test_job_to_record_builds_facet(self, db_session, job_record):
        """to_record output is accepted by job_from_record."""
        db_session.add(Job(**job_record))
        db_session.commit()

        stored = db_session.get(Job, "j-1")
        assert job_from_record(stored.to_record()) == job_from_record(job_record)
