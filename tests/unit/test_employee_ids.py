import threading

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from task_portal.config.settings import settings
from task_portal.database import Base
from task_portal.models.user import User, UserRole
from task_portal.services.credentials import CredentialStore
from task_portal.services.employee_ids import EmployeeIdIssuer, format_employee_id
from task_portal.services.exceptions import DuplicateIdentifier, UsernameTaken


class TestFormatting:

    def test_zero_padded_to_three_digits(self):
        assert format_employee_id(1) == "EMP001"
        assert format_employee_id(42) == "EMP042"

    def test_grows_past_the_padding(self):
        assert format_employee_id(1000) == "EMP1000"

    def test_custom_prefix_and_width(self):
        assert format_employee_id(7, prefix="E-", width=5) == "E-00007"


class TestNextCandidate:

    def test_first_employee_gets_emp001(self, db_session: Session):
        # The seeded admin has no employee ID
        assert EmployeeIdIssuer(db_session).next_candidate() == "EMP001"

    def test_follows_highest_existing_id(self, db_session: Session):
        for username, employee_id in [("a", "EMP001"), ("b", "EMP007"), ("c", "EMP003")]:
            db_session.add(User(username=username, hashed_password="x",
                                role=UserRole.EMPLOYEE.value, employee_id=employee_id))
        db_session.commit()

        assert EmployeeIdIssuer(db_session).next_candidate() == "EMP008"

    def test_ignores_non_numeric_suffixes(self, db_session: Session):
        db_session.add(User(username="odd", hashed_password="x",
                            role=UserRole.EMPLOYEE.value, employee_id="EMPX12"))
        db_session.commit()

        assert EmployeeIdIssuer(db_session).next_candidate() == "EMP001"


class TestInsertWithId:

    def test_sequential_signups_get_distinct_ids(self, db_session: Session):
        store = CredentialStore(db_session)
        ids = [store.create_user(f"user{i}", "pw").employee_id for i in range(5)]

        assert ids == ["EMP001", "EMP002", "EMP003", "EMP004", "EMP005"]

    def test_stale_candidate_is_retried(self, db_session: Session, monkeypatch):
        """Two signups that read the same maximum must not share an ID"""
        store = CredentialStore(db_session)
        alice = store.create_user("alice", "pw1")
        assert alice.employee_id == "EMP001"

        original = EmployeeIdIssuer.next_candidate
        calls = []

        def stale_then_fresh(self):
            calls.append(1)
            if len(calls) == 1:
                # What a concurrent signup that read the table before alice committed would compute
                return "EMP001"
            return original(self)

        monkeypatch.setattr(EmployeeIdIssuer, "next_candidate", stale_then_fresh)

        bob = store.create_user("bob", "pw2")

        assert bob.employee_id == "EMP002"
        assert len(calls) == 2
        employee_ids = [u.employee_id for u in store.list_employees()]
        assert sorted(employee_ids) == ["EMP001", "EMP002"]

    def test_gives_up_after_max_attempts(self, db_session: Session, monkeypatch):
        store = CredentialStore(db_session)
        store.create_user("alice", "pw1")

        monkeypatch.setattr(EmployeeIdIssuer, "next_candidate", lambda self: "EMP001")

        with pytest.raises(DuplicateIdentifier):
            store.create_user("bob", "pw2")

        assert store.get_by_username("bob") is None

    def test_username_collision_is_not_retried(self, db_session: Session):
        CredentialStore(db_session).create_user("alice", "pw1")

        user = User(username="alice", hashed_password="x", role=UserRole.EMPLOYEE.value)
        with pytest.raises(UsernameTaken):
            EmployeeIdIssuer(db_session).insert_with_id(user)


class TestConcurrentSignups:

    def test_simultaneous_signups_get_distinct_ids(self, tmp_path, monkeypatch):
        """Real threads, each with its own session, released together"""
        workers = 8
        # A signup can lose to each of the others at most once
        monkeypatch.setattr(settings, "EMPLOYEE_ID_MAX_ATTEMPTS", workers)

        engine = create_engine(
            f"sqlite:///{tmp_path / 'signups.db'}",
            connect_args={"check_same_thread": False, "timeout": 30},
        )
        Base.metadata.create_all(bind=engine)
        SessionForThread = sessionmaker(autocommit=False, autoflush=False, bind=engine)

        barrier = threading.Barrier(workers)
        issued = []
        errors = []
        lock = threading.Lock()

        def signup(index: int):
            db = SessionForThread()
            try:
                barrier.wait()
                user = CredentialStore(db).create_user(f"worker{index}", "pw")
                with lock:
                    issued.append(user.employee_id)
            except Exception as e:
                with lock:
                    errors.append(e)
            finally:
                db.close()

        threads = [threading.Thread(target=signup, args=(i,)) for i in range(workers)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        engine.dispose()

        assert errors == []
        assert len(issued) == workers
        assert len(set(issued)) == workers
        assert sorted(issued) == [f"EMP{i:03d}" for i in range(1, workers + 1)]
