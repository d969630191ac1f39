# backend/tests/conftest.py
"""
Pytest configuration.

Environment is pinned BEFORE any app import so settings resolve to
shared-secret token verification and a dummy Stripe key. Every test gets
a fresh in-memory SQLite database; route tests swap ``get_db`` and the
Stripe gateway through ``app.dependency_overrides``.
"""

import os

# CRITICAL: Set testing mode BEFORE any app imports!
os.environ["SECRET_KEY"] = "test-secret-key-for-pytest-only-0123456789"
os.environ["IDENTITY_JWKS_URL"] = ""
os.environ["STRIPE_SECRET_KEY"] = "sk_test_dummy"
os.environ["CLIENT_DOMAIN"] = "http://localhost:5173"
os.environ["AUTO_CREATE_SCHEMA"] = "false"
os.environ["RECONCILE_ON_STARTUP"] = "false"

from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable, Dict, List, Optional

from fastapi.testclient import TestClient
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.dependencies.database import get_db
from app.api.dependencies.services import get_checkout_gateway
from app.auth import create_access_token
from app.core.enums import ApplicationStatus, RoleName, TuitionStatus
from app.database import Base, enable_sqlite_savepoints
from app.main import app
from app.models import TuitionPosting, TutorApplication, User
from app.services.stripe_service import CheckoutSession



class FakeCheckoutGateway:
    """In-memory stand-in for StripeCheckoutGateway."""

    def __init__(self) -> None:
        self.sessions: Dict[str, CheckoutSession] = {}
        self.created: List[dict] = []
        self.retrieved: List[str] = []

    def add_session(self, session: CheckoutSession) -> CheckoutSession:
        self.sessions[session.id] = session
        return session

    def create_checkout_session(self, **kwargs) -> CheckoutSession:
        self.created.append(kwargs)
        session_id = f"cs_test_{len(self.created)}"
        return CheckoutSession(
            id=session_id, url=f"https://checkout.stripe.test/c/pay/{session_id}"
        )

    def retrieve_checkout_session(self, session_id: str) -> CheckoutSession:
        self.retrieved.append(session_id)
        return self.sessions[session_id]


@pytest.fixture
def db_engine():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        future=True,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_savepoints(engine)
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(db_engine) -> sessionmaker:
    return sessionmaker(bind=db_engine, autoflush=False, expire_on_commit=False, future=True)


@pytest.fixture
def db(session_factory) -> Session:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def fake_gateway() -> FakeCheckoutGateway:
    return FakeCheckoutGateway()


@pytest.fixture
def client(session_factory, fake_gateway) -> TestClient:
    """
    TestClient bound to the per-test database.

    Not used as a context manager, so the lifespan (engine creation,
    startup reconciliation) does not run.
    """

    def override_get_db():
        session = session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_checkout_gateway] = lambda: fake_gateway
    try:
        yield TestClient(app, raise_server_exceptions=False)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> Callable[[str], Dict[str, str]]:
    def _headers(email: str) -> Dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(email)}"}

    return _headers


def _now() -> datetime:
    return datetime.now(timezone.utc)


@pytest.fixture
def make_user(session_factory) -> Callable[..., User]:
    def _make(email: str, role: RoleName = RoleName.STUDENT, name: Optional[str] = None) -> User:
        now = _now()
        with session_factory() as session:
            user = User(
                email=email,
                name=name or email.split("@")[0],
                role=role.value,
                verified=False,
                created_at=now,
                last_logged_in=now,
                timestamp=now,
            )
            session.add(user)
            session.commit()
            return user

    return _make


@pytest.fixture
def make_tuition(session_factory) -> Callable[..., TuitionPosting]:
    def _make(
        subject: str = "Mathematics",
        *,
        class_level: str = "Class 8",
        location: str = "Dhaka",
        budget: str = "100.00",
        status: TuitionStatus = TuitionStatus.APPROVED,
        posted_by_email: Optional[str] = "student@example.com",
    ) -> TuitionPosting:
        with session_factory() as session:
            posting = TuitionPosting(
                subject=subject,
                class_level=class_level,
                location=location,
                budget=Decimal(budget),
                status=status.value,
                posted_by_email=posted_by_email,
            )
            session.add(posting)
            session.commit()
            return posting

    return _make


@pytest.fixture
def make_application(session_factory) -> Callable[..., TutorApplication]:
    def _make(
        tutor_email: str = "tutor@example.com",
        *,
        status: ApplicationStatus = ApplicationStatus.PENDING,
        expected_salary: str = "150.00",
        qualifications: str = "BSc Mathematics",
        experience: str = "3 years",
    ) -> TutorApplication:
        with session_factory() as session:
            application = TutorApplication(
                tutor_email=tutor_email,
                tutor_name="Tutor",
                qualifications=qualifications,
                experience=experience,
                expected_salary=Decimal(expected_salary),
                status=status.value,
            )
            session.add(application)
            session.commit()
            return application

    return _make
