import json

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from labrecord.api.deps import get_db, get_executor
from labrecord.core.executor import CodeExecutor
from labrecord.core.security import create_access_token, get_password_hash
from labrecord.db import Assignment, Base, User
from labrecord.main import app
from labrecord.services.workflow import SubmissionWorkflow

RUNNER_URL = "https://runner.test/api/v2/piston/execute"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


class FakeRunner:
    """Stands in for the hosted runner; records every payload it receives."""

    def __init__(self):
        self.requests = []
        self.status_code = 200
        self.body = {"run": {"stdout": "ok\n", "stderr": "", "code": 0}}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(json.loads(request.content))
        if isinstance(self.body, (dict, list)):
            return httpx.Response(self.status_code, json=self.body)
        return httpx.Response(self.status_code, text=self.body)


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def executor(runner):
    return CodeExecutor(api_url=RUNNER_URL, transport=httpx.MockTransport(runner))


@pytest.fixture
def workflow(db, executor):
    return SubmissionWorkflow(db, executor)


def _make_user(db, email, role, full_name):
    user = User(
        email=email,
        hashed_password=get_password_hash("secret123"),
        role=role,
        full_name=full_name,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def teacher(db):
    return _make_user(db, "teacher@lab.local", "teacher", "Ada Teacher")


@pytest.fixture
def student(db):
    return _make_user(db, "student@lab.local", "student", "Sam Student")


@pytest.fixture
def other_student(db):
    return _make_user(db, "other@lab.local", "student", "Olu Student")


@pytest.fixture
def assignment(db, teacher):
    row = Assignment(
        title="Sum Of Two Numbers",
        description="Read two integers and print their sum.",
        teacher_id=teacher.id,
        details={"difficulty": "easy", "sample_input": "1 2", "sample_output": "3"},
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def auth_headers(user):
    token = create_access_token(user.email, role=user.role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def client(session_factory, executor):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_executor] = lambda: executor
    # no context manager: startup would create tables on the configured database
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth():
    return auth_headers
