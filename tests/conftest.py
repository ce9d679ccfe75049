from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from task_service.config import Settings
from task_service.main import create_app
from task_service.repository import TaskRepository


class SteppingClock:
    """Each call returns a time one second later than the previous one."""

    def __init__(self, start=datetime(2024, 2, 1, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self):
        self.now = self.now + timedelta(seconds=1)
        return self.now


@pytest.fixture()
def clock():
    return SteppingClock()


@pytest.fixture()
def repo(clock):
    return TaskRepository(clock=clock)


@pytest.fixture()
def settings():
    return Settings()


@pytest.fixture()
def client(settings, repo):
    app = create_app(settings=settings, repository=repo)
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
