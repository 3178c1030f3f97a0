from io import BytesIO
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from openpyxl import Workbook

import cobalt


class FakeS3Client:
    def __init__(self, store):
        self.store = store
        self.meta = SimpleNamespace(events=SimpleNamespace(unregister=lambda *args, **kwargs: None))

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False

    async def put_object(self, **kwargs):
        if self.store.error:
            raise self.store.error
        self.store.objects[kwargs["Key"]] = kwargs

    async def delete_object(self, Bucket, Key):
        if self.store.error:
            raise self.store.error
        self.store.objects.pop(Key, None)
        self.store.deleted.append(Key)


class FakeS3:
    """Stands in for the aiobotocore client factory kept on app.state.s3."""

    def __init__(self):
        self.objects = {}
        self.deleted = []
        self.error = None

    def __call__(self):
        return FakeS3Client(self)


@pytest.fixture
def s3():
    return FakeS3()


def _client(tmp_path, monkeypatch, s3, seed):
    monkeypatch.setattr(cobalt, "DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'cobalt.db'}")
    monkeypatch.setattr(cobalt, "DATABASE_AUTO_CREATE", True)
    monkeypatch.setattr(cobalt, "SEED_DEFAULTS", seed)

    with TestClient(cobalt.app) as client:
        cobalt.app.state.s3 = s3
        yield client


@pytest.fixture
def client(tmp_path, monkeypatch, s3):
    yield from _client(tmp_path, monkeypatch, s3, seed=False)


@pytest.fixture
def seeded_client(tmp_path, monkeypatch, s3):
    yield from _client(tmp_path, monkeypatch, s3, seed=True)


@pytest.fixture
def make_workbook():
    def make(header, *rows) -> bytes:
        workbook = Workbook()
        worksheet = workbook.active
        worksheet.append(list(header))
        for row in rows:
            worksheet.append(list(row))

        buffer = BytesIO()
        workbook.save(buffer)
        return buffer.getvalue()

    return make
