import json

import httpx
import pytest

from cobalt import cli
from cobalt.client import ApiError, MsdsClient


def transport(handler):
    return httpx.MockTransport(handler)


async def test_create_posts_to_api():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(201, json={"success": True, "data": {"id": 1, "name": "염산"}})

    async with MsdsClient("http://registry.local/", transport=transport(handler)) as client:
        result = await client.create_msds({"name": "염산"})

    assert result["data"]["id"] == 1
    request, = requests
    assert request.method == "POST"
    assert str(request.url) == "http://registry.local/api/v1/msds/"
    assert json.loads(request.content) == {"name": "염산"}


async def test_list_passes_query():
    def handler(request):
        assert request.url.params["q"] == "염산"
        assert request.url.params["page_size"] == "1"
        return httpx.Response(200, json={"items": [], "total": 3, "page": 1, "page_size": 1, "pages": 3})

    async with MsdsClient("http://registry.local", transport=transport(handler)) as client:
        assert (await client.list_msds(q="염산", page_size=1))["total"] == 3


async def test_errors_carry_detail():
    def handler(request):
        if request.url.path.endswith("/msds/"):
            return httpx.Response(422, json={"detail": [{"msg": "Value error, Name is required"}]})
        return httpx.Response(500, text="boom")

    async with MsdsClient("http://registry.local", transport=transport(handler)) as client:
        with pytest.raises(ApiError) as exc_info:
            await client.create_msds({"name": ""})
        assert exc_info.value.status_code == 422
        assert exc_info.value.message == "Value error, Name is required"

        with pytest.raises(ApiError, match="boom"):
            client._check(await client.http.get("other"))


class FakeClient:
    created = []

    def __init__(self, base_url):
        self.base_url = base_url

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False

    async def create_msds(self, payload):
        if payload["name"] == "가성소다":
            raise ApiError(409, "duplicate")
        self.created.append(payload)
        return {"success": True}

    async def list_msds(self, q=None, page=1, page_size=12):
        return {"total": len(self.created)}


@pytest.fixture
def fake_client(monkeypatch):
    FakeClient.created = []
    monkeypatch.setattr(cli, "MsdsClient", FakeClient)
    return FakeClient


@pytest.fixture
def workbook_path(tmp_path, make_workbook):
    path = tmp_path / "msds.xlsx"
    path.write_bytes(make_workbook(
        ["name", "ghssign", "ishl"],
        ["염산", "1", "ㅇ"],
        ["가성소다", "3", None],
    ))
    return path


async def test_cli_reports_failures(fake_client, workbook_path):
    assert await cli.run(workbook_path, "http://registry.local") == 1
    assert [payload["name"] for payload in fake_client.created] == ["염산"]
    assert fake_client.created[0]["warning_symbols"] == ["101"]


async def test_cli_succeeds_when_every_row_uploads(fake_client, tmp_path, make_workbook):
    path = tmp_path / "ok.xlsx"
    path.write_bytes(make_workbook(["name"], ["염산"], ["황산"]))

    assert await cli.run(path, "http://registry.local") == 0
    assert len(fake_client.created) == 2


async def test_cli_dry_run_prints_previews(fake_client, workbook_path, capsys):
    assert await cli.run(workbook_path, "http://registry.local", dry_run=True) == 0
    assert fake_client.created == []

    previews = json.loads(capsys.readouterr().out)
    assert [preview["name"] for preview in previews] == ["염산", "가성소다"]
    assert previews[1]["warning_symbol_labels"] == ["부식성"]


async def test_cli_rejects_unreadable_workbook(fake_client, tmp_path):
    path = tmp_path / "broken.xlsx"
    path.write_bytes(b"garbage")

    assert await cli.run(path, "http://registry.local") == 2


def test_main_parses_arguments(monkeypatch, tmp_path):
    calls = []

    async def fake_run(path, api_url, dry_run):
        calls.append((path, api_url, dry_run))
        return 0

    monkeypatch.setattr(cli, "run", fake_run)

    assert cli.main([str(tmp_path / "msds.xlsx"), "--api", "http://x", "--dry-run"]) == 0
    assert calls == [(tmp_path / "msds.xlsx", "http://x", True)]
