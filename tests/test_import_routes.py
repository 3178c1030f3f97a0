from io import BytesIO

from openpyxl import load_workbook

IMPORT = "/api/v1/msds/import"

HEADER = ["purpose", "area", "msdsno", "name", "ghssign", "prgear", "ishl", "cmml"]
XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def upload(content, name="msds.xlsx"):
    return {"file": (name, content, XLSX)}


def test_template_download(client):
    response = client.get(f"{IMPORT}/template")

    assert response.status_code == 200
    assert response.headers["content-type"] == XLSX
    assert "msds_template.xlsx" in response.headers["content-disposition"]

    worksheet = load_workbook(BytesIO(response.content)).active
    header = [cell.value for cell in worksheet[1]]
    assert header[:2] == ["purpose", "area"]
    assert "name" in header
    assert worksheet.max_row == 2


def test_preview_does_not_write(client, make_workbook):
    content = make_workbook(
        HEADER,
        ["순수시약", "19,20", "M0001", "염산", "1,3", "4", "ㅇ", None],
        ["연료", "1", "M0002", None, None, None, None, None],
    )

    response = client.post(f"{IMPORT}/preview", files=upload(content))
    assert response.status_code == 200

    body = response.json()
    assert body["total"] == 1
    assert body["skipped"] == 1
    row, = body["rows"]
    assert row["name"] == "염산"
    assert row["warning_symbols"] == ["101", "103"]
    assert row["warning_symbol_labels"] == ["폭발성", "부식성"]
    assert row["protective_equipment_labels"] == ["보안경"]

    assert client.get("/api/v1/msds/").json()["total"] == 0


def test_import_creates_records(client, make_workbook):
    content = make_workbook(
        HEADER,
        ["순수시약", "19, 20", "M0001", "염산", "1,3", "4", "ㅇ", None],
        ["폐수처리", "7", "M0002", "가성소다", "3", "2", None, "ㅇ"],
        ["연료", None, None, "   ", None, None, None, None],
    )

    response = client.post(f"{IMPORT}/", files=upload(content))
    assert response.status_code == 200

    body = response.json()
    assert body["succeeded"] == 2
    assert body["failed"] == 0
    assert body["skipped"] == 1
    assert body["results"] == [
        {"success": True, "name": "염산", "error": None},
        {"success": True, "name": "가성소다", "error": None},
    ]

    items = client.get("/api/v1/msds/").json()["items"]
    assert [item["name"] for item in items] == ["염산", "가성소다"]
    hcl, naoh = items
    assert hcl["warning_symbols"] == ["101", "103"]
    assert hcl["protective_equipment"] == ["4"]
    assert hcl["reception"] == ["19", "20"]
    assert hcl["laws"] == ["산업안전보건법"]
    assert naoh["laws"] == ["화학물질관리법"]


def test_import_rejects_bad_files(client, make_workbook):
    response = client.post(f"{IMPORT}/", files=upload(b"not a spreadsheet", "msds.csv"))
    assert response.status_code == 400

    response = client.post(f"{IMPORT}/preview", files=upload(make_workbook(HEADER)))
    assert response.status_code == 400
    assert "no data" in response.json()["detail"]
