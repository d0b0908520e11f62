"""Tests for the MCP tool functions (called directly, no transport)."""

import asyncio

import pytest

pytest.importorskip("mcp")

from shiftscan import mcp_server  # noqa: E402

NOTICE = """\
2025/05/01
田中 9:00-17:00 レジ
"""

ROSTER = """\
5/1 5/2 5/3
鈴木 9:00-17:00 休み 10:00-18:00
"""


@pytest.fixture(autouse=True)
def artifact_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("SHIFTSCAN_ARTIFACT_DIR", str(tmp_path))
    monkeypatch.setenv("SHIFTSCAN_USER_NAME", "田中")
    monkeypatch.delenv("SHIFTSCAN_ENV_FILE", raising=False)
    return tmp_path


class TestExtractionTools:
    def test_extract_shifts_default_name(self):
        result = asyncio.run(mcp_server.extract_shifts(NOTICE))
        assert result["name"] == "田中"
        assert result["count"] == 1
        shift = result["shifts"][0]
        assert shift["date"] == "2025-05-01"
        assert shift["start_time"] == "2025-05-01T09:00"
        assert shift["notes"] == "レジ"
        assert "saved" not in result

    def test_extract_shifts_save(self):
        result = asyncio.run(mcp_server.extract_shifts(NOTICE, name="田中", save=True))
        assert len(result["saved"]) == 1
        assert len(mcp_server.list_saved_shifts()) == 1

    def test_extract_shift_table(self):
        result = asyncio.run(mcp_server.extract_shift_table(ROSTER, today="2025-01-01"))
        assert result["count"] == 2
        assert [s["date"] for s in result["employees"]["鈴木"]] == ["2025-05-01", "2025-05-03"]

    def test_bad_today(self):
        with pytest.raises(ValueError):
            asyncio.run(mcp_server.extract_shift_table(ROSTER, today="01/01/2025"))


class TestStorageTools:
    def test_save_and_query(self):
        extracted = asyncio.run(mcp_server.extract_shift_table(ROSTER, today="2025-01-01"))
        saved = mcp_server.save_extracted_shifts(extracted["employees"]["鈴木"], employee_name="鈴木")
        assert len(saved) == 2
        assert len(mcp_server.shifts_on_day("2025-05-03")) == 1
        week = mcp_server.shifts_in_week("2025-05-01")
        assert week["days"][0] == "2025-04-27"
        assert len(week["shifts"]) == 2
        assert len(mcp_server.shifts_in_month(2025, 5, employee_name="鈴木")) == 2

    def test_delete(self):
        asyncio.run(mcp_server.extract_shifts(NOTICE, save=True))
        [record] = mcp_server.list_saved_shifts()
        assert mcp_server.delete_saved_shift(record["id"]) == {"shift_id": record["id"], "deleted": True}
        assert mcp_server.list_saved_shifts() == []

    def test_export_xlsx(self, artifact_dir):
        pytest.importorskip("openpyxl")
        asyncio.run(mcp_server.extract_shift_table(ROSTER, today="2025-01-01", save=True))
        result = mcp_server.export_schedule_xlsx("2025-05-01", "2025-05-31")
        assert result["count"] == 2
        assert result["path"].endswith("shifts_2025-05-01_2025-05-31.xlsx")
        assert (artifact_dir / "exports" / "shifts_2025-05-01_2025-05-31.xlsx").exists()


class TestHttpTransport:
    def test_bind_defaults(self, monkeypatch):
        monkeypatch.delenv("HOST", raising=False)
        monkeypatch.delenv("PORT", raising=False)
        assert mcp_server.http_bind() == ("127.0.0.1", 8000)

    def test_bind_from_env(self, monkeypatch):
        monkeypatch.setenv("HOST", "0.0.0.0")
        monkeypatch.setenv("PORT", "9100")
        assert mcp_server.http_bind() == ("0.0.0.0", 9100)

    def test_no_key_is_open(self):
        assert mcp_server.is_authorized("/mcp", "", None)

    def test_bearer_token_required(self):
        assert mcp_server.is_authorized("/mcp", "Bearer s3cret", "s3cret")
        assert not mcp_server.is_authorized("/mcp", "Bearer wrong", "s3cret")
        assert not mcp_server.is_authorized("/mcp", "s3cret", "s3cret")
        assert not mcp_server.is_authorized("/mcp", "", "s3cret")

    def test_health_is_public(self):
        assert mcp_server.is_authorized("/health", "", "s3cret")

    def test_app_has_health_route(self):
        pytest.importorskip("starlette")
        app = mcp_server.build_http_app("s3cret")
        assert "/health" in [getattr(route, "path", None) for route in app.routes]
