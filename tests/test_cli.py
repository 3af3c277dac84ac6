import json
import os

from cli.main import main


def test_upload_query_and_apps(tmp_path, capsys):
    root = str(tmp_path / "logs")

    assert main(["--store-root", root, "upload", "svc1", "ERROR", "boom", "--timestamp", "t1"]) == 0
    assert main(["--store-root", root, "upload", "svc1", "INFO", "fine", "--timestamp", "t2"]) == 0
    capsys.readouterr()

    assert main(["--store-root", root, "query", "svc1", "ERROR"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["logs"] == [
        {"application_id": "svc1", "log_level": "ERROR", "timestamp": "t1", "log_message": "boom"}
    ]

    assert main(["--store-root", root, "apps"]) == 0
    assert capsys.readouterr().out.splitlines() == ["svc1"]


def test_query_unknown_app_fails(tmp_path, capsys):
    assert main(["--store-root", str(tmp_path), "query", "ghost", "INFO"]) == 1
    assert "Unable to read application logs" in capsys.readouterr().err


def test_upload_rejects_multiline_message(tmp_path, capsys):
    assert main(["--store-root", str(tmp_path), "upload", "svc1", "INFO", "a\nb"]) == 2
    assert not (tmp_path / "svc1").exists()


def test_serve_uses_store_root(tmp_path, monkeypatch):
    import uvicorn

    monkeypatch.setenv("APPLOG_STORE_ROOT", "elsewhere")
    seen = {}

    def fake_run(app, **kwargs):
        seen["app"] = app
        seen["env"] = os.environ.get("APPLOG_STORE_ROOT")
        seen["kwargs"] = kwargs

    monkeypatch.setattr(uvicorn, "run", fake_run)
    custom = tmp_path / "custom"

    assert main(["--store-root", str(custom), "serve", "--port", "9001"]) == 0
    assert seen["env"] == str(custom)
    assert seen["app"].state.log_store.store_root == custom
    assert seen["kwargs"]["port"] == 9001


def test_serve_with_reload_passes_store_root_through_env(tmp_path, monkeypatch):
    import uvicorn

    monkeypatch.setenv("APPLOG_STORE_ROOT", "elsewhere")
    seen = {}

    def fake_run(app, **kwargs):
        seen["app"] = app
        seen["env"] = os.environ.get("APPLOG_STORE_ROOT")
        seen["reload"] = kwargs.get("reload")

    monkeypatch.setattr(uvicorn, "run", fake_run)
    custom = tmp_path / "custom"

    assert main(["--store-root", str(custom), "serve", "--reload"]) == 0
    assert seen == {"app": "runtime.api.server:app", "env": str(custom), "reload": True}
