from fastapi.testclient import TestClient

from task_service.config import Settings
from task_service.dashboard import render_dashboard
from task_service.main import create_app


def test_dashboard_is_served_without_auth(client: TestClient) -> None:
    response = client.get("/")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "<title>Task Board</title>" in response.text


def test_dashboard_does_not_leak_key_by_default(client: TestClient) -> None:
    response = client.get("/")
    assert "test-key" not in response.text
    assert "const EMBEDDED_API_KEY = null;" in response.text


def test_dashboard_can_embed_key_for_local_use(settings: Settings) -> None:
    settings = settings.model_copy(update={"dashboard_embed_api_key": True})
    client = TestClient(create_app(settings))
    response = client.get("/")
    assert 'const EMBEDDED_API_KEY = "test-key";' in response.text


def test_render_escapes_script_breaking_keys() -> None:
    html = render_dashboard('</script><script>alert("x")')
    assert "</script><script>alert" not in html
    assert "\\u003c/script>" in html


def test_render_uses_api_routes() -> None:
    html = render_dashboard()
    assert "/api/tasks" in html
    assert "/api/statistics" in html
    assert "X-API-KEY" in html
