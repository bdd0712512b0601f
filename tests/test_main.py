from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient

from deletion_service import main as main_module
from deletion_service.main import create_app
from deletion_service.plugins.facebook.data_deletion.service import (
    get_data_deletion_service,
)


def test_unknown_route_returns_404_with_method_and_path(test_client: TestClient):
    response = test_client.get("/unknown-route")

    assert response.status_code == 404
    assert response.json() == {
        "error": "Not found",
        "message": "Route GET /unknown-route not found",
    }


def test_wrong_method_on_known_route_returns_404(test_client: TestClient):
    response = test_client.get("/fb-data-deletion")

    assert response.status_code == 404
    assert response.json()["message"] == "Route GET /fb-data-deletion not found"


def test_unknown_post_route_returns_404(test_client: TestClient):
    response = test_client.post("/health", json={})

    assert response.status_code == 404
    assert response.json()["message"] == "Route POST /health not found"


def test_unhandled_exception_returns_generic_500(app, test_client: TestClient):
    def broken_service():
        raise RuntimeError("wiring is broken")

    app.dependency_overrides[get_data_deletion_service] = broken_service

    response = test_client.post(
        "/fb-data-deletion", json={"user_id": "1", "challenge": "c"}
    )

    assert response.status_code == 500
    assert response.json() == {
        "error": "Internal server error",
        "message": "Something went wrong!",
    }


def test_cors_headers_are_sent(test_client: TestClient):
    response = test_client.get("/health", headers={"Origin": "https://facebook.com"})

    assert response.headers["access-control-allow-origin"] == "*"


def test_cors_preflight(test_client: TestClient):
    response = test_client.options(
        "/fb-data-deletion",
        headers={
            "Origin": "https://facebook.com",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )

    assert response.status_code == 200
    assert "POST" in response.headers["access-control-allow-methods"]


def test_correlation_id_is_propagated(test_client: TestClient):
    response = test_client.get("/health", headers={"X-Correlation-ID": "req-123"})

    assert response.headers["x-correlation-id"] == "req-123"
    assert response.headers["x-process-time"].endswith("s")


def test_correlation_id_is_generated(test_client: TestClient):
    response = test_client.get("/")

    assert len(response.headers["x-correlation-id"]) == 36


def test_excluded_plugin_routes_are_not_registered(settings, deletion_backend):
    app = create_app(
        settings=settings,
        deletion_backend=deletion_backend,
        excluded_plugins=["legal/privacy"],
    )

    with TestClient(app) as client:
        redirect = client.get("/privacy-policy", follow_redirects=False)
        info = client.get("/").json()

    assert redirect.status_code == 404
    assert "GET /privacy-policy" not in info["endpoints"]


def test_each_app_has_its_own_context(settings, deletion_backend):
    first = create_app(settings=settings, deletion_backend=deletion_backend)
    second = create_app(settings=settings, deletion_backend=deletion_backend)

    assert first.state.context is not second.state.context
    assert first.state.context.deletion_backend is deletion_backend


def test_unhandled_exception_keeps_cors_and_correlation_headers(
    app, test_client: TestClient
):
    def broken_service():
        raise RuntimeError("wiring is broken")

    app.dependency_overrides[get_data_deletion_service] = broken_service

    response = test_client.post(
        "/fb-data-deletion",
        json={"user_id": "1", "challenge": "c"},
        headers={"Origin": "https://facebook.com", "X-Correlation-ID": "req-1"},
    )

    assert response.status_code == 500
    assert response.json()["error"] == "Internal server error"
    assert response.headers["access-control-allow-origin"] == "*"
    assert response.headers["x-correlation-id"] == "req-1"
    assert "x-process-time" in response.headers


@patch("deletion_service.main.logger")
def test_malformed_body_log_omits_rejected_values(
    mock_logger: MagicMock, test_client: TestClient
):
    response = test_client.post(
        "/fb-data-deletion",
        json={"user_id": "1", "challenge": {"secret": "s3cr3t"}},
    )

    assert response.status_code == 400
    errors = mock_logger.warning.call_args.kwargs["errors"]
    assert errors[0]["type"] == "string_type"
    assert errors[0]["loc"][-1] == "challenge"
    assert all(set(error) == {"loc", "type"} for error in errors)
    assert "s3cr3t" not in repr(mock_logger.warning.call_args)


def test_importing_main_builds_no_app():
    assert not hasattr(main_module, "app")


@patch("deletion_service.main.uvicorn.run")
def test_run_serves_the_app_factory(mock_run: MagicMock, monkeypatch):
    monkeypatch.setenv("PORT", "8081")

    main_module.run()

    args, kwargs = mock_run.call_args
    assert args == ("deletion_service.main:create_app",)
    assert kwargs["factory"] is True
    assert kwargs["port"] == 8081
    assert kwargs["proxy_headers"] is True
