from fastapi.testclient import TestClient

from deletion_service.main import create_app


def test_privacy_policy_redirects(test_client: TestClient):
    response = test_client.get("/privacy-policy", follow_redirects=False)

    assert response.status_code == 302
    assert response.headers["location"] == "/privacy-policy.html"


def test_privacy_policy_page_is_served(test_client: TestClient):
    response = test_client.get("/privacy-policy")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "Privacy Policy" in response.text


def test_privacy_policy_redirect_target_is_configurable(settings, deletion_backend):
    settings = settings.model_copy(
        update={"privacy_policy_url": "https://example.org/privacy"}
    )
    app = create_app(settings=settings, deletion_backend=deletion_backend)

    with TestClient(app) as client:
        response = client.get("/privacy-policy", follow_redirects=False)

    assert response.status_code == 302
    assert response.headers["location"] == "https://example.org/privacy"
