from fastapi import status
from fastapi.testclient import TestClient


def test_health(client: TestClient) -> None:
    r = client.get("/health")
    assert r.status_code == status.HTTP_200_OK
    assert r.json() == {"status": "ok"}


def test_root_lists_pending_commands(client: TestClient) -> None:
    """The root endpoint reports queued command counts per device."""
    client.post("/api/cmd", json={"sn": "DEV1", "command": "INFO"})
    client.post("/api/cmd", json={"sn": "DEV1", "command": "CHECK"})

    r = client.get("/")
    assert r.status_code == status.HTTP_200_OK
    body = r.json()
    assert body["docs"] == "/docs"
    assert body["pending_commands"] == {"DEV1": 2}
