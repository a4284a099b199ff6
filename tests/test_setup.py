"""
Tests for the setup (registration) endpoint
"""

from eink_hub.exceptions import ConflictError, StoreError
from tests.conftest import LOGO_URL, MAC, register


def test_setup_already_registered(mock_client, mock_repo):
    """A known MAC gets the 404 sentinel with null credentials and no insert."""
    mock_repo.exists_by_mac.return_value = True

    response = mock_client.get("/api/setup", headers={"ID": MAC})

    assert response.status_code == 200
    assert response.json() == {
        "status": 404,
        "api_key": None,
        "friendly_id": None,
        "image_url": None,
        "filename": None,
    }
    mock_repo.exists_by_mac.assert_awaited_once_with(MAC)
    mock_repo.create.assert_not_awaited()


def test_setup_creates_physical_device(mock_client, mock_repo):
    """A new MAC is registered with a generated id and API key."""
    mock_repo.exists_by_mac.return_value = False
    mock_repo.create.return_value = None

    response = mock_client.get("/api/setup", headers={"ID": MAC})

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == 200
    assert data["friendly_id"] == "AAAAAA"
    assert len(data["api_key"]) == 22
    assert data["image_url"] == LOGO_URL
    assert data["filename"] == "empty_state"
    mock_repo.create.assert_awaited_once_with("AAAAAA", MAC, data["api_key"])


def test_setup_creates_virtual_device(mock_client, mock_repo):
    """Without an ID header the device is virtual and no MAC lookup happens."""
    mock_repo.create.return_value = None

    response = mock_client.get("/api/setup")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == 200
    assert data["friendly_id"] == "AAAAAA"
    mock_repo.exists_by_mac.assert_not_awaited()
    mock_repo.create.assert_awaited_once_with("AAAAAA", None, data["api_key"])


def test_setup_blank_mac_is_virtual(mock_client, mock_repo):
    """A blank ID header counts as no MAC."""
    mock_repo.create.return_value = None

    response = mock_client.get("/api/setup", headers={"ID": ""})

    assert response.json()["status"] == 200
    mock_repo.exists_by_mac.assert_not_awaited()
    assert mock_repo.create.await_args.args[1] is None


def test_setup_exists_by_mac_error(mock_client, mock_repo):
    """Store failures surface as a generic 500."""
    mock_repo.exists_by_mac.side_effect = StoreError("DB Error")

    response = mock_client.get("/api/setup", headers={"ID": MAC})

    assert response.status_code == 500
    assert response.json() == {"detail": "Something went wrong"}
    mock_repo.create.assert_not_awaited()


def test_setup_create_conflict_is_generic_error(mock_client, mock_repo):
    """A lost registration race is reported like any other store failure."""
    mock_repo.exists_by_mac.return_value = False
    mock_repo.create.side_effect = ConflictError("duplicate mac")

    response = mock_client.get("/api/setup", headers={"ID": MAC})

    assert response.status_code == 500
    assert response.json() == {"detail": "Something went wrong"}


def test_setup_is_idempotent_for_same_mac(client):
    """Registering one MAC twice yields a single device."""
    first = register(client, MAC)
    second = register(client, MAC)

    assert first["status"] == 200
    assert second["status"] == 404
    assert second["api_key"] is None

    devices = client.get("/api/devices").json()
    assert len(devices) == 1
    assert devices[0]["id"] == first["friendly_id"]
    assert devices[0]["mac"] == MAC


def test_setup_virtual_devices_are_independent(client):
    """Every MAC-less setup creates a new device."""
    first = register(client)
    second = register(client)

    assert first["friendly_id"] != second["friendly_id"]
    assert first["api_key"] != second["api_key"]
    assert [d["mac"] for d in client.get("/api/devices").json()] == [None, None]
