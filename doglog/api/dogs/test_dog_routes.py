# doglog/api/dogs/test_dog_routes.py
"""
반려견 프로필 API 테스트

사용법: python -m pytest doglog/api/dogs/test_dog_routes.py -v
"""
from unittest.mock import MagicMock


def _create(client, **overrides):
    body = {"name": "Bori", "breed": "Border Collie", "birthdate": "2020-05-01", "gender": "Female"}
    body.update(overrides)
    return client.post('/api/dogs/', json=body)


def test_create_and_get_dog(client):
    response = _create(client)
    assert response.status_code == 201
    created = response.get_json()
    assert created["name"] == "Bori"
    assert created["birthdate"] == "2020-05-01"
    assert created["gender"] == "Female"

    fetched = client.get(f"/api/dogs/{created['dog_id']}").get_json()
    assert fetched["dog_id"] == created["dog_id"]
    assert fetched["breed"] == "Border Collie"


def test_create_dog_validation(client):
    response = client.post('/api/dogs/', json={"breed": "Poodle"})
    assert response.status_code == 400
    assert response.get_json()["error_code"] == "VALIDATION_ERROR"
    assert "name" in response.get_json()["details"]

    response = _create(client, gender="Unknown")
    assert response.status_code == 400
    assert "gender" in response.get_json()["details"]


def test_list_dogs_in_creation_order(client):
    _create(client, name="Bori")
    _create(client, name="Choco")

    names = [dog["name"] for dog in client.get('/api/dogs/').get_json()]
    assert names == ["Bori", "Choco"]


def test_get_missing_dog_returns_404(client):
    response = client.get('/api/dogs/nope')
    assert response.status_code == 404
    assert response.get_json()["error_code"] == "DOG_NOT_FOUND"


def test_update_dog(client):
    dog_id = _create(client).get_json()["dog_id"]

    response = client.patch(f'/api/dogs/{dog_id}', json={"name": "Bori II", "breed": None})
    assert response.status_code == 200
    assert response.get_json()["name"] == "Bori II"
    assert response.get_json()["breed"] is None

    empty = client.patch(f'/api/dogs/{dog_id}', json={})
    assert empty.status_code == 400
    assert empty.get_json()["error_code"] == "EMPTY_UPDATE"

    missing = client.patch('/api/dogs/nope', json={"name": "X"})
    assert missing.status_code == 404


def test_delete_dog_cascades_records_and_cache(app, client, fake_db):
    dog_id = _create(client).get_json()["dog_id"]
    other_id = _create(client, name="Choco").get_json()["dog_id"]
    client.put(f'/api/dogs/{dog_id}/days/2024-03-15',
               json={"activities": [{"activity_type": "Walk", "outcome": "good"}], "rating": "good"})
    client.put(f'/api/dogs/{other_id}/days/2024-03-15',
               json={"activities": [{"activity_type": "Walk", "outcome": "bad"}]})

    gateway = app.services['openai']
    gateway.invalidate_cache = MagicMock()

    response = client.delete(f'/api/dogs/{dog_id}')

    assert response.status_code == 204
    gateway.invalidate_cache.assert_called_once_with(dog_id)
    assert client.get(f'/api/dogs/{dog_id}').status_code == 404
    remaining = [doc.to_dict()["dog_id"] for doc in fake_db.collection('activities').stream()]
    assert remaining == [other_id]
    assert list(fake_db.collection('daily_ratings').stream()) == []


def test_delete_missing_dog_returns_404(client):
    assert client.delete('/api/dogs/nope').status_code == 404


def test_health_reports_missing_key(client):
    body = client.get('/health').get_json()
    assert body == {"status": "OK", "has_api_key": False}
