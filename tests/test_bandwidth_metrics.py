"""
Tests for bandwidth metric endpoints.
"""
from fastapi import status


def _post_metric(client, **payload):
    response = client.post("/api/bandwidth-metrics", json=payload)
    assert response.status_code == status.HTTP_201_CREATED, response.text
    return response.json()


def test_create_and_get_bandwidth_metric(client):
    metric = _post_metric(client, deviceId=3, incoming=1.25, outgoing=0.75)

    assert metric["deviceId"] == 3
    assert metric["incoming"] == 1.25
    assert metric["timestamp"]

    response = client.get(f"/api/bandwidth-metrics/{metric['id']}")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == metric


def test_metric_without_device_is_allowed(client):
    metric = _post_metric(client, incoming=0.0, outgoing=0.0)

    assert metric["deviceId"] is None


def test_list_newest_first(client):
    created = [_post_metric(client, deviceId=1, incoming=i, outgoing=i) for i in range(3)]

    listed = client.get("/api/bandwidth-metrics").json()

    assert [m["id"] for m in listed] == [m["id"] for m in reversed(created)]


def test_limit_bounds_result(client):
    for i in range(5):
        _post_metric(client, deviceId=1, incoming=i, outgoing=i)

    listed = client.get("/api/bandwidth-metrics", params={"limit": 2}).json()

    assert len(listed) == 2
    assert listed[0]["incoming"] == 4


def test_filter_by_device(client):
    _post_metric(client, deviceId=1, incoming=1, outgoing=1)
    _post_metric(client, deviceId=2, incoming=2, outgoing=2)
    _post_metric(client, deviceId=1, incoming=3, outgoing=3)

    listed = client.get("/api/bandwidth-metrics", params={"deviceId": 1}).json()

    assert {m["deviceId"] for m in listed} == {1}
    assert len(listed) == 2


def test_days_window_includes_fresh_samples(client):
    _post_metric(client, deviceId=1, incoming=1, outgoing=1)

    listed = client.get("/api/bandwidth-metrics", params={"days": 1}).json()

    assert len(listed) == 1


def test_negative_traffic_rejected(client):
    response = client.post("/api/bandwidth-metrics", json={"incoming": -1, "outgoing": 1})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "Validation failed"


def test_malformed_query_parameters_rejected(client):
    for params in ({"limit": "abc"}, {"limit": -1}, {"days": "x"}, {"days": 0}, {"deviceId": "one"}):
        response = client.get("/api/bandwidth-metrics", params=params)
        assert response.status_code == status.HTTP_400_BAD_REQUEST, params
        assert response.json()["detail"] == "Malformed request parameters"


def test_delete_bandwidth_metric(client):
    metric = _post_metric(client, deviceId=1, incoming=1, outgoing=1)

    assert client.delete(f"/api/bandwidth-metrics/{metric['id']}").status_code == status.HTTP_204_NO_CONTENT
    assert client.get(f"/api/bandwidth-metrics/{metric['id']}").status_code == status.HTTP_404_NOT_FOUND
    assert client.delete(f"/api/bandwidth-metrics/{metric['id']}").status_code == status.HTTP_404_NOT_FOUND


def test_large_limit_returns_everything_available(client):
    for i in range(3):
        _post_metric(client, deviceId=1, incoming=i, outgoing=i)

    response = client.get("/api/bandwidth-metrics", params={"limit": 5000})

    assert response.status_code == status.HTTP_200_OK
    assert len(response.json()) == 3


def test_zero_limit_returns_empty_list(client):
    _post_metric(client, deviceId=1, incoming=1, outgoing=1)

    response = client.get("/api/bandwidth-metrics", params={"limit": 0})

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == []
