from fastapi.testclient import TestClient

from songflow.api.server import create_app
from songflow.config import EngineSettings


def _client() -> TestClient:
    return TestClient(create_app(settings=EngineSettings(default_resolution=480, default_bpm=120.0)))


def _create_song(client: TestClient) -> str:
    response = client.post("/v1/songs", json={"title": "demo"})
    assert response.status_code == 200
    return response.json()["song_id"]


def test_root_endpoint() -> None:
    response = _client().get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_create_and_get_song() -> None:
    client = _client()
    song_id = _create_song(client)

    body = client.get(f"/v1/songs/{song_id}").json()

    assert body["meta"]["title"] == "demo"
    assert body["resolution"] == 480
    assert body["tempos"][0]["bpm"] == 120.0
    assert body["time_signatures"][0]["numerator"] == 4


def test_unknown_song_returns_404() -> None:
    response = _client().get("/v1/songs/missing")
    assert response.status_code == 404


def test_tempo_endpoints_and_conversion() -> None:
    client = _client()
    song_id = _create_song(client)

    response = client.post(f"/v1/songs/{song_id}/tempos", json={"ticks": 960, "bpm": 60})
    assert response.status_code == 200
    assert response.json()["tempos"][1]["time"] == 1.0

    converted = client.get(f"/v1/songs/{song_id}/convert", params={"tick": 1920}).json()
    assert converted["seconds"] == 3.0
    converted = client.get(f"/v1/songs/{song_id}/convert", params={"seconds": 3.0}).json()
    assert converted["tick"] == 1920


def test_convert_requires_exactly_one_value() -> None:
    client = _client()
    song_id = _create_song(client)
    response = client.get(f"/v1/songs/{song_id}/convert", params={"tick": 1, "seconds": 1.0})
    assert response.status_code == 400


def test_overwrite_tempos_rejects_late_start() -> None:
    client = _client()
    song_id = _create_song(client)

    response = client.put(f"/v1/songs/{song_id}/tempos", json={"tempos": [{"ticks": 480, "bpm": 100}]})
    assert response.status_code == 400

    response = client.put(f"/v1/songs/{song_id}/tempos", json={"tempos": []})
    assert response.status_code == 400


def test_tempo_validation_errors_return_422() -> None:
    client = _client()
    song_id = _create_song(client)
    response = client.post(f"/v1/songs/{song_id}/tempos", json={"ticks": 0, "bpm": 0})
    assert response.status_code == 422


def test_import_endpoint_creates_tracks() -> None:
    client = _client()
    song_id = _create_song(client)

    response = client.post(
        f"/v1/songs/{song_id}/import",
        json={
            "data": {
                "resolution": 96,
                "tracks": [
                    {
                        "notes": [{"ticks": 48, "duration_ticks": 48, "midi": 60, "velocity": 1.0}],
                        "control_changes": {"7": [{"ticks": 0, "value": 0.5}]},
                    }
                ],
            },
            "insert_at_tick": 0,
        },
    )
    assert response.status_code == 200
    track_ids = response.json()["track_ids"]
    assert len(track_ids) == 1

    body = client.get(f"/v1/songs/{song_id}").json()
    track = body["tracks"][0]
    assert track["track_id"] == track_ids[0]
    assert track["clips"][0]["notes"][0]["start_tick"] == 240
    assert track["automation"][0]["target_type"] == "volume"


def test_convert_rejects_negative_values() -> None:
    client = _client()
    song_id = _create_song(client)
    assert client.get(f"/v1/songs/{song_id}/convert", params={"tick": -1}).status_code == 422
    assert client.get(f"/v1/songs/{song_id}/convert", params={"seconds": -0.5}).status_code == 422
