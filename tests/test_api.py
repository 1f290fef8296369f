"""HTTP API tests using FastAPI's TestClient."""

import json
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from lifeboard.api.app import create_app, status_for
from lifeboard.api.schemas import EXAMPLE_BOARD, BoardStateDto
from lifeboard.config import Settings
from lifeboard.errors import (
    InputError,
    NotConvergedError,
    NotFoundError,
    RangeError,
    ShapeError,
    StorageError,
    ValidationError,
)
from lifeboard.service.board_service import BoardService
from lifeboard.storage.board_store import BoardStore

BLINKER_VERTICAL = [
    [False, False, False, False, False],
    [False, False, True, False, False],
    [False, False, True, False, False],
    [False, False, True, False, False],
    [False, False, False, False, False],
]

BLINKER_HORIZONTAL = [
    [False, False, False, False, False],
    [False, False, False, False, False],
    [False, True, True, True, False],
    [False, False, False, False, False],
    [False, False, False, False, False],
]

BLOCK = [
    [False, False, False, False],
    [False, True, True, False],
    [False, True, True, False],
    [False, False, False, False],
]


@pytest.fixture
def client():
    app = create_app(Settings(), service=BoardService(BoardStore()))
    with TestClient(app) as client:
        yield client


def upload(client, board):
    response = client.post("/api/boards", json={"board": board})
    assert response.status_code == 201, response.text
    return response.json()["id"]


class TestUploadEndpoint:

    def test_upload_and_fetch(self, client):
        board_id = upload(client, BLINKER_VERTICAL)
        response = client.get(f"/api/boards/{board_id}")
        assert response.status_code == 200
        assert response.json() == {"board": BLINKER_VERTICAL}

    def test_upload_null_board(self, client):
        response = client.post("/api/boards", json={"board": None})
        assert response.status_code == 400
        assert response.json()["error"] == "InputError"

    def test_upload_missing_board(self, client):
        response = client.post("/api/boards", json={})
        assert response.status_code == 400

    def test_upload_jagged_board(self, client):
        response = client.post("/api/boards", json={"board": [[True, False, True], [True], [True, True, True]]})
        assert response.status_code == 400
        assert response.json()["error"] == "ShapeError"

    def test_upload_too_small(self, client):
        response = client.post("/api/boards", json={"board": [[True, True], [True, True]]})
        assert response.status_code == 400
        assert response.json()["error"] == "ValidationError"

    @pytest.mark.parametrize("row", [
        ["x", "y", "z"],
        [1, 0, 1],
        ["yes", "no", "on"],
        ["true", "false", "1"],
    ])
    def test_upload_non_boolean_cells(self, client, row):
        """Only JSON booleans are cells; numbers and strings aren't coerced."""
        response = client.post("/api/boards", json={"board": [row] * 3})
        assert response.status_code == 422

    def test_example_board_is_blinker(self, client):
        """The documented example is a valid upload that oscillates."""
        assert EXAMPLE_BOARD == [
            [False, True, False],
            [False, True, False],
            [False, True, False],
        ]
        assert BoardStateDto.model_json_schema()["examples"] == [{"board": EXAMPLE_BOARD}]

        board_id = upload(client, EXAMPLE_BOARD)
        response = client.get(f"/api/boards/{board_id}/states", params={"steps": 2})
        assert response.json() == {"board": EXAMPLE_BOARD}


class TestSimulationEndpoints:

    def test_next_state(self, client):
        board_id = upload(client, BLINKER_VERTICAL)

        response = client.get(f"/api/boards/{board_id}/next")
        assert response.status_code == 200
        assert response.json() == {"board": BLINKER_HORIZONTAL}

        response = client.get(f"/api/boards/{board_id}/next")
        assert response.json() == {"board": BLINKER_VERTICAL}

    def test_states_after_steps(self, client):
        board_id = upload(client, BLINKER_VERTICAL)

        response = client.get(f"/api/boards/{board_id}/states", params={"steps": 3})
        assert response.status_code == 200
        assert response.json() == {"board": BLINKER_HORIZONTAL}

        # State was stored: one more step brings it back
        response = client.get(f"/api/boards/{board_id}/states", params={"steps": 1})
        assert response.json() == {"board": BLINKER_VERTICAL}

    def test_states_negative_steps(self, client):
        board_id = upload(client, BLINKER_VERTICAL)
        response = client.get(f"/api/boards/{board_id}/states", params={"steps": -1})
        assert response.status_code == 400
        assert response.json()["error"] == "RangeError"
        assert "steps" in response.json()["detail"]

    def test_states_missing_steps(self, client):
        board_id = upload(client, BLINKER_VERTICAL)
        response = client.get(f"/api/boards/{board_id}/states")
        assert response.status_code == 422

    def test_final_state(self, client):
        board_id = upload(client, BLOCK)
        response = client.get(f"/api/boards/{board_id}/final", params={"maxIterations": 10})
        assert response.status_code == 200
        assert response.json() == {"board": BLOCK}

    def test_final_oscillator_not_converged(self, client):
        board_id = upload(client, BLINKER_VERTICAL)
        response = client.get(f"/api/boards/{board_id}/final", params={"maxIterations": 25})

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "NotConvergedError"
        assert board_id in body["detail"]

        # Board untouched by the failed search
        assert client.get(f"/api/boards/{board_id}").json() == {"board": BLINKER_VERTICAL}

    def test_final_zero_iterations(self, client):
        board_id = upload(client, BLOCK)
        response = client.get(f"/api/boards/{board_id}/final", params={"maxIterations": 0})
        assert response.status_code == 400
        assert response.json()["error"] == "RangeError"

    @pytest.mark.parametrize("path", ["", "/next", "/states?steps=1", "/final?maxIterations=5"])
    def test_unknown_board(self, client, path):
        response = client.get(f"/api/boards/does-not-exist{path}")
        assert response.status_code == 404
        assert response.json()["error"] == "NotFoundError"
        assert "does-not-exist" in response.json()["detail"]


class TestErrorMapping:

    @pytest.mark.parametrize("error,expected", [
        (InputError("x"), 400),
        (ShapeError("x"), 400),
        (ValidationError("x"), 400),
        (RangeError("steps", -1, "x"), 400),
        (NotFoundError("abc"), 404),
        (NotConvergedError(5), 500),
        (StorageError("disk"), 500),
        (RuntimeError("boom"), 500),
    ])
    def test_status_for(self, error, expected):
        assert status_for(error) == expected

    def test_unexpected_error_is_500(self):
        service = MagicMock()
        service.next.side_effect = RuntimeError("boom")
        app = create_app(Settings(), service=service)

        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/api/boards/abc/next")

        assert response.status_code == 500


class TestLifespanPersistence:

    def test_boards_survive_restart(self, tmp_path):
        path = tmp_path / "boards.json"
        settings = Settings(store_path=str(path))

        with TestClient(create_app(settings)) as client:
            board_id = upload(client, BLINKER_VERTICAL)
            client.get(f"/api/boards/{board_id}/next")

        saved = json.loads(path.read_text())
        assert saved["boards"][board_id] == BLINKER_HORIZONTAL

        with TestClient(create_app(settings)) as client:
            response = client.get(f"/api/boards/{board_id}")
            assert response.json() == {"board": BLINKER_HORIZONTAL}

    def test_min_size_from_settings(self):
        settings = Settings(min_rows=1, min_cols=1)
        with TestClient(create_app(settings)) as client:
            response = client.post("/api/boards", json={"board": [[True]]})
            assert response.status_code == 201
