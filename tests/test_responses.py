"""
Album API - Response Helper Tests
==================================

What:  Shape of JSON, error and empty responses, and the encoding-failure path.
"""

import json
import logging

from album_api.responses import empty_response, error_response, json_response
from album_api.schemas.album import AlbumSchema


class TestResponseHelpers:

    def test_json_response_encodes_models(self):
        album = AlbumSchema(id="a1", title="T", artist="Ar", price=9.99)

        response = json_response(201, [album])

        assert response.status_code == 201
        assert response.media_type == "application/json"
        assert json.loads(response.body) == [
            {"id": "a1", "title": "T", "artist": "Ar", "price": 9.99}
        ]

    def test_error_response_shape(self):
        response = error_response(404, "album not found")

        assert response.status_code == 404
        assert response.media_type == "application/json"
        assert json.loads(response.body) == {"error": "album not found"}

    def test_error_response_headers(self):
        response = error_response(405, "Method not allowed", headers={"Allow": "GET, POST"})

        assert response.headers["allow"] == "GET, POST"

    def test_empty_response(self):
        response = empty_response(204)

        assert response.status_code == 204
        assert response.body == b""

    def test_encoding_failure_is_logged_not_raised(self, caplog):
        with caplog.at_level(logging.ERROR, logger="album_api.responses"):
            response = json_response(200, {"price": float("nan")})

        assert response.status_code == 200
        assert response.body == b""
        assert response.media_type == "application/json"
        assert "Failed to encode JSON response" in caplog.text
