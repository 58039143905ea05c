"""Tests for the REST API. No Redis server is needed: caching stays off."""

import pytest
from fastapi.testclient import TestClient

import api.main
from api.main import app
from code_compressor import SAMPLES, FormatKind


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


class TestHealth:
    def test_health(self, client: TestClient):
        response = client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["cache_enabled"] is False
        assert body["redis_connected"] is False

    def test_malformed_redis_url_starts_without_cache(self, monkeypatch):
        monkeypatch.setattr(api.main, "REDIS_URL", "not-a-redis-url")
        with TestClient(app) as client:
            body = client.get("/health").json()
        assert body["status"] == "ok"
        assert body["cache_enabled"] is False
        assert api.main.redis_client is None

    def test_cache_stats_without_redis(self, client: TestClient):
        body = client.get("/cache/stats").json()
        assert body["enabled"] is False
        assert body["connected"] is False
        assert body["keys_count"] is None


class TestCompressEndpoint:
    def test_compress_css(self, client: TestClient):
        response = client.post("/compress", json={"text": "  .a {  color : red ; }  ", "format": "css"})
        assert response.status_code == 200
        body = response.json()
        assert body["text"] == ".a{color:red;}"
        assert body["format"] == "css"
        assert body["stats"] == {
            "original_tokens": 7,
            "compressed_tokens": 4,
            "saved_tokens": 3,
            "saved_percentage": pytest.approx(300 / 7),
        }

    def test_default_format_is_typescript(self, client: TestClient):
        body = client.post("/compress", json={"text": "let  x = 1; // one"}).json()
        assert body["format"] == "typescript"
        assert body["text"] == "let x = 1;"

    def test_blank_text_rejected(self, client: TestClient):
        response = client.post("/compress", json={"text": "   ", "format": "css"})
        assert response.status_code == 422
        assert "Nothing to compress" in response.json()["detail"]

    def test_unknown_format_rejected(self, client: TestClient):
        response = client.post("/compress", json={"text": "a: b", "format": "yaml"})
        assert response.status_code == 422

    def test_invalid_json_returned_unchanged(self, client: TestClient):
        body = client.post("/compress", json={"text": "{oops", "format": "json"}).json()
        assert body["text"] == "{oops"
        assert body["stats"]["saved_tokens"] == 0


class TestDecompressEndpoint:
    def test_decompress_json(self, client: TestClient):
        response = client.post("/decompress", json={"text": '{"a":1}', "format": "json"})
        assert response.status_code == 200
        assert response.json() == {"text": '{\n  "a": 1\n}', "format": "json"}

    def test_decompress_html(self, client: TestClient):
        body = client.post("/decompress", json={"text": "<div><p>Hi</p></div>", "format": "html"}).json()
        assert body["text"] == "<div>\n  <p>Hi</p>\n</div>"

    def test_blank_text_rejected(self, client: TestClient):
        response = client.post("/decompress", json={"text": "", "format": "json"})
        assert response.status_code == 422


class TestBatchEndpoint:
    def test_batch(self, client: TestClient):
        payload = {
            "format": "css",
            "items": [
                {"id": "one", "text": "  .a {  color : red ; }  "},
                {"id": "two", "text": ".b { margin: 0; }"},
            ],
        }
        response = client.post("/compress/batch", json=payload)
        assert response.status_code == 200
        body = response.json()
        assert [item["id"] for item in body["items"]] == ["one", "two"]
        assert body["items"][1]["text"] == ".b{margin:0;}"
        assert body["total_original_tokens"] == sum(
            item["stats"]["original_tokens"] for item in body["items"]
        )
        assert body["overall_saved_percentage"] > 0

    def test_empty_batch(self, client: TestClient):
        body = client.post("/compress/batch", json={"items": []}).json()
        assert body["items"] == []
        assert body["overall_saved_percentage"] == 0.0


class TestTokensEndpoint:
    @pytest.mark.parametrize(("text", "tokens"), [("", 0), ("abcd", 1), ("abcde", 2)])
    def test_tokens(self, client: TestClient, text: str, tokens: int):
        assert client.post("/tokens", json={"text": text}).json() == {"tokens": tokens}


class TestExamplesEndpoint:
    @pytest.mark.parametrize("fmt", list(FormatKind))
    def test_examples(self, client: TestClient, fmt: FormatKind):
        body = client.get(f"/examples/{fmt.value}").json()
        assert body == {"format": fmt.value, "text": SAMPLES[fmt]}

    def test_unknown_format(self, client: TestClient):
        assert client.get("/examples/yaml").status_code == 422
