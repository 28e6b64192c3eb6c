"""Tests for the HTML routes."""

import logging

import pytest
from httpx import ASGITransport, AsyncClient

from config import Config
from urlshortener.database.exceptions import StoreError
from urlshortener.service import URLShortenerService
from web_app import create_app


@pytest.mark.asyncio
class TestWebRoutes:
    """Test form, redirect and static routes."""

    async def test_homepage(self, client):
        response = await client.get("/")

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert 'id="url"' in response.text
        assert 'action="/shorten"' in response.text

    async def test_shorten_form(self, client, service):
        response = await client.post("/shorten", data={"url": "https://example.com/page"})

        assert response.status_code == 200
        code = await service.shorten("https://example.com/page")
        assert f"http://sho.rt/{code}" in response.text

    async def test_shorten_form_dedup(self, client):
        first = await client.post("/shorten", data={"url": "https://example.com/page"})
        second = await client.post("/shorten", data={"url": "https://EXAMPLE.com/page/"})

        assert first.status_code == second.status_code == 200

        def short_url(text):
            start = text.index("http://sho.rt/")
            return text[start:start + len("http://sho.rt/") + 7]

        assert short_url(first.text) == short_url(second.text)

    async def test_shorten_form_invalid_scheme(self, client):
        response = await client.post("/shorten", data={"url": "ftp://example.com/x"})

        assert response.status_code == 400
        assert "only HTTP and HTTPS protocols are supported" in response.text

    async def test_shorten_form_empty(self, client):
        response = await client.post("/shorten", data={"url": ""})

        assert response.status_code == 400
        assert "URL cannot be empty" in response.text

    async def test_shorten_form_leading_whitespace(self, client):
        response = await client.post("/shorten", data={"url": " https://example.com/page"})

        assert response.status_code == 400
        assert "whitespace or control characters" in response.text

    async def test_shorten_form_missing_field(self, client):
        response = await client.post("/shorten", data={})

        assert response.status_code == 400

    async def test_redirect(self, client):
        url = "https://example.com/Some/Path?x=1"
        await client.post("/shorten", data={"url": url})
        code = (await client.post("/api/shorten", json={"url": url})).json()["short_code"]

        response = await client.get(f"/{code}", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == url

    async def test_redirect_unknown_code(self, client):
        response = await client.get("/aaaaaaa", follow_redirects=False)

        assert response.status_code == 404
        assert "Short code not found" in response.text

    @pytest.mark.parametrize("code", ["abc", "bad$code", "a" * 21])
    async def test_redirect_invalid_code(self, client, code):
        response = await client.get(f"/{code}", follow_redirects=False)

        assert response.status_code == 404
        assert "Short code not found" in response.text

    async def test_requests_are_logged(self, client, caplog):
        with caplog.at_level(logging.INFO, logger="url_shortener.web"):
            await client.get("/")

        messages = [r.getMessage() for r in caplog.records if r.name == "url_shortener.web"]
        assert any(m.startswith("Request: GET / from") for m in messages)
        assert any(m.startswith("Response: GET / - Status: 200") for m in messages)

    async def test_static_file(self, client):
        response = await client.get("/static/style.css")

        assert response.status_code == 200
        assert "text/css" in response.headers["content-type"]

    async def test_store_failure_renders_500(self, test_config, fake_store, logger):
        fake_store.fail_with = StoreError("disk I/O error")
        service = URLShortenerService(db=fake_store, logger=logger)
        app = create_app(fake_store, None, service, test_config)

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
            shorten = await client.post("/shorten", data={"url": "https://example.com/"})
            redirect = await client.get("/abcdefg", follow_redirects=False)

        assert shorten.status_code == 500
        assert redirect.status_code == 500

    async def test_missing_templates_fall_back(self, tmp_path, service):
        config = Config(_env_file=None, templates_dir=str(tmp_path / "no-templates"))
        app = create_app(None, None, service, config)

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
            home = await client.get("/")
            missing = await client.get("/aaaaaaa")

        assert home.status_code == 200
        assert "URL Shortener" in home.text
        assert missing.status_code == 404
        assert "Short code not found" in missing.text
