"""Test cases for logging helpers."""

import asyncio
import json
import logging

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from contactscout.core.logging import (
    ClientIPFilter,
    JSONFormatter,
    client_ip_var,
    sanitize_log_data,
)
from contactscout.core.security import ClientIPMiddleware


def make_record(**extra):
    record = logging.LogRecord(
        name="contactscout.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg="Scrape completed",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestSanitizeLogData:
    def test_emails_masked(self):
        sanitized = sanitize_log_data({"note": "contact info@acme.com"})

        assert sanitized["note"] == "contact ***@***.***"

    def test_secret_keys_masked(self):
        sanitized = sanitize_log_data({"api_key": "abc", "nested": {"token": "t"}})

        assert sanitized == {"api_key": "********", "nested": {"token": "********"}}

    def test_non_dict_returned_as_is(self):
        assert sanitize_log_data("plain") == "plain"


class TestJSONFormatter:
    def test_extra_fields_included_and_emails_excluded(self):
        record = make_record(
            result_count=2,
            emails=["info@acme.com"],
            url="https://p.test/?domains=a.com",
        )

        entry = json.loads(JSONFormatter().format(record))

        assert entry["message"] == "Scrape completed"
        assert entry["result_count"] == 2
        assert entry["url"] == "https://p.test/?domains=a.com"
        assert "emails" not in entry

    def test_client_ip_filter_defaults(self):
        record = make_record()

        assert ClientIPFilter().filter(record) is True
        assert record.client_ip == "-"


class TestClientIPContext:
    """The client IP follows the request that emitted the log record."""

    @pytest.mark.asyncio
    async def test_overlapping_requests_keep_their_own_ip(self):
        first_entered = asyncio.Event()
        release_first = asyncio.Event()
        seen = {}

        app = FastAPI()
        app.add_middleware(ClientIPMiddleware)

        @app.get("/who")
        async def who(name: str):
            if name == "first":
                first_entered.set()
                await release_first.wait()
            record = make_record()
            ClientIPFilter().filter(record)
            seen[name] = record.client_ip
            if name == "second":
                release_first.set()
            return {}

        async def call(name, ip):
            transport = httpx.ASGITransport(app=app, client=(ip, 1234))
            async with httpx.AsyncClient(
                transport=transport, base_url="http://test"
            ) as client:
                await client.get("/who", params={"name": name})

        first = asyncio.create_task(call("first", "10.0.0.1"))
        await first_entered.wait()
        await call("second", "10.0.0.2")
        await first

        assert seen == {"first": "10.0.0.1", "second": "10.0.0.2"}
        assert client_ip_var.get() == "-"

    def test_ip_reset_after_request(self):
        app = FastAPI()
        app.add_middleware(ClientIPMiddleware)

        @app.get("/ip")
        async def current_ip():
            return {"ip": client_ip_var.get()}

        response = TestClient(app).get("/ip")

        assert response.json() == {"ip": "testclient"}
        assert client_ip_var.get() == "-"
