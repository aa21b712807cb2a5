"""Pytest configuration and fixtures for the Govee node tests."""

from __future__ import annotations

import json
import os

os.environ.setdefault("GOVEE_API_KEY", "test-api-key")

import httpx
import pytest

LAMP = "AA:BB:CC:DD:EE:FF:00:11"
PLUG = "11:22:33:44:55:66:77:88"
PURIFIER = "99:88:77:66:55:44:33:22"

DEVICES = [
    {
        "device": LAMP,
        "model": "H6159",
        "deviceName": "Desk Lamp",
        "controllable": True,
        "retrievable": True,
        "supportCmds": ["turn", "brightness", "color", "colorTem"],
        "properties": {"colorTem": {"range": {"min": 2000, "max": 9000}}},
    },
    {
        "device": PLUG,
        "model": "H5080",
        "deviceName": "Smart Plug",
        "controllable": True,
        "retrievable": True,
        "supportCmds": ["turn"],
    },
]

APPLIANCES = [
    {
        "device": PURIFIER,
        "model": "H7121",
        "deviceName": "Air Purifier",
        "controllable": True,
        "retrievable": False,
        "supportCmds": ["turn", "mode"],
        "properties": {
            "mode": {"options": [{"name": "Low", "value": 1}, {"name": "High", "value": 3}]},
        },
    },
]

SUCCESS = {"code": 200, "message": "Success", "data": {}}


class FakeGovee:
    """Records every request and answers the way the Govee API does."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.failures: dict[str, tuple[int, dict]] = {}
        self.devices: list[dict] = list(DEVICES)
        self.appliances: list[dict] = list(APPLIANCES)
        self.state_data: dict | None = None

    def fail(self, path: str, status: int, payload: dict) -> None:
        self.failures[path] = (status, payload)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path in self.failures:
            status, payload = self.failures[path]
            return httpx.Response(status, json=payload)

        if request.method == "GET" and path == "/v1/devices":
            return httpx.Response(200, json={"code": 200, "message": "Success", "data": {"devices": self.devices}})
        if request.method == "GET" and path == "/v1/appliance/devices":
            return httpx.Response(200, json={"code": 200, "message": "Success", "data": {"devices": self.appliances}})
        if request.method == "GET" and path == "/v1/devices/state":
            if self.state_data is not None:
                return httpx.Response(200, json={"code": 200, "message": "Success", "data": self.state_data})
            return httpx.Response(200, json={
                "code": 200,
                "message": "Success",
                "data": {
                    "device": request.url.params["device"],
                    "model": request.url.params["model"],
                    "properties": [{"online": True}, {"powerState": "on"}, {"brightness": 80}],
                },
            })
        if request.method == "PUT" and path in ("/v1/devices/control", "/v1/appliance/devices/control"):
            return httpx.Response(200, json=SUCCESS)
        return httpx.Response(404, json={"code": 404, "message": "Not Found"})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    def bodies(self, path: str) -> list[dict]:
        return [json.loads(r.content) for r in self.calls("PUT", path)]


@pytest.fixture
def fake_api() -> FakeGovee:
    """Fake Govee cloud API."""
    return FakeGovee()
