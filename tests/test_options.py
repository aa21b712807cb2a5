"""Tests for the dynamic option loaders."""

from __future__ import annotations

import pytest

from govee_node.options import load_options
from conftest import APPLIANCES, LAMP, PLUG, PURIFIER


def _pairs(options) -> list[tuple]:
    return [(o.name, o.value) for o in options]


@pytest.mark.asyncio
async def test_devices_are_labelled_with_model(fake_api) -> None:
    options = await load_options("getDevices", transport=fake_api.transport)

    assert _pairs(options) == [("Desk Lamp (H6159)", LAMP), ("Smart Plug (H5080)", PLUG)]


@pytest.mark.asyncio
async def test_model_of_selected_device(fake_api) -> None:
    assert _pairs(await load_options("getDeviceModels", LAMP, fake_api.transport)) == [("H6159", "H6159")]
    assert await load_options("getDeviceModels", "", fake_api.transport) == []
    assert fake_api.requests == fake_api.calls("GET", "/v1/devices")


@pytest.mark.asyncio
async def test_commands_of_selected_device(fake_api) -> None:
    options = await load_options("getDeviceCommands", PLUG, fake_api.transport)

    assert _pairs(options) == [("turn", "turn")]


@pytest.mark.asyncio
async def test_commands_union_when_nothing_selected(fake_api) -> None:
    options = await load_options("getDeviceCommands", transport=fake_api.transport)

    assert [o.value for o in options] == ["brightness", "color", "colorTem", "turn"]


@pytest.mark.asyncio
async def test_appliances_and_modes(fake_api) -> None:
    assert _pairs(await load_options("getAppliances", transport=fake_api.transport)) == [
        ("Air Purifier (H7121)", PURIFIER),
    ]
    assert _pairs(await load_options("getApplianceModes", PURIFIER, fake_api.transport)) == [
        ("Low", 1),
        ("High", 3),
    ]
    assert _pairs(await load_options("getApplianceCommands", PURIFIER, fake_api.transport)) == [
        ("turn", "turn"),
        ("mode", "mode"),
    ]
    assert await load_options("getApplianceModes", "00:00", fake_api.transport) == []


@pytest.mark.asyncio
async def test_api_failure_degrades_to_empty(fake_api) -> None:
    fake_api.fail("/v1/devices", 401, {"message": "Invalid API Key"})

    assert await load_options("getDevices", transport=fake_api.transport) == []
    assert await load_options("getDeviceCommands", LAMP, fake_api.transport) == []


@pytest.mark.asyncio
async def test_unnamed_or_missing_mode_options_are_skipped(fake_api) -> None:
    fake_api.appliances = [
        {**APPLIANCES[0], "properties": {"mode": {"options": [{"value": 2}, {"name": "Auto", "value": 4}]}}},
        {"device": "00:22", "model": "H7100", "supportCmds": None, "properties": {"mode": {"options": None}}},
    ]

    assert _pairs(await load_options("getApplianceModes", PURIFIER, fake_api.transport)) == [("Auto", 4)]
    assert await load_options("getApplianceModes", "00:22", fake_api.transport) == []
    assert _pairs(await load_options("getApplianceCommands", "00:22", fake_api.transport)) == []
