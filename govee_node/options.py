"""Dynamic option lists for the node's UI dropdowns.

These are lookups only: any API failure degrades to an empty list so the
editor stays usable with a bad key or while rate limited.
"""
import logging
import httpx
from typing import Awaitable, Callable, Dict, List, Optional
from .errors import GoveeError
from .govee_client import make_client
from .models import Device, OptionItem
from .state import BatchCache

log = logging.getLogger("options")

Loader = Callable[[BatchCache, str], Awaitable[List[OptionItem]]]

def _labelled(records: List[Device]) -> List[OptionItem]:
    return [OptionItem(name=f"{r.device_name} ({r.model})", value=r.device) for r in records]

def _model_of(records: List[Device], mac: str) -> List[OptionItem]:
    found = next((r for r in records if r.device == mac), None)
    return [OptionItem(name=found.model, value=found.model)] if found else []

def _commands_of(records: List[Device], mac: str) -> List[OptionItem]:
    if mac:
        found = next((r for r in records if r.device == mac), None)
        if found:
            return [OptionItem(name=c, value=c) for c in found.support_cmds]
    # no device selected: every command any device advertises
    cmds = sorted({c for r in records for c in r.support_cmds})
    return [OptionItem(name=c, value=c) for c in cmds]

async def get_devices(cache: BatchCache, mac: str) -> List[OptionItem]:
    return _labelled(await cache.devices())

async def get_device_models(cache: BatchCache, mac: str) -> List[OptionItem]:
    if not mac:
        return []
    return _model_of(await cache.devices(), mac)

async def get_device_commands(cache: BatchCache, mac: str) -> List[OptionItem]:
    return _commands_of(await cache.devices(), mac)

async def get_appliances(cache: BatchCache, mac: str) -> List[OptionItem]:
    return _labelled(await cache.appliances())

async def get_appliance_models(cache: BatchCache, mac: str) -> List[OptionItem]:
    if not mac:
        return []
    return _model_of(await cache.appliances(), mac)

async def get_appliance_commands(cache: BatchCache, mac: str) -> List[OptionItem]:
    return _commands_of(await cache.appliances(), mac)

async def get_appliance_modes(cache: BatchCache, mac: str) -> List[OptionItem]:
    if not mac:
        return []
    found = await cache.find_appliance(mac)
    if found is None:
        return []
    return [OptionItem(name=o.name, value=o.value) for o in found.mode_options()]

LOAD_OPTIONS: Dict[str, Loader] = {
    "getDevices": get_devices,
    "getDeviceModels": get_device_models,
    "getDeviceCommands": get_device_commands,
    "getAppliances": get_appliances,
    "getApplianceModels": get_appliance_models,
    "getApplianceCommands": get_appliance_commands,
    "getApplianceModes": get_appliance_modes,
}

async def load_options(
    method: str,
    device: str = "",
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> List[OptionItem]:
    loader = LOAD_OPTIONS[method]
    async with make_client(transport) as client:
        try:
            return await loader(BatchCache(client), device)
        except GoveeError as e:
            log.warning("%s failed, returning no options: %s", method, e)
            return []
