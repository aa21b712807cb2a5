import logging
import httpx
from pydantic import ValidationError
from typing import Any, Dict, List, Optional
from .errors import GoveeApiError
from .govee_client import list_devices, list_appliances
from .models import Device

log = logging.getLogger("state")

def _parse(records: List[Dict[str, Any]]) -> List[Device]:
    try:
        return [Device.model_validate(r) for r in records]
    except ValidationError as e:
        raise GoveeApiError("Unexpected device list payload", payload=records) from e

class BatchCache:
    """Device and appliance lists, fetched at most once per execution batch."""

    def __init__(self, client: httpx.AsyncClient):
        self.client = client
        self._devices: Optional[List[Device]] = None
        self._appliances: Optional[List[Device]] = None

    async def devices(self) -> List[Device]:
        if self._devices is None:
            self._devices = _parse(await list_devices(self.client))
            log.info("Fetched %d device(s)", len(self._devices))
        return self._devices

    async def appliances(self) -> List[Device]:
        if self._appliances is None:
            self._appliances = _parse(await list_appliances(self.client))
            log.info("Fetched %d appliance(s)", len(self._appliances))
        return self._appliances

    async def find_device(self, mac: str) -> Optional[Device]:
        return next((d for d in await self.devices() if d.device == mac), None)

    async def find_appliance(self, mac: str) -> Optional[Device]:
        return next((a for a in await self.appliances() if a.device == mac), None)
