import logging
import httpx
from typing import Any, Dict, List, Optional
from .settings import settings
from .errors import GoveeApiError

log = logging.getLogger("govee")

DEVICES_PATH = "/v1/devices"
DEVICE_STATE_PATH = "/v1/devices/state"
DEVICE_CONTROL_PATH = "/v1/devices/control"
APPLIANCES_PATH = "/v1/appliance/devices"
APPLIANCE_CONTROL_PATH = "/v1/appliance/devices/control"

def auth_headers() -> Dict[str, str]:
    return {"Govee-API-Key": settings.GOVEE_API_KEY, "Content-Type": "application/json"}

def make_client(transport: Optional[httpx.AsyncBaseTransport] = None) -> httpx.AsyncClient:
    """One client per execution batch; the caller closes it."""
    return httpx.AsyncClient(
        base_url=settings.GOVEE_API_URL,
        headers=auth_headers(),
        timeout=settings.GOVEE_REQUEST_TIMEOUT,
        transport=transport,
    )

def _error_payload(r: httpx.Response) -> Any:
    try:
        return r.json()
    except ValueError:
        return r.text

async def api_request(
    c: httpx.AsyncClient,
    method: str,
    path: str,
    body: Optional[Dict[str, Any]] = None,
    params: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    kwargs: Dict[str, Any] = {}
    if body:
        kwargs["json"] = body
    if params:
        kwargs["params"] = params
    log.debug("%s %s params=%s body=%s", method, path, params, body)
    try:
        r = await c.request(method, path, **kwargs)
    except httpx.HTTPError as e:
        raise GoveeApiError(f"Govee API request failed: {e}") from e
    if r.is_error:
        payload = _error_payload(r)
        message = payload.get("message") if isinstance(payload, dict) else None
        raise GoveeApiError(
            f"Govee API returned {r.status_code} for {method} {path}: {message or r.reason_phrase}",
            status_code=r.status_code,
            payload=payload,
        )
    try:
        return r.json()
    except ValueError as e:
        raise GoveeApiError(
            f"Govee API returned a non-JSON body for {method} {path}",
            status_code=r.status_code,
            payload=r.text,
        ) from e

def _devices_of(response: Dict[str, Any]) -> List[Dict[str, Any]]:
    data = response.get("data") or {}
    return data.get("devices") or []

# convenience helpers
async def list_devices(c: httpx.AsyncClient) -> List[Dict[str, Any]]:
    return _devices_of(await api_request(c, "GET", DEVICES_PATH))

async def list_appliances(c: httpx.AsyncClient) -> List[Dict[str, Any]]:
    return _devices_of(await api_request(c, "GET", APPLIANCES_PATH))

async def get_device_state(c: httpx.AsyncClient, device: str, model: str) -> Dict[str, Any]:
    return await api_request(c, "GET", DEVICE_STATE_PATH, params={"device": device, "model": model})

async def control_device(c: httpx.AsyncClient, device: str, model: str, cmd: Dict[str, Any]):
    return await api_request(c, "PUT", DEVICE_CONTROL_PATH, {"device": device, "model": model, "cmd": cmd})

async def control_appliance(c: httpx.AsyncClient, device: str, model: str, cmd: Dict[str, Any]):
    return await api_request(c, "PUT", APPLIANCE_CONTROL_PATH, {"device": device, "model": model, "cmd": cmd})

async def check_credentials(c: httpx.AsyncClient) -> Dict[str, Any]:
    """Connectivity check for the API key; never raises."""
    try:
        await api_request(c, "GET", DEVICES_PATH)
    except GoveeApiError as e:
        log.warning("Credential check failed: %s", e)
        return {"status": "error", "message": e.message, "statusCode": e.status_code}
    return {"status": "ok", "message": "Connection successful"}
