"""Execution of the Govee node over a batch of workflow items.

The host hands over a :class:`NodeContext`; :func:`execute` resolves the
(resource, operation) pair once, then runs its handler for every input item in
order. Handlers return one record or a list of records; each becomes an output
row paired with the item index. Under continue-on-fail a failing item yields a
single ``{"error": message}`` row instead of aborting the batch.
"""
import copy
import json
import logging
import httpx
from pydantic import ValidationError
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Tuple, Union
from .description import Operation, Resource, find_property
from .errors import (
    CommandNotSupportedError,
    GoveeApiError,
    GoveeError,
    InvalidFormatError,
    MissingParameterError,
    NotFoundError,
    UnknownOperationError,
    UnknownResourceError,
)
from .govee_client import control_appliance, control_device, get_device_state, make_client
from .mappings import convert_value, normalize_command_value, value_parameter
from .models import Command, Device, DeviceState, OutputItem
from .state import BatchCache

log = logging.getLogger("node")

_MISSING = object()

Record = Dict[str, Any]
Handler = Callable[["NodeContext", BatchCache, int], Awaitable[Union[Record, List[Record]]]]


class NodeContext:
    """Parameters and input items supplied by the host for one execution.

    ``item_parameters[i]`` overrides ``parameters`` for item ``i``, the way an
    expression evaluated against that item would.
    """

    def __init__(
        self,
        parameters: Dict[str, Any],
        items: Optional[List[Record]] = None,
        item_parameters: Optional[List[Dict[str, Any]]] = None,
        continue_on_fail: bool = False,
    ):
        self.parameters = dict(parameters)
        self.items = items if items is not None else [{}]
        self.item_parameters = item_parameters or []
        self.continue_on_fail = continue_on_fail

    def _supplied(self, name: str, index: int) -> Any:
        if index < len(self.item_parameters) and name in self.item_parameters[index]:
            return self.item_parameters[index][name]
        return self.parameters.get(name, _MISSING)

    def _display_values(self, index: int) -> Dict[str, Any]:
        values: Dict[str, Any] = {}
        for key in ("resource", "operation", "command"):
            value = self._supplied(key, index)
            if value is _MISSING:
                prop = find_property(key, values)
                value = prop["default"] if prop else None
            values[key] = value
        return values

    def get_node_parameter(self, name: str, index: int, default: Any = _MISSING) -> Any:
        value = self._supplied(name, index)
        if value is not _MISSING:
            return value
        prop = find_property(name, self._display_values(index))
        if prop is not None:
            return copy.deepcopy(prop["default"])
        if default is not _MISSING:
            return default
        raise MissingParameterError(f'Could not get parameter "{name}"', item_index=index)


def _validation_enabled(ctx: NodeContext, i: int) -> bool:
    options = ctx.get_node_parameter("options", i, {}) or {}
    return bool(options.get("validateCommand"))


def _check_supported(target: Optional[Device], mac: str, commands: Iterable[str], i: int, kind: str) -> None:
    # unknown targets are left for the API to reject
    if target is None:
        return
    for name in commands:
        if not target.supports(name):
            raise CommandNotSupportedError(
                f'{kind} "{mac}" does not support the "{name}" command. '
                f'Supported: {", ".join(target.support_cmds)}',
                item_index=i,
            )


def _command(ctx: NodeContext, resource: Resource, i: int) -> Dict[str, Any]:
    name = ctx.get_node_parameter("command", i)
    raw = ctx.get_node_parameter(value_parameter(resource.value, name), i, "")
    return {"name": name, "value": convert_value(resource.value, name, raw)}


def parse_commands(raw: Any, i: int) -> List[Command]:
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError as e:
            raise InvalidFormatError(
                'Invalid JSON in Commands field. Expected an array like: [{"name": "turn", "value": "on"}]',
                item_index=i,
            ) from e
    if not isinstance(raw, list):
        raise InvalidFormatError("Commands must be a JSON array", item_index=i)
    try:
        return [Command.model_validate(c) for c in raw]
    except ValidationError as e:
        raise InvalidFormatError(
            f'Every command must be an object with a string "name": {e.errors()[0]["msg"]}',
            item_index=i,
        ) from e


# ---- device ----

async def device_get_all(ctx: NodeContext, cache: BatchCache, i: int) -> List[Record]:
    return [d.to_output() for d in await cache.devices()]


async def device_get(ctx: NodeContext, cache: BatchCache, i: int) -> Record:
    mac = ctx.get_node_parameter("device", i)
    found = await cache.find_device(mac)
    if found is None:
        raise NotFoundError(f'Device with MAC address "{mac}" not found', item_index=i)
    return found.to_output()


async def device_get_capabilities(ctx: NodeContext, cache: BatchCache, i: int) -> Union[Record, List[Record]]:
    mac = ctx.get_node_parameter("device", i, "")
    if not mac:
        return [d.capabilities() for d in await cache.devices()]
    found = await cache.find_device(mac)
    if found is None:
        raise NotFoundError(f'Device with MAC address "{mac}" not found', item_index=i)
    return found.capabilities()


async def device_get_state(ctx: NodeContext, cache: BatchCache, i: int) -> Record:
    device = ctx.get_node_parameter("device", i)
    model = ctx.get_node_parameter("model", i)
    response = await get_device_state(cache.client, device, model)
    data = response.get("data")
    if data is None:
        return {}
    try:
        return DeviceState.model_validate(data).model_dump(by_alias=True, exclude_unset=True)
    except ValidationError as e:
        raise GoveeApiError("Unexpected device state payload", payload=response, item_index=i) from e


async def device_control(ctx: NodeContext, cache: BatchCache, i: int) -> Record:
    device = ctx.get_node_parameter("device", i)
    model = ctx.get_node_parameter("model", i)
    if _validation_enabled(ctx, i):
        command = ctx.get_node_parameter("command", i)
        _check_supported(await cache.find_device(device), device, [command], i, "Device")
    return await control_device(cache.client, device, model, _command(ctx, Resource.DEVICE, i))


async def device_multi_control(ctx: NodeContext, cache: BatchCache, i: int) -> List[Record]:
    device = ctx.get_node_parameter("device", i)
    model = ctx.get_node_parameter("model", i)
    commands = parse_commands(ctx.get_node_parameter("commands", i), i)
    if _validation_enabled(ctx, i):
        _check_supported(await cache.find_device(device), device, [c.name for c in commands], i, "Device")

    cmds = [c.to_cmd(normalize_command_value(c.name, c.value)) for c in commands]
    results = []
    for cmd in cmds:
        response = await control_device(cache.client, device, model, cmd)
        results.append({**response, "_command": cmd["name"]})
    return results


# ---- appliance ----

async def appliance_get_all(ctx: NodeContext, cache: BatchCache, i: int) -> List[Record]:
    return [a.to_output() for a in await cache.appliances()]


async def appliance_control(ctx: NodeContext, cache: BatchCache, i: int) -> Record:
    device = ctx.get_node_parameter("device", i)
    model = ctx.get_node_parameter("model", i)
    if _validation_enabled(ctx, i):
        command = ctx.get_node_parameter("command", i)
        _check_supported(await cache.find_appliance(device), device, [command], i, "Appliance")
    return await control_appliance(cache.client, device, model, _command(ctx, Resource.APPLIANCE, i))


HANDLERS: Dict[Tuple[Resource, Operation], Handler] = {
    (Resource.DEVICE, Operation.GET_ALL): device_get_all,
    (Resource.DEVICE, Operation.GET): device_get,
    (Resource.DEVICE, Operation.GET_CAPABILITIES): device_get_capabilities,
    (Resource.DEVICE, Operation.GET_STATE): device_get_state,
    (Resource.DEVICE, Operation.CONTROL): device_control,
    (Resource.DEVICE, Operation.MULTI_CONTROL): device_multi_control,
    (Resource.APPLIANCE, Operation.GET_ALL): appliance_get_all,
    (Resource.APPLIANCE, Operation.CONTROL): appliance_control,
}


def resolve_handler(resource: Any, operation: Any) -> Handler:
    try:
        res = Resource(resource)
    except ValueError:
        raise UnknownResourceError(f"Unknown resource: {resource}") from None
    try:
        handler = HANDLERS.get((res, Operation(operation)))
    except ValueError:
        handler = None
    if handler is None:
        raise UnknownOperationError(f"Unknown operation: {operation}")
    return handler


async def execute(ctx: NodeContext, transport: Optional[httpx.AsyncBaseTransport] = None) -> List[OutputItem]:
    handler = resolve_handler(
        ctx.get_node_parameter("resource", 0),
        ctx.get_node_parameter("operation", 0),
    )
    out: List[OutputItem] = []
    async with make_client(transport) as client:
        cache = BatchCache(client)
        for i in range(len(ctx.items)):
            try:
                result = await handler(ctx, cache, i)
            except Exception as e:
                if isinstance(e, GoveeError) and e.item_index is None:
                    e.item_index = i
                if not ctx.continue_on_fail:
                    raise
                log.warning("Item %d failed, continuing: %s", i, e)
                out.append(OutputItem(json={"error": str(e)}, paired_item=i))
                continue
            rows = result if isinstance(result, list) else [result]
            out.extend(OutputItem(json=row, paired_item=i) for row in rows)
    return out
