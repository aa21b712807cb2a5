"""Static description of the Govee node: resources, operations and fields.

Fields follow the host's property format. A field is visible when every key in
``displayOptions.show`` matches the current parameter values; parameter lookup
falls back to the default of the visible field with that name.
"""
from enum import Enum
from typing import Any, Dict, List, Optional
from .models import APPLIANCE_COMMANDS, DEVICE_COMMANDS


class Resource(str, Enum):
    DEVICE = "device"
    APPLIANCE = "appliance"


class Operation(str, Enum):
    GET_ALL = "getAll"
    GET = "get"
    GET_CAPABILITIES = "getCapabilities"
    GET_STATE = "getState"
    CONTROL = "control"
    MULTI_CONTROL = "multiControl"


OPERATIONS: Dict[Resource, List[Dict[str, str]]] = {
    Resource.DEVICE: [
        {"name": "Control", "value": "control", "description": "Send a command to a device", "action": "Control a device"},
        {"name": "Get", "value": "get", "description": "Get a single device", "action": "Get a device"},
        {"name": "Get Capabilities", "value": "getCapabilities", "description": "Get the commands and properties a device supports", "action": "Get device capabilities"},
        {"name": "Get Many", "value": "getAll", "description": "Get a list of many devices", "action": "Get many devices"},
        {"name": "Get State", "value": "getState", "description": "Get the current state of a device", "action": "Get device state"},
        {"name": "Multi-Command", "value": "multiControl", "description": "Send several commands to a device in order", "action": "Send multiple commands to a device"},
    ],
    Resource.APPLIANCE: [
        {"name": "Control", "value": "control", "description": "Send a command to an appliance", "action": "Control an appliance"},
        {"name": "Get Many", "value": "getAll", "description": "Get a list of many appliances", "action": "Get many appliances"},
    ],
}


def _show(resource: Resource, operations: List[str], **extra: List[str]) -> Dict[str, Any]:
    return {"show": {"resource": [resource.value], "operation": operations, **extra}}


_TURN_OPTIONS = [{"name": "On", "value": "on"}, {"name": "Off", "value": "off"}]

DEVICE_FIELDS: List[Dict[str, Any]] = [
    {
        "displayName": "Device",
        "name": "device",
        "type": "options",
        "typeOptions": {"loadOptionsMethod": "getDevices"},
        "required": True,
        "default": "",
        "displayOptions": _show(Resource.DEVICE, ["get", "getState", "control", "multiControl"]),
        "description": "The MAC address of the Govee device (e.g., AA:BB:CC:DD:EE:FF:00:11)",
    },
    {
        "displayName": "Device",
        "name": "device",
        "type": "options",
        "typeOptions": {"loadOptionsMethod": "getDevices"},
        "default": "",
        "displayOptions": _show(Resource.DEVICE, ["getCapabilities"]),
        "description": "Leave empty to return the capabilities of every device",
    },
    {
        "displayName": "Device Model",
        "name": "model",
        "type": "options",
        "typeOptions": {"loadOptionsMethod": "getDeviceModels", "loadOptionsDependsOn": ["device"]},
        "required": True,
        "default": "",
        "displayOptions": _show(Resource.DEVICE, ["getState", "control", "multiControl"]),
        "description": "The model number of the Govee device (e.g., H6159)",
    },
    {
        "displayName": "Command",
        "name": "command",
        "type": "options",
        "typeOptions": {"loadOptionsMethod": "getDeviceCommands", "loadOptionsDependsOn": ["device"]},
        "required": True,
        "default": "turn",
        "displayOptions": _show(Resource.DEVICE, ["control"]),
        "description": "The command to execute on the device",
    },
    {
        "displayName": "Turn Value",
        "name": "turnValue",
        "type": "options",
        "options": _TURN_OPTIONS,
        "required": True,
        "default": "on",
        "displayOptions": _show(Resource.DEVICE, ["control"], command=["turn"]),
        "description": "Whether to turn the device on or off",
    },
    {
        "displayName": "Brightness",
        "name": "brightnessValue",
        "type": "number",
        "typeOptions": {"minValue": 0, "maxValue": 100},
        "required": True,
        "default": 100,
        "displayOptions": _show(Resource.DEVICE, ["control"], command=["brightness"]),
        "description": "Brightness level from 0 (off) to 100 (max)",
    },
    {
        "displayName": "Color",
        "name": "colorValue",
        "type": "color",
        "required": True,
        "default": "#FFFFFF",
        "displayOptions": _show(Resource.DEVICE, ["control"], command=["color"]),
        "description": "Hex color to set, e.g. #FF8800",
    },
    {
        "displayName": "Color Temperature",
        "name": "colorTemValue",
        "type": "number",
        "required": True,
        "default": 5000,
        "displayOptions": _show(Resource.DEVICE, ["control"], command=["colorTem"]),
        "description": "Color temperature in Kelvin (valid range depends on device, typically 2000-9000)",
    },
    {
        "displayName": "Command Value",
        "name": "genericCommandValue",
        "type": "string",
        "default": "",
        "displayOptions": {"show": {"resource": ["device"], "operation": ["control"]},
                           "hide": {"command": list(DEVICE_COMMANDS)}},
        "description": "Value for commands without a dedicated field; parsed as JSON when possible",
    },
    {
        "displayName": "Commands",
        "name": "commands",
        "type": "json",
        "required": True,
        "default": "[]",
        "displayOptions": _show(Resource.DEVICE, ["multiControl"]),
        "description": 'JSON array of commands, e.g. [{"name": "turn", "value": "on"}, {"name": "brightness", "value": 50}]',
    },
    {
        "displayName": "Options",
        "name": "options",
        "type": "collection",
        "default": {},
        "displayOptions": _show(Resource.DEVICE, ["control", "multiControl"]),
        "options": [
            {
                "displayName": "Validate Command",
                "name": "validateCommand",
                "type": "boolean",
                "default": False,
                "description": "Whether to check the command against the device's supported commands before sending it",
            },
        ],
    },
]

APPLIANCE_FIELDS: List[Dict[str, Any]] = [
    {
        "displayName": "Appliance",
        "name": "device",
        "type": "options",
        "typeOptions": {"loadOptionsMethod": "getAppliances"},
        "required": True,
        "default": "",
        "displayOptions": _show(Resource.APPLIANCE, ["control"]),
        "description": "The MAC address of the Govee appliance",
    },
    {
        "displayName": "Appliance Model",
        "name": "model",
        "type": "options",
        "typeOptions": {"loadOptionsMethod": "getApplianceModels", "loadOptionsDependsOn": ["device"]},
        "required": True,
        "default": "",
        "displayOptions": _show(Resource.APPLIANCE, ["control"]),
        "description": "The model number of the Govee appliance (e.g., H7121)",
    },
    {
        "displayName": "Command",
        "name": "command",
        "type": "options",
        "typeOptions": {"loadOptionsMethod": "getApplianceCommands", "loadOptionsDependsOn": ["device"]},
        "required": True,
        "default": "turn",
        "displayOptions": _show(Resource.APPLIANCE, ["control"]),
        "description": "The command to execute on the appliance",
    },
    {
        "displayName": "Turn Value",
        "name": "turnValue",
        "type": "options",
        "options": _TURN_OPTIONS,
        "required": True,
        "default": "on",
        "displayOptions": _show(Resource.APPLIANCE, ["control"], command=["turn"]),
        "description": "Whether to turn the appliance on or off",
    },
    {
        "displayName": "Mode",
        "name": "modeValue",
        "type": "options",
        "typeOptions": {"loadOptionsMethod": "getApplianceModes", "loadOptionsDependsOn": ["device"]},
        "required": True,
        "default": 1,
        "displayOptions": _show(Resource.APPLIANCE, ["control"], command=["mode"]),
        "description": "The mode ID to set on the appliance",
    },
    {
        "displayName": "Command Value",
        "name": "genericCommandValue",
        "type": "string",
        "default": "",
        "displayOptions": {"show": {"resource": ["appliance"], "operation": ["control"]},
                           "hide": {"command": list(APPLIANCE_COMMANDS)}},
        "description": "Value for commands without a dedicated field; parsed as JSON when possible",
    },
    {
        "displayName": "Options",
        "name": "options",
        "type": "collection",
        "default": {},
        "displayOptions": _show(Resource.APPLIANCE, ["control"]),
        "options": [
            {
                "displayName": "Validate Command",
                "name": "validateCommand",
                "type": "boolean",
                "default": False,
                "description": "Whether to check the command against the appliance's supported commands before sending it",
            },
        ],
    },
]

NODE_DESCRIPTION: Dict[str, Any] = {
    "displayName": "Govee",
    "name": "govee",
    "version": 1,
    "description": (
        "Control and manage Govee smart devices. Rate limits: 10,000 req/day overall; "
        "10 req/min for device list; 10 req/min/device for control and state."
    ),
    "credentials": [{"name": "goveeApi", "required": True}],
    "properties": [
        {
            "displayName": "Resource",
            "name": "resource",
            "type": "options",
            "options": [
                {"name": "Appliance", "value": "appliance", "description": "Manage Govee appliances (humidifiers, purifiers, etc.)"},
                {"name": "Device", "value": "device", "description": "Manage Govee devices (lights, plugs, switches)"},
            ],
            "default": "device",
        },
        *[
            {
                "displayName": "Operation",
                "name": "operation",
                "type": "options",
                "displayOptions": {"show": {"resource": [resource.value]}},
                "options": options,
                "default": "getAll",
            }
            for resource, options in OPERATIONS.items()
        ],
        *DEVICE_FIELDS,
        *APPLIANCE_FIELDS,
    ],
}


def is_visible(prop: Dict[str, Any], values: Dict[str, Any]) -> bool:
    rules = prop.get("displayOptions") or {}
    for key, allowed in (rules.get("show") or {}).items():
        if values.get(key) not in allowed:
            return False
    for key, hidden in (rules.get("hide") or {}).items():
        if values.get(key) in hidden:
            return False
    return True


def find_property(name: str, values: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """The declared field called ``name`` that is visible for ``values``."""
    for prop in NODE_DESCRIPTION["properties"]:
        if prop["name"] == name and is_visible(prop, values):
            return prop
    return None
