# Maps resource+command to the node parameter holding its value and the
# conversion applied before the value goes into the control body.
import json
import re
from typing import Any, Callable, Dict, Tuple
from .errors import InvalidFormatError
from .models import RGB

HEX_COLOR = re.compile(r"#?([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})", re.IGNORECASE)

def hex_to_rgb(hex_color: str) -> Dict[str, int]:
    """Convert ``#RRGGBB`` (``#`` optional, any case) to ``{"r", "g", "b"}``."""
    m = HEX_COLOR.fullmatch(hex_color) if isinstance(hex_color, str) else None
    if not m:
        raise InvalidFormatError(f"Invalid hex color: {hex_color}")
    r, g, b = (int(part, 16) for part in m.groups())
    return RGB(r=r, g=g, b=b).model_dump()

GENERIC_VALUE_PARAM = "genericCommandValue"

COMMAND_VALUE_MAP: Dict[str, Dict[str, Tuple[str, Callable[[Any], Any]]]] = {
    "device": {
        "turn": ("turnValue", str),
        "brightness": ("brightnessValue", int),
        "color": ("colorValue", hex_to_rgb),
        "colorTem": ("colorTemValue", int),
    },
    "appliance": {
        "turn": ("turnValue", str),
        "mode": ("modeValue", int),
    },
}

def parse_generic_value(raw: Any) -> Any:
    # pass-through commands: JSON when it parses, the raw string otherwise
    if not isinstance(raw, str):
        return raw
    try:
        return json.loads(raw)
    except ValueError:
        return raw

def value_parameter(resource: str, command: str) -> str:
    entry = COMMAND_VALUE_MAP.get(resource, {}).get(command)
    return entry[0] if entry else GENERIC_VALUE_PARAM

def convert_value(resource: str, command: str, raw: Any) -> Any:
    entry = COMMAND_VALUE_MAP.get(resource, {}).get(command)
    if entry is None:
        return parse_generic_value(raw)
    try:
        return entry[1](raw)
    except (TypeError, ValueError) as e:
        raise InvalidFormatError(f'Invalid value {raw!r} for the "{command}" command') from e

def normalize_command_value(command: str, value: Any) -> Any:
    """Used by multi-command payloads, where values arrive already decoded."""
    if command == "color" and isinstance(value, str):
        return hex_to_rgb(value)
    return value
