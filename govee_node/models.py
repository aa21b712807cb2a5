from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Dict, List, Optional

DEVICE_COMMANDS = ("turn", "brightness", "color", "colorTem")
APPLIANCE_COMMANDS = ("turn", "mode")

class _Record(BaseModel):
    # keep fields the API adds later so records round-trip to output untouched
    model_config = ConfigDict(extra="allow", populate_by_name=True)

class ColorTemRange(_Record):
    min: Optional[int] = None
    max: Optional[int] = None

class ColorTemProperty(_Record):
    range: Optional[ColorTemRange] = None

class ModeOption(_Record):
    name: Optional[str] = None
    value: Any = None

class ModeProperty(_Record):
    options: List[ModeOption] = Field(default_factory=list)

    @field_validator("options", mode="before")
    @classmethod
    def options_none_as_empty(cls, v: Any) -> Any:
        return [] if v is None else v

class DeviceProperties(_Record):
    color_tem: Optional[ColorTemProperty] = Field(default=None, alias="colorTem")
    mode: Optional[ModeProperty] = None

class Device(_Record):
    """A device or appliance as returned by the list endpoints."""
    device: str
    model: str
    device_name: Optional[str] = Field(default=None, alias="deviceName")
    controllable: Optional[bool] = None
    retrievable: Optional[bool] = None
    support_cmds: List[str] = Field(default_factory=list, alias="supportCmds")
    properties: Optional[DeviceProperties] = None

    @field_validator("support_cmds", mode="before")
    @classmethod
    def support_cmds_none_as_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    def supports(self, command: str) -> bool:
        return command in self.support_cmds

    def mode_options(self) -> List[ModeOption]:
        if self.properties and self.properties.mode:
            return [o for o in self.properties.mode.options if o.name is not None]
        return []

    def capabilities(self) -> Dict[str, Any]:
        out = self.to_output()
        return {k: out.get(k) for k in (
            "device", "deviceName", "model", "controllable",
            "retrievable", "supportCmds", "properties",
        )}

    def to_output(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True)

class DeviceState(_Record):
    device: Optional[str] = None
    model: Optional[str] = None
    properties: List[Any] = Field(default_factory=list)

    @field_validator("properties", mode="before")
    @classmethod
    def properties_none_as_empty(cls, v: Any) -> Any:
        return [] if v is None else v

class Command(BaseModel):
    name: str
    value: Any = None

    def to_cmd(self, value: Any) -> Dict[str, Any]:
        # a command given without a value is sent without one
        if "value" not in self.model_fields_set:
            return {"name": self.name}
        return {"name": self.name, "value": value}

class RGB(BaseModel):
    r: int = Field(ge=0, le=255)
    g: int = Field(ge=0, le=255)
    b: int = Field(ge=0, le=255)

class OptionItem(BaseModel):
    name: str
    value: Any

class OutputItem(BaseModel):
    """One output row paired with the input item that produced it."""
    json_: Dict[str, Any] = Field(alias="json")
    paired_item: int = Field(alias="pairedItem")

    model_config = ConfigDict(populate_by_name=True)
