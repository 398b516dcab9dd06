"""Helpers that build JSON-schema parameter objects for function calling."""

import json
from typing import Any


class Param:
    """A typed JSON-schema parameter with an optional description."""

    def __init__(self, type_: str, description: str | None = None):
        self._type = type_
        self._description = description

    @property
    def type(self) -> str:
        return self._type

    @property
    def description(self) -> str | None:
        return self._description

    def to_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {"type": self._type}
        if self._description is not None:
            schema["description"] = self._description
        return schema

    def __str__(self) -> str:
        return json.dumps(self.to_schema())


class StringParam(Param):
    def __init__(self, description: str | None = None):
        super().__init__("string", description)


class ObjectParam(Param):
    """Object parameter. Unknown properties are always rejected."""

    def __init__(self, description: str | None = None):
        super().__init__("object", description)
        self.properties: dict[str, Param] | None = None
        self.required: list[str] | None = None
        self.additional_properties = False

    def add_property(self, name: str, param: Param) -> None:
        if self.properties is None:
            self.properties = {}
        self.properties[name] = param

    def add_required_property(self, name: str, param: Param) -> None:
        self.add_property(name, param)
        if self.required is None:
            self.required = []
        if name not in self.required:
            self.required.append(name)

    def to_schema(self) -> dict[str, Any]:
        schema = super().to_schema()
        if self.properties is not None:
            schema["properties"] = {name: param.to_schema() for name, param in self.properties.items()}
        if self.required is not None:
            schema["required"] = list(self.required)
        schema["additionalProperties"] = self.additional_properties
        return schema
