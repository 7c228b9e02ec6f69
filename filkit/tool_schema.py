"""Descriptions of generator tools, the modules they make and manifests."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Mapping, Sequence


class FormatError(ValueError):
    """Raised when a format string cannot be substituted."""


class InvalidToolError(ValueError):
    """Raised when a tool description is malformed or invalid."""


def substitute_params(fmt_string: str, params: Sequence[tuple[str, str]]) -> str:
    """Replace every ``${name}`` in ``fmt_string`` with its value.

    The first pair in ``params`` with a matching name wins.
    """
    result: list[str] = []
    chars = iter(fmt_string)
    for c in chars:
        if c != "$":
            result.append(c)
            continue
        if next(chars, None) != "{":
            raise FormatError("Expected `{' after `$'")
        name: list[str] = []
        for c2 in chars:
            if c2 == "}":
                break
            name.append(c2)
        param = "".join(name)
        if not param:
            raise FormatError("Expected parameter name after $")
        value = next((v for p, v in params if p == param), None)
        if value is None:
            raise FormatError(f"Unknown parameter `${param}' in `{fmt_string}'")
        result.append(str(value))
    return "".join(result)


def _field(data: Mapping[str, Any], key: str, kind: type, err: type[Exception]) -> Any:
    if key not in data:
        raise err(f"missing field `{key}'")
    value = data[key]
    if not isinstance(value, kind):
        raise err(f"field `{key}' must be of type {kind.__name__}")
    return value


def _str_list(data: Mapping[str, Any], key: str, err: type[Exception]) -> list[str]:
    values = _field(data, key, list, err)
    if not all(isinstance(v, str) for v in values):
        raise err(f"field `{key}' must be a list of strings")
    return list(values)


def _str_map(data: Mapping[str, Any], key: str, err: type[Exception]) -> dict[str, str]:
    values = _field(data, key, dict, err)
    if not all(isinstance(k, str) and isinstance(v, str) for k, v in values.items()):
        raise err(f"field `{key}' must map strings to strings")
    return dict(values)


@dataclass
class Module:
    """A module that a tool can generate."""

    parameters: list[str]
    name_format: str
    cli_format: str
    outputs: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Module":
        return cls(
            parameters=_str_list(data, "parameters", InvalidToolError),
            name_format=_field(data, "name_format", str, InvalidToolError),
            cli_format=_field(data, "cli_format", str, InvalidToolError),
            outputs=_str_map(data, "outputs", InvalidToolError),
        )

    def name(self, params: Sequence[tuple[str, str]]) -> str:
        """The generated module name for the given parameter values."""
        return substitute_params(self.name_format, params)

    def cli(self, params: Sequence[tuple[str, str]]) -> str:
        """The tool arguments for the given parameter values."""
        return substitute_params(self.cli_format, params)


@dataclass
class Tool:
    """A tool that generates external modules."""

    name: str
    path: str
    globals: dict[str, str] = field(default_factory=dict)
    modules: dict[str, Module] = field(default_factory=dict)
    requires_out_file: bool | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Tool":
        requires = data.get("requires_out_file")
        if requires is not None and not isinstance(requires, bool):
            raise InvalidToolError("field `requires_out_file' must be a boolean")
        raw_modules = _field(data, "modules", dict, InvalidToolError)
        modules = {}
        for mod_name, mod in raw_modules.items():
            if not isinstance(mod, dict):
                raise InvalidToolError(f"module `{mod_name}' must be a table")
            modules[mod_name] = Module.from_dict(mod)
        return cls(
            name=_field(data, "name", str, InvalidToolError),
            path=_field(data, "path", str, InvalidToolError),
            globals=_str_map(data, "globals", InvalidToolError),
            modules=modules,
            requires_out_file=requires,
        )

    @classmethod
    def from_toml(cls, text: str) -> "Tool":
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as err:
            raise InvalidToolError(str(err)) from err
        return cls.from_dict(data)

    def get_module(self, name: str) -> Module | None:
        """The module called ``name``, or None."""
        return self.modules.get(name)

    def validate(self) -> None:
        """Check that the binary exists and every format string is usable."""
        if not Path(self.path).exists():
            raise InvalidToolError(
                f"tool `{self.name}' does not exist at path `{self.path}'"
            )
        base = list(self.globals.items())
        base.append(("NAME_FORMAT", ""))
        if self.requires_out_file:
            base.append(("OUT_FILE", ""))
        for mod_name, module in self.modules.items():
            params = [(p, "") for p in module.parameters] + base
            try:
                module.name(params)
            except FormatError as err:
                raise InvalidToolError(
                    f"[tool `{self.name}'] Invalid name format for module `{mod_name}': {err}"
                ) from err
            try:
                module.cli(params)
            except FormatError as err:
                raise InvalidToolError(
                    f"[tool `{self.name}'] Invalid CLI command for module `{mod_name}': {err}"
                ) from err


@dataclass(frozen=True)
class Instance:
    """A particular module to generate, with its parameter values."""

    name: str
    parameters: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters", tuple(self.parameters))

    def __str__(self) -> str:
        return f"{self.name}[{', '.join(self.parameters)}]"


def _instance_from_dict(data: Any) -> Instance:
    if not isinstance(data, dict):
        raise ValueError("each module in a manifest must be a table")
    return Instance(
        _field(data, "name", str, ValueError),
        tuple(_str_list(data, "parameters", ValueError)),
    )


@dataclass(frozen=True)
class Manifest:
    """The modules a tool invocation should generate."""

    modules: tuple[Instance, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "modules", tuple(self.modules))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Manifest":
        entries: Iterable[Any] = _field(data, "modules", list, ValueError)
        return cls(tuple(_instance_from_dict(e) for e in entries))

    @classmethod
    def from_toml(cls, text: str) -> "Manifest":
        return cls.from_dict(tomllib.loads(text))


@dataclass
class ToolOutput:
    """The result of running a tool for one instance."""

    name: str = ""
    file: Path = field(default_factory=Path)
    exist_params: dict[str, str] = field(default_factory=dict)