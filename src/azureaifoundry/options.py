"""Typed per-operation configuration.

The host framework hands over configuration as an untyped mapping. Each
operation parses it exactly once through ``from_bag``: recognized keys with
the right type are kept, anything else is ignored and logged at DEBUG.
Constructing a config directly validates eagerly instead.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
import logging
from typing import Any, ClassVar, Literal, TypeVar

from azureaifoundry.errors import ConfigurationError

logger = logging.getLogger(__name__)

ToolChoice = Literal["auto", "required", "none"]
ValueKind = Literal["int", "number", "str"]

TOOL_CHOICES: frozenset[str] = frozenset({"auto", "required", "none"})

_C = TypeVar("_C", bound="_BagConfig")


def _matches(kind: ValueKind, value: Any) -> bool:
    # bool is an int subclass; never accept it as a number.
    if isinstance(value, bool):
        return False
    match kind:
        case "int":
            return isinstance(value, int)
        case "number":
            return isinstance(value, (int, float))
        case "str":
            return isinstance(value, str)


class _BagConfig:
    """Shared ``from_bag`` parsing for the frozen config dataclasses below."""

    #: Bag key -> (dataclass field, expected kind).
    _BAG_KEYS: ClassVar[dict[str, tuple[str, ValueKind]]] = {}

    @classmethod
    def from_bag(cls: type[_C], bag: Any) -> _C:
        """Build a config from an untyped mapping, a ready instance, or None."""
        if isinstance(bag, cls):
            return bag
        if bag is None:
            return cls()
        if not isinstance(bag, Mapping):
            logger.debug(
                "Ignoring %s config of type %s", cls.__name__, type(bag).__name__
            )
            return cls()

        kwargs: dict[str, Any] = {}
        for key, value in bag.items():
            entry = cls._BAG_KEYS.get(key)
            if entry is None:
                logger.debug("Ignoring unknown %s key %r", cls.__name__, key)
                continue
            field_name, kind = entry
            if value is None:
                continue
            if not _matches(kind, value):
                logger.debug(
                    "Ignoring %s key %r: expected %s, got %s",
                    cls.__name__,
                    key,
                    kind,
                    type(value).__name__,
                )
                continue
            kwargs[field_name] = float(value) if kind == "number" else value
        return cls(**kwargs)

    def _check_kinds(self) -> None:
        kinds = {name: kind for name, kind in self._BAG_KEYS.values()}
        for f in fields(self):  # type: ignore[arg-type]
            value = getattr(self, f.name)
            kind = kinds.get(f.name)
            if value is None or kind is None:
                continue
            if not _matches(kind, value):
                raise ConfigurationError(
                    f"{f.name} must be {_KIND_NAMES[kind]}, got {type(value).__name__}",
                    hint=f"Pass {f.name}=<{_KIND_NAMES[kind]}> or omit it.",
                )


_KIND_NAMES: dict[ValueKind, str] = {
    "int": "an integer",
    "number": "a number",
    "str": "a string",
}


@dataclass(frozen=True)
class ChatConfig(_BagConfig):
    """Chat completion tuning."""

    _BAG_KEYS: ClassVar[dict[str, tuple[str, ValueKind]]] = {
        "maxOutputTokens": ("max_tokens", "int"),
        "temperature": ("temperature", "number"),
        "topP": ("top_p", "number"),
        "toolChoice": ("tool_choice", "str"),
    }

    max_tokens: int | None = None
    temperature: float | None = None
    top_p: float | None = None
    #: Only ``auto``, ``required`` and ``none`` are forwarded, and only with tools.
    tool_choice: str | None = None

    def __post_init__(self) -> None:
        """Validate option shapes early for clear errors."""
        self._check_kinds()

    @property
    def effective_tool_choice(self) -> ToolChoice | None:
        if self.tool_choice in TOOL_CHOICES:
            return self.tool_choice  # type: ignore[return-value]
        return None


@dataclass(frozen=True)
class ImageConfig(_BagConfig):
    """Image generation options."""

    _BAG_KEYS: ClassVar[dict[str, tuple[str, ValueKind]]] = {
        "n": ("n", "int"),
        "size": ("size", "str"),
        "quality": ("quality", "str"),
        "style": ("style", "str"),
        "response_format": ("response_format", "str"),
    }

    n: int = 1
    size: str = "1024x1024"
    quality: str = "standard"
    style: str = "vivid"
    response_format: str = "url"

    def __post_init__(self) -> None:
        """Validate option shapes early for clear errors."""
        self._check_kinds()


@dataclass(frozen=True)
class SpeechConfig(_BagConfig):
    """Text-to-speech options."""

    _BAG_KEYS: ClassVar[dict[str, tuple[str, ValueKind]]] = {
        "voice": ("voice", "str"),
        "response_format": ("response_format", "str"),
        "speed": ("speed", "number"),
    }

    voice: str = "alloy"
    response_format: str = "mp3"
    speed: float = 1.0

    def __post_init__(self) -> None:
        """Validate option shapes early for clear errors."""
        self._check_kinds()


@dataclass(frozen=True)
class TranscriptionConfig(_BagConfig):
    """Speech-to-text options."""

    _BAG_KEYS: ClassVar[dict[str, tuple[str, ValueKind]]] = {
        "language": ("language", "str"),
        "prompt": ("prompt", "str"),
        "response_format": ("response_format", "str"),
        "temperature": ("temperature", "number"),
    }

    language: str | None = None
    prompt: str | None = None
    response_format: str = "json"
    temperature: float | None = None

    def __post_init__(self) -> None:
        """Validate option shapes early for clear errors."""
        self._check_kinds()
