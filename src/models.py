#!/usr/bin/env python3
"""
Data model for the catlink driver.

Rig configuration objects are frozen dataclasses: they are loaded once at
initialization and shared read-only between the worker threads.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple


class ServiceState(Enum):
    """CAT service lifecycle states."""
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    RUNNING = "running"
    STOPPED = "stopped"


class CommandName(str, Enum):
    """Well-known command names used in rig configurations."""
    INIT = "INIT"
    READ = "READ"
    PLAYBACK = "PLAYBACK"


class StatusTag(str, Enum):
    """Well-known status tags produced by markers."""
    IDENTITY = "IDENTITY"
    VFOA_FREQ = "VFOAFREQ"
    VFOB_FREQ = "VFOBFREQ"
    SPLIT = "SPLIT"
    SELECT = "SELECT"
    MAIN_MODE = "MAINMODE"
    SUB_MODE = "SUBMODE"
    TX_PWR = "TXPWR"


@dataclass(frozen=True)
class SerialConfig:
    port: str = ""
    baud_rate: int = 0
    data_bits: int = 8
    stop_bits: float = 1
    parity: str = "N"
    rts_cts: bool = False
    read_timeout_ms: int = 0
    write_timeout_ms: int = 0
    line_delimiter: str = ";"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SerialConfig':
        return cls(**_known_fields(cls, data))


@dataclass(frozen=True)
class CatConfig:
    """Timing and queue sizing for one rig link."""
    listener_rate_limiter_interval_ms: int = 0
    listener_read_timeout_ms: int = 0
    send_channel_size: int = 0
    processing_channel_size: int = 0
    status_channel_size: int = 1

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CatConfig':
        return cls(**_known_fields(cls, data))


@dataclass(frozen=True)
class ValueMapping:
    key: str
    value: str


@dataclass(frozen=True)
class Marker:
    """Byte range within a line payload, its status tag and optional value remap."""
    index: int
    length: int
    tag: str
    value_mappings: Tuple[ValueMapping, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Marker':
        mappings = tuple(
            ValueMapping(key=str(m.get('key', '')), value=str(m.get('value', '')))
            for m in data.get('value_mappings') or ()
        )
        return cls(
            index=data.get('index', 0),
            length=data.get('length', 0),
            tag=data.get('tag', ''),
            value_mappings=mappings,
        )


@dataclass(frozen=True)
class StateDefinition:
    prefix: str
    markers: Tuple[Marker, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StateDefinition':
        return cls(
            prefix=data.get('prefix', ''),
            markers=tuple(Marker.from_dict(m) for m in data.get('markers') or ()),
        )


@dataclass(frozen=True)
class CommandDefinition:
    name: str
    template: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CommandDefinition':
        return cls(name=data.get('name', ''), template=data.get('template', ''))


@dataclass(frozen=True)
class OutboundCommand:
    name: str
    formatted_text: str


@dataclass(frozen=True)
class MatchedLine:
    """A recognized line on its way from the listener to the processor."""
    prefix: str
    markers: Tuple[Marker, ...]
    data: str


@dataclass(frozen=True)
class RequiredConfigs:
    default_rig_id: int = 0


@dataclass(frozen=True)
class RigConfig:
    id: int = 0
    name: str = ""
    serial: SerialConfig = field(default_factory=SerialConfig)
    cat: CatConfig = field(default_factory=CatConfig)
    states: Tuple[StateDefinition, ...] = ()
    commands: Tuple[CommandDefinition, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RigConfig':
        """Build a RigConfig from its JSON form. No validation is done here."""
        return cls(
            id=data.get('id', 0),
            name=data.get('name', ''),
            serial=SerialConfig.from_dict(data.get('serial') or {}),
            cat=CatConfig.from_dict(data.get('cat') or {}),
            states=tuple(StateDefinition.from_dict(s) for s in data.get('states') or ()),
            commands=tuple(CommandDefinition.from_dict(c) for c in data.get('commands') or ()),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _known_fields(cls, data: Dict[str, Any]) -> Dict[str, Any]:
    names = cls.__dataclass_fields__.keys()
    return {key: value for key, value in data.items() if key in names}
