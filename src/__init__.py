#!/usr/bin/env python3
"""
catlink Package

CAT command/response link driver: polls a serial-attached transceiver,
turns its responses into status snapshots and sends configured commands.
"""

from .version import (
    __version__, __build_date__, __author__, __description__,
    VERSION, BUILD_DATE, AUTHOR, get_version_string, get_full_version_info
)
from .config import ConfigService
from .errors import (
    CatError, MissingDependency, InvalidRigID, InvalidConfig, EmptyStatePrefix,
    NotInitialized, NotStarted, TransportOpenFailed, TransportCloseFailed,
    CommandNotFound, ArityMismatch, QueueFull, QueueClosed, ConfigError,
    TransportError, TransportTimeout, TransportReadError, TransportWriteError
)
from .logging_cfg import CatLogger, configure_logging, get_logger
from .models import (
    CommandName, StatusTag, ServiceState, SerialConfig, CatConfig, Marker,
    ValueMapping, StateDefinition, CommandDefinition, OutboundCommand,
    MatchedLine, RequiredConfigs, RigConfig
)
from .schema import ConfigValidator
from .service import CatService

__all__ = [
    '__version__', '__build_date__', '__author__', '__description__',
    'VERSION', 'BUILD_DATE', 'AUTHOR', 'get_version_string', 'get_full_version_info',
    'ConfigService', 'ConfigValidator', 'CatService', 'CatLogger',
    'configure_logging', 'get_logger',
    'CatError', 'MissingDependency', 'InvalidRigID', 'InvalidConfig', 'EmptyStatePrefix',
    'NotInitialized', 'NotStarted', 'TransportOpenFailed', 'TransportCloseFailed',
    'CommandNotFound', 'ArityMismatch', 'QueueFull', 'QueueClosed', 'ConfigError',
    'TransportError', 'TransportTimeout', 'TransportReadError', 'TransportWriteError',
    'CommandName', 'StatusTag', 'ServiceState', 'SerialConfig', 'CatConfig', 'Marker',
    'ValueMapping', 'StateDefinition', 'CommandDefinition', 'OutboundCommand',
    'MatchedLine', 'RequiredConfigs', 'RigConfig',
]
