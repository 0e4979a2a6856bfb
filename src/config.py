#!/usr/bin/env python3
"""
Configuration service for the catlink driver.
Loads the rig catalogue from a JSON file and resolves the default rig.
"""

import json
import os
from typing import Any, Dict, Optional

from .errors import ConfigError
from .models import RequiredConfigs, RigConfig

CONFIG_FILE = os.path.expanduser('~/.config/catlink/config.json')
CONFIG_ENV_VAR = 'CATLINK_CONFIG'


class ConfigService:
    """Holds the parsed configuration document and answers rig lookups."""

    def __init__(self, config_file: Optional[str] = None):
        self.config_file = config_file or os.environ.get(CONFIG_ENV_VAR) or CONFIG_FILE
        self._document: Dict[str, Any] = {}

    @classmethod
    def from_dict(cls, document: Dict[str, Any]) -> 'ConfigService':
        """Build a service around an in-memory configuration document."""
        service = cls()
        service._document = document
        return service

    def load(self) -> 'ConfigService':
        """Load configuration from file.

        A missing file leaves the document empty; initialization of the CAT
        service then fails on the missing default rig.
        """
        if not os.path.exists(self.config_file):
            self._document = {}
            return self
        try:
            with open(self.config_file, 'r') as f:
                document = json.load(f)
        except (OSError, ValueError) as e:
            raise ConfigError(f"Error loading config {self.config_file}: {e}") from e
        if not isinstance(document, dict):
            raise ConfigError(f"Config {self.config_file} must contain a JSON object")
        self._document = document
        return self

    def required_configs(self) -> RequiredConfigs:
        required = self._document.get('required')
        if not isinstance(required, dict):
            raise ConfigError("Missing 'required' configuration section")
        try:
            default_rig_id = int(required.get('default_rig_id', 0))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid default_rig_id: {e}") from e
        return RequiredConfigs(default_rig_id=default_rig_id)

    def rig_config_by_id(self, rig_id: int) -> RigConfig:
        for rig in self._document.get('rigs') or ():
            if isinstance(rig, dict) and rig.get('id') == rig_id:
                return RigConfig.from_dict(rig)
        raise ConfigError(f"Rig {rig_id} not found in configuration")
