# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Centralized host-side configuration for rjy."""

import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from rjy.models.host_config import HostConfigModel, SSHConfig
from rjy.paths import HostPaths

logger = logging.getLogger(__name__)


class HostConfig:
    """Manages host-side configuration from ~/.config/rjy/config.yml."""

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path or HostPaths.config_file()
        self.model = self._load()

    def _load(self) -> HostConfigModel:
        """Load configuration from file, falling back to defaults."""
        if not self.config_path.exists():
            return HostConfigModel()

        try:
            with open(self.config_path) as f:
                raw_config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load config from {self.config_path}: {e}")
            return HostConfigModel()

        try:
            return HostConfigModel.model_validate(raw_config)
        except ValidationError as e:
            logger.warning(f"Config validation errors in {self.config_path}: {e}")
            return HostConfigModel()

    @property
    def ssh(self) -> SSHConfig:
        """SSH launch settings."""
        return self.model.ssh


# Singleton instance
_config: Optional[HostConfig] = None


def get_config() -> HostConfig:
    """Get the global host configuration."""
    global _config
    if _config is None:
        _config = HostConfig()
    return _config


def reset_config() -> None:
    """Forget the cached configuration (next get_config() reloads it)."""
    global _config
    _config = None
