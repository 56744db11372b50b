# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Pydantic models for host configuration (~/.config/rjy/config.yml)."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SSHConfig(BaseModel):
    """How the SSH forwarding process is launched.

    The forward is always `-N -L {bind_address}:{port}:localhost:{port}`;
    these settings only tune the surrounding command line.
    """

    model_config = ConfigDict(extra="ignore")

    binary: str = "ssh"
    forward_x11: bool = True  # -Y
    bind_address: str = "localhost"
    extra_args: List[str] = Field(default_factory=list)

    @field_validator("binary", "bind_address")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v.strip()


class HostConfigModel(BaseModel):
    """Root of the host configuration file."""

    model_config = ConfigDict(extra="ignore")

    ssh: SSHConfig = Field(default_factory=SSHConfig)
