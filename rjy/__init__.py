# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""rjy - Manage SSH tunnels to remote Jupyter notebook servers."""

__version__ = "0.1.0"
