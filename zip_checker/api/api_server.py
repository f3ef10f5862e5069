# Copyright 2026 Cisco Systems, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0

"""
Standalone REST API server for Zip Checker.

This module provides a convenience ``run_server()`` entry-point for the
canonical ``app`` in :mod:`zip_checker.api.api`.
"""

from ..config.config import Config


def run_server(host: str | None = None, port: int | None = None, reload: bool = False) -> None:
    """Run the API server.

    Args:
        host: Host to bind to (defaults to ``Config.host``).
        port: Port to bind to (defaults to ``Config.port``).
        reload: Enable auto-reload for development.
    """
    import uvicorn

    config = Config()
    uvicorn.run(
        "zip_checker.api.api:app",
        host=host or config.host,
        port=port or config.port,
        reload=reload,
    )


if __name__ == "__main__":
    run_server()
