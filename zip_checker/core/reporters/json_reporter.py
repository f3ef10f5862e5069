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
JSON format reporter for scan results.
"""

import json

from ...core.models import ClassificationResult, ScanReport


class JSONReporter:
    """Generates JSON format reports."""

    def __init__(self, pretty: bool = True, include_metadata: bool = False):
        """
        Initialize JSON reporter.

        Args:
            pretty: Indent the output
            include_metadata: Emit the full report object instead of the bare
                results array served by ``/check``
        """
        self.pretty = pretty
        self.include_metadata = include_metadata

    def generate_report(self, data: ScanReport | list[ClassificationResult]) -> str:
        if isinstance(data, ScanReport):
            payload = data.to_dict() if self.include_metadata else [r.to_dict() for r in data.results]
        else:
            payload = [r.to_dict() for r in data]

        if self.pretty:
            return json.dumps(payload, indent=2)
        return json.dumps(payload, separators=(",", ":"))
