# Copyright 2026 Cisco Systems, Inc. and its affiliates
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
Tests for configuration module.
"""

import os
from unittest.mock import patch

import pytest

from zip_checker.config.config import Config
from zip_checker.config.constants import ZipCheckerConstants


def _clean_env() -> dict[str, str]:
    return {k: v for k, v in os.environ.items() if not k.startswith("ZIP_CHECKER_")}


class TestConfigInitialization:
    """Test Config class initialization."""

    def test_config_with_defaults(self):
        with patch.dict("os.environ", _clean_env(), clear=True):
            config = Config()

            assert config.max_upload_size_mb == 50
            assert config.max_upload_size_bytes == 50 * 1024 * 1024
            assert config.signatures_path is None
            assert config.host == "localhost"
            assert config.port == 8090

    def test_config_with_custom_values(self):
        config = Config(max_upload_size_mb=5, signatures_path="/tmp/sigs.yaml", host="0.0.0.0", port=9000)

        assert config.max_upload_size_mb == 5
        assert config.signatures_path == "/tmp/sigs.yaml"
        assert config.host == "0.0.0.0"
        assert config.port == 9000

    def test_config_from_env_variables(self):
        with patch.dict(
            "os.environ",
            {
                "ZIP_CHECKER_MAX_UPLOAD_MB": "10",
                "ZIP_CHECKER_SIGNATURES_PATH": "/etc/zip-checker/signatures.yaml",
                "ZIP_CHECKER_HOST": "0.0.0.0",
                "ZIP_CHECKER_PORT": "8181",
            },
        ):
            config = Config.from_env()

            assert config.max_upload_size_mb == 10
            assert config.signatures_path == "/etc/zip-checker/signatures.yaml"
            assert config.host == "0.0.0.0"
            assert config.port == 8181

    def test_explicit_values_win_over_env(self):
        with patch.dict("os.environ", {"ZIP_CHECKER_SIGNATURES_PATH": "/env.yaml"}):
            config = Config(signatures_path="/explicit.yaml")

            assert config.signatures_path == "/explicit.yaml"

    def test_empty_signatures_env_is_ignored(self):
        with patch.dict("os.environ", {"ZIP_CHECKER_SIGNATURES_PATH": ""}):
            assert Config().signatures_path is None


class TestConfigValidation:
    def test_non_integer_upload_limit(self):
        with patch.dict("os.environ", {"ZIP_CHECKER_MAX_UPLOAD_MB": "lots"}):
            with pytest.raises(ValueError, match="ZIP_CHECKER_MAX_UPLOAD_MB"):
                Config()

    def test_non_integer_port(self):
        with patch.dict("os.environ", {"ZIP_CHECKER_PORT": "http"}):
            with pytest.raises(ValueError, match="ZIP_CHECKER_PORT"):
                Config()

    def test_non_positive_upload_limit(self):
        with pytest.raises(ValueError):
            Config(max_upload_size_mb=0)


class TestConfigFromFile:
    def test_load_from_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("# comment\nZIP_CHECKER_MAX_UPLOAD_MB=7\nZIP_CHECKER_PORT=9999\n")

        with patch.dict("os.environ", _clean_env(), clear=True):
            config = Config.from_file(env_file)

            assert config.max_upload_size_mb == 7
            assert config.port == 9999

    def test_environment_wins_over_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("ZIP_CHECKER_PORT=9999\n")

        with patch.dict("os.environ", {**_clean_env(), "ZIP_CHECKER_PORT": "7000"}, clear=True):
            assert Config.from_file(env_file).port == 7000

    def test_missing_env_file(self, tmp_path):
        with patch.dict("os.environ", _clean_env(), clear=True):
            config = Config.from_file(tmp_path / "missing.env")

            assert config.max_upload_size_mb == 50


class TestConstants:
    def test_defaults(self):
        assert ZipCheckerConstants.DEFAULT_PORT == 8090
        assert ZipCheckerConstants.DEFAULT_MAX_UPLOAD_MB == 50
        assert "json" in ZipCheckerConstants.OUTPUT_FORMATS

    def test_version_matches_package(self):
        from zip_checker import __version__

        assert ZipCheckerConstants.VERSION == __version__
