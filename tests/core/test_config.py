# Copyright 2026 Firefly Software Solutions Inc.
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
"""Tests for Config loading and @config_properties binding."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from unittest.mock import patch

import pytest

from sharedcsrf.core.config import Config, config_properties, env_key_for
from sharedcsrf.security.properties import CsrfProperties


class TestConfig:
    def test_get_nested_value(self):
        config = Config({"sharedcsrf": {"csrf": {"cookie_secure": False}}})
        assert config.get("sharedcsrf.csrf.cookie_secure") is False

    def test_get_with_default(self):
        assert Config({}).get("missing.key", "default") == "default"

    def test_env_key_for(self):
        assert env_key_for("sharedcsrf.csrf.secret") == "SHAREDCSRF_CSRF_SECRET"
        assert env_key_for("app.cookie-domain") == "SHAREDCSRF_APP_COOKIE_DOMAIN"

    def test_env_var_override(self):
        with patch.dict(os.environ, {"SHAREDCSRF_CSRF_SECRET": "from-env"}):
            config = Config({"sharedcsrf": {"csrf": {"secret": "from-file"}}})
            assert config.get("sharedcsrf.csrf.secret") == "from-env"

    def test_placeholder_with_default(self):
        with patch.dict(os.environ, {}, clear=True):
            config = Config({"sharedcsrf": {"csrf": {"secret": "${CSRF_SECRET:}"}}})
            assert config.get("sharedcsrf.csrf.secret") == ""

    def test_placeholder_from_env(self):
        with patch.dict(os.environ, {"CSRF_SECRET": "abc"}, clear=True):
            config = Config({"sharedcsrf": {"csrf": {"secret": "${CSRF_SECRET:}"}}})
            assert config.get("sharedcsrf.csrf.secret") == "abc"

    def test_unresolvable_placeholder(self):
        with patch.dict(os.environ, {}, clear=True):
            config = Config({"a": "${NOPE}"})
            with pytest.raises(ValueError, match="Cannot resolve placeholder"):
                config.get("a")


class TestConfigSources:
    def test_package_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            config = Config.from_sources(Path("/nonexistent"))
            assert config.get("sharedcsrf.csrf.cookie_secure") is True
            assert config.get("sharedcsrf.logging.format") == "console"

    def test_yaml_and_profile_overlay(self, tmp_path: Path):
        (tmp_path / "sharedcsrf.yaml").write_text("sharedcsrf:\n  csrf:\n    cookie_domain: example.com\n")
        (tmp_path / "sharedcsrf-dev.yaml").write_text("sharedcsrf:\n  csrf:\n    cookie_secure: false\n")

        config = Config.from_sources(tmp_path, active_profiles=["dev"])

        assert config.get("sharedcsrf.csrf.cookie_domain") == "example.com"
        assert config.get("sharedcsrf.csrf.cookie_secure") is False
        assert len(config.loaded_sources) == 3

    def test_toml_in_config_dir(self, tmp_path: Path):
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "sharedcsrf.toml").write_text('[sharedcsrf.csrf]\ncookie_domain = "toml.example"\n')

        config = Config.from_sources(tmp_path, load_defaults=False)

        assert config.get("sharedcsrf.csrf.cookie_domain") == "toml.example"

    def test_from_file(self, tmp_path: Path):
        path = tmp_path / "custom.yaml"
        path.write_text("sharedcsrf:\n  csrf:\n    bearer_bypass: true\n")
        assert Config.from_file(path).get("sharedcsrf.csrf.bearer_bypass") is True


class TestBind:
    def test_bind_csrf_properties(self, secret_hex: str):
        config = Config({
            "sharedcsrf": {
                "csrf": {
                    "secret": secret_hex,
                    "cookie_secure": False,
                    "exclude_patterns": ["/hooks/*"],
                }
            }
        })
        props = config.bind(CsrfProperties)
        assert props.secret == secret_hex
        assert props.cookie_secure is False
        assert props.exclude_patterns == ["/hooks/*"]
        assert props.form_field_enabled is True

    def test_bind_coerces_env_strings(self):
        env = {
            "SHAREDCSRF_CSRF_COOKIE_SECURE": "false",
            "SHAREDCSRF_CSRF_EXCLUDE_PATTERNS": "/a/*, /b",
        }
        with patch.dict(os.environ, env):
            props = Config({}).bind(CsrfProperties)
        assert props.cookie_secure is False
        assert props.exclude_patterns == ["/a/*", "/b"]

    def test_bind_uses_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            props = Config({}).bind(CsrfProperties)
        assert props == CsrfProperties()

    def test_bind_requires_decorator(self):
        @dataclass
        class Plain:
            value: int = 1

        with pytest.raises(ValueError, match="not decorated"):
            Config({}).bind(Plain)

    def test_bind_custom_dataclass(self):
        @config_properties(prefix="app.pool")
        @dataclass
        class PoolConfig:
            size: int = 5

        with patch.dict(os.environ, {"SHAREDCSRF_APP_POOL_SIZE": "9"}):
            assert Config({}).bind(PoolConfig).size == 9
