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
"""Tests for StructlogAdapter."""

import logging

from sharedcsrf.core.config import Config
from sharedcsrf.logging.structlog_adapter import StructlogAdapter


class TestStructlogAdapterConfigure:
    def test_configure_with_defaults(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        assert adapter._root_level == "INFO"
        assert adapter._format == "console"

    def test_configure_reads_root_level(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"sharedcsrf": {"logging": {"level": {"root": "DEBUG"}}}}))
        assert adapter._root_level == "DEBUG"

    def test_configure_reads_format(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"sharedcsrf": {"logging": {"format": "json"}}}))
        assert adapter._format == "json"

    def test_configure_reads_per_module_levels(self):
        adapter = StructlogAdapter()
        config = Config({"sharedcsrf": {"logging": {"level": {"root": "INFO", "sharedcsrf.web": "WARNING"}}}})
        adapter.configure(config)
        assert adapter._module_levels == {"sharedcsrf.web": "WARNING"}
        assert logging.getLogger("sharedcsrf.web").level == logging.WARNING


class TestStructlogAdapterLoggers:
    def test_set_level(self):
        adapter = StructlogAdapter()
        adapter.set_level("sharedcsrf.security", "DEBUG")
        assert logging.getLogger("sharedcsrf.security").level == logging.DEBUG
