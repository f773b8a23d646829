"""Tests for call context and log formatting."""

import asyncio
import io
import json
import logging
import sys

import pytest

from contentstack_mcp.core.context import (
    generate_correlation_id,
    get_correlation_id,
    get_tool_name,
    request_context,
)
from contentstack_mcp.core.logging_config import (
    ROOT_LOGGER,
    HumanReadableFormatter,
    StructuredFormatter,
    configure_logging,
)


@pytest.fixture
def restore_root_logger():
    logger = logging.getLogger(ROOT_LOGGER)
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)


class TestRequestContext:
    def test_correlation_id_format(self):
        corr_id = generate_correlation_id()
        assert corr_id.startswith("req_")
        assert len(corr_id) == len("req_") + 12

    def test_values_set_and_reset(self):
        with request_context(tool="contentstack_get_entry", correlation_id="req_x") as ctx:
            assert get_correlation_id() == "req_x"
            assert get_tool_name() == "contentstack_get_entry"
            assert ctx.to_dict()["tool"] == "contentstack_get_entry"
        assert get_correlation_id() == ""
        assert get_tool_name() == ""

    @pytest.mark.asyncio
    async def test_concurrent_tasks_isolated(self):
        async def run(tool):
            with request_context(tool=tool):
                await asyncio.sleep(0)
                return get_tool_name(), get_correlation_id()

        (tool_a, corr_a), (tool_b, corr_b) = await asyncio.gather(run("a"), run("b"))
        assert (tool_a, tool_b) == ("a", "b")
        assert corr_a != corr_b


class TestFormatters:
    def test_structured_output(self, restore_root_logger):
        stream = io.StringIO()
        configure_logging(level=logging.DEBUG, format="structured", stream=stream)
        logger = logging.getLogger(f"{ROOT_LOGGER}.tools.dispatcher")

        with request_context(tool="contentstack_get_assets", correlation_id="req_abc"):
            logger.info("Tool failed", extra={"error": {"status_code": 500}})

        entry = json.loads(stream.getvalue().strip())
        assert entry["level"] == "INFO"
        assert entry["message"] == "Tool failed"
        assert entry["correlation_id"] == "req_abc"
        assert entry["tool"] == "contentstack_get_assets"
        assert entry["extra"] == {"error": {"status_code": 500}}

    def test_human_output(self, restore_root_logger):
        stream = io.StringIO()
        configure_logging(level="INFO", format="human", stream=stream)
        logger = logging.getLogger(f"{ROOT_LOGGER}.server")

        with request_context(correlation_id="req_def"):
            logger.info("Server created")

        line = stream.getvalue().strip()
        assert "[INFO] [req_def] server: Server created" in line

    def test_reconfigure_replaces_handler(self, restore_root_logger):
        configure_logging(stream=io.StringIO())
        logger = configure_logging(stream=io.StringIO())
        assert len(logger.handlers) == 1

    def test_formatter_classes(self):
        record = logging.LogRecord(ROOT_LOGGER, logging.WARNING, __file__, 1, "msg %s", ("x",), None)
        assert json.loads(StructuredFormatter().format(record))["message"] == "msg x"
        assert HumanReadableFormatter(include_timestamp=False).format(record) == "[WARNING] contentstack_mcp: msg x"

    def test_structured_exception_and_unserializable_extra(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = logging.LogRecord(
                ROOT_LOGGER, logging.ERROR, __file__, 1, "failed", None, sys.exc_info()
            )
        record.payload = object()

        entry = json.loads(StructuredFormatter().format(record))

        assert "RuntimeError: boom" in entry["exception"]
        assert entry["extra"]["payload"].startswith("<object object")
        assert entry["correlation_id"] == "-"
