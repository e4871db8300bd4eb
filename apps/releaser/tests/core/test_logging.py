"""Tests for structlog configuration.

Deliberately minimal: structlog's own suite covers the library. We check
our wrapper and the platform ContextVar.
"""

import asyncio
import logging

import pytest
import structlog

from releaser.core.logging import (
    PlatformLogFilter,
    _inject_context_vars,
    bind_platform,
    configure_structlog,
    get_platform_context,
)


class TestConfigureStructlog:
    def test_configure_does_not_raise_in_debug_mode(self) -> None:
        configure_structlog(debug=True)

    def test_configure_does_not_raise_in_ci_mode(self) -> None:
        configure_structlog(debug=False)

    def test_configure_multiple_times_is_safe(self) -> None:
        configure_structlog(debug=True)
        configure_structlog(debug=False)

    def test_stdlib_bridge_is_active_after_configure(self) -> None:
        configure_structlog(debug=False)
        logging.getLogger("test.stdlib").info("stdlib message")


class TestPlatformContext:
    def test_processor_injects_platform(self) -> None:
        async def inner():
            bind_platform("linux")
            return _inject_context_vars(None, "info", {"event": "x"})

        event_dict = asyncio.run(inner())
        assert event_dict["platform"] == "linux"

    def test_processor_leaves_dict_alone_without_platform(self) -> None:
        assert "platform" not in _inject_context_vars(None, "info", {"event": "x"})

    @pytest.mark.asyncio
    async def test_tasks_do_not_share_platform(self) -> None:
        seen: dict[str, str] = {}

        async def job(name: str) -> None:
            bind_platform(name)
            await asyncio.sleep(0)
            seen[name] = get_platform_context()

        await asyncio.gather(job("macos"), job("linux"), job("windows"))

        assert seen == {"macos": "macos", "linux": "linux", "windows": "windows"}


class TestPlatformLogFilter:
    def _record(self) -> logging.LogRecord:
        return logging.LogRecord("releaser.build", logging.INFO, __file__, 1, "Built", None, None)

    def test_stamps_platform_from_context(self) -> None:
        async def inner():
            bind_platform("windows")
            record = self._record()
            PlatformLogFilter().filter(record)
            return record

        assert asyncio.run(inner()).platform == "windows"

    def test_dash_without_platform(self) -> None:
        record = self._record()

        assert PlatformLogFilter().filter(record) is True
        assert record.platform == "-"

    @pytest.mark.asyncio
    async def test_platform_reaches_worker_threads(self) -> None:
        def in_thread() -> str:
            record = self._record()
            PlatformLogFilter().filter(record)
            return record.platform

        async def job(name: str) -> str:
            bind_platform(name)
            return await asyncio.to_thread(in_thread)

        assert await asyncio.gather(job("macos"), job("linux")) == ["macos", "linux"]
