"""Tests for ContextVar-based scan configuration.

Validates defaults, thread isolation, context manager behavior, and the
effect of each option on a scan.
"""

from threading import Thread

import pytest
from conftest import RecordingMachine, generic_tag

from scanmark import (
    NestingDepthError,
    Parser,
    ScanConfig,
    get_scan_config,
    reset_scan_config,
    scan_config_context,
    set_scan_config,
)


class TestScanConfigDataclass:
    """Test ScanConfig frozen dataclass behavior."""

    def test_default_values(self) -> None:
        config = ScanConfig()
        assert config.strip_trailing_newline is True
        assert config.flush_empty is False
        assert config.strict is False
        assert config.max_depth is None

    def test_immutability(self) -> None:
        """Config is frozen and cannot be modified."""
        config = ScanConfig()
        with pytest.raises(AttributeError):
            config.strict = True  # type: ignore[misc]

    def test_from_dict_basic(self) -> None:
        config = ScanConfig.from_dict({"strict": True, "max_depth": 4})
        assert config.strict is True
        assert config.max_depth == 4
        assert config.flush_empty is False

    def test_from_dict_ignores_unknown_keys(self) -> None:
        config = ScanConfig.from_dict({"strict": True, "unknown_key": "ignored"})
        assert config.strict is True

    def test_from_dict_empty(self) -> None:
        assert ScanConfig.from_dict({}) == ScanConfig()


class TestContextVarFunctions:
    """Test get/set/reset functions."""

    def teardown_method(self) -> None:
        reset_scan_config()

    def test_default_config(self) -> None:
        assert get_scan_config() == ScanConfig()

    def test_set_and_get(self) -> None:
        set_scan_config(ScanConfig(strict=True))
        assert get_scan_config().strict is True

    def test_reset_restores_default(self) -> None:
        set_scan_config(ScanConfig(strict=True))
        reset_scan_config()
        assert get_scan_config().strict is False


class TestScanConfigContext:
    """Test scan_config_context context manager."""

    def test_context_sets_config(self) -> None:
        with scan_config_context(ScanConfig(flush_empty=True)):
            assert get_scan_config().flush_empty is True
        assert get_scan_config().flush_empty is False

    def test_nested_contexts(self) -> None:
        with scan_config_context(ScanConfig(strict=True)):
            with scan_config_context(ScanConfig(max_depth=2)):
                assert get_scan_config().strict is False
                assert get_scan_config().max_depth == 2
            assert get_scan_config().strict is True
        assert get_scan_config().strict is False

    def test_context_restores_on_exception(self) -> None:
        with pytest.raises(ValueError, match="test"):
            with scan_config_context(ScanConfig(strict=True)):
                raise ValueError("test")
        assert get_scan_config().strict is False


class TestThreadIsolation:
    """Each thread scans with its own config."""

    def test_thread_isolation(self) -> None:
        results: dict[int, list[object]] = {}
        parser = Parser([generic_tag()])

        def worker(thread_id: int, config: ScanConfig) -> None:
            set_scan_config(config)
            results[thread_id] = parser.parse("[a]x\n[a.]").outline()

        configs = [
            ScanConfig(strip_trailing_newline=True),
            ScanConfig(strip_trailing_newline=False),
        ]
        threads = [Thread(target=worker, args=(i, c)) for i, c in enumerate(configs)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results[0] == [("tag", ["x"])]
        assert results[1] == [("tag", ["x\n"])]


class TestOptionsAffectScan:
    """Each option changes scanning as documented."""

    def test_strip_disabled_keeps_newlines(self) -> None:
        parser = Parser([generic_tag()])
        with scan_config_context(ScanConfig(strip_trailing_newline=False)):
            tree = parser.parse("[a]x\n[a.]y\n")
        assert tree.outline() == [("tag", ["x\n"]), "y\n"]

    def test_flush_empty_reports_empty_slices(self, recorder: RecordingMachine) -> None:
        parser = Parser([generic_tag()], machine=recorder)
        with scan_config_context(ScanConfig(flush_empty=True)):
            tree = parser.parse("[a][a.]")
        assert recorder.calls == [
            ("flush", ""),
            ("start", "tag", "a"),
            ("flush", ""),
            ("end", "tag", "a"),
            ("flush", ""),
            ("finish",),
        ]
        # Empty text never becomes a tree child
        assert tree.outline() == [("tag", [])]

    def test_max_depth_allows_up_to_limit(self) -> None:
        parser = Parser([generic_tag()])
        with scan_config_context(ScanConfig(max_depth=2)):
            tree = parser.parse("[a][b]x[b.][a.]")
        assert len(tree) == 2

    def test_max_depth_exceeded(self) -> None:
        parser = Parser([generic_tag()])
        with scan_config_context(ScanConfig(max_depth=2)):
            with pytest.raises(NestingDepthError) as exc_info:
                parser.parse("[a][b][c]x[c.][b.][a.]")
        assert exc_info.value.max_depth == 2
        assert exc_info.value.offset == 6
        assert exc_info.value.token_name == "tag"

    def test_config_read_per_parse(self) -> None:
        parser = Parser([generic_tag()])
        with scan_config_context(ScanConfig(strip_trailing_newline=False)):
            kept = parser.parse("a\n").outline()
        stripped = parser.parse("a\n").outline()
        assert kept == ["a\n"]
        assert stripped == ["a"]

    def test_crlf_keeps_carriage_return(self) -> None:
        """Only the final line feed is stripped from a CRLF ending."""
        from scanmark import reconstruct

        text = "[a]x\r\n[a.]y\r\n"
        tree = Parser([generic_tag()]).parse(text)
        assert tree.outline() == [("tag", ["x\r"]), "y\r"]
        assert reconstruct(tree) == text
