"""
Finalizer tests: one-shot stop + text handoff, platform viewer dispatch.
"""

import os
import sys
from unittest.mock import patch, MagicMock

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import core.finalizer as finalizer
from core.finalizer import (
    FINAL_FILENAME, FINAL_TEXT, SequenceFinalizer, final_path, open_in_viewer, write_and_open,
)


class TestPayload:

    def test_text_and_location(self):
        assert FINAL_TEXT == "MOGGADO pelo jodismiu\r\nFim da sequência."
        assert final_path().name == FINAL_FILENAME

    def test_write_keeps_crlf_and_utf8(self, tmp_path):
        target = tmp_path / "final.txt"
        with patch("core.finalizer.open_in_viewer") as viewer:
            path = write_and_open(path=target)
        assert path == target
        assert target.read_bytes() == FINAL_TEXT.encode("utf-8")
        assert b"\r\n" in target.read_bytes()
        viewer.assert_called_once_with(target)

    def test_write_overwrites(self, tmp_path):
        target = tmp_path / "final.txt"
        target.write_text("stale contents that are longer than the payload" * 3)
        with patch("core.finalizer.open_in_viewer"):
            write_and_open("short", path=target)
        assert target.read_text(encoding="utf-8") == "short"


class TestViewer:

    def test_linux_uses_xdg_open(self, monkeypatch):
        monkeypatch.setattr(finalizer.sys, "platform", "linux")
        with patch("core.finalizer.subprocess.Popen") as popen:
            open_in_viewer("/tmp/x.txt")
        assert popen.call_args[0][0] == ["xdg-open", "/tmp/x.txt"]

    def test_macos_uses_open(self, monkeypatch):
        monkeypatch.setattr(finalizer.sys, "platform", "darwin")
        with patch("core.finalizer.subprocess.Popen") as popen:
            open_in_viewer("/tmp/x.txt")
        popen.assert_called_once_with(["open", "/tmp/x.txt"])

    def test_missing_viewer_propagates(self, monkeypatch):
        monkeypatch.setattr(finalizer.sys, "platform", "linux")
        with patch("core.finalizer.subprocess.Popen", side_effect=FileNotFoundError):
            with pytest.raises(FileNotFoundError):
                open_in_viewer("/tmp/x.txt")


class TestSequenceFinalizer:

    def test_runs_once(self):
        handoff = MagicMock()
        fin = SequenceFinalizer(handoff=handoff)
        assert fin.run() is True
        assert fin.run() is False
        handoff.assert_called_once_with(FINAL_TEXT)
        assert fin.handoff_ok is True

    def test_stop_before_handoff(self):
        order = []
        fin = SequenceFinalizer(on_stop=lambda: order.append("stop"),
                                handoff=lambda text: order.append("handoff"))
        fin.run()
        assert order == ["stop", "handoff"]

    def test_handoff_error_logged_not_raised(self, caplog):
        handoff = MagicMock(side_effect=PermissionError("read-only temp dir"))
        fin = SequenceFinalizer(handoff=handoff)
        with caplog.at_level("WARNING", logger="core.finalizer"):
            assert fin.run() is True
        assert fin.handoff_ok is False
        assert "handoff failed" in caplog.text

    def test_no_handoff(self):
        stopped = MagicMock()
        fin = SequenceFinalizer(on_stop=stopped, handoff=None)
        assert fin.run() is True
        stopped.assert_called_once()
        assert fin.handoff_ok is None

    def test_default_handoff_writes_temp_file(self, tmp_path, monkeypatch):
        monkeypatch.setattr(finalizer.tempfile, "gettempdir", lambda: str(tmp_path))
        with patch("core.finalizer.open_in_viewer") as viewer:
            SequenceFinalizer().run()
        written = tmp_path / FINAL_FILENAME
        assert written.read_bytes() == FINAL_TEXT.encode("utf-8")
        viewer.assert_called_once()
