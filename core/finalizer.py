"""
Meltdown — Sequence Finalizer
Runs once after the last phase: stops the sequence, blanks the screen and
hands a short text file to the desktop's default viewer. The handoff is
best-effort; nothing it raises reaches the caller.
"""

import logging
import os
import subprocess
import sys
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)

FINAL_FILENAME = "moggado_final.txt"
FINAL_TEXT = "MOGGADO pelo jodismiu\r\nFim da sequência."


def final_path() -> Path:
    return Path(tempfile.gettempdir()) / FINAL_FILENAME


def open_in_viewer(path):
    """Open a file with the platform's default application."""
    path = str(path)
    if sys.platform.startswith("win"):
        os.startfile(path)  # type: ignore[attr-defined]
    elif sys.platform == "darwin":
        subprocess.Popen(["open", path])
    else:
        subprocess.Popen(["xdg-open", path],
                         stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)


def write_and_open(text: str = FINAL_TEXT, path=None) -> Path:
    """Write text to a temp file and open it. Errors propagate to the caller."""
    path = Path(path) if path is not None else final_path()
    # newline="" keeps the literal \r\n line break
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)
    open_in_viewer(path)
    return path


class SequenceFinalizer:
    """One-shot end-of-sequence hook.

    Args:
        on_stop: Called first (stop ticking, blank the frame). Must not raise.
        handoff: Called with the payload text; failures are logged and ignored.
        text: Payload written by the handoff.
    """

    def __init__(self, on_stop=None, handoff=write_and_open, text=FINAL_TEXT):
        self.on_stop = on_stop
        self.handoff = handoff
        self.text = text
        self.ran = False
        self.handoff_ok = None

    def run(self) -> bool:
        """Finalize. Returns False if it had already run."""
        if self.ran:
            return False
        self.ran = True

        if self.on_stop is not None:
            self.on_stop()

        if self.handoff is None:
            return True
        try:
            self.handoff(self.text)
            self.handoff_ok = True
            logger.info("Sequence finished, final text handed off")
        except Exception:
            self.handoff_ok = False
            logger.warning("Final text handoff failed (ignored)", exc_info=True)
        return True
