# ==============================================================================
# progress.py  –  Byte-based progress bar for long scans
#
# Wraps tqdm so the scanning code can call `update`/`finish` without caring
# whether a bar is actually shown (small files get a no-op tracker).
# ==============================================================================

from __future__ import annotations

from typing import Optional

from tqdm import tqdm


class ProgressTracker:
    """
    Count consumed bytes and push them to a tqdm bar every `every` lines.

    Parameters
    ----------
    total_bytes : int
        File size; the bar is completed to this value on :meth:`finish`.
    desc : str
        Bar label ("Validating" / "Correcting").
    enabled : bool
        When False nothing is drawn and every call is cheap.
    every : int
        Line interval between bar refreshes.
    """

    def __init__(
        self, total_bytes: int, desc: str, enabled: bool, every: int = 1000
    ) -> None:
        self.total_bytes = total_bytes
        self.every = max(every, 1)
        self.lines = 0
        self._pending = 0
        self._bar: Optional[tqdm] = (
            tqdm(
                total=total_bytes,
                desc=desc,
                unit="B",
                unit_scale=True,
                ncols=100,
                leave=True,
            )
            if enabled
            else None
        )

    @property
    def enabled(self) -> bool:
        return self._bar is not None

    def update(self, raw_line: str) -> None:
        """Account for one physical line (its text plus the newline)."""
        self.lines += 1
        if self._bar is None:
            return
        text = raw_line.rstrip("\r\n")
        self._pending += len(text.encode("utf-8", "surrogateescape")) + 1
        if self.lines % self.every == 0:
            self._bar.update(self._pending)
            self._pending = 0

    def finish(self) -> None:
        """Jump the bar to 100% and close it."""
        if self._bar is None:
            return
        self._bar.n = self.total_bytes
        self._bar.refresh()
        self._bar.close()
        self._bar = None


def progress_bar(
    total_bytes: int,
    desc: str,
    threshold: int,
    every: int = 1000,
    enabled: Optional[bool] = None,
) -> ProgressTracker:
    """Build a tracker; shown automatically once `total_bytes` exceeds `threshold`."""
    show = total_bytes > threshold if enabled is None else enabled
    return ProgressTracker(total_bytes, desc, enabled=show, every=every)
