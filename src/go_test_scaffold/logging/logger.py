"""JSONL run-event logger."""

import json
import time
from contextlib import contextmanager
from datetime import UTC, datetime
from pathlib import Path


class RunLogger:
    """Append-only JSONL event log, one file per day.

    A logger built without a directory is disabled: ``log`` and ``timed``
    become no-ops so callers never have to branch on configuration.
    """

    def __init__(self, log_dir: Path | None) -> None:
        self.log_dir = log_dir
        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)

    @property
    def enabled(self) -> bool:
        return self.log_dir is not None

    @property
    def _log_file(self) -> Path:
        """Current log file (one per day)."""
        today = datetime.now(UTC).strftime("%Y-%m-%d")
        return self.log_dir / f"go-test-scaffold-{today}.jsonl"

    def log(
        self,
        event_type: str,
        data: dict,
        *,
        source: str | None = None,
        duration_ms: int | None = None,
    ) -> None:
        """Append one event. Write failures propagate."""
        if not self.enabled:
            return
        entry = {
            "event_type": event_type,
            "data": data,
            "source": source,
            "duration_ms": duration_ms,
            "timestamp": datetime.now(UTC).isoformat(),
        }
        with self._log_file.open("a") as f:
            f.write(json.dumps(entry) + "\n")

    @contextmanager
    def timed(self, event_type: str, **kwargs):
        """Context manager that auto-captures duration and status."""
        context = {"status": "started"}
        start = time.monotonic()
        try:
            yield context
            context["status"] = "success"
        except Exception as e:
            context["status"] = "error"
            context["error"] = str(e)
            raise
        finally:
            duration_ms = int((time.monotonic() - start) * 1000)
            self.log(event_type, context, duration_ms=duration_ms, **kwargs)
