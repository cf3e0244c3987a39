"""Start and stop companion daemons (dashboard, scraper) next to the exporter."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

log = logging.getLogger(__name__)


class Companion:
    """One external daemon launched with a fixed argv."""

    def __init__(self, name: str, argv: list[str]) -> None:
        self.name = name
        self.argv = list(argv)
        self._process: subprocess.Popen[bytes] | None = None

    @property
    def running(self) -> bool:
        return self._process is not None and self._process.poll() is None

    def start(self) -> bool:
        """Spawn the daemon. Failure is logged and reported as False."""
        if self.running:
            return True
        try:
            self._process = subprocess.Popen(
                self.argv,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            log.warning("failed to start %s: %s", self.name, e)
            return False
        log.info("%s started (pid %s)", self.name, self._process.pid)
        return True

    def stop(self, timeout: float = 5.0) -> None:
        """Terminate the daemon, killing it if it outlives *timeout*."""
        proc = self._process
        if proc is None:
            return
        self._process = None
        if proc.poll() is not None:
            return
        proc.terminate()
        try:
            proc.wait(timeout=timeout)
        except subprocess.TimeoutExpired:
            log.warning("%s did not exit, killing it", self.name)
            proc.kill()
            proc.wait()
        log.info("%s stopped", self.name)


def default_companions(home: str | Path | None = None) -> dict[str, Companion]:
    """Grafana and Prometheus installed under the user's home directory."""
    base = Path(home) if home is not None else Path.home()
    grafana = base / "grafana"
    prometheus = base / "prometheus"
    return {
        "grafana": Companion(
            "grafana",
            [
                str(grafana / "bin" / "grafana"),
                "server",
                "--config",
                str(grafana / "conf" / "defaults.ini"),
                "--homepath",
                str(grafana),
            ],
        ),
        "prometheus": Companion(
            "prometheus",
            [
                str(prometheus / "prometheus"),
                f"--config.file={prometheus / 'prometheus.yml'}",
            ],
        ),
    }
