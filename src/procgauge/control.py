"""Control channel: activation messages, catalog dump and status file.

A client writes one comma-separated list of metric names into a named
pipe. A leading ``1`` asks for the catalog to be dumped instead of
starting a run.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from .catalog import MetricDescriptor
from .errors import ConfigurationError
from .utils import write_text

log = logging.getLogger(__name__)

DUMP_SENTINEL = "1"


@dataclass(frozen=True, slots=True)
class ActivationRequest:
    dump_catalog: bool
    names: tuple[str, ...] = ()


def parse_metric_list(text: str) -> list[str]:
    """Split a comma-separated list, trimming whitespace and dropping empties."""
    return [item.strip() for item in text.split(",") if item.strip()]


def parse_activation(text: str) -> ActivationRequest:
    names = parse_metric_list(text)
    if names and names[0] == DUMP_SENTINEL:
        return ActivationRequest(dump_catalog=True)
    return ActivationRequest(dump_catalog=False, names=tuple(names))


def read_control_message(fifo_path: str) -> str:
    """Block until one message arrives on the FIFO, then remove the FIFO.

    Raises:
        ConfigurationError: if the FIFO cannot be created or read.
    """
    try:
        os.mkfifo(fifo_path, 0o666)
    except FileExistsError:
        pass
    except OSError as e:
        raise ConfigurationError(code="control_channel", message=f"mkfifo {fifo_path}: {e}") from e

    log.info("waiting for activation message", extra={"path": fifo_path})
    try:
        with open(fifo_path) as fh:
            return fh.read()
    except OSError as e:
        raise ConfigurationError(code="control_channel", message=f"read {fifo_path}: {e}") from e
    finally:
        try:
            os.unlink(fifo_path)
        except FileNotFoundError:
            pass


def format_catalog_dump(names: Iterable[str]) -> str:
    return "".join(f"Metric: {name}\n" for name in names)


def write_catalog_dump(catalog: Mapping[str, MetricDescriptor], path: str) -> None:
    write_text(path, format_catalog_dump(catalog))
    log.info("catalog written", extra={"path": path})


def write_status(path: str, status: str) -> None:
    """Replace the status file with a single status line."""
    try:
        write_text(path, status + "\n")
    except OSError as e:
        log.warning("cannot write status file: %s", e, extra={"path": path})
