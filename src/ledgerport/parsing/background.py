"""Run ``parse`` off the calling thread when an executor is available."""

import logging
from concurrent.futures import Executor, Future
from typing import Optional

from ledgerport.domain.entities import RawGrid
from ledgerport.logging_setup import get_logger
from ledgerport.parsing import check_extension, parse

logger = get_logger(__name__)


def parse_in_background(
    content: bytes,
    extension: str,
    executor: Optional[Executor] = None,
    log: Optional[logging.Logger] = None,
) -> "Future[RawGrid]":
    """Submit ``parse`` to ``executor`` and return its future.

    Without a usable executor (none given, or it refuses new work because it
    was shut down) the parse runs synchronously and the returned future is
    already settled. Either way the future resolves to the same grid, or
    raises the same error, that ``parse`` would.
    """
    log = log or logger
    # Rejected extensions fail immediately, wherever the parse would run.
    check_extension(extension)

    if executor is not None:
        try:
            return executor.submit(parse, content, extension, log)
        except RuntimeError as e:
            log.warning("Background parser unavailable (%s); parsing in process", e)

    future: "Future[RawGrid]" = Future()
    try:
        future.set_result(parse(content, extension, log=log))
    except Exception as e:
        future.set_exception(e)
    return future
