#!/usr/bin/env python3
"""
Listener worker: polls the serial port and forwards recognized lines.
"""

import queue
import threading
import time

from .errors import TransportError, TransportTimeout
from .matcher import StateMatcher
from .models import MatchedLine


def serial_port_listener(cancel: threading.Event, port, processing_queue: queue.Queue,
                         matcher: StateMatcher, interval: float, read_timeout: float, log):
    """Read one line per tick until cancel is set.

    Args:
        cancel: Per-run cancellation signal
        port: Open port providing read_response(timeout)
        processing_queue: Bounded queue feeding the processor
        matcher: Prefix matcher for the rig's known responses
        interval: Tick interval in seconds
        read_timeout: Upper bound for a single read in seconds
        log: Logger accepting key-value context
    """
    next_tick = time.monotonic() + interval
    while not cancel.wait(max(0.0, next_tick - time.monotonic())):
        next_tick += interval
        if next_tick < time.monotonic():
            # Reads overran one or more ticks; do not try to catch up
            next_tick = time.monotonic() + interval

        try:
            raw = port.read_response(read_timeout)
        except TransportTimeout:
            continue
        except TransportError as e:
            if cancel.is_set():
                return
            log.error(f"Serial read error: {e}", worker="listener")
            continue

        if cancel.is_set():
            return
        if not raw:
            continue

        line = raw.decode('ascii', errors='replace')
        match = matcher.lookup(line)
        if match is None:
            log.debug("Discarding unrecognized line", raw_line=line)
            continue

        matched = MatchedLine(
            prefix=match.definition.prefix,
            markers=match.definition.markers,
            data=line[match.prefix_length:],
        )
        try:
            processing_queue.put_nowait(matched)
        except queue.Full:
            log.warning("Processing queue full, dropping line", raw_line=line)
