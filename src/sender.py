#!/usr/bin/env python3
"""
Sender worker: drains the outbound command queue onto the serial port.
"""

import queue
import threading

from .errors import TransportError
from .processor import QUEUE_POLL_INTERVAL


def serial_port_sender(cancel: threading.Event, port, send_queue: queue.Queue, log):
    """Write queued commands until cancel is set.

    Failed writes are logged and the command is dropped; there is no retry.
    """
    while not cancel.is_set():
        try:
            command = send_queue.get(timeout=QUEUE_POLL_INTERVAL)
        except queue.Empty:
            continue

        if cancel.is_set():
            return
        try:
            port.write_command(command.formatted_text)
            log.debug("Command sent", command=command.name, text=command.formatted_text)
        except TransportError as e:
            if cancel.is_set():
                return
            log.error(f"Serial write error: {e}", command=command.name)
