#!/usr/bin/env python3
"""
Processor worker: turns matched lines into status snapshots and publishes them.
"""

import queue
import threading

from .extractor import extract_status
from .mailbox import StatusMailbox, publish

# Upper bound on how long a queue wait may delay noticing cancellation
QUEUE_POLL_INTERVAL = 0.1


def line_processor(cancel: threading.Event, processing_queue: queue.Queue,
                   mailbox: StatusMailbox, log):
    while not cancel.is_set():
        try:
            line = processing_queue.get(timeout=QUEUE_POLL_INTERVAL)
        except queue.Empty:
            continue

        log.debug("Processing line", prefix=line.prefix, data=line.data)
        status = extract_status(line, log)
        if status is None:
            continue
        publish(mailbox, status, cancel, log)
