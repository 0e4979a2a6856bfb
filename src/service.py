#!/usr/bin/env python3
"""
CAT service for the catlink driver.

Owns the rig configuration, the prefix matcher and the per-run queues, and
runs the listener, processor and sender workers between start() and stop().

Lifecycle:
    UNINITIALIZED --initialize()--> INITIALIZED --start()--> RUNNING
    RUNNING --stop()--> STOPPED --start()--> RUNNING

start() while RUNNING and stop() while not RUNNING are no-ops.
"""

import dataclasses
import queue
import threading
from typing import Callable, List, Optional, Union

from marshmallow import ValidationError

from .commands import format_command, lookup_command
from .errors import (ConfigError, InvalidConfig, InvalidRigID, MissingDependency,
                     NotInitialized, NotStarted, QueueClosed, QueueFull, TransportCloseFailed,
                     TransportError, TransportOpenFailed)
from .listener import serial_port_listener
from .mailbox import StatusMailbox, StatusStream
from .matcher import StateMatcher
from .models import CommandName, RigConfig, ServiceState
from .processor import line_processor
from .schema import ConfigValidator
from .sender import serial_port_sender
from .transport import open_serial_port

SERVICE_NAME = "catservice"

# Used when the configured listener interval is zero or negative
DEFAULT_LISTENER_INTERVAL_MS = 250
# Used when neither the CAT nor the serial read timeout is positive
DEFAULT_READ_TIMEOUT_MS = 500


class RunState:
    """Resources belonging to one start()/stop() cycle."""

    def __init__(self, port):
        self.port = port
        self.cancel = threading.Event()
        self.threads: List[threading.Thread] = []


class CatService:
    """Drives one rig over a CAT link.

    Args:
        config_service: Provides required_configs() and rig_config_by_id()
        logger: Leveled logger accepting key-value context
        validator: Structural config validator; a new ConfigValidator if omitted
        transport_factory: Opens the port for a SerialConfig
    """

    def __init__(self, config_service=None, logger=None,
                 validator: Optional[ConfigValidator] = None,
                 transport_factory: Callable = open_serial_port):
        self.config_service = config_service
        self.logger = logger
        self._validator = validator
        self._transport_factory = transport_factory

        self._config: Optional[RigConfig] = None
        self._matcher: Optional[StateMatcher] = None

        self._state = ServiceState.UNINITIALIZED
        self._initialized = threading.Event()
        self._init_lock = threading.Lock()
        self._init_done = False
        self._init_error: Optional[Exception] = None

        self._lock = threading.Lock()
        self._run: Optional[RunState] = None

        self._mailbox: Optional[StatusMailbox] = None
        self._send_queue: Optional[queue.Queue] = None
        self._processing_queue: Optional[queue.Queue] = None

    @property
    def state(self) -> ServiceState:
        return self._state

    def initialize(self) -> None:
        """Load and validate the default rig configuration.

        The body runs once; later calls return (or raise) the first outcome.
        """
        with self._init_lock:
            if not self._init_done:
                self._init_done = True
                try:
                    self._initialize_once()
                except Exception as e:
                    self._init_error = e
        if self._init_error is not None:
            raise self._init_error

    def _initialize_once(self) -> None:
        op = "catlink.CatService.initialize"
        if self.config_service is None:
            raise MissingDependency(op, "Config service has not been set.")
        if self.logger is None:
            raise MissingDependency(op, "Logger service has not been set.")

        cfg = self._get_rig_config()

        validator = self._validator if self._validator is not None else ConfigValidator()
        try:
            cfg = validator.validate(cfg)
        except ValidationError as e:
            raise InvalidConfig(op, f"Rig configuration is invalid: {e.messages}", e.messages) from e

        cfg = self._apply_timing_defaults(cfg)
        self._matcher = StateMatcher(cfg.states, self.logger)
        self._config = cfg
        self._allocate_queues()

        self._state = ServiceState.INITIALIZED
        self._initialized.set()
        self.logger.info("CAT service initialized", rig_id=cfg.id, rig=cfg.name,
                         states=len(self._matcher), commands=len(cfg.commands))

    def _get_rig_config(self) -> RigConfig:
        """Resolve the default rig's configuration."""
        op = "catlink.CatService.get_rig_config"
        try:
            required = self.config_service.required_configs()
        except ConfigError as e:
            raise InvalidRigID(op, f"Failed to read required configs: {e}") from e

        if required.default_rig_id < 1:
            raise InvalidRigID(op, "Default rig ID is invalid.")

        try:
            return self.config_service.rig_config_by_id(required.default_rig_id)
        except ConfigError as e:
            raise InvalidRigID(op, str(e)) from e

    @staticmethod
    def _apply_timing_defaults(cfg: RigConfig) -> RigConfig:
        cat = cfg.cat
        interval = cat.listener_rate_limiter_interval_ms
        if interval <= 0:
            interval = DEFAULT_LISTENER_INTERVAL_MS

        read_timeout = cat.listener_read_timeout_ms
        if read_timeout <= 0:
            read_timeout = cfg.serial.read_timeout_ms
        if read_timeout <= 0:
            read_timeout = DEFAULT_READ_TIMEOUT_MS

        return dataclasses.replace(cfg, cat=dataclasses.replace(
            cat,
            listener_rate_limiter_interval_ms=interval,
            listener_read_timeout_ms=read_timeout,
        ))

    def _allocate_queues(self) -> None:
        cat = self._config.cat
        self._mailbox = StatusMailbox(cat.status_channel_size)
        self._send_queue = queue.Queue(maxsize=cat.send_channel_size)
        self._processing_queue = queue.Queue(maxsize=cat.processing_channel_size)

    def start(self) -> None:
        """Open the port and launch the workers. No-op if already running."""
        op = "catlink.CatService.start"
        if not self._initialized.is_set():
            raise NotInitialized(op, "Service is not initialized.")

        with self._lock:
            if self._state is ServiceState.RUNNING:
                return
            if self._state not in (ServiceState.INITIALIZED, ServiceState.STOPPED):
                raise NotInitialized(op, f"Cannot start from state {self._state.value}.")

            try:
                port = self._transport_factory(self._config.serial)
            except (TransportError, OSError) as e:
                raise TransportOpenFailed(op, f"Failed to initialize serial port: {e}") from e

            # Fresh queues per run so nothing from a previous run leaks in
            if self._state is ServiceState.STOPPED:
                self._allocate_queues()

            run = RunState(port)
            cat = self._config.cat
            self._launch_worker(run, "listener", serial_port_listener,
                                port, self._processing_queue, self._matcher,
                                cat.listener_rate_limiter_interval_ms / 1000.0,
                                cat.listener_read_timeout_ms / 1000.0, self.logger)
            self._launch_worker(run, "sender", serial_port_sender,
                                port, self._send_queue, self.logger)
            self._launch_worker(run, "processor", line_processor,
                                self._processing_queue, self._mailbox, self.logger)

            self._run = run
            self._state = ServiceState.RUNNING
            self.logger.info("CAT service started", port=self._config.serial.port)

    def _launch_worker(self, run: RunState, worker_name: str, worker_func, *args) -> None:
        def worker():
            self.logger.info("CAT worker starting", worker=worker_name)
            try:
                worker_func(run.cancel, *args)
            except Exception:
                self.logger.exception("CAT worker crashed", worker=worker_name)
            finally:
                self.logger.info("CAT worker stopped", worker=worker_name)

        thread = threading.Thread(target=worker, name=f"catlink-{worker_name}", daemon=True)
        run.threads.append(thread)
        thread.start()

    def stop(self) -> None:
        """Stop the workers and close the port. No-op if not running."""
        op = "catlink.CatService.stop"
        if not self._initialized.is_set():
            raise NotInitialized(op, "Service is not initialized.")

        with self._lock:
            if self._state is not ServiceState.RUNNING:
                return

            run = self._run
            run.cancel.set()
            try:
                run.port.abort()
            except (TransportError, OSError) as e:
                self.logger.warning(f"Failed to abort in-flight I/O: {e}")
            for thread in run.threads:
                thread.join()

            # The queues are dropped, not drained or closed: the workers are
            # gone and the next start() allocates new ones.
            self._send_queue = None
            self._processing_queue = None
            self._run = None
            self._state = ServiceState.STOPPED

            try:
                run.port.close()
            except (TransportError, OSError) as e:
                raise TransportCloseFailed(op, f"Failed to close serial port: {e}") from e
            self.logger.info("CAT service stopped")

    def enqueue_command(self, name: Union[str, CommandName], *params: str) -> None:
        """Format a configured command and queue it for the sender.

        Raises:
            NotInitialized, NotStarted, CommandNotFound, ArityMismatch,
            QueueFull, QueueClosed
        """
        op = "catlink.CatService.enqueue_command"
        if not self._initialized.is_set():
            raise NotInitialized(op, "Service is not initialized.")
        if self._state is not ServiceState.RUNNING:
            raise NotStarted(op, "Service is not started.")

        command = format_command(lookup_command(self._config.commands, name), params)

        send_queue = self._send_queue
        if send_queue is None:
            raise QueueClosed(op, "Send queue is closed.")
        try:
            send_queue.put_nowait(command)
        except queue.Full:
            raise QueueFull(op, "Send queue is full.") from None

    def status_channel(self) -> StatusStream:
        """Receive-only stream of status snapshots (latest wins)."""
        op = "catlink.CatService.status_channel"
        if not self._initialized.is_set():
            raise NotInitialized(op, "Service is not initialized.")
        return StatusStream(self._current_mailbox)

    def _current_mailbox(self) -> StatusMailbox:
        return self._mailbox

    def rig_config(self) -> RigConfig:
        """Return the active rig configuration, or an empty one before initialize()."""
        if not self._initialized.is_set():
            return RigConfig()
        return self._config


