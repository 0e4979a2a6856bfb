#!/usr/bin/env python3
"""
Serial transport for the catlink driver.
Wraps a pyserial port with line-oriented, bounded read/write primitives.
"""

import threading

import serial

from .errors import TransportError, TransportReadError, TransportTimeout, TransportWriteError
from .models import SerialConfig

DEFAULT_READ_TIMEOUT_MS = 500
DEFAULT_WRITE_TIMEOUT_MS = 500

_PARITIES = {
    'N': serial.PARITY_NONE,
    'E': serial.PARITY_EVEN,
    'O': serial.PARITY_ODD,
    'M': serial.PARITY_MARK,
    'S': serial.PARITY_SPACE,
}

_STOP_BITS = {
    1: serial.STOPBITS_ONE,
    1.5: serial.STOPBITS_ONE_POINT_FIVE,
    2: serial.STOPBITS_TWO,
}


class SerialPort:
    """Line-oriented CAT port.

    Reads return one response line without its delimiter. A partial line left
    over from a timed-out read is kept and completed by the next read.
    """

    def __init__(self, ser: serial.Serial, delimiter: str = ';'):
        self._serial = ser
        self._delimiter = delimiter.encode('ascii')
        self._pending = b''
        self._write_lock = threading.Lock()

    def read_response(self, timeout: float) -> bytes:
        """Read one response line within timeout seconds.

        Raises:
            TransportTimeout: no complete line arrived in time
            TransportReadError: the port failed
        """
        try:
            if self._serial.timeout != timeout:
                self._serial.timeout = timeout
            chunk = self._serial.read_until(self._delimiter)
        except (serial.SerialException, OSError) as e:
            raise TransportReadError(f"Serial read failed: {e}") from e

        data = self._pending + chunk
        if not data.endswith(self._delimiter):
            self._pending = data
            raise TransportTimeout("No complete response before deadline")

        self._pending = b''
        return data[:-len(self._delimiter)].strip(b'\r\n')

    def write_command(self, text: str) -> None:
        """Write one formatted command to the rig.

        Raises:
            TransportWriteError: the write failed or timed out
        """
        payload = text.encode('ascii')
        with self._write_lock:
            try:
                written = self._serial.write(payload)
                self._serial.flush()
            except (serial.SerialTimeoutException, serial.SerialException, OSError) as e:
                raise TransportWriteError(f"Serial write failed: {e}") from e
        if written is not None and written != len(payload):
            raise TransportWriteError(f"Short write: {written} of {len(payload)} bytes")

    def abort(self) -> None:
        """Abandon any in-flight read or write."""
        try:
            self._serial.cancel_read()
            self._serial.cancel_write()
        except (serial.SerialException, OSError) as e:
            raise TransportError(f"Failed to cancel serial I/O: {e}") from e

    def close(self) -> None:
        try:
            self._serial.close()
        except (serial.SerialException, OSError) as e:
            raise TransportError(f"Failed to close serial port: {e}") from e


def open_serial_port(cfg: SerialConfig) -> SerialPort:
    """Open the rig's serial port.

    Args:
        cfg: Serial settings from the rig configuration

    Returns:
        Open SerialPort

    Raises:
        TransportError: if the port cannot be opened
    """
    read_timeout_ms = cfg.read_timeout_ms if cfg.read_timeout_ms > 0 else DEFAULT_READ_TIMEOUT_MS
    write_timeout_ms = cfg.write_timeout_ms if cfg.write_timeout_ms > 0 else DEFAULT_WRITE_TIMEOUT_MS
    try:
        ser = serial.Serial(
            port=cfg.port,
            baudrate=cfg.baud_rate,
            bytesize=cfg.data_bits,
            parity=_PARITIES.get(cfg.parity.upper(), serial.PARITY_NONE),
            stopbits=_STOP_BITS.get(cfg.stop_bits, serial.STOPBITS_ONE),
            rtscts=cfg.rts_cts,
            timeout=read_timeout_ms / 1000.0,
            write_timeout=write_timeout_ms / 1000.0,
        )
    except (serial.SerialException, ValueError, OSError) as e:
        raise TransportError(f"Failed to open serial port {cfg.port}: {e}") from e
    return SerialPort(ser, cfg.line_delimiter)
