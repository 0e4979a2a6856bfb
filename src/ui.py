#!/usr/bin/env python3
"""
User Interface module for the catlink driver.
Handles the terminal header and the rolling status display.
"""

import datetime
import os
from typing import Dict, Optional

from .models import RigConfig


class UserInterface:
    """Manages the terminal output of the catlink command-line tool."""

    def __init__(self, stream=None):
        self.has_color = self._check_term_color()
        self._stream = stream

    def _check_term_color(self) -> bool:
        """Check if terminal supports color based on TERM environment variable."""
        term = os.getenv("TERM", "")
        color_terms = ['xterm', 'screen', 'tmux', 'rxvt', 'konsole', 'gnome']
        return any(color_term in term for color_term in color_terms) or 'color' in term

    def _get_color_code(self, color_code: str) -> str:
        """Return color code if terminal supports color, otherwise empty string."""
        return color_code if self.has_color else ""

    def _print(self, text: str = ""):
        print(text, file=self._stream)

    def show_header(self, version: str, build_date: str, rig: RigConfig):
        """Display version and link information for the active rig.

        Args:
            version: Software version
            build_date: Build date
            rig: Active rig configuration
        """
        clr_green = self._get_color_code("\033[1;32m")
        clr_cyan = self._get_color_code("\033[1;36m")
        clr_yellow = self._get_color_code("\033[1;33m")
        clr_magenta = self._get_color_code("\033[1;35m")
        reset = self._get_color_code("\033[0m")

        serial_cfg = rig.serial
        self._print(clr_green + "="*80 + reset)
        self._print(f"{clr_cyan}catlink v{version}{reset} - {clr_yellow}{build_date}{reset}")
        self._print(
            f"{clr_magenta}  Rig:{reset} {rig.name or rig.id} | "
            f"{clr_magenta}Port:{reset} {serial_cfg.port} | "
            f"{clr_magenta}Baud:{reset} {serial_cfg.baud_rate} | "
            f"{clr_magenta}Poll:{reset} {rig.cat.listener_rate_limiter_interval_ms}ms"
        )
        self._print(
            f"{clr_magenta}  States:{reset} {len(rig.states)} | "
            f"{clr_magenta}Commands:{reset} {', '.join(c.name for c in rig.commands) or 'none'}"
        )
        self._print(clr_green + "="*80 + reset)
        self._print()

    def format_status(self, status: Dict[str, str], now: Optional[datetime.datetime] = None) -> str:
        """Render one status snapshot as a single line, tags sorted."""
        timestamp = (now or datetime.datetime.now()).strftime('%H:%M:%S')
        fields = ' | '.join(f"{tag}={value}" for tag, value in sorted(status.items()))
        return f"[{timestamp}] {fields}" if fields else f"[{timestamp}] (empty)"

    def show_status(self, status: Dict[str, str]):
        clr_white = self._get_color_code("\033[1;37m")
        reset = self._get_color_code("\033[0m")
        self._print(f"{clr_white}{self.format_status(status)}{reset}")
