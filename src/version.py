#!/usr/bin/env python3
"""
catlink Version Information

Centralized version, date, and author strings for reuse by scripts, setup, and docs.
"""

__version__ = "0.3.0"
__build_date__ = "2026-10-19"
__author__ = "Station Manager contributors"
__description__ = "CAT command/response link driver for serial-attached transceivers"

VERSION = __version__
BUILD_DATE = __build_date__
AUTHOR = __author__



def get_version_string():
    """Return formatted version string"""
    return f"catlink v{__version__}"


def get_full_version_info():
    """Return complete version information"""
    return {
        'version': __version__,
        'build_date': __build_date__,
        'author': __author__,
        'description': __description__,
    }


if __name__ == '__main__':
    print(f"Version: {__version__}")
    print(f"Build Date: {__build_date__}")
    print(f"Author: {__author__}")
