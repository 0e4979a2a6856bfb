#!/usr/bin/env python3
"""
Status extraction for matched CAT lines.
Each marker slices a field out of the payload and optionally remaps it.
"""

from typing import Dict, Optional

from .models import MatchedLine, Marker


def resolve_marker(marker: Marker, data: str, log=None) -> Optional[str]:
    """Resolve one marker against a payload.

    Returns:
        The extracted (and possibly remapped) value, or None when the marker
        does not fit the payload.
    """
    if marker.index < 0 or marker.index >= len(data):
        if log is not None:
            log.warning("Marker index out of range, skipping",
                        tag=marker.tag, index=marker.index, data_length=len(data))
        return None

    end = min(marker.index + marker.length, len(data))
    if marker.index >= end:
        return None

    raw = data[marker.index:end]
    if not marker.value_mappings:
        return raw

    for mapping in marker.value_mappings:
        if mapping.key == raw:
            return mapping.value
    # Unmapped values resolve to an empty string
    return ""


def extract_status(line: MatchedLine, log=None) -> Optional[Dict[str, str]]:
    """Turn a matched line into a tag -> value status snapshot.

    Returns None for states that carry no markers.
    """
    if not line.markers:
        if log is not None:
            log.debug("No markers for state", prefix=line.prefix)
        return None

    status: Dict[str, str] = {}
    for marker in line.markers:
        value = resolve_marker(marker, line.data, log)
        if value is not None:
            status[marker.tag] = value
    return status
