#!/usr/bin/env python3
"""
Unit tests for marker-based status extraction.
"""

import unittest
import unittest.mock as mock

from catlink.extractor import extract_status, resolve_marker
from catlink.models import MatchedLine, Marker, ValueMapping

MODES = (ValueMapping('1', 'LSB'), ValueMapping('2', 'USB'), ValueMapping('2', 'SHADOWED'))


def line(data, *markers):
    return MatchedLine(prefix='XX', markers=tuple(markers), data=data)


class TestResolveMarker(unittest.TestCase):

    def test_slice_within_bounds(self):
        self.assertEqual(resolve_marker(Marker(2, 3, 'T'), '12345'), '345')

    def test_slice_clamped_to_data_end(self):
        self.assertEqual(resolve_marker(Marker(4, 10, 'T'), '12345'), '5')

    def test_index_past_end_is_skipped_with_warning(self):
        log = mock.Mock()
        self.assertIsNone(resolve_marker(Marker(10, 1, 'T'), '12345', log))
        log.warning.assert_called_once()

    def test_index_equal_to_length_is_skipped(self):
        self.assertIsNone(resolve_marker(Marker(5, 1, 'T'), '12345'))

    def test_negative_index_is_skipped(self):
        self.assertIsNone(resolve_marker(Marker(-1, 2, 'T'), '12345'))

    def test_zero_length_is_skipped(self):
        self.assertIsNone(resolve_marker(Marker(1, 0, 'T'), '12345'))

    def test_first_matching_mapping_wins(self):
        self.assertEqual(resolve_marker(Marker(0, 1, 'MODE', MODES), '2'), 'USB')

    def test_unmapped_value_resolves_to_empty(self):
        self.assertEqual(resolve_marker(Marker(0, 1, 'MODE', MODES), '9'), '')


class TestExtractStatus(unittest.TestCase):

    def test_mixed_markers_in_one_line(self):
        status = extract_status(line(
            '12345',
            Marker(2, 3, 'MID'),
            Marker(4, 10, 'TAIL'),
            Marker(10, 1, 'MISSING'),
        ))
        self.assertEqual(status, {'MID': '345', 'TAIL': '5'})

    def test_no_markers_extracts_nothing(self):
        log = mock.Mock()
        self.assertIsNone(extract_status(line('12345'), log))
        log.debug.assert_called_once()

    def test_all_markers_skipped_yields_empty_snapshot(self):
        self.assertEqual(extract_status(line('', Marker(0, 1, 'T'))), {})

    def test_markers_resolved_independently(self):
        status = extract_status(line(
            '014074000' + '2',
            Marker(0, 9, 'VFOAFREQ'),
            Marker(50, 2, 'BROKEN'),
            Marker(9, 1, 'MAINMODE', MODES),
        ))
        self.assertEqual(status, {'VFOAFREQ': '014074000', 'MAINMODE': 'USB'})

    def test_later_marker_overwrites_same_tag(self):
        status = extract_status(line('AB', Marker(0, 1, 'T'), Marker(1, 1, 'T')))
        self.assertEqual(status, {'T': 'B'})


if __name__ == '__main__':
    unittest.main()
