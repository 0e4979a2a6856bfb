#!/usr/bin/env python3
"""
Unit tests for the logging configuration module.
"""

import json
import logging
import os
import tempfile
import unittest

from catlink.logging_cfg import CatLogger, ColoredConsoleFormatter, JSONFormatter


def make_record(**extra):
    record = logging.LogRecord('catlink', logging.WARNING, __file__, 42,
                               "Processing queue full, dropping line", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestFormatters(unittest.TestCase):

    def test_json_includes_context(self):
        entry = json.loads(JSONFormatter().format(make_record(worker='listener', raw_line='FA1')))
        self.assertEqual(entry['level'], 'WARNING')
        self.assertEqual(entry['message'], "Processing queue full, dropping line")
        self.assertEqual(entry['worker'], 'listener')
        self.assertEqual(entry['raw_line'], 'FA1')
        self.assertNotIn('msg', entry)

    def test_json_serializes_unknown_types(self):
        entry = json.loads(JSONFormatter().format(make_record(port=object())))
        self.assertIsInstance(entry['port'], str)

    def test_console_shows_context(self):
        output = ColoredConsoleFormatter().format(make_record(worker='sender'))
        self.assertIn('WARNING: Processing queue full, dropping line', output)
        self.assertIn('worker=sender', output)


class TestCatLogger(unittest.TestCase):

    def test_context_travels_as_extra(self):
        log = CatLogger('catlink.test.extra')
        with self.assertLogs('catlink.test.extra', level='DEBUG') as captured:
            log.info("CAT worker starting", worker='listener')
            log.debug("Discarding unrecognized line", raw_line='ZZ1')
        self.assertEqual(captured.records[0].worker, 'listener')
        self.assertEqual(captured.records[1].raw_line, 'ZZ1')

    def test_configure_writes_json_file(self):
        log = CatLogger('catlink.test.file')
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, 'catlink.log')
            log.configure(verbose=False, log_file=path)
            log.configure(verbose=True, log_file=os.path.join(tmpdir, 'ignored.log'))
            log.error("Serial write error", command='READ')
            for handler in log.logger.handlers:
                handler.flush()
            with open(path) as f:
                entries = [json.loads(line) for line in f]
            for handler in list(log.logger.handlers):
                handler.close()
                log.logger.removeHandler(handler)

        self.assertFalse(os.path.exists(os.path.join(tmpdir, 'ignored.log')))
        self.assertEqual(entries[0]['message'], "Logging system initialized")
        self.assertEqual(entries[-1]['command'], 'READ')


if __name__ == '__main__':
    unittest.main()
