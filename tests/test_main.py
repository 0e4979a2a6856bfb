#!/usr/bin/env python3
"""
Unit tests for the command-line front end and status display.
"""

import argparse
import datetime
import io
import os
import tempfile
import unittest
import unittest.mock as mock

from catlink.config import ConfigService
from catlink.main import build_parser, main, parse_command_arg, run
from catlink.models import RigConfig, ServiceState
from catlink.service import CatService
from catlink.ui import UserInterface

from fake_port import FakePort, make_document


class TestParseCommandArg(unittest.TestCase):

    def test_name_only(self):
        self.assertEqual(parse_command_arg('READ'), ('READ', []))
        self.assertEqual(parse_command_arg('READ:'), ('READ', []))

    def test_with_params(self):
        self.assertEqual(parse_command_arg('INIT:one,two'), ('INIT', ['one', 'two']))

    def test_blank_name(self):
        with self.assertRaises(argparse.ArgumentTypeError):
            parse_command_arg(':1')

    def test_parser_collects_commands(self):
        args = build_parser().parse_args(['-c', 'INIT', '-c', 'PLAYBACK:1', '--once'])
        self.assertEqual(args.commands, [('INIT', []), ('PLAYBACK', ['1'])])
        self.assertTrue(args.once)

    def test_version_flag(self):
        with mock.patch('sys.stdout', new_callable=io.StringIO) as out:
            with self.assertRaises(SystemExit):
                build_parser().parse_args(['--version'])
        self.assertIn('catlink v', out.getvalue())


class TestUserInterface(unittest.TestCase):

    def test_format_status_sorted(self):
        ui = UserInterface()
        now = datetime.datetime(2026, 10, 19, 12, 30, 5)
        line = ui.format_status({'VFOAFREQ': '014074000', 'MAINMODE': 'USB'}, now)
        self.assertEqual(line, '[12:30:05] MAINMODE=USB | VFOAFREQ=014074000')

    def test_format_empty_status(self):
        now = datetime.datetime(2026, 10, 19, 12, 30, 5)
        self.assertEqual(UserInterface().format_status({}, now), '[12:30:05] (empty)')

    def test_header_names_rig(self):
        out = io.StringIO()
        ui = UserInterface(stream=out)
        ui.has_color = False
        rig = RigConfig.from_dict(make_document()['rigs'][0])
        ui.show_header('0.3.0', '2026-10-19', rig)
        text = out.getvalue()
        self.assertIn('catlink v0.3.0', text)
        self.assertIn('Test Rig', text)
        self.assertIn('INIT, READ', text)


class TestRun(unittest.TestCase):

    def test_run_once_prints_status_and_stops(self):
        port = FakePort([b'FA014074000'])
        service = CatService(config_service=ConfigService.from_dict(make_document()),
                             logger=mock.Mock(), transport_factory=lambda cfg: port)
        service.initialize()
        out = io.StringIO()
        ui = UserInterface(stream=out)
        ui.has_color = False

        run(service, ui, [('READ', []), ('INIT', ['only-one'])], once=True)

        self.assertIs(service.state, ServiceState.STOPPED)
        self.assertIn('VFOAFREQ=014074000', out.getvalue())
        self.assertEqual(port.close_calls, 1)
        # The rejected command is logged, not raised
        service.logger.error.assert_called()


class TestMain(unittest.TestCase):

    def test_missing_config_fails_initialize(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with mock.patch('catlink.main.configure_logging'):
                code = main(['--config', os.path.join(tmpdir, 'absent.json'), '--no-header'])
        self.assertEqual(code, 1)

    def test_malformed_config(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, 'config.json')
            with open(path, 'w') as f:
                f.write('{')
            with mock.patch('catlink.main.configure_logging'):
                code = main(['--config', path])
        self.assertEqual(code, 2)


if __name__ == '__main__':
    unittest.main()
