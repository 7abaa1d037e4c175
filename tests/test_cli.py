"""Tests for the sprout console client."""

import io
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest.mock import MagicMock, patch

from cli import __main__ as cli_main
from cli.console import ConsoleUI


THEMES = {'themes': ['animals', 'food', 'space', 'vehicles'], 'default': 'animals',
          'tiers': ['easy', 'regular', 'challenge']}


class TestArguments(unittest.TestCase):

    def test_defaults(self):
        args = cli_main.build_parser().parse_args([])
        self.assertEqual(args.server, 'http://localhost:8000')
        self.assertEqual(args.user, 'default')
        self.assertIsNone(args.age)
        self.assertFalse(args.themes)

    def test_profile_arguments(self):
        args = cli_main.build_parser().parse_args(['--user', 'maya', '--age', '7', '--theme', 'space'])
        self.assertEqual((args.user, args.age, args.theme), ('maya', 7, 'space'))

    def test_one_shot_actions_are_exclusive(self):
        with redirect_stderr(io.StringIO()), self.assertRaises(SystemExit):
            cli_main.build_parser().parse_args(['--themes', '--forget'])


class TestConsoleActions(unittest.TestCase):

    def setUp(self):
        self.client = MagicMock()
        self.client.user_id = 'maya'
        self.client.get_themes.return_value = THEMES
        self.ui = ConsoleUI(self.client)

    def test_list_themes(self):
        out = io.StringIO()
        with redirect_stdout(out):
            self.ui.list_themes()
        self.assertIn('animals (default)', out.getvalue())
        self.assertIn('vehicles', out.getvalue())

    def test_forget(self):
        self.client.delete_user.return_value = True
        out = io.StringIO()
        with redirect_stdout(out):
            self.ui.forget()
        self.client.delete_user.assert_called_once_with()
        self.assertIn('deleted', out.getvalue())

    def test_main_runs_one_shot_action_without_playing(self):
        with patch.object(cli_main, 'ConsoleUI') as ui_class:
            cli_main.main(['--themes'])
        ui_class.return_value.list_themes.assert_called_once_with()
        ui_class.return_value.run.assert_not_called()

    def test_unknown_theme_falls_back_to_default(self):
        self.client.health_check.return_value = {'service': 'sprout'}
        self.client.user_exists.return_value = True
        self.client.set_profile.return_value = {'theme': 'animals', 'tier': 'regular', 'completed_words': []}
        self.ui.play_word = MagicMock(return_value=False)
        with redirect_stdout(io.StringIO()):
            self.ui.run(theme='dinosaurs')
        self.client.set_profile.assert_called_once_with(age=None, theme='animals')


if __name__ == '__main__':
    unittest.main()
