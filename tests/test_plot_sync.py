"""
Tests for plot synchronization with the cluster.
"""

import os
import sys
import shutil
import subprocess
import tempfile
import unittest
from unittest.mock import Mock, call, patch

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from core.plot_sync import PlotSync
import push_and_pull

REMOTE = "cluster:/scratch/plots/"


class TestPlotSync(unittest.TestCase):

    def setUp(self):
        self.cwd = tempfile.mkdtemp()
        self.runner = Mock()
        self.sync = PlotSync(remote=REMOTE, runner=self.runner, cwd=self.cwd)

    def tearDown(self):
        shutil.rmtree(self.cwd, ignore_errors=True)

    def commands(self):
        return [c.args[0] for c in self.runner.call_args_list]

    def test_destination_for(self):
        self.assertEqual(PlotSync.destination_for("detailed/*.pdf"), "detailed")
        self.assertEqual(PlotSync.destination_for("*.pdf"), ".")
        self.assertEqual(PlotSync.destination_for("det*/a.pdf"), ".")
        self.assertEqual(PlotSync.destination_for("[ab]/a.pdf"), ".")
        self.assertEqual(PlotSync.destination_for("/abs/a.pdf"), ".")

    def test_fetch_defaults(self):
        self.sync.fetch("")
        self.assertEqual(self.commands(), [
            ["scp", "-r", REMOTE + "detailed", "."],
            ["scp", "-r", REMOTE + "*.pdf", "."],
        ])

    def test_fetch_pattern_into_subdirectory(self):
        self.sync.fetch("detailed/loss_*.pdf")
        self.assertEqual(self.commands(), [["scp", "-r", REMOTE + "detailed/loss_*.pdf", "detailed/"]])
        self.assertTrue(os.path.isdir(os.path.join(self.cwd, "detailed")))

    def test_fetch_pattern_into_current_directory(self):
        self.sync.fetch("*.png")
        self.assertEqual(self.commands(), [["scp", "-r", REMOTE + "*.png", "./"]])

    def test_run_order_and_default_message(self):
        self.sync.run("", "")
        self.assertEqual(self.commands(), [
            ["git", "pull"],
            ["scp", "-r", REMOTE + "detailed", "."],
            ["scp", "-r", REMOTE + "*.pdf", "."],
            ["git", "add", "."],
            ["git", "commit", "-m", "update plots"],
            ["git", "push"],
        ])
        for c in self.runner.call_args_list:
            self.assertEqual(c.kwargs, {"cwd": self.cwd, "check": True})

    def test_run_prompts_after_pull(self):
        asked = []

        def prompt(text):
            asked.append((text, len(self.runner.call_args_list)))
            return " detailed/*.pdf " if len(asked) == 1 else "fig 2"

        self.sync.run(prompt=prompt)

        # pattern asked once git pull ran, message once files were staged
        self.assertEqual([n for _, n in asked], [1, 3])
        self.assertEqual(self.commands(), [
            ["git", "pull"],
            ["scp", "-r", REMOTE + "detailed/*.pdf", "detailed/"],
            ["git", "add", "."],
            ["git", "commit", "-m", "fig 2"],
            ["git", "push"],
        ])

    def test_failure_stops_remaining_steps(self):
        self.runner.side_effect = [None, subprocess.CalledProcessError(1, ["scp"])]
        with self.assertRaises(subprocess.CalledProcessError):
            self.sync.run("*.pdf", "new plots")
        self.assertEqual(len(self.runner.call_args_list), 2)


class TestPushAndPullCli(unittest.TestCase):

    @patch("core.plot_sync.subprocess.run")
    def test_non_interactive(self, mock_run):
        rc = push_and_pull.main(["--remote", REMOTE, "--pattern", "*.pdf", "--message", "fig 3"])
        self.assertEqual(rc, 0)
        cmds = [c.args[0] for c in mock_run.call_args_list]
        self.assertEqual(cmds[-2], ["git", "commit", "-m", "fig 3"])
        self.assertEqual(cmds[-1], ["git", "push"])

    @patch("builtins.input", side_effect=["", ""])
    @patch("core.plot_sync.subprocess.run")
    def test_prompts_when_not_given(self, mock_run, mock_input):
        rc = push_and_pull.main(["--remote", REMOTE])
        self.assertEqual(rc, 0)
        self.assertEqual(mock_input.call_count, 2)
        self.assertIn(call(["git", "commit", "-m", "update plots"], cwd=".", check=True), mock_run.call_args_list)

    @patch("core.plot_sync.subprocess.run", side_effect=subprocess.CalledProcessError(1, ["git", "pull"]))
    def test_failed_command_exit_code(self, mock_run):
        rc = push_and_pull.main(["--pattern", "x", "--message", "m"])
        self.assertEqual(rc, 1)
        mock_run.assert_called_once()


if __name__ == '__main__':
    unittest.main()
