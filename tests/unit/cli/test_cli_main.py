"""CLI argument, discovery, and exit-behavior tests.

Verifies how ``lazypdf.cli.main`` builds the document list and reports
startup failures. The interactive runtime is mocked out.
"""

from __future__ import annotations

import io
from pathlib import Path
import tempfile
import unittest
from unittest import mock

from lazypdf import cli
from lazypdf.errors import EmptyDocumentError, OpenError
from lazypdf.runtime.config import Settings


class CliMainTests(unittest.TestCase):
    def setUp(self) -> None:
        patches = [
            mock.patch("lazypdf.cli.configure_logging"),
            mock.patch("lazypdf.cli.load_settings", return_value=Settings(viewer_command="xdg-open")),
            mock.patch("sys.stdin", mock.Mock(isatty=mock.Mock(return_value=True))),
        ]
        for patcher in patches:
            patcher.start()
            self.addCleanup(patcher.stop)
        self.stdout = io.StringIO()
        stdout_patch = mock.patch("sys.stdout", self.stdout)
        stdout_patch.start()
        self.addCleanup(stdout_patch.stop)

    def test_no_paths_discovers_pdfs_in_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            for name in ("a.pdf", "b.pdf", "notes.txt"):
                (root / name).write_bytes(b"x")
            (root / "dir.pdf").mkdir()

            with mock.patch("lazypdf.cli.run_viewer", return_value=root / "a.pdf") as run_viewer:
                cli.main([], default_directory=root)

        paths, settings, start_page = run_viewer.call_args.args
        self.assertEqual(sorted(path.name for path in paths), ["a.pdf", "b.pdf"])
        self.assertEqual(settings.viewer_command, "xdg-open")
        self.assertIsNone(start_page)

    def test_no_documents_found_exits_with_message(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("lazypdf.cli.run_viewer") as run_viewer:
                with self.assertRaises(SystemExit) as ctx:
                    cli.main([], default_directory=Path(tmp))

        run_viewer.assert_not_called()
        self.assertEqual(str(ctx.exception), "Couldn't find pdf files")

    def test_explicit_paths_keep_argument_order(self) -> None:
        with mock.patch("lazypdf.cli.run_viewer", return_value=Path("c.pdf")) as run_viewer:
            cli.main(["c.pdf", "a.pdf", "b.pdf"])

        paths, _settings, _start = run_viewer.call_args.args
        self.assertEqual(paths, [Path("c.pdf"), Path("a.pdf"), Path("b.pdf")])

    def test_successful_quit_prints_last_viewed_path(self) -> None:
        with mock.patch("lazypdf.cli.run_viewer", return_value=Path("b.pdf")):
            cli.main(["a.pdf", "b.pdf"])

        self.assertEqual(self.stdout.getvalue(), "b.pdf\n")

    def test_page_option_is_one_based(self) -> None:
        with mock.patch("lazypdf.cli.run_viewer", return_value=Path("a.pdf")) as run_viewer:
            cli.main(["-p", "3", "a.pdf"])

        self.assertEqual(run_viewer.call_args.args[2], 2)

    def test_viewer_and_protocol_flags_override_settings(self) -> None:
        with mock.patch("lazypdf.cli.run_viewer", return_value=Path("a.pdf")) as run_viewer:
            cli.main(["--viewer", "zathura", "--image-protocol", "kitty", "a.pdf"])

        settings = run_viewer.call_args.args[1]
        self.assertEqual(settings.viewer_command, "zathura")
        self.assertEqual(settings.image_protocol, "kitty")

    def test_non_positive_page_is_rejected_by_argparse(self) -> None:
        with mock.patch("sys.stderr", io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                cli.main(["-p", "0", "a.pdf"])

        self.assertEqual(ctx.exception.code, 2)

    def test_startup_failure_exits_non_zero_with_diagnostic(self) -> None:
        for error in (OpenError(Path("a.pdf"), "bad xref"), EmptyDocumentError(Path("a.pdf"))):
            with self.subTest(error=type(error).__name__):
                with mock.patch("lazypdf.cli.run_viewer", side_effect=error):
                    with self.assertRaises(SystemExit) as ctx:
                        cli.main(["a.pdf"])

                self.assertIn("Couldn't load a.pdf", str(ctx.exception))
                self.assertEqual(self.stdout.getvalue(), "")

    def test_non_tty_stdin_is_rejected(self) -> None:
        with mock.patch("sys.stdin", mock.Mock(isatty=mock.Mock(return_value=False))), mock.patch(
            "lazypdf.cli.run_viewer"
        ) as run_viewer:
            with self.assertRaises(SystemExit) as ctx:
                cli.main(["a.pdf"])

        run_viewer.assert_not_called()
        self.assertEqual(str(ctx.exception), "Not an interactive tty")


if __name__ == "__main__":
    unittest.main()
