import io
import os
import subprocess
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest import mock

from md2pdf import cli
from md2pdf.errors import MultipleInputFilesError, UsageError
from tests.fakes import FakeProber


class TestPriorityFlags(unittest.TestCase):

    def test_order(self):
        self.assertEqual(cli.find_priority_action(["--diagnostics", "--help"]), cli.HELP)
        self.assertEqual(cli.find_priority_action(["--list-fonts", "-h"]), cli.HELP)
        self.assertEqual(cli.find_priority_action(["--list-fonts", "--diagnostics"]), cli.DIAGNOSTICS)
        self.assertEqual(cli.find_priority_action(["notes.md", "--list-fonts"]), cli.LIST_FONTS)
        self.assertIsNone(cli.find_priority_action(["notes.md", "-t", "heros"]))

    def test_help_wins_over_diagnostics(self):
        out = io.StringIO()
        with mock.patch("md2pdf.cli.run_diagnostics") as diagnostics, redirect_stdout(out):
            status = cli.main(["--diagnostics", "--help"], prober=FakeProber())

        self.assertEqual(status, 0)
        diagnostics.assert_not_called()
        self.assertIn("usage: md2pdf", out.getvalue())
        self.assertIn("--list-fonts", out.getvalue())

    def test_diagnostics_always_exits_zero(self):
        prober = FakeProber()
        with redirect_stdout(io.StringIO()):
            status = cli.main(["missing.md", "--diagnostics"], prober=prober)

        self.assertEqual(status, 0)
        self.assertIn(("program", "pandoc"), prober.calls)

    def test_list_fonts(self):
        out = io.StringIO()
        with redirect_stdout(out):
            status = cli.main(["--list-fonts"], prober=FakeProber(programs=["fc-list"], families=["Inter"]))

        self.assertEqual(status, 0)
        self.assertIn("Inter", out.getvalue().splitlines())

    def test_grouped_short_help_flag(self):
        out = io.StringIO()
        with mock.patch("md2pdf.converter.subprocess.run") as run, redirect_stdout(out):
            status = cli.main(["-yh", "notes.md"])

        self.assertEqual(status, 0)
        run.assert_not_called()
        self.assertIn("usage: md2pdf", out.getvalue())

    def test_broken_font_catalog_is_advisory(self):
        failure = subprocess.CalledProcessError(1, ["fc-list"])
        for argv in (["--diagnostics"], ["--list-fonts"]):
            out = io.StringIO()
            with mock.patch("md2pdf.prober.shutil.which", return_value="/usr/bin/tool"), \
                    mock.patch("md2pdf.prober.subprocess.run", side_effect=failure), \
                    redirect_stdout(out):
                status = cli.main(argv)
            self.assertEqual(status, 0, argv)

        self.assertIn("Usage Tip", out.getvalue())

    def test_broken_font_catalog_reports_missing_fonts(self):
        out = io.StringIO()
        with mock.patch("md2pdf.prober.shutil.which", return_value="/usr/bin/tool"), \
                mock.patch("md2pdf.prober.subprocess.run", side_effect=subprocess.CalledProcessError(1, ["fc-list"])), \
                redirect_stdout(out):
            status = cli.main(["--diagnostics"])

        self.assertEqual(status, 0)
        self.assertIn("Missing font for theme 'heros': TeX Gyre Heros", out.getvalue())
        self.assertIn("--- Diagnostics Complete ---", out.getvalue())


class TestParseArguments(unittest.TestCase):

    def parse(self, argv, **kwargs):
        err = io.StringIO()
        with redirect_stderr(err):
            args = cli.parse_arguments(argv, **kwargs)
        return args, err.getvalue()

    def test_defaults(self):
        args, err = self.parse(["notes.md"])

        self.assertEqual(args.input_file, "notes.md")
        self.assertEqual(args.theme, "modern")
        self.assertEqual(args.lang, "en")
        self.assertEqual(args.font, "")
        self.assertEqual(args.output, "")
        self.assertFalse(args.yes)
        self.assertFalse(args.watch)
        self.assertEqual(err, "")

    def test_flags_in_any_order(self):
        args, _ = self.parse(["-t", "heros", "notes.md", "--lang", "pt", "-y", "-o", "out.pdf"])

        self.assertEqual(args.input_file, "notes.md")
        self.assertEqual(args.theme, "heros")
        self.assertEqual(args.lang, "pt")
        self.assertEqual(args.output, "out.pdf")
        self.assertTrue(args.yes)

    def test_flag_value_is_not_an_input(self):
        args, _ = self.parse(["-o", "other.md", "notes.md"])
        self.assertEqual(args.output, "other.md")
        self.assertEqual(args.input_file, "notes.md")

    def test_font_with_spaces(self):
        args, _ = self.parse(["-f", "DejaVu Sans", "notes.md"])
        self.assertEqual(args.font, "DejaVu Sans")

    def test_multiple_inputs(self):
        with self.assertRaises(MultipleInputFilesError) as ctx:
            self.parse(["a.md", "-y", "b.md"])
        self.assertEqual((ctx.exception.first, ctx.exception.second), ("a.md", "b.md"))
        self.assertIn("'a.md' and 'b.md'", str(ctx.exception))

    def test_unknown_arguments_are_warned(self):
        args, err = self.parse(["--frobnicate", "notes.md", "extra.txt"])

        self.assertEqual(args.input_file, "notes.md")
        self.assertIn("Warning: Ignoring unknown argument: --frobnicate", err)
        self.assertIn("Warning: Ignoring unknown argument: extra.txt", err)

    def test_unknown_arguments_strict(self):
        with self.assertRaises(UsageError):
            self.parse(["--frobnicate", "notes.md"], strict=True)

    def test_abbreviated_flags_are_unknown(self):
        args, err = self.parse(["--diag", "--list", "--he", "--the", "heros", "notes.md"])

        self.assertEqual(args.theme, "modern")
        for token in ("--diag", "--list", "--he", "--the", "heros"):
            self.assertIn(f"Warning: Ignoring unknown argument: {token}\n", err)
        self.assertFalse(hasattr(args, "diagnostics"))
        self.assertFalse(hasattr(args, "list_fonts"))
        self.assertFalse(hasattr(args, "help"))

    def test_invalid_theme(self):
        with self.assertRaises(UsageError):
            self.parse(["-t", "comic", "notes.md"])

    def test_missing_flag_value(self):
        with self.assertRaises(UsageError):
            self.parse(["notes.md", "-l"])


class TestMain(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.input_file = os.path.join(self.tmp.name, "notes.md")
        with open(self.input_file, "w") as f:
            f.write("# Notes\n")
        self.output_file = os.path.join(self.tmp.name, "notes.pdf")

    def tearDown(self):
        self.tmp.cleanup()

    def run_main(self, argv, returncode=0, confirm=None):
        out, err = io.StringIO(), io.StringIO()
        confirm = confirm or mock.Mock(return_value=True)
        completed = subprocess.CompletedProcess([], returncode)
        with mock.patch("md2pdf.converter.subprocess.run", return_value=completed) as run, \
                redirect_stdout(out), redirect_stderr(err):
            status = cli.main(argv, confirm=confirm)
        return status, run, out.getvalue(), err.getvalue()

    def test_success(self):
        status, run, out, _ = self.run_main([self.input_file])

        self.assertEqual(status, 0)
        run.assert_called_once()
        self.assertIn(f"Successfully created {self.output_file}", out)

    def test_conversion_failure(self):
        status, run, _, err = self.run_main([self.input_file], returncode=2)

        self.assertEqual(status, 1)
        self.assertIn("PDF generation failed.", err)

    def test_no_input(self):
        status, run, _, err = self.run_main(["-t", "heros"])

        self.assertEqual(status, 1)
        run.assert_not_called()
        self.assertIn("Error: No input file specified.", err)
        self.assertIn("usage: md2pdf", err)

    def test_input_not_found(self):
        status, run, _, err = self.run_main([os.path.join(self.tmp.name, "missing.md")])

        self.assertEqual(status, 1)
        run.assert_not_called()
        self.assertIn("not found", err)

    def test_multiple_inputs(self):
        status, run, _, err = self.run_main([self.input_file, "second.md"])

        self.assertEqual(status, 1)
        run.assert_not_called()
        self.assertIn("Multiple input files", err)

    def test_theme_font_conflict(self):
        status, run, _, err = self.run_main(["-t", "heros", "-f", "Foo", self.input_file])

        self.assertEqual(status, 1)
        run.assert_not_called()
        self.assertIn("mutually exclusive", err)

    def test_overwrite_declined(self):
        open(self.output_file, "w").close()
        status, run, out, _ = self.run_main([self.input_file], confirm=mock.Mock(return_value=False))

        self.assertEqual(status, 1)
        run.assert_not_called()
        self.assertIn("Operation cancelled.", out)

    def test_overwrite_accepted(self):
        open(self.output_file, "w").close()
        confirm = mock.Mock(return_value=True)
        status, run, _, _ = self.run_main([self.input_file], confirm=confirm)

        self.assertEqual(status, 0)
        confirm.assert_called_once()
        run.assert_called_once()

    def test_overwrite_with_terminal_answer(self):
        open(self.output_file, "w").close()
        with mock.patch("builtins.input", return_value="y"):
            status, run, _, _ = self.run_main([self.input_file], confirm=cli.confirm_on_terminal)
        self.assertEqual(status, 0)
        run.assert_called_once()

        with mock.patch("builtins.input", return_value="n"):
            status, run, _, _ = self.run_main([self.input_file], confirm=cli.confirm_on_terminal)
        self.assertEqual(status, 1)
        run.assert_not_called()

    def test_abbreviated_diagnostics_flag_does_not_run_diagnostics(self):
        with mock.patch("md2pdf.cli.run_diagnostics") as diagnostics:
            status, run, _, err = self.run_main(["--diag", self.input_file, "-y"])

        self.assertEqual(status, 0)
        diagnostics.assert_not_called()
        run.assert_called_once()
        self.assertIn("Warning: Ignoring unknown argument: --diag", err)

    def test_watch_mode(self):
        with mock.patch("md2pdf.cli.watch_and_convert", return_value=True) as watch:
            status, run, _, _ = self.run_main(["-w", self.input_file])

        self.assertEqual(status, 0)
        watch.assert_called_once()
        self.assertEqual(watch.call_args[0][0].options.input_file, self.input_file)

    def test_run_exits_with_status(self):
        with mock.patch("md2pdf.cli.main", return_value=1):
            with self.assertRaises(SystemExit) as ctx:
                cli.run()
        self.assertEqual(ctx.exception.code, 1)


if __name__ == "__main__":
    unittest.main()
