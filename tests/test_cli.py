"""Tests for the command-line entry point (end-to-end)."""

import io
import os
import shutil
import subprocess
import sys
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout

ROOT = os.path.join(os.path.dirname(__file__), "..")
sys.path.insert(0, ROOT)

from excel_templater.cli import main
from excel_templater.errors import ExitCodes
from tests.sample_workbooks import create_hosts_workbook, write_template


class TestUsage(unittest.TestCase):
    def _run(self, argv):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = main(argv)
        return code, out.getvalue(), err.getvalue()

    def test_no_arguments(self):
        code, out, _ = self._run([])
        self.assertEqual(code, ExitCodes.INVALID_ARGUMENTS)
        self.assertIn("usage:", out)

    def test_one_argument(self):
        code, out, _ = self._run(["book.xlsx"])
        self.assertEqual(code, 1)
        self.assertIn("template_file", out)

    def test_module_entry_point(self):
        proc = subprocess.run([sys.executable, "-m", "excel_templater"], cwd=ROOT,
                              capture_output=True, text=True)
        self.assertEqual(proc.returncode, 1)
        self.assertIn("usage:", proc.stdout)


class TestGenerate(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.book = os.path.join(self.tmpdir, "hosts.xlsx")
        self.template = os.path.join(self.tmpdir, "template.conf")
        self.out_root = os.path.join(self.tmpdir, "out")
        create_hosts_workbook(self.book)
        write_template(self.template, "host=<host>\r\nport=<port>\r\nowner=<owner>\r\n")

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def _run(self, *extra):
        argv = [self.book, self.template, "--engine", "openpyxl", "--output-root", self.out_root]
        argv.extend(extra)
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = main(argv)
        return code, out.getvalue(), err.getvalue()

    def test_end_to_end(self):
        code, out, _ = self._run()
        self.assertEqual(code, ExitCodes.SUCCESS)
        folders = os.listdir(self.out_root)
        self.assertEqual(len(folders), 1)
        self.assertRegex(folders[0], r"^hosts_\d{8}_\d{6}$")
        folder = os.path.join(self.out_root, folders[0])
        self.assertEqual(sorted(os.listdir(folder)), ["db.conf", "web.conf"])
        with open(os.path.join(folder, "db.conf"), "rb") as f:
            self.assertEqual(f.read(), b"host=db01\nport=5432\nowner=\n")
        self.assertIn("Files written: 2", out)
        self.assertIn("Duplicate filenames skipped: 1", out)
        self.assertIn(folder, out)

    def test_config_file(self):
        config = os.path.join(self.tmpdir, "run.yaml")
        with open(config, "w") as f:
            f.write(f"output_root: {self.out_root}\nlog_level: WARNING\n")
        argv = [self.book, self.template, "--engine", "openpyxl", "--config", config]
        with redirect_stdout(io.StringIO()):
            code = main(argv)
        self.assertEqual(code, ExitCodes.SUCCESS)
        self.assertEqual(len(os.listdir(self.out_root)), 1)

    def test_missing_workbook(self):
        os.unlink(self.book)
        code, _, err = self._run()
        self.assertEqual(code, ExitCodes.WORKBOOK_ERROR)
        self.assertIn("Excel file not found", err)
        self.assertFalse(os.path.exists(self.out_root))

    def test_output_folder_failure(self):
        with open(self.out_root, "w") as f:
            f.write("in the way")
        code, _, err = self._run()
        self.assertEqual(code, ExitCodes.OUTPUT_FOLDER_ERROR)
        self.assertIn("Cannot create output folder", err)

    def test_bad_config(self):
        code, _, err = self._run("--config", os.path.join(self.tmpdir, "missing.yaml"))
        self.assertEqual(code, ExitCodes.INVALID_ARGUMENTS)
        self.assertIn("Config file not found", err)

    def test_unknown_encoding(self):
        code, _, err = self._run("--encoding", "bogus-enc")
        self.assertEqual(code, ExitCodes.INVALID_ARGUMENTS)
        self.assertIn("Unknown encoding", err)
        self.assertFalse(os.path.exists(self.out_root))


if __name__ == "__main__":
    unittest.main()
