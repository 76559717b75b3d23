import contextlib
import io
import os
import tempfile
import unittest
from unittest import mock

from .errors import OutputError, PrerequisiteError
from . import utils

class UtilsTest(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.root = self.tmp.name
        self.addCleanup(utils.set_color, utils.COLOR)
        utils.set_color(False)

    def tearDown(self):
        self.tmp.cleanup()

    def make_project(self, name):
        path = os.path.join(self.root, name)
        os.makedirs(path)
        with open(os.path.join(path, utils.PROJECT_MARKER), "w", encoding='utf-8') as fout:
            fout.write("")
        return path

    def test_a_tail(self):
        self.assertEqual(utils.tail("a\nb\nc\n", 2), ["b", "c"])
        self.assertEqual(utils.tail("a\nb", 30), ["a", "b"])
        self.assertEqual(utils.tail("", 30), [])
        self.assertEqual(utils.tail("a\n", 0), [])

    def test_l_tail_counts_newlines_only(self):
        text = "".join(f'step {i}\r50%\rdone\n' for i in range(40))
        lines = utils.tail(text, 30)
        self.assertEqual(len(lines), 30)
        self.assertEqual(lines[0], "step 10\r50%\rdone")
        self.assertEqual(utils.tail("a\x0cb\nc", 30), ["a\x0cb", "c"])

    def test_b_project_root_from_cwd(self):
        project = self.make_project("ghostty")
        self.assertEqual(utils.find_project_root(project, fallback=self.root),
                         os.path.abspath(project))

    def test_c_project_root_fallback(self):
        project = self.make_project("ghostty")
        elsewhere = os.path.join(self.root, "elsewhere")
        os.makedirs(elsewhere)
        with mock.patch.dict(os.environ, {}, clear=False):
            os.environ.pop(utils.PROJECT_ROOT_ENV, None)
            self.assertEqual(utils.find_project_root(elsewhere, fallback=project),
                             os.path.abspath(project))

    def test_d_project_root_from_environment(self):
        project = self.make_project("ghostty")
        elsewhere = os.path.join(self.root, "elsewhere")
        os.makedirs(elsewhere)
        with mock.patch.dict(os.environ, {utils.PROJECT_ROOT_ENV: project}):
            self.assertEqual(utils.find_project_root(elsewhere, fallback=elsewhere),
                             os.path.abspath(project))

    def test_e_project_root_missing(self):
        with mock.patch.dict(os.environ, {}, clear=False):
            os.environ.pop(utils.PROJECT_ROOT_ENV, None)
            with self.assertRaises(PrerequisiteError) as cm:
                utils.find_project_root(self.root, fallback=self.root)
        self.assertIn("build.zig", str(cm.exception))

    def test_f_recursive_rm(self):
        path = os.path.join(self.root, "zig-out", "lib")
        os.makedirs(path)
        utils.recursive_rm(os.path.join(self.root, "zig-out"))
        self.assertFalse(os.path.exists(os.path.join(self.root, "zig-out")))
        # Gone already, still fine.
        utils.recursive_rm(os.path.join(self.root, "zig-out"))

    def test_g_recursive_rm_refuses_home(self):
        self.assertRaises(ValueError, utils.recursive_rm, os.path.expanduser("~"))
        self.assertRaises(ValueError, utils.recursive_rm, os.sep)

    def test_h_failure_report(self):
        out = io.StringIO()
        err = io.StringIO()
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            with self.assertRaises(OutputError):
                with utils.failure_report(False):
                    raise OutputError("XCFramework not found at: x", hints=["rebuild"])
        self.assertIn("ERROR: XCFramework not found at: x", err.getvalue())
        self.assertIn("ERROR: rebuild", err.getvalue())
        self.assertIn("Build failed with exit code 2", err.getvalue())
        self.assertIn("Run with --verbose", out.getvalue())

    def test_i_no_color_when_piped(self):
        with contextlib.redirect_stdout(io.StringIO()) as out:
            utils.success("done")
        self.assertEqual(out.getvalue(), "✓ done\n")

    def test_j_color_override(self):
        utils.set_color(True)
        with contextlib.redirect_stdout(io.StringIO()) as out:
            utils.warn("careful")
        self.assertEqual(out.getvalue(), f'{utils.YELLOW}⚠{utils.NC} careful\n')

    def test_k_color_decided_once(self):
        utils.set_color(None)
        with contextlib.redirect_stdout(io.StringIO()):
            self.assertFalse(utils.use_color())
        # Later changes to stdout don't flip the decision.
        with mock.patch("sys.stdout") as stdout:
            stdout.isatty.return_value = True
            self.assertFalse(utils.use_color())
            stdout.isatty.assert_not_called()
