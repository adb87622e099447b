import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stdout

from lcparse.lang.error import ErrorHandler, GenericException, InvalidLambda
from lcparse.lang.session import Session
from lcparse.pure.term import Application, Lambda, Variable


class SessionTestCase(unittest.TestCase):

    def setUp(self):
        self.tmp_dir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmp_dir.cleanup()

    def write(self, text):
        path = os.path.join(self.tmp_dir.name, "terms.lc")
        with open(path, "w", encoding="utf-8") as file:
            file.write(text)
        return path

    def test_preprocess_line(self):
        cases = {
            "λx.x": ("λx.x", False),
            "  f x  ;; apply f": ("f x", False),
            ";; only a comment": ("", False),
            "f (x": ("f (x", True),
            "(λx.(x": ("(λx.(x", True),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, Session.preprocess_line(case, 1, False), case)

    def test_preprocess_continuation(self):
        exprs = []
        __, add_to_prev = Session.preprocess_line("f (x", 1, False, exprs)
        self.assertTrue(add_to_prev)
        __, add_to_prev = Session.preprocess_line("  y)  ;; done", 2, add_to_prev, exprs)
        self.assertFalse(add_to_prev)
        self.assertEqual([("f (x y)", 1)], exprs)

    def test_file(self):
        path = self.write(";; identity\nλx.x\n\nf x y\nf (x\n  y)\n")
        sess = Session(ErrorHandler(), path, cmd_line=False)

        expected = [
            Lambda("x", Variable("x")),
            Application(Application(Variable("f"), Variable("x")), Variable("y")),
            Application(Variable("f"), Application(Variable("x"), Variable("y"))),
        ]
        self.assertEqual(expected, sess.results)

    def test_file_run(self):
        path = self.write("λx.x\nf x\n")
        sess = Session(ErrorHandler(), path, cmd_line=False, fmt="json", indent=0)

        output = io.StringIO()
        with redirect_stdout(output):
            sess.run()

        lines = output.getvalue().splitlines()
        self.assertEqual(2, len(lines))
        self.assertEqual({"tag": "lambda", "bind": "x", "body": {"tag": "var", "name": "x"}}, json.loads(lines[0]))
        self.assertEqual("application", json.loads(lines[1])["tag"])

    def test_file_parse_error(self):
        path = self.write("λx.x\nλx\n")
        with self.assertRaises(InvalidLambda):
            Session(ErrorHandler(), path, cmd_line=False)

    def test_missing_file(self):
        path = os.path.join(self.tmp_dir.name, "missing.lc")
        self.assertRaises(GenericException, Session, ErrorHandler(), path, False)

    def test_empty_file(self):
        path = self.write(";; nothing here\n\n")
        output = io.StringIO()
        with redirect_stdout(output):
            sess = Session(ErrorHandler(), path, cmd_line=False)
        self.assertEqual([], sess.results)
        self.assertIn("contains no λ-terms", output.getvalue())

    def test_reserved_filename(self):
        self.assertRaises(GenericException, Session, ErrorHandler(), Session.SH_FILE, False)

    def test_unknown_format(self):
        self.assertRaises(GenericException, Session, ErrorHandler(), Session.SH_FILE, True, "xml")

    def test_add_pop(self):
        error_handler = ErrorHandler()
        sess = Session(error_handler, Session.SH_FILE, cmd_line=True, fmt="expr")
        self.assertFalse(error_handler.fatal)

        sess.add("λ x . x  y", 1)
        self.assertEqual("λx.x y", sess.pop())
        self.assertEqual([], sess.results)

        self.assertRaises(ValueError, sess.add, "   ", 2)
        self.assertRaises(InvalidLambda, sess.add, "λ.x", 3)
        self.assertEqual(("λ.x", 3), error_handler.traceback[Session.SH_FILE])

    def test_render(self):
        sess = Session(ErrorHandler(), Session.SH_FILE, cmd_line=True)
        sess.add("λx.x", 1)

        rendered = sess.pop()
        self.assertIn("\n", rendered)
        self.assertIn('"bind": "x"', rendered)
        self.assertEqual({"tag": "lambda", "bind": "x", "body": {"tag": "var", "name": "x"}}, json.loads(rendered))

    def test_render_keeps_unicode(self):
        sess = Session(ErrorHandler(), Session.SH_FILE, cmd_line=True, indent=0)
        sess.add("λé.é", 1)
        self.assertEqual('{"tag": "lambda", "bind": "é", "body": {"tag": "var", "name": "é"}}', sess.pop())


if __name__ == '__main__':
    unittest.main()
