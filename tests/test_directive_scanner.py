"""
Tests for comment stripping and directive extraction.
"""

import os
import sys
import unittest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from core.directive_scanner import DirectiveScanner
from utils.latex_text_utils import strip_comments, split_names, normalize_relpath


class TestLatexTextUtils(unittest.TestCase):

    def test_strip_comments(self):
        self.assertEqual(strip_comments("% whole line"), "")
        self.assertEqual(strip_comments("text % trailing"), "text ")
        self.assertEqual(strip_comments("50\\% of cases"), "50\\% of cases")
        self.assertEqual(strip_comments("50\\% of % cases"), "50\\% of ")
        self.assertEqual(strip_comments("line\\\\% \\input{hidden}"), "line\\\\")
        self.assertEqual(strip_comments("a\\\\\\% b"), "a\\\\\\% b")

    def test_split_names(self):
        self.assertEqual(split_names("a, b,c"), ["a", "b", "c"])
        self.assertEqual(split_names(" a ,, "), ["a"])
        self.assertEqual(split_names("my fig"), ["my fig"])
        self.assertEqual(split_names("my pkg, x", squeeze=True), ["mypkg", "x"])

    def test_normalize_relpath(self):
        self.assertEqual(normalize_relpath("./figs/plot.pdf"), "figs/plot.pdf")
        self.assertEqual(normalize_relpath("figs\\plot.pdf"), "figs/plot.pdf")
        self.assertEqual(normalize_relpath("figs//plot"), "figs/plot")


class TestDirectiveScanner(unittest.TestCase):

    def setUp(self):
        self.scanner = DirectiveScanner()

    def test_all_kinds(self):
        tex = r"""
\documentclass[twocolumn]{mycls}
\usepackage[utf8]{inputenc}
\usepackage{amsmath, localsty}
\begin{document}
\input{sections/intro}\include{sections/method}
\includegraphics[width=0.5\linewidth]{figs/a}
\bibliographystyle{plainnat}
\end{document}
"""
        found = [(d.kind, d.names) for d in self.scanner.scan(tex)]
        self.assertEqual(found, [
            ("class", ["mycls"]),
            ("package", ["inputenc"]),
            ("package", ["amsmath", "localsty"]),
            ("include", ["sections/intro"]),
            ("include", ["sections/method"]),
            ("graphic", ["figs/a"]),
            ("bibstyle", ["plainnat"]),
        ])

    def test_includegraphics_is_not_an_include(self):
        self.assertEqual(self.scanner.names(r"\includegraphics{fig}", "include"), [])
        self.assertEqual(self.scanner.names(r"\includegraphics{fig}", "graphic"), ["fig"])

    def test_line_numbers(self):
        directives = self.scanner.scan("line one\n\\input{a}\n% \\input{b}\n\\input{c}\n")
        self.assertEqual([(d.names, d.line) for d in directives], [(["a"], 2), (["c"], 4)])

    def test_kind_filter(self):
        tex = "\\input{a}\n\\usepackage{b}\n"
        self.assertEqual([d.kind for d in self.scanner.scan(tex, kinds=("package",))], ["package"])


if __name__ == '__main__':
    unittest.main()
