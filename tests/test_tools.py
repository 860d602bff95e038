from __future__ import absolute_import, print_function

import os
import tempfile
from unittest import TestCase, main

from ll1 import LL1
from ll1.tools import build_ll1
from ll1.tools.print_table import (argparser, format_table, format_parse_table,
                                   print_grammar, print_sets, print_table, print_parse)

from io import StringIO

from .grammars import GRAMMAR, GRAMMAR_LEX_RULES, DEFAULT_GRAMMAR, PRINTED_PARSING_TABLE


class TestPrintTable(TestCase):
    def setUp(self):
        self.ll1 = LL1({'bnf': GRAMMAR, 'lex': GRAMMAR_LEX_RULES})

    def test_format_table(self):
        table = format_table(['', 'a'], [['E', 1], ["E'", '-']])
        self.assertEqual(table, '\n'.join([
            '+----+---+',
            '|    │ a |',
            '+----+---+',
            '| E  │ 1 |',
            '+----+---+',
            "| E' │ - |",
            '+----+---+',
        ]))

    def test_parse_table(self):
        self.assertEqual(format_parse_table(self.ll1), PRINTED_PARSING_TABLE)

        out = StringIO()
        print_table(self.ll1, out)
        self.assertIn(PRINTED_PARSING_TABLE, out.getvalue())

    def test_print_grammar(self):
        out = StringIO()
        print_grammar(self.ll1.get_grammar(), out)
        out = out.getvalue()
        self.assertIn("  1. E -> T E'\n", out)
        self.assertIn("  3. E' -> ε\n", out)
        self.assertIn('  9. F -> "(" E ")"\n', out)

    def test_print_sets(self):
        out = StringIO()
        print_sets(self.ll1.get_follow_sets(), 'Symbol', 'Follow set', out)
        out = out.getvalue()
        self.assertIn('Follow set:', out)
        self.assertIn('| F      │ ")", "*", "+", $ |', out)

    def test_print_parse(self):
        out = StringIO()
        self.assertTrue(print_parse(self.ll1, '2 + 3', out))
        self.assertIn('Accepted. Productions: 1, 4, 8, 6, 2, 4, 8, 6, 3', out.getvalue())

        out = StringIO()
        self.assertFalse(print_parse(self.ll1, 'id id', out))
        out = out.getvalue()
        self.assertIn('Parse error, unexpected token "id" at line 1, column 4.', out)
        self.assertIn('id id\n   ^\n', out)


class TestBuildLL1(TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.bnf_fn = os.path.join(self.tmpdir.name, 'expressions.bnf')
        self.lex_fn = os.path.join(self.tmpdir.name, 'expressions.lex')
        with open(self.bnf_fn, 'w', encoding='utf-8') as f:
            f.write(GRAMMAR)
        with open(self.lex_fn, 'w', encoding='utf-8') as f:
            f.write(GRAMMAR_LEX_RULES)

    def tearDown(self):
        self.tmpdir.cleanup()

    def _build(self, args):
        ns = argparser.parse_args(args)
        try:
            return build_ll1(ns) + (ns,)
        finally:
            ns.grammar_file.close()
            if ns.lex is not None:
                ns.lex.close()

    def test_grammar_and_lex(self):
        ll1, out, ns = self._build([self.bnf_fn, '-x', self.lex_fn, '-p', '2 + id', '--no-sets'])
        self.assertEqual(ll1.parse('2 + id'), [1, 4, 8, 6, 2, 4, 7, 6, 3])
        self.assertEqual(ns.parse, ['2 + id'])
        self.assertTrue(ns.no_sets)
        self.assertFalse(ll1.options.strict)

    def test_flags(self):
        with open(self.bnf_fn, 'w', encoding='utf-8') as f:
            f.write(DEFAULT_GRAMMAR)
        ll1, out, ns = self._build(['--strict', '-d', self.bnf_fn])
        self.assertTrue(ll1.options.strict)
        self.assertTrue(ll1.options.debug)
        self.assertEqual(ll1.get_grammar().lex_vars, [])


if __name__ == '__main__':
    main()
