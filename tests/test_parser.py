# -*- coding: utf-8 -*-
from __future__ import absolute_import

import unittest
from io import StringIO, BytesIO

try:
    import regex
except ImportError:
    regex = None

from ll1 import LL1, END
from ll1.exceptions import (ConfigurationError, ParseError, UnexpectedInput,
                            UnexpectedToken, UnexpectedEOF)

from .grammars import (GRAMMAR, GRAMMAR_LEX_RULES, DEFAULT_GRAMMAR, NULLABLE_GRAMMAR,
                       CONFLICT_GRAMMAR, PARSING_TABLE)

__all__ = ['TestParser']


class TestParser(unittest.TestCase):
    def setUp(self):
        self.ll1 = LL1({'bnf': GRAMMAR, 'lex': GRAMMAR_LEX_RULES})

    def test_accept(self):
        self.assertEqual(self.ll1.parse('id + id * id'), [1, 4, 7, 6, 2, 4, 7, 5, 7, 6, 3])
        self.assertEqual(self.ll1.parse('2 + 3'), [1, 4, 8, 6, 2, 4, 8, 6, 3])
        self.assertEqual(self.ll1.parse('(id)'), [1, 4, 9, 1, 4, 7, 6, 3, 6, 3])
        self.assertEqual(self.ll1.parse('id'), [1, 4, 7, 6, 3])

    def test_deterministic(self):
        text = '(1.5 + id) * 2'
        self.assertEqual(self.ll1.parse(text), self.ll1.parse(text))

    def test_whitespace(self):
        self.assertEqual(self.ll1.parse('id+id'), self.ll1.parse(' id \n +\t id '))

    def test_unbalanced(self):
        with self.assertRaises(UnexpectedEOF) as cm:
            self.ll1.parse('( id')
        e = cm.exception
        self.assertEqual(e.stack, [END, "E'", "T'", '")"'])
        self.assertEqual(e.expected, {'")"'})
        self.assertEqual(e.token.type, END)
        assert isinstance(e, UnexpectedInput)
        assert isinstance(e, ParseError)

    def test_unexpected_token(self):
        with self.assertRaises(UnexpectedToken) as cm:
            self.ll1.parse('id id')
        e = cm.exception
        self.assertEqual(e.expected, {'"*"', '"+"', END, '")"'})
        self.assertEqual(e.token.type, '"id"')
        self.assertEqual((e.line, e.column), (1, 4))
        self.assertEqual(e.stack[-1], "T'")

    def test_unexpected_position(self):
        with self.assertRaises(UnexpectedToken) as cm:
            self.ll1.parse('id\n  id')
        self.assertEqual((cm.exception.line, cm.exception.column), (2, 3))

    def test_unknown_char(self):
        with self.assertRaises(UnexpectedToken) as cm:
            self.ll1.parse('id # id')
        self.assertEqual(cm.exception.token.value, '#')

    def test_terminal_mismatch(self):
        with self.assertRaises(UnexpectedToken) as cm:
            self.ll1.parse('(id *)')
        self.assertEqual(cm.exception.token.type, '")"')
        self.assertEqual(cm.exception.expected, {'"id"', 'NUMBER', '"("'})

    def test_incomplete(self):
        with self.assertRaises(UnexpectedEOF) as cm:
            self.ll1.parse('id + ')
        self.assertEqual(cm.exception.stack, [END, "E'", 'T'])

        with self.assertRaises(UnexpectedEOF) as cm:
            self.ll1.parse('')
        self.assertEqual(cm.exception.stack, [END, 'E'])

    def test_trailing_input(self):
        # `$` can't be matched against anything but the end of input
        self.assertRaises(UnexpectedToken, self.ll1.parse, 'id ) id')
        self.assertRaises(UnexpectedInput, self.ll1.parse, 'id $ id')

    def test_error_message(self):
        texts = ('( id', 'id id', 'id + ', '', 'id # id')
        for text in texts:
            with self.assertRaises(UnexpectedInput) as cm:
                self.ll1.parse(text)
            e = cm.exception
            self.assertIn('Parse error', str(e))
            context = e.get_context(text)
            self.assertTrue(context.endswith('^\n'))

    def test_get_context(self):
        text = 'id + id id'
        with self.assertRaises(UnexpectedToken) as cm:
            self.ll1.parse(text)
        self.assertEqual(cm.exception.get_context(text), 'id + id id\n        ^\n')

    def test_nullable(self):
        ll1 = LL1(NULLABLE_GRAMMAR)
        self.assertEqual(ll1.parse(''), [1, 3, 5])
        self.assertEqual(ll1.parse('b'), [1, 3, 4])
        self.assertEqual(ll1.parse('a b'), [1, 2, 4])
        self.assertRaises(UnexpectedToken, ll1.parse, 'b a')

    def test_default_lex_rules(self):
        ll1 = LL1(DEFAULT_GRAMMAR)
        self.assertEqual(ll1.parse('id*(id+id)'), [1, 4, 7, 5, 8, 1, 4, 7, 6, 2, 4, 7, 6, 3, 6, 3])
        self.assertRaises(UnexpectedToken, ll1.parse, '2')

    def test_conflict(self):
        # The last production wins, so a lone "a" isn't accepted
        ll1 = LL1(CONFLICT_GRAMMAR)
        self.assertEqual(ll1.parse('a b'), [2])
        self.assertRaises(UnexpectedEOF, ll1.parse, 'a')

    def test_lex_rules_as_list(self):
        ll1 = LL1({'bnf': 'S -> "a" "," "b"', 'lex': ['"a" : "a"', '"b" : "b"', '"," : ","']})
        self.assertEqual(ll1.parse('a, b'), [1])

    def test_optional_lex_rule(self):
        ll1 = LL1({'bnf': 'S -> NUM "x"', 'lex': '[0-9]* : NUM\n"x" : "x"'})
        self.assertEqual(ll1.parse('12x'), [1])
        self.assertRaises(UnexpectedToken, ll1.parse, 'x')

    def test_space_terminal(self):
        # Whitespace is skipped before the rules are tried
        ll1 = LL1('S -> "a" " " "b"')
        self.assertRaises(UnexpectedToken, ll1.parse, 'a b')

    def test_file_grammar(self):
        ll1 = LL1(StringIO(DEFAULT_GRAMMAR))
        self.assertEqual(ll1.parse('id'), [1, 4, 7, 6, 3])

    def test_g_regex_flags(self):
        import re
        ll1 = LL1({'bnf': 'S -> WORD', 'lex': '[a-z]+ : WORD'}, g_regex_flags=re.I)
        self.assertEqual(ll1.parse('HeLLo'), [1])

    @unittest.skipIf(regex is None, "'regex' lib not installed")
    def test_regex(self):
        ll1 = LL1({'bnf': 'S -> WORD', 'lex': r'\p{Lu}\p{Ll}+ : WORD'}, regex=True)
        self.assertEqual(ll1.parse('Ünïcode'), [1])

    def test_options(self):
        self.assertRaises(ConfigurationError, LL1, DEFAULT_GRAMMAR, foo=True)
        self.assertRaises(ConfigurationError, LL1, DEFAULT_GRAMMAR, cache=1)
        ll1 = LL1(DEFAULT_GRAMMAR, debug=1)
        self.assertIs(ll1.options.debug, True)
        with self.assertRaises(ConfigurationError):
            ll1.options.foo = True

    def test_save_load(self):
        f = BytesIO()
        self.ll1.save(f)
        f.seek(0)
        ll1 = LL1.load(f)
        self.assertEqual(ll1.get_table(), PARSING_TABLE)
        self.assertEqual(ll1.parse('2 + 3'), [1, 4, 8, 6, 2, 4, 8, 6, 3])
        self.assertEqual(ll1.get_follow_sets()['F'], {'"*"', '"+"', END, '")"'})

        f.seek(0)
        self.assertRaises(ConfigurationError, LL1.load, f, strict=True)


if __name__ == '__main__':
    unittest.main()
