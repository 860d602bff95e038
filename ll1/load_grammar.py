"""Parses and normalizes grammars written in the BNF notation:

    E  -> T E'
    E' -> "+" T E'
        | ε
    T  -> "id" | NUMBER

Terminals are double-quoted, lexical variables are ALL_CAPS names defined
by the lexical rules, and anything else on the right-hand side is a
nonterminal. An empty right-hand side (or ε) derives the empty string.

Lexical rules are written one per line as ``<regexp> : <token>``:

    "("                  : "("
    [0-9]+("."[0-9]+)?\\b : NUMBER
"""

import re

from .utils import logger, classify, dedup_list, Serialize
from .exceptions import GrammarError
from .grammar import EPSILON, END, Production, is_terminal
from .enums import SymbolKind

_RULE_RE = re.compile(r'^(?:(?P<lhs>[^\s|"]+?)\s*->|(?P<alt>\|))(?P<rhs>.*)$')

# The token name is the last colon-separated part that is a valid token name,
# so patterns may contain colons of their own.
_LEX_RULE_RE = re.compile(r'^(?P<pattern>.*\S)\s*:\s*(?P<name>"[^"]*"|[^\s":]+)\s*$')

ALTERNATIVE = '|'


def _to_lines(text):
    "Returns (line number, stripped line) for every non-blank line"
    if isinstance(text, str):
        text = text.split('\n')
    return [(i, line.strip()) for i, line in enumerate(text, 1) if line.strip()]


def split_rhs(rhs):
    """Splits a right-hand side on whitespace:

    A "+" B " " C  ->  ['A', '"+"', 'B', '" "', 'C']
    """
    parts = rhs.split()
    symbols = []
    i = 0
    while i < len(parts):
        # The space terminal is broken in two by the split
        if parts[i] == '"' and i + 1 < len(parts) and parts[i + 1] == '"':
            symbols.append('" "')
            i += 2
        else:
            symbols.append(parts[i])
            i += 1
    return symbols


def split_alternatives(symbols):
    alternatives = [[]]
    for sym in symbols:
        if sym == ALTERNATIVE:
            alternatives.append([])
        else:
            alternatives[-1].append(sym)
    return [tuple(alt) if alt else (EPSILON,) for alt in alternatives]


def load_bnf(bnf):
    """Returns the list of (lhs, rhs) pairs described by the grammar,
    in the order they were written.

    A line starting with ``|`` continues the nonterminal of the line before it.
    """
    if not isinstance(bnf, (str, list, tuple)):
        raise GrammarError("Expected the grammar as a string or a list of lines, got %r" % type(bnf).__name__)

    productions = []
    current = None
    for line_no, line in _to_lines(bnf):
        m = _RULE_RE.match(line)
        if m is None:
            raise GrammarError("Invalid production at line %d (expected `A -> ...` or `| ...`): %r" % (line_no, line))

        if m.group('lhs'):
            current = m.group('lhs')
        elif current is None:
            raise GrammarError("Alternative at line %d doesn't follow any production: %r" % (line_no, line))

        for rhs in split_alternatives(split_rhs(m.group('rhs'))):
            productions.append((current, rhs))

    if not productions:
        raise GrammarError("Grammar is empty")

    return productions


def load_lex(lex):
    """Normalizes the lexical rules into an ordered {pattern: token} dict.

    Accepts ``<pattern> : <token>`` lines (as a string or a list), a dict, or a list of pairs.
    """
    if lex is None:
        return None

    if isinstance(lex, dict):
        return dict(lex)

    if isinstance(lex, str) or all(isinstance(line, str) for line in lex):
        rules = {}
        for line_no, line in _to_lines(lex):
            m = _LEX_RULE_RE.match(line)
            if m is None:
                raise GrammarError("Invalid lexical rule at line %d (expected `<pattern> : <token>`): %r" % (line_no, line))
            rules[m.group('pattern')] = m.group('name')
        return rules

    try:
        return {pattern: name for pattern, name in lex}
    except (TypeError, ValueError):
        raise GrammarError("Expected the lexical rules as a string, a dict or a list of pairs, got %r" % (lex,))


class Grammar(Serialize):
    """The normalized form of a grammar.

    Productions are numbered from 1, in the order they appear. The left-hand side
    of the first production is the start symbol.

    Parameters:
        grammar: the BNF grammar, either as a string, a list of lines, a file-like
                 object, or a dict ``{'bnf': ..., 'lex': ...}`` that also provides
                 the lexical rules.

    When no lexical rules are given, they are inferred from the terminals of the grammar.
    """

    __serialize_fields__ = 'productions', 'start_symbol', 'user_lex_rules', 'original_bnf', 'original_lex'
    __serialize_namespace__ = Production,

    def __init__(self, grammar):
        try:
            read = grammar.read
        except AttributeError:
            pass
        else:
            grammar = read()

        lex = None
        if isinstance(grammar, dict):
            try:
                bnf = grammar['bnf']
            except KeyError:
                raise GrammarError("A grammar given as a dict must have a 'bnf' entry")
            lex = grammar.get('lex')
        else:
            bnf = grammar

        self.original_bnf = bnf
        self.original_lex = lex
        self.user_lex_rules = load_lex(lex)

        self.productions = {number: Production(number, lhs, rhs)
                            for number, (lhs, rhs) in enumerate(load_bnf(bnf), 1)}
        self.start_symbol = self.productions[1].lhs

        self._deserialize()
        self._check_symbols()

    def _deserialize(self):
        self._terminals = None
        self._nonterminals = None
        self._lex_rules = None
        self._lex_vars = None
        self._lex_var_set = None
        self._by_lhs = None
        self._by_rhs = None

    def _check_symbols(self):
        for sym in dedup_list(s for p in self.productions.values() for s in p.rhs):
            if self.kind_of(sym) is SymbolKind.nonterminal and sym not in self.productions_by_lhs:
                logger.warning("Symbol %s is used but has no productions and no lexical rule", sym)

    def __repr__(self):
        return 'Grammar(%r)' % [str(p) for p in self.productions.values()]

    def __len__(self):
        return len(self.productions)

    def __iter__(self):
        return iter(self.productions.values())

    def get_production(self, number):
        try:
            return self.productions[number]
        except KeyError:
            raise GrammarError("No production numbered %r" % (number,))

    @property
    def terminals(self):
        "Terminals of the grammar, in the order they are first used"
        if self._terminals is None:
            self._terminals = dedup_list(sym for p in self.productions.values() for sym in p.rhs
                                         if is_terminal(sym))
        return self._terminals

    @property
    def nonterminals(self):
        if self._nonterminals is None:
            self._nonterminals = dedup_list(p.lhs for p in self.productions.values())
        return self._nonterminals

    @property
    def lex_rules(self):
        """Lexical rules for the tokenizer, as {pattern: token}.

        If they weren't provided, every terminal matches itself.
        """
        if self._lex_rules is None:
            if self.user_lex_rules is not None:
                self._lex_rules = self.user_lex_rules
            else:
                self._lex_rules = {t: t for t in self.terminals}
        return self._lex_rules

    @property
    def lex_vars(self):
        "Token names of the lexical rules that aren't terminals, e.g. NUMBER"
        if self._lex_vars is None:
            self._lex_vars = dedup_list(name for name in self.lex_rules.values() if not is_terminal(name))
        return self._lex_vars

    @property
    def productions_by_lhs(self):
        if self._by_lhs is None:
            self._by_lhs = classify(self.productions.values(), lambda p: p.lhs)
        return self._by_lhs

    def productions_for(self, symbol):
        "Returns all the productions of `symbol`"
        return self.productions_by_lhs.get(symbol, [])

    def productions_with(self, symbol):
        "Returns all the productions that use `symbol` on their right-hand side"
        if self._by_rhs is None:
            by_rhs = {}
            for p in self.productions.values():
                for sym in dedup_list(p.rhs):
                    by_rhs.setdefault(sym, []).append(p)
            self._by_rhs = by_rhs
        return self._by_rhs.get(symbol, [])

    def is_terminal(self, symbol):
        return is_terminal(symbol)

    def is_token(self, symbol):
        "Tokens are either terminals, or one of the variables of the lexical grammar"
        if self._lex_var_set is None:
            self._lex_var_set = frozenset(self.lex_vars)
        return is_terminal(symbol) or symbol in self._lex_var_set

    def kind_of(self, symbol):
        if symbol == EPSILON:
            return SymbolKind.epsilon
        if symbol == END:
            return SymbolKind.end
        if is_terminal(symbol):
            return SymbolKind.terminal
        if self.is_token(symbol):
            return SymbolKind.lex_var
        return SymbolKind.nonterminal
