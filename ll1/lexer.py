## Lexer Implementation

import re

from .exceptions import GrammarError
from .grammar import END, is_terminal, wrap_terminal

_LITERAL_RE = re.compile(r'"([^"]+)"')
_WHITESPACE_RE = re.compile(r'\s+')


class LexRule:
    """A lexical rule: a regexp, and the name of the token it produces.

    Quoted text in the pattern is matched literally, so ``"."`` stands for ``\\.``
    """

    def __init__(self, pattern, name):
        self.pattern = pattern
        self.name = name

    def __repr__(self):
        return '%s(%r, %r)' % (type(self).__name__, self.pattern, self.name)

    def to_regexp(self):
        return _LITERAL_RE.sub(lambda m: re.escape(m.group(1)), self.pattern)


class LexerConf:
    def __init__(self, rules, re_module=re, g_regex_flags=0):
        self.rules = rules
        self.re_module = re_module
        self.g_regex_flags = g_regex_flags
        self.matchers = [(self._compile(rule), rule.name) for rule in rules]

    @classmethod
    def from_grammar(cls, grammar, re_module=re, g_regex_flags=0):
        rules = [LexRule(pattern, name) for pattern, name in grammar.lex_rules.items()]
        return cls(rules, re_module, g_regex_flags)

    def _compile(self, rule):
        try:
            regexp = self.re_module.compile(rule.to_regexp(), self.g_regex_flags)
        except self.re_module.error as e:
            raise GrammarError("Cannot compile lexical rule %r: %s" % (rule.pattern, e))
        return regexp


class Token(str):
    """A string with meta-information, that is produced by the tokenizer.

    Attributes:
        type: Name of the token: a terminal like '"+"', a lexical variable like 'NUMBER', or '$'
        value: Value of the token. Terminals are wrapped in quotes, so they compare equal to the grammar symbol.
        pos_in_stream: The index of the token in the text
        line: The line of the token in the text (starting with 1)
        column: The column of the token in the text (starting with 1)
    """
    __slots__ = ('type', 'value', 'pos_in_stream', 'line', 'column')

    def __new__(cls, type_, value, pos_in_stream=None, line=None, column=None):
        self = super(Token, cls).__new__(cls, value)
        self.type = type_
        self.value = value
        self.pos_in_stream = pos_in_stream
        self.line = line
        self.column = column
        return self

    def __reduce__(self):
        return (self.__class__, (self.type, self.value, self.pos_in_stream, self.line, self.column))

    def __repr__(self):
        return 'Token(%s, %r)' % (self.type, self.value)

    def __eq__(self, other):
        if isinstance(other, Token) and self.type != other.type:
            return False

        return str.__eq__(self, other)

    __hash__ = str.__hash__


class LineCounter:
    def __init__(self):
        self.newline_char = '\n'
        self.char_pos = 0
        self.line = 1
        self.column = 1
        self.line_start_pos = 0

    def feed(self, token, test_newline=True):
        """Consume a token and calculate the new line & column.

        As an optional optimization, set test_newline=False if token doesn't contain a newline.
        """
        if test_newline:
            newlines = token.count(self.newline_char)
            if newlines:
                self.line += newlines
                self.line_start_pos = self.char_pos + token.rindex(self.newline_char) + 1

        self.char_pos += len(token)
        self.column = self.char_pos - self.line_start_pos + 1


class Tokenizer:
    """Extracts tokens from a string, one at a time, using the lexical rules.

    The tokens are produced lazily and only once. The last one is always the '$' token.

    Rules are tried in the order they were declared, and the first one that matches wins.
    A character that no rule matches becomes a token of its own (with the character as its type),
    which the parser is then sure to reject.

    Whitespace is skipped before any rule is tried, so a rule for a whitespace terminal like " " never matches.
    """

    def __init__(self, text, lexer_conf):
        self.text = text + END
        self.lexer_conf = lexer_conf
        self.line_ctr = LineCounter()

    def is_eof(self):
        return self.line_ctr.char_pos >= len(self.text)

    def get_next_token(self):
        text = self.text
        line_ctr = self.line_ctr

        m = _WHITESPACE_RE.match(text, line_ctr.char_pos)
        if m:
            line_ctr.feed(m.group(0))

        pos = line_ctr.char_pos
        if text[pos:] == END or self.is_eof():
            token = Token(END, END, pos, line_ctr.line, line_ctr.column)
            line_ctr.feed(text[pos:], False)
            return token

        # The rules never see the sentinel
        endpos = len(text) - len(END)
        for regexp, name in self.lexer_conf.matchers:
            m = regexp.match(text, pos, endpos)
            # An empty match counts as no match
            if m and m.end() > pos:
                value = m.group(0)
                token = Token(name, wrap_terminal(value) if is_terminal(name) else value,
                              pos, line_ctr.line, line_ctr.column)
                line_ctr.feed(value)
                return token

        char = text[pos]
        token = Token(char, char, pos, line_ctr.line, line_ctr.column)
        line_ctr.feed(char)
        return token

    def lex(self):
        while not self.is_eof():
            yield self.get_next_token()

    __iter__ = lex
