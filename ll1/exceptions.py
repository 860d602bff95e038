class LL1Error(Exception):
    pass


class ConfigurationError(LL1Error, ValueError):
    pass


def assert_config(value, options, msg='Got %r, expected one of %s'):
    if value not in options:
        raise ConfigurationError(msg % (value, options))


class GrammarError(LL1Error):
    pass


class ParseError(LL1Error):
    pass


class UnexpectedInput(ParseError):
    """UnexpectedInput Error.

    Used as a base class for the following exceptions:

    - ``UnexpectedToken``: The parser received a token that no table entry accepts
    - ``UnexpectedEOF``: The input ended while the stack still held symbols

    After catching one of these exceptions, you may call ``get_context`` to create a nicer error message.
    """
    pos_in_stream = None
    token = None
    stack = None

    def get_context(self, text, span=40):
        """Returns a pretty string pinpointing the error in the text,
        with span amount of context characters around it.

        Note:
            The parser doesn't hold a copy of the text it has to parse,
            so you have to provide it again
        """
        assert self.pos_in_stream is not None, self
        pos = min(self.pos_in_stream, len(text))
        start = max(pos - span, 0)
        end = pos + span
        before = text[start:pos].rsplit('\n', 1)[-1]
        after = text[pos:end].split('\n', 1)[0]
        return before + after + '\n' + ' ' * len(before.expandtabs()) + '^\n'

    def _format_expected(self, expected):
        return "Expected one of: \n\t* %s\n" % '\n\t* '.join(sorted(expected))


class UnexpectedToken(UnexpectedInput):
    """Raised by the parser when the lookahead token has no entry in the
    parsing table for the symbol on top of the stack.
    """

    def __init__(self, token, expected, stack=None):
        self.line = getattr(token, 'line', '?')
        self.column = getattr(token, 'column', '?')
        self.pos_in_stream = getattr(token, 'pos_in_stream', None)

        self.token = token
        self.expected = expected
        self.stack = stack

        super(UnexpectedToken, self).__init__()

    def __str__(self):
        message = ("Parse error, unexpected token %s at line %s, column %s.\n%s"
                   % (getattr(self.token, 'value', self.token), self.line, self.column,
                      self._format_expected(self.expected)))
        return message


class UnexpectedEOF(UnexpectedInput):
    """Raised when the input is exhausted but the stack still holds symbols
    that cannot derive the empty string.
    """

    def __init__(self, token, stack, expected=None):
        self.token = token
        self.stack = stack
        self.expected = expected or set()
        self.pos_in_stream = getattr(token, 'pos_in_stream', None)
        self.line = getattr(token, 'line', '?')
        self.column = getattr(token, 'column', '?')

        super(UnexpectedEOF, self).__init__()

    def __str__(self):
        message = ("Parse error, stack is not empty at end of input: %s (last token: %s)\n"
                   % (' '.join(self.stack), getattr(self.token, 'value', self.token)))
        if self.expected:
            message += self._format_expected(self.expected)
        return message
