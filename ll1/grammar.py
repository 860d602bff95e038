from .utils import Serialize


# The empty derivation
EPSILON = 'ε'

# End of input, and bottom of the stack
END = '$'


def is_terminal(symbol):
    """Terminals are written in double quotes in the grammar, e.g. "+", or " "."""
    return len(symbol) >= 2 and symbol[0] == '"' and symbol[-1] == '"'


def wrap_terminal(text):
    return '"%s"' % text


class Production(Serialize):
    """
        number : 1-based index of the production, in the order it appears in the grammar
        lhs : the nonterminal this production expands
        rhs : a tuple of symbols, (EPSILON,) for an empty expansion
    """
    __slots__ = ('number', 'lhs', 'rhs', '_hash')

    __serialize_fields__ = 'number', 'lhs', 'rhs'

    def __init__(self, number, lhs, rhs):
        self.number = number
        self.lhs = lhs
        self.rhs = tuple(rhs) or (EPSILON,)
        self._hash = hash((self.number, self.lhs, self.rhs))

    def _deserialize(self):
        self.rhs = tuple(self.rhs)
        self._hash = hash((self.number, self.lhs, self.rhs))

    @property
    def is_epsilon(self):
        return self.rhs == (EPSILON,)

    def __str__(self):
        return '%s -> %s' % (self.lhs, ' '.join(self.rhs))

    def __repr__(self):
        return 'Production(%r, %r, %r)' % (self.number, self.lhs, self.rhs)

    def __hash__(self):
        return self._hash

    def __eq__(self, other):
        if not isinstance(other, Production):
            return False
        return self.number == other.number and self.lhs == other.lhs and self.rhs == other.rhs

