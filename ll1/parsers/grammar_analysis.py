"""First, Follow and Predict sets of an LL(1) grammar.

The sets are computed on demand by mutually recursive functions, and memoized.
An empty set is stored for a symbol before recursing into its productions,
so cyclic references terminate. On left-recursive grammars (which aren't LL(1)
anyway) the sets may come out incomplete.
"""

from ..grammar import EPSILON, END
from ..load_grammar import Grammar


class GrammarAnalyzer(object):
    def __init__(self, grammar, debug=False):
        self.debug = debug
        self.grammar = grammar if isinstance(grammar, Grammar) else Grammar(grammar)
        self._reset_sets()

    def _reset_sets(self):
        self.FIRST = {}
        self.FOLLOW = {}

    def get_first_sets(self):
        """Rules for First sets

        - If X is a terminal then First(X) is just X
        - If there is a production X -> ε then add ε to First(X)
        - If there is a production X -> Y1 Y2 .. Yk then add First(Y1 Y2 .. Yk) to First(X)
        """
        for lhs in self.grammar.nonterminals:
            self.first_of(lhs)
        return self.FIRST

    def first_of(self, symbol):
        """Returns the First set of a symbol.

        Given the productions:

            S -> "a" B
            S -> Y X
            Y -> "b"

        first_of('S') is {'"a"', '"b"'}: "a" directly, and "b" through Y.
        """
        # Already built, or currently being built further up the stack
        if symbol in self.FIRST:
            return self.FIRST[symbol]

        first_set = self.FIRST[symbol] = set()

        if self.grammar.is_token(symbol):
            first_set.add(symbol)
            return first_set

        for production in self.grammar.productions_for(symbol):
            first_set |= self.first_of_rhs(production.rhs)

        return first_set

    def first_of_rhs(self, rhs):
        """First(Y1 Y2 .. Yk) is First(Y1) without ε, plus First(Y2 .. Yk) if Y1 can derive ε.

        If every Yi can derive ε, then ε is in First(Y1 Y2 .. Yk) too.
        """
        first_set = set()

        for sym in rhs:
            if sym == EPSILON:
                first_set.add(EPSILON)
                break

            first_of_current = self.first_of(sym)
            first_set |= first_of_current - {EPSILON}

            if EPSILON not in first_of_current:
                break
        else:
            if rhs:
                first_set.add(EPSILON)

        return first_set

    def get_follow_sets(self):
        """Rules for Follow sets

        - Put $ (the end of input) in Follow(S), where S is the start symbol
        - If there is a production A -> a B b, then everything in First(b) except ε is in Follow(B)
        - If there is a production A -> a B, then everything in Follow(A) is in Follow(B)
        - If there is a production A -> a B b, where First(b) contains ε,
          then everything in Follow(A) is in Follow(B)
        """
        for lhs in self.grammar.nonterminals:
            self.follow_of(lhs)
        return self.FOLLOW

    def follow_of(self, symbol):
        if symbol in self.FOLLOW:
            return self.FOLLOW[symbol]

        follow_set = self.FOLLOW[symbol] = set()

        if symbol == self.grammar.start_symbol:
            follow_set.add(END)

        for production in self.grammar.productions_with(symbol):
            rhs = production.rhs
            for i, sym in enumerate(rhs):
                if sym != symbol:
                    continue

                # Everything that can start what follows, until something that can't vanish
                for follow_sym in rhs[i+1:]:
                    if follow_sym == EPSILON:
                        continue
                    first_of_follow = self.first_of(follow_sym)
                    follow_set |= first_of_follow - {EPSILON}
                    if EPSILON not in first_of_follow:
                        break
                else:
                    # Nothing follows, or all of it can derive ε.
                    # Skip productions like B -> "a" B, they add nothing new.
                    if production.lhs != symbol:
                        follow_set |= self.follow_of(production.lhs)

        return follow_set

    def predict_set(self, production):
        """Predict(A -> α) = First(α) ∪ (Follow(A) if α =>* ε)

        Accepts a Production or its number. An ε-production predicts Follow(A).
        """
        if isinstance(production, int):
            production = self.grammar.get_production(production)

        if production.is_epsilon:
            return set(self.follow_of(production.lhs))

        first_set = self.first_of_rhs(production.rhs)
        predict_set = set(first_set)
        if EPSILON in first_set:
            predict_set |= self.follow_of(production.lhs)
        return predict_set

    def get_predict_sets(self):
        """Returns the Predict set of every production that isn't directly an ε-production,
        keyed by a readable label like "1. E -> T E'".
        """
        predict_sets = {}
        i = 0
        for production in self.grammar.productions.values():
            if production.is_epsilon:
                continue
            i += 1
            predict_sets['%d. %s' % (i, production)] = self.predict_set(production)
        return predict_sets
