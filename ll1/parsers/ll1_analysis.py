"""This module builds the LL(1) parsing table for ll1_parser.py

Conflicting cells are resolved in favor of the production that comes last,
unless the analyzer is strict.
"""

from ..utils import logger, Serialize
from ..exceptions import GrammarError
from ..grammar import EPSILON

from .grammar_analysis import GrammarAnalyzer


class ParseTable(Serialize):
    """Maps each nonterminal, and each lookahead token, to the number of the production to expand.

        table : {nonterminal: {lookahead: production number}}
    """
    __serialize_fields__ = 'table',

    def __init__(self, table):
        self.table = table

    def __repr__(self):
        return 'ParseTable(%r)' % self.table

    def __eq__(self, other):
        return isinstance(other, ParseTable) and self.table == other.table

    def get(self, nonterminal, lookahead):
        return self.table.get(nonterminal, {}).get(lookahead)

    def expected(self, nonterminal):
        "The lookaheads that have an entry for this nonterminal"
        return set(self.table.get(nonterminal, ()))

    def rows(self, columns, empty='-'):
        """Returns the table as a list of rows, one for each nonterminal,
        each starting with the nonterminal and followed by a cell for every column.
        """
        return [[nonterminal] + [row.get(column, empty) for column in columns]
                for nonterminal, row in self.table.items()]


class LL1_Analyzer(GrammarAnalyzer):
    def __init__(self, grammar, debug=False, strict=False):
        GrammarAnalyzer.__init__(self, grammar, debug)
        self.strict = strict
        self._parse_table = None

    @property
    def parse_table(self):
        if self._parse_table is None:
            self.compute_ll1_table()
        return self._parse_table

    def compute_ll1_table(self):
        """Each production goes under the columns of its Predict set.

        That is First(rhs), plus Follow(lhs) when the rhs can derive ε.
        For an ε-production it's just Follow(lhs).
        """
        table = {}

        for production in self.grammar.productions.values():
            row = table.setdefault(production.lhs, {})

            for lookahead in self.predict_set(production) - {EPSILON}:
                previous = row.get(lookahead)
                if previous is not None and previous != production.number:
                    msg = "Collision in %s for %s: %s, %s" % (
                        production.lhs, lookahead,
                        self.grammar.get_production(previous), production)
                    if self.strict:
                        raise GrammarError(msg + " (the grammar isn't LL(1))")
                    if self.debug:
                        logger.warning("%s (resolving as %d)", msg, production.number)

                row[lookahead] = production.number

        logger.debug("Built LL(1) table: %d nonterminals, %d entries",
                     len(table), sum(len(row) for row in table.values()))

        self._parse_table = ParseTable(table)
        return self._parse_table
