"""This module implements a table-driven LL(1) parser
"""
from typing import List

from ..utils import logger
from ..exceptions import UnexpectedInput, UnexpectedToken, UnexpectedEOF
from ..grammar import EPSILON, END
from ..lexer import Token, Tokenizer, LexerConf
from ..load_grammar import Grammar

from .ll1_analysis import ParseTable


class ParserState:
    """The stack and the productions used so far, for a single run of the parser"""
    __slots__ = 'parser', 'stack', 'productions'

    stack: List[str]
    productions: List[int]

    def __init__(self, parser: 'LL1_Parser'):
        self.parser = parser
        # `$` at the bottom, and the start symbol on top of it
        self.stack = [END, parser.grammar.start_symbol]
        self.productions = []

    def derive(self, nonterminal: str, token: Token) -> None:
        "Replace the nonterminal with the right-hand side of the production the table selects"
        parse_table = self.parser.parse_table
        number = parse_table.get(nonterminal, token.type)
        if number is None:
            raise UnexpectedToken(token, parse_table.expected(nonterminal), self.stack + [nonterminal])

        production = self.parser.grammar.productions[number]
        self.productions.append(number)

        # Pushed in reverse, so the leftmost symbol ends up on top.
        # An ε-production derives nothing, so nothing is pushed.
        self.stack.extend(sym for sym in reversed(production.rhs) if sym != EPSILON)


class LL1_Parser:
    parse_table: ParseTable
    grammar: Grammar
    lexer_conf: LexerConf
    debug: bool

    def __init__(self, grammar: Grammar, parse_table: ParseTable, lexer_conf: LexerConf, debug: bool=False):
        self.grammar = grammar
        self.parse_table = parse_table
        self.lexer_conf = lexer_conf
        self.debug = debug

    def parse(self, text: str) -> List[int]:
        """Checks the text for acceptance.

        Returns the numbers of the productions of its leftmost derivation,
        or raises UnexpectedInput.
        """
        state = ParserState(self)
        try:
            return self.parse_from_state(state, Tokenizer(text, self.lexer_conf))
        except UnexpectedInput:
            if self.debug:
                logger.debug("Stack dump: %s", ' '.join(state.stack))
                logger.debug("Productions so far: %s", ', '.join(map(str, state.productions)))
            raise

    def parse_from_state(self, state: ParserState, tokenizer: Tokenizer) -> List[int]:
        stack = state.stack
        is_token = self.grammar.is_token

        token = tokenizer.get_next_token()

        while not tokenizer.is_eof():
            top = stack.pop()

            if top == END:
                raise UnexpectedToken(token, {END}, [END])

            if is_token(top):
                if top != token.type:
                    raise UnexpectedToken(token, {top}, stack + [top])
                # Already popped from the stack, so just advance
                token = tokenizer.get_next_token()
                continue

            state.derive(top, token)

        # The input is over, what's left on the stack has to derive ε
        while len(stack) > 1 and not is_token(stack[-1]) \
                and self.parse_table.get(stack[-1], token.type) is not None:
            state.derive(stack.pop(), token)

        # At the end the stack should contain only `$`,
        # and the last token should be `$` as well
        if stack != [END] or token.type != END:
            top = stack[-1]
            expected = {top} if top == END or is_token(top) else self.parse_table.expected(top)
            raise UnexpectedEOF(token, list(stack), expected)

        return state.productions
