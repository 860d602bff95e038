from .utils import logger
from .exceptions import (ParseError, GrammarError, UnexpectedToken, UnexpectedEOF,
                         UnexpectedInput, ConfigurationError, LL1Error)
from .grammar import EPSILON, END, Production
from .load_grammar import Grammar
from .lexer import Token, Tokenizer
from .parsers.grammar_analysis import GrammarAnalyzer
from .ll1 import LL1

__version__: str = "0.3.0"
