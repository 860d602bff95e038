from ll1.exceptions import ConfigurationError, assert_config

import os, pickle, hashlib
import tempfile

from .utils import Serialize, FS, logger
from .load_grammar import Grammar
from .lexer import LexerConf, Tokenizer
from .parsers.ll1_analysis import LL1_Analyzer, ParseTable
from .parsers.ll1_parser import LL1_Parser

import re
try:
    import regex
except ImportError:
    regex = None


class LL1Options(Serialize):
    """Specifies the options for LL1

    """
    OPTIONS_DOC = """
    **===  General Options  ===**

    debug
            Log the cells of the parsing table that were claimed by more than one production,
            and dump the parser stack on errors, through the ``ll1`` logger (default: False)
    strict
            Raise a GrammarError when two productions claim the same cell of the parsing table,
            instead of letting the last one win (default: False)
    cache
            Cache the grammar analysis and parsing table, for faster loading.

            - When ``False``, does nothing (default)
            - When ``True``, caches to a temporary file in the local directory
            - When given a string, caches to the path pointed by the string

    **===  Lexer Options  ===**

    regex
            When True, uses the ``regex`` module instead of the stdlib ``re`` for the lexical rules.
    g_regex_flags
            Flags that are applied to all lexical rules

    **=== End Options ===**
    """
    if __doc__:
        __doc__ += OPTIONS_DOC

    # Adding a new option needs to be done in multiple places:
    # - In the dictionary below. This is the primary truth of which options `LL1.__init__` accepts
    # - In the docstring above.
    # - Potentially in `_LOAD_ALLOWED_OPTIONS` below this class, when the option doesn't change the table
    # - Potentially in `ll1.tools.__init__`, if it makes sense, and it can easily be passed as a cmd argument
    _defaults = {
        'debug': False,
        'strict': False,
        'cache': False,
        'regex': False,
        'g_regex_flags': 0,
    }

    def __init__(self, options_dict):
        o = dict(options_dict)

        options = {}
        for name, default in self._defaults.items():
            if name in o:
                value = o.pop(name)
                if isinstance(default, bool) and name != 'cache':
                    value = bool(value)
            else:
                value = default

            options[name] = value

        self.__dict__['options'] = options

        if not isinstance(self.cache, (bool, str)):
            raise ConfigurationError("cache argument must be bool or str")

        if o:
            raise ConfigurationError("Unknown options: %s" % ', '.join(o.keys()))

    def __getattr__(self, name):
        try:
            return self.__dict__['options'][name]
        except KeyError as e:
            raise AttributeError(e)

    def __setattr__(self, name, value):
        assert_config(name, self.options.keys(), "%r isn't a valid option. Expected one of: %s")
        self.options[name] = value

    def serialize(self):
        return self.options

    @classmethod
    def deserialize(cls, data):
        return cls(data)


# Options that can be passed when loading from cache, or from a saved file.
# They don't change the grammar or the parsing table.
_LOAD_ALLOWED_OPTIONS = {'debug', 'regex', 'g_regex_flags'}


class LL1(Serialize):
    """Main interface for the library.

    Normalizes the grammar, computes its First, Follow and Predict sets,
    builds the LL(1) parsing table, and parses text with it.

    Parameters:
        grammar: the BNF grammar, as a string, a list of lines, a file-like object,
                 or a dict with the ``bnf`` grammar and the ``lex`` rules. See ``Grammar``.
        options: a dictionary controlling various aspects of LL1.

    Example:
        >>> LL1('''
        ...     S -> F
        ...        | "(" S "+" F ")"
        ...     F -> "a"
        ... ''').parse('(a + a)')
        [2, 1, 3, 3]
    """
    __serialize_fields__ = 'grammar', 'parse_table', 'options'

    def __init__(self, grammar, **options):
        self.options = LL1Options(options)

        # Drain file-like objects to get their contents
        try:
            read = grammar.read
        except AttributeError:
            pass
        else:
            grammar = read()

        cache_fn = None
        if self.options.cache:
            if isinstance(grammar, Grammar):
                raise ConfigurationError("cache only works when the grammar is given as text")
            if isinstance(self.options.cache, str):
                cache_fn = self.options.cache
            else:
                from . import __version__
                options_str = ''.join(k + str(v) for k, v in sorted(options.items()))
                s = repr(grammar) + options_str + __version__
                md5 = hashlib.md5(s.encode('utf8')).hexdigest()
                cache_fn = os.path.join(tempfile.gettempdir(), '.ll1_cache_%s.tmp' % md5)

            if FS.exists(cache_fn):
                logger.debug('Loading grammar from cache: %s', cache_fn)
                # Remove options that aren't relevant for loading from cache
                load_options = {k: v for k, v in options.items() if k in _LOAD_ALLOWED_OPTIONS}
                with FS.open(cache_fn, 'rb') as f:
                    try:
                        self._load(f, **load_options)
                    except Exception:
                        raise RuntimeError("Failed to load LL1 from cache: %r. Try to delete the file and run again." % cache_fn)
                return

        if isinstance(grammar, Grammar):
            self.grammar = grammar
        else:
            self.grammar = Grammar(grammar)

        self._analyzer = LL1_Analyzer(self.grammar, debug=self.options.debug, strict=self.options.strict)
        self.parse_table = self._analyzer.compute_ll1_table()
        self._build_parser()

        if cache_fn:
            logger.debug('Saving grammar to cache: %s', cache_fn)
            with FS.open(cache_fn, 'wb') as f:
                self.save(f)

    if __doc__:
        __doc__ += "\n\n" + LL1Options.OPTIONS_DOC

    def _get_re_module(self):
        if self.options.regex:
            if regex:
                return regex
            raise ImportError('`regex` module must be installed if calling `LL1(regex=True)`.')
        return re

    def _build_parser(self):
        self.lexer_conf = LexerConf.from_grammar(self.grammar, self._get_re_module(), self.options.g_regex_flags)
        self.parser = LL1_Parser(self.grammar, self.parse_table, self.lexer_conf, self.options.debug)

    @property
    def analyzer(self):
        "The analyzer holding the First and Follow sets (recomputed lazily after loading)"
        if self._analyzer is None:
            self._analyzer = LL1_Analyzer(self.grammar, debug=self.options.debug, strict=self.options.strict)
        return self._analyzer

    def save(self, f):
        """Saves the instance into the given file object

        Useful for caching and multiprocessing.
        """
        pickle.dump(self.serialize(), f, protocol=pickle.HIGHEST_PROTOCOL)

    @classmethod
    def load(cls, f, **options):
        """Loads an instance from the given file object

        Useful for caching and multiprocessing.
        """
        inst = cls.__new__(cls)
        return inst._load(f, **options)

    def _load(self, f, **kwargs):
        if isinstance(f, dict):
            d = f
        else:
            d = pickle.load(f)

        if set(kwargs) - _LOAD_ALLOWED_OPTIONS:
            raise ConfigurationError("Some options are not allowed when loading a Parser: {}"
                                     .format(set(kwargs) - _LOAD_ALLOWED_OPTIONS))
        options = dict(d['options'])
        options.update(kwargs)
        self.options = LL1Options.deserialize(options)
        self.grammar = Grammar.deserialize(d['grammar'])
        self.parse_table = ParseTable.deserialize(d['parse_table'])
        self._analyzer = None
        self._build_parser()
        return self

    @classmethod
    def open(cls, grammar_filename, rel_to=None, **options):
        """Create an instance of LL1 with the grammar given by its filename

        If ``rel_to`` is provided, the function will find the grammar filename in relation to it.

        Example:

            >>> LL1.open("expressions.bnf", rel_to=__file__)
            LL1(...)

        """
        if rel_to:
            basepath = os.path.dirname(rel_to)
            grammar_filename = os.path.join(basepath, grammar_filename)
        with open(grammar_filename, encoding='utf8') as f:
            return cls(f, **options)

    def __repr__(self):
        return 'LL1(%r, ...)' % self.grammar

    def get_grammar(self):
        return self.grammar

    def get_first_sets(self):
        return self.analyzer.get_first_sets()

    def get_follow_sets(self):
        return self.analyzer.get_follow_sets()

    def get_predict_sets(self):
        return self.analyzer.get_predict_sets()

    def get_table(self):
        "Returns the parsing table, as {nonterminal: {lookahead: production number}}"
        return self.parse_table.table

    def lex(self, text):
        "Only tokenize the text, without parsing it. The last token is always '$'"
        return Tokenizer(text, self.lexer_conf).lex()

    def parse(self, text):
        """Parse the given text, according to the grammar.

        Returns:
            The list of production numbers used in the leftmost derivation of the text.

        Raises:
            UnexpectedToken: when a token has no entry in the parsing table.
            UnexpectedEOF: when the input ends but the stack isn't empty.
        """
        return self.parser.parse(text)
