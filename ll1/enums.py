import enum


@enum.unique
class SymbolKind(enum.Enum):
  terminal = enum.auto()
  lex_var = enum.auto()
  nonterminal = enum.auto()
  epsilon = enum.auto()
  end = enum.auto()
