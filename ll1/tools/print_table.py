"""Prints the grammar, its First, Follow and Predict sets, and its LL(1) parsing table.

Optionally parses some input with it, and prints the productions that were used.

    python -m ll1.tools.print_table expressions.bnf --lex expressions.lex -p "2 + 3 * x"
"""
import sys
from argparse import ArgumentParser

from ll1 import END, UnexpectedInput
from ll1.tools import base_argparser, build_ll1


argparser = ArgumentParser(prog='python -m ll1.tools.print_table', description="LL(1) table printer",
                           parents=[base_argparser])
argparser.add_argument('-p', '--parse', action='append', default=[], help='text to parse with the grammar (can be repeated)')
argparser.add_argument('--no-sets', action='store_true', help="don't print the First, Follow and Predict sets")


def format_table(head, rows):
    """Draws the rows as a text table:

        +----+-----+
        |    │ "+" |
        +----+-----+
        | E' │ 2   |
        +----+-----+
    """
    head = [str(cell) for cell in head]
    rows = [[str(cell) for cell in row] for row in rows]
    widths = [max(len(row[i]) for row in [head] + rows) for i in range(len(head))]

    border = '+' + '+'.join('-' * (w + 2) for w in widths) + '+'

    def line(cells):
        return '| ' + ' │ '.join(cell.ljust(w) for cell, w in zip(cells, widths)) + ' |'

    lines = [border, line(head), border]
    for row in rows:
        lines += [line(row), border]
    return '\n'.join(lines)


def print_grammar(grammar, out=sys.stdout):
    out.write('\nGrammar:\n\n')
    for production in grammar:
        out.write('  %d. %s\n' % (production.number, production))
    out.write('\n')


def print_sets(sets, lhs_header, rhs_header, out=sys.stdout):
    out.write('\n%s:\n\n' % rhs_header)
    rows = [[symbol, ', '.join(sorted(symbols))] for symbol, symbols in sets.items()]
    out.write(format_table([lhs_header, rhs_header], rows))
    out.write('\n\n')


def table_columns(grammar):
    return grammar.terminals + grammar.lex_vars + [END]


def format_parse_table(ll1):
    grammar = ll1.get_grammar()
    columns = table_columns(grammar)
    return format_table([''] + columns, ll1.parse_table.rows(columns))


def print_table(ll1, out=sys.stdout):
    out.write('Parsing table:\n\n')
    out.write(format_parse_table(ll1))
    out.write('\n\n')


def print_parse(ll1, text, out=sys.stdout):
    out.write('Parsing: "%s"\n\n' % text)
    try:
        productions = ll1.parse(text)
    except UnexpectedInput as e:
        out.write('%s\n' % e)
        if e.pos_in_stream is not None:
            out.write(e.get_context(text))
        return False
    out.write('Accepted. Productions: %s\n\n' % ', '.join(map(str, productions)))
    return True


def main():
    if len(sys.argv) == 1:
        argparser.print_help(sys.stderr)
        sys.exit(1)
    ns = argparser.parse_args()
    ll1, out = build_ll1(ns)

    print_grammar(ll1.get_grammar(), out)
    if not ns.no_sets:
        print_sets(ll1.get_first_sets(), 'Symbol', 'First set', out)
        print_sets(ll1.get_follow_sets(), 'Symbol', 'Follow set', out)
        print_sets(ll1.get_predict_sets(), 'Production', 'Predict set', out)
    print_table(ll1, out)

    accepted = [print_parse(ll1, text, out) for text in ns.parse]
    if not all(accepted):
        sys.exit(1)


if __name__ == '__main__':
    main()
