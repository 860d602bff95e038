#
# This example checks arithmetic expressions against an LL(1) grammar
#
# It prints the productions of the leftmost derivation for every accepted
# expression, and points at the offending token otherwise.
#
# To run this, use:
#     python -m examples.expressions
#
import os
import sys

from ll1 import LL1, UnexpectedInput

__path__ = os.path.dirname(__file__)

def _read(name):
    with open(os.path.join(__path__, name), encoding='utf-8') as f:
        return f.read()

expressions = LL1({'bnf': _read('expressions.bnf'), 'lex': _read('expressions.lex')})


def check(text):
    try:
        productions = expressions.parse(text)
    except UnexpectedInput as e:
        print(e)
        print(e.get_context(text))
        return False

    grammar = expressions.get_grammar()
    print('Accepted: %s' % text)
    for number in productions:
        print('  %s' % grammar.get_production(number))
    print()
    return True


def main():
    texts = sys.argv[1:] or ['2 * (x + 1)', '-y / 3 - 4', '(1 + 2', '1 2']
    results = [check(text) for text in texts]
    if not all(results):
        sys.exit(1)


if __name__ == '__main__':
    main()
