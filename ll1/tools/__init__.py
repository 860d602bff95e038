import sys
from argparse import ArgumentParser, FileType
from ll1 import LL1

base_argparser = ArgumentParser(add_help=False, epilog='Look at the ll1 documentation for more info on the options')


flags = [
    ('d', 'debug'),
    'strict',
    'regex',
]

options = []

base_argparser.add_argument('-o', '--out', type=FileType('w', encoding='utf-8'), default=sys.stdout, help='the output file (default=stdout)')
base_argparser.add_argument('-x', '--lex', type=FileType('r', encoding='utf-8'), help='a file with the lexical rules, one `<pattern> : <token>` per line')
base_argparser.add_argument('grammar_file', type=FileType('r', encoding='utf-8'), help='A BNF grammar file')

for f in flags:
    if isinstance(f, tuple):
        options.append(f[1])
        base_argparser.add_argument('-' + f[0], '--' + f[1], action='store_true')
    else:
        options.append(f)
        base_argparser.add_argument('--' + f, action='store_true')


def build_ll1(namespace):
    kwargs = {n: getattr(namespace, n) for n in options}
    grammar = namespace.grammar_file.read()
    if namespace.lex is not None:
        grammar = {'bnf': grammar, 'lex': namespace.lex.read()}
    return LL1(grammar, **kwargs), namespace.out
