import re
from setuptools import setup

__version__ ,= re.findall('__version__: str = "(.*)"', open('ll1/__init__.py').read())

setup(
    name = "ll1",
    version = __version__,
    packages = ['ll1', 'll1.parsers', 'll1.tools'],

    requires = [],
    install_requires = [],

    extras_require = {
        "regex": ["regex"],
        "atomic_cache": ["atomicwrites"],
    },

    package_data = {'': ['*.md']},

    test_suite = 'tests.__main__',

    # metadata for upload to PyPI
    description = "LL(1) grammar analysis and table-driven parsing",
    license = "MIT",
    keywords = "LL1 parser parsing grammar first follow predict",
    long_description='''
ll1 analyzes context-free grammars written in BNF, and parses text with them.

Main Features:
 - Computes the First, Follow and Predict sets of a grammar
 - Builds the LL(1) parsing table, and reports its conflicts
 - Table-driven parser, that returns the leftmost derivation of the text
 - Regexp-based lexical rules, or literal terminals by default
 - Automatic line & column tracking for error reporting
 - Caching of the parsing table
 - Command-line table printer
''',

    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Intended Audience :: Education",
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Compilers",
        "Topic :: Text Processing :: General",
        "License :: OSI Approved :: MIT License",
    ],
)
