from functools import reduce
import operator

import regex

from .util import LexError
from .accumulator import Operator


class Lexer:
    '''
    Lexer for calculator keystrokes.

    One character per key, except for base changes (@2 through @16). For
    consistency, needs to be instantiated, despite holding no internal state.
    '''
    # Digits of every supported base. Typing one the current base lacks is
    # the accumulator's problem, not ours.
    DIGIT = r'[0-9a-f]'
    OPERATOR = r'(?:' + r'|'.join(map(regex.escape,
                                      (op.value for op in Operator))) + r')'
    EVALUATE = r'='
    CLEAR = r'C'
    BACKSPACE = r'<'
    BASE = r'''
            @
            (?<__base__>
                # 10 through 16 before 2 through 9, or @16 would be @1
                1[0-6]
                |
                [2-9]
            )
            '''
    SPACE = r'\s+'
    # Start of a base lexeme that the next key may complete
    BASE_PREFIX = r'@1?'

    # All possible lexemes.
    LEXEME = r'(?<digit>' + DIGIT + r')|' \
             r'(?<operator>' + OPERATOR + r')|' \
             r'(?<evaluate>' + EVALUATE + r')|' \
             r'(?<clear>' + CLEAR + r')|' \
             r'(?<backspace>' + BACKSPACE + r')|' \
             r'(?<base>' + BASE + r')|' \
             r'(?<space>' + SPACE + r')'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.POSIX,
                    regex.DOTALL,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)

    def lex(self, line):
        '''
        Take a line and yield all lexemes.

        Stops on the first bad lexeme, raising LexError once the good ones
        before it have been yielded.
        '''
        while line:
            match = regex.match(type(self).LEXEME, line,
                                flags=type(self).FLAGS)
            if match is None:
                break
            yield match
            line = line[len(match.group(0)):]
        if line:
            raise LexError("Couldn't lex {0}".format(line.strip()))

    def isprefix(self, line):
        '''
        Return True if line is an incomplete lexeme, waiting for more keys.
        '''
        return regex.fullmatch(type(self).BASE_PREFIX, line) is not None

    def isfeedable(self, match):
        '''
        Return True if lexeme can be fed to an accumulator.
        '''
        return 'space' not in self.matchedgroups(match).keys()

    def matchedgroups(self, match):
        '''
        Return matched groups of lexeme, by name.
        '''
        return {key: value
                for key, value
                in match.groupdict().items()
                if value}

    def kind(self, match):
        '''
        Return name of the kind of lexeme matched: digit, operator, etc.
        '''
        return next(key
                    for key
                    in self.matchedgroups(match)
                    if not key.startswith('__'))
