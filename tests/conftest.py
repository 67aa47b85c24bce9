from pytest import Item, fixture

from basecalc.accumulator import Accumulator
from basecalc.lexer import Lexer


@fixture
def accumulator():
    return Accumulator()


@fixture
def keys(accumulator):
    '''
    Type keystrokes, e.g. keys('5+3='), and return the display.
    '''
    lexer = Lexer()

    def type_(line):
        for match in lexer.lex(line):
            if lexer.isfeedable(match):
                accumulator.feed(lexer.matchedgroups(match))
        return accumulator.display
    return type_


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Log every assertion, in case we later need to audit a run.

    Use with pytest -rP and enable_assertion_pass_hook.
    '''
    print('given', item.name + ':' + str(lineno), str(orig))
    print('actual', item.name + ':' + str(lineno),
          '\n'.join(str(expl).splitlines()[:-2]))
