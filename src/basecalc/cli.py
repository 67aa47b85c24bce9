import sys
from argparse import ArgumentParser, REMAINDER
import logging

from .util import CalcError, MIN_BASE, MAX_BASE
from .accumulator import Accumulator
from .lexer import Lexer


log = logging.getLogger(__name__)


def base(text):
    '''
    argparse type for a supported base.
    '''
    n = int(text)
    if not MIN_BASE <= n <= MAX_BASE:
        raise ValueError(text)
    return n


class CLI:
    '''
    Command line interface to calculator.
    '''

    LOG_FORMAT = '%(asctime)s %(name)s [%(levelname)s] %(message)s'

    def dumper(self):
        '''
        Dump all lexemes kinds and matches.
        '''
        lexer = Lexer()
        print('<kind>\t<repr(lexeme)>')
        for line in self.args.expressions:
            try:
                for match in lexer.lex(line):
                    if lexer.isfeedable(match):
                        print(lexer.kind(match), repr(match.group(0)),
                              sep='\t')
            except CalcError as e:
                print(e.args[0], file=sys.stderr)

    def executor(self):
        '''
        Run keystrokes through accumulator, one line at a time.

        Prints the display after each line.
        '''
        accumulator = Accumulator(base=self.args.base)
        lexer = Lexer()
        for line in self.args.expressions:
            try:
                for match in lexer.lex(line):
                    if lexer.isfeedable(match):
                        accumulator.feed(lexer.matchedgroups(match))
            # Abort entire rest of line, makes sense anyway
            except CalcError as e:
                print(e.args[0], file=sys.stderr)
            print(accumulator.display)

    def interactive(self):
        '''
        Run full-screen calculator.
        '''
        # Imported late; no need for a terminal UI to run keystrokes.
        from .ui import CalculatorUI
        CalculatorUI(Accumulator(base=self.args.base)).run()

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        lexer = Lexer()
        print(lexer.LEXEME)

    def _interactive(self):
        '''
        Return True if we should run the full-screen UI.

        Only if running the calculator, on stdin, and both stdin/out are a
        tty.
        '''
        return self.args.action == self.executor and \
            self.args.expressions is sys.stdin and \
            sys.stdin.isatty() and sys.stdout.isatty()

    def _configure_logging(self, interactive):
        '''
        Log to file if asked, else stderr, unless the UI owns the terminal.
        '''
        level = logging.DEBUG if self.args.verbose else logging.WARNING
        if self.args.log_file:
            handler = logging.FileHandler(self.args.log_file)
        elif interactive:
            handler = logging.NullHandler()
        else:
            handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(self.LOG_FORMAT))
        logging.basicConfig(level=level, handlers=[handler], force=True)

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(
            description='Integer calculator, in bases {} to {}'.format(
                MIN_BASE, MAX_BASE))
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true')
        self.argument_parser.add_argument('-b', '--base',
                                          type=base,
                                          default=Accumulator.DEFAULT_BASE,
                                          help='initial base')
        self.argument_parser.add_argument('--log-file',
                                          metavar='PATH')
        self.argument_parser.add_argument('-e', '--expression',
                                          nargs=REMAINDER,
                                          dest='expressions',
                                          help='keystrokes, e.g. 5+3=')
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=sys.stdin)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        interactive = self._interactive()
        self._configure_logging(interactive)
        if interactive:
            self.args.action = self.interactive
        try:
            self.args.action()
        except KeyboardInterrupt:
            sys.exit(1)
