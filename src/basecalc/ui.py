'''
Full-screen terminal front end to the accumulator.
'''

from functools import partial
import logging

from prompt_toolkit.application import Application
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.key_binding.bindings.focus import focus_next, \
    focus_previous
from prompt_toolkit.layout import Layout
from prompt_toolkit.layout.containers import HSplit, VSplit
from prompt_toolkit.styles import Style
from prompt_toolkit.widgets import Button, Frame, Label, MenuContainer, \
    MenuItem

from .accumulator import Accumulator, Operator, DIGITS
from .lexer import Lexer
from .util import LexError, MIN_BASE, MAX_BASE


log = logging.getLogger(__name__)

STYLE = Style.from_dict({
    'display': 'bold',
    'status': 'reverse',
})


class CalculatorUI:
    '''
    Calculator window: display, buttons, and a base conversion menu.

    Every button and menu item calls straight into one Accumulator.
    '''

    TITLE = 'Calculator'
    CHECKED = '\N{CHECK MARK} '
    UNCHECKED = '  '
    BUTTON_WIDTH = 11

    def __init__(self, accumulator=None):
        self.accumulator = accumulator or Accumulator()
        self.lexer = Lexer()
        # Keys typed so far of an unfinished lexeme, e.g. @1 of @16
        self.held = ''

        button = partial(Button, width=self.BUTTON_WIDTH)
        # Indexed by digit value, 0 through f
        self.digits = [button(digit, handler=partial(self.accumulator.append,
                                                     digit))
                       for digit in DIGITS]
        self.operators = {op: button(op.value,
                                     handler=partial(self.accumulator.operation,
                                                     op))
                          for op in Operator}
        self.equals = button('=', handler=self.accumulator.evaluate)
        self.backspace = button('backspace', handler=self.accumulator.backspace)
        self.clear = button('CE', handler=self.accumulator.clear)

        # Indexed by base - MIN_BASE
        self.base_items = [MenuItem(str(base),
                                    handler=partial(self.set_base, base))
                           for base in range(MIN_BASE, MAX_BASE + 1)]
        self._check()

        display = Label(lambda: self.accumulator.display or ' ',
                        style='class:display')
        status = Label(self._status, style='class:status')
        digit = self.digits.__getitem__
        body = HSplit([
            VSplit([Frame(display), self.clear], padding=1),
            VSplit(self.digits[10:], padding=1),
            VSplit([digit(7), digit(8), digit(9), self.backspace], padding=1),
            VSplit([digit(4), digit(5), digit(6),
                    self.operators[Operator.ADD]], padding=1),
            VSplit([digit(1), digit(2), digit(3),
                    self.operators[Operator.SUB]], padding=1),
            VSplit([self.equals, digit(0), self.operators[Operator.DIV],
                    self.operators[Operator.MUL]], padding=1),
            status,
        ])
        self.menu = MenuContainer(
            body=Frame(body, title=self.TITLE),
            menu_items=[
                MenuItem('Convert', children=[
                    MenuItem('toBase', children=self.base_items),
                ]),
            ],
        )
        self.application = Application(
            layout=Layout(self.menu, focused_element=self.equals),
            key_bindings=self._key_bindings(),
            style=STYLE,
            mouse_support=True,
            full_screen=True,
        )

    def _status(self):
        return 'base {}  pending {}  previous {}  (F10 menu, ^Q quit)'.format(
            self.accumulator.base, self.accumulator.pending.value,
            self.accumulator.previous)

    def _check(self):
        '''
        Tick menu item of current base, and only that one.
        '''
        for base, item in enumerate(self.base_items, MIN_BASE):
            mark = self.CHECKED if base == self.accumulator.base \
                else self.UNCHECKED
            item.text = mark + str(base)

    def set_base(self, base):
        self.accumulator.set_base(base)
        self._check()

    def keystroke(self, data):
        '''
        Feed typed characters to the accumulator, as if buttons were pressed.

        Keys that aren't calculator keys are ignored, along with whatever
        unfinished lexeme they were meant to complete.
        '''
        data = self.held + data
        self.held = ''
        if self.lexer.isprefix(data):
            self.held = data
            return
        try:
            for match in self.lexer.lex(data):
                if self.lexer.isfeedable(match):
                    self.accumulator.feed(self.lexer.matchedgroups(match))
        except LexError as e:
            log.debug('Ignored keys: %s', e.args[0])
        self._check()

    def _key_bindings(self):
        bindings = KeyBindings()
        bindings.add('tab')(focus_next)
        bindings.add('s-tab')(focus_previous)

        @bindings.add('c-q')
        @bindings.add('c-c')
        def _quit(event):
            event.app.exit()

        @bindings.add('f10')
        def _menu(event):
            event.app.layout.focus(self.menu.window)

        @bindings.add('backspace')
        def _backspace(event):
            self.accumulator.backspace()

        @bindings.add('delete')
        def _clear(event):
            self.accumulator.clear()

        @bindings.add('<any>')
        def _type(event):
            self.keystroke(event.data)

        return bindings

    def run(self):
        '''
        Run until the user quits.
        '''
        log.info('Starting in base %d', self.accumulator.base)
        self.application.run()
