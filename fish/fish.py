#!/usr/bin/env python3

# ><> interpreter
# Copyright © 2016 Filippo Baroni <filippo.gianni.baroni@gmail.com>
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Lesser General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Lesser General Public License for more details.
#
# You should have received a copy of the GNU Lesser General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from enum import Enum
import math
import operator
import random
import sys
import time

from .errors import FishError, InvalidValue
from .grid import Code, Cursor
from .stacks import Stacks


DIRECTIONS = {
    '^' : (0, -1),
    '>' : (1, 0),
    'v' : (0, 1),
    '<' : (-1, 0)
}

# (dx, dy) -> (a * dx + b * dy, c * dx + d * dy) for ((a, b), (c, d))
MIRRORS = {
    '/'  : ((0, -1), (-1, 0)),
    '\\' : ((0, 1), (1, 0)),
    '|'  : ((-1, 0), (0, 1)),
    '_'  : ((1, 0), (0, -1)),
    '#'  : ((-1, 0), (0, -1))
}


def divide(x, y):
    if y == 0:
        if x == 0 or math.isnan(x):
            return math.nan
        return math.copysign(math.inf, x) * math.copysign(1.0, y)
    return x / y


def remainder(x, y):
    # C fmod: NaN instead of an error for a zero divisor or an infinite dividend
    if y == 0 or math.isinf(x):
        return math.nan
    return math.fmod(x, y)


OPERATORS = {
    # Arith
    '+' : operator.add,
    '-' : operator.sub,
    '*' : operator.mul,
    '%' : remainder,
    ',' : divide,
    # Cmp
    '=' : operator.eq,
    '(' : operator.lt,
    ')' : operator.gt
}

QUOTES = '"\''

HEXDIGITS = '0123456789abcdef'

MISC = ':~}{@rl[]&$;.x!?niogp'

ABS_EPSILON = 1e-12
REL_EPSILON = 1e-8


class Instr(Enum):
    STRING = 'string'
    QUOTE = 'quote'
    DIRECTION = 'direction'
    MIRROR = 'mirror'
    DIGIT = 'digit'
    OPERATOR = 'operator'
    MISC = 'misc'
    NOP = 'nop'


class State(Enum):
    RUNNING = 'running'
    COMPLETED = 'completed'
    FAILED = 'failed'


def classify(instr, stringmode = None):
    if stringmode is not None:
        return Instr.STRING
    if instr in QUOTES:
        return Instr.QUOTE
    if instr in DIRECTIONS:
        return Instr.DIRECTION
    if instr in MIRRORS:
        return Instr.MIRROR
    if instr in HEXDIGITS:
        return Instr.DIGIT
    if instr in OPERATORS:
        return Instr.OPERATOR
    if instr in MISC:
        return Instr.MISC
    return Instr.NOP


def reflect(mirror, direction):
    (a, b), (c, d) = MIRRORS[mirror]
    dx, dy = direction
    return (a * dx + b * dy, c * dx + d * dy)


def approximately_equal(a, b):
    diff = abs(a - b)
    if diff <= ABS_EPSILON:
        return True
    return diff <= max(abs(a), abs(b)) * REL_EPSILON


def format_number(v):
    if math.isfinite(v) and v == int(v):
        return str(int(v))
    return repr(v)


def to_int(v):
    try:
        return int(v)
    except (ValueError, OverflowError):
        raise InvalidValue('Cannot convert {} to integer'.format(v))


def to_char(v):
    try:
        return chr(to_int(v))
    except (ValueError, OverflowError):
        raise InvalidValue('{} is not a character code'.format(format_number(v)))


class Channel:
    """Input characters to be consumed front to back, and produced output.

    `sink`, if given, is called with every piece of text as it is produced.
    """

    def __init__(self, input = '', sink = None):
        self.input = list(reversed(input))
        self.output = []
        self.sink = sink

    def read(self):
        if self.input:
            return self.input.pop()
        return None

    def write(self, s):
        self.output.append(s)
        if self.sink is not None:
            self.sink(s)

    def remaining(self):
        return ''.join(reversed(self.input))

    def text(self):
        return ''.join(self.output)


class Machine:
    """A running ><> program.

    The instruction under the initial cursor is executed on construction,
    every `step` then moves the cursor and executes the new cell.  Errors
    raised by an instruction end the program in the FAILED state, with the
    error kept in `error`.
    """

    def __init__(self, source, input = '', stack = (), rng = None, output = None,
                 trace = None):
        self.code = Code(source)
        self.cursor = Cursor(self.code)
        self.stacks = Stacks(stack)
        self.io = Channel(input, output)
        self.rng = rng if rng is not None else random.Random()
        self.trace = trace
        self.stringmode = None
        self.state = State.RUNNING
        self.error = None
        self.execute()

    def is_completed(self):
        return self.state == State.COMPLETED

    def is_failed(self):
        return self.state == State.FAILED

    @property
    def running(self):
        return self.state == State.RUNNING

    def position(self):
        return self.cursor.position

    def direction(self):
        return self.cursor.direction

    def size(self):
        return self.code.size

    def grid_snapshot(self):
        return self.code.snapshot()

    def stacks_snapshot(self):
        return self.stacks.snapshot()

    def output(self):
        return self.io.text()

    def remaining_input(self):
        return self.io.remaining()

    def step(self):
        if not self.running:
            return False
        self.cursor.move()
        self.execute()
        return self.running

    def run(self, limit = None):
        steps = 0
        while self.running and (limit is None or steps < limit):
            self.step()
            steps += 1
        return steps

    def execute(self):
        instr = self.cursor.current()
        try:
            try:
                self.exec_instruction(instr)
            except (ValueError, OverflowError) as e:
                raise InvalidValue(str(e))
        except FishError as e:
            self.error = e
            self.state = State.FAILED
            if self.trace is not None:
                self.debug('failing on \'{}\': {}'.format(instr, e))

    def debug(self, msg):
        x, y = self.cursor.position
        print('[# ({:>2}, {:>2}) {} #]'.format(x, y, msg), file = self.trace)

    def exec_instruction(self, instr):
        kind = classify(instr, self.stringmode)
        # string mode
        if kind is Instr.STRING:
            if instr == self.stringmode:
                if self.trace is not None:
                    self.debug('leaving string mode {}'.format(self.stringmode))
                self.stringmode = None
            else:
                self.stacks.push(ord(instr))
            return
        # NOP
        if kind is Instr.NOP:
            return
        if kind is Instr.QUOTE:
            if self.trace is not None:
                self.debug('entering string mode {}'.format(instr))
            self.stringmode = instr
            return
        if self.trace is not None:
            self.debug('executing \'{}\' with stacks {}'
                       .format(instr, [list(f.stack) for f in self.stacks.frames]))
        if kind is Instr.DIRECTION:
            self.cursor.direction = DIRECTIONS[instr]
        elif kind is Instr.MIRROR:
            self.cursor.direction = reflect(instr, self.cursor.direction)
        elif kind is Instr.DIGIT:
            self.stacks.push(int(instr, 16))
        elif kind is Instr.OPERATOR:
            y, x = self.stacks.peek(2)
            v = OPERATORS[instr](x, y)
            self.stacks.popn(2)
            self.stacks.push(v)
        else:
            self.exec_misc(instr)

    def exec_misc(self, instr):
        stacks = self.stacks
        # Duplicate
        if instr == ':':
            stacks.duplicate()
        # Pop
        elif instr == '~':
            stacks.discard()
        # Rotate
        elif instr == '}':
            stacks.rotate_right()
        elif instr == '{':
            stacks.rotate_left()
        elif instr == '@':
            stacks.rotate_three()
        # Reverse
        elif instr == 'r':
            stacks.reverse()
        # Length
        elif instr == 'l':
            stacks.length()
        # New
        elif instr == '[':
            stacks.split()
        # Merge
        elif instr == ']':
            stacks.merge()
        # Register
        elif instr == '&':
            stacks.register_transfer()
        # Swap
        elif instr == '$':
            stacks.swap()
        # Die
        elif instr == ';':
            self.state = State.COMPLETED
        # Jump
        elif instr == '.':
            y, x = map(to_int, stacks.peek(2))
            stacks.popn(2)
            self.cursor.teleport(x, y)
        # Random direction
        elif instr == 'x':
            self.cursor.direction = self.rng.choice(list(DIRECTIONS.values()))
        # Skip
        elif instr == '!':
            self.cursor.skip()
        # CondSkip
        elif instr == '?':
            if approximately_equal(stacks.pop(), 0):
                self.cursor.skip()
        # Out number
        elif instr == 'n':
            self.io.write(format_number(stacks.pop()))
        # Out
        elif instr == 'o':
            c = to_char(stacks.peek(1)[0])
            stacks.pop()
            self.io.write(c)
        # In
        elif instr == 'i':
            c = self.io.read()
            stacks.push(-1 if c is None else ord(c))
        # Get
        elif instr == 'g':
            y, x = map(to_int, stacks.peek(2))
            stacks.popn(2)
            stacks.push(ord(self.code.get(x, y)))
        # Put
        elif instr == 'p':
            y, x, v = stacks.peek(3)
            x, y, v = to_int(x), to_int(y), to_char(v)
            if x < 0 or y < 0:
                raise InvalidValue('Cannot write to negative position ({}, {})'.format(x, y))
            stacks.popn(3)
            self.code.set(x, y, v)


def read_code(string):
    lines = string.split('\n')
    # shebang
    if lines and lines[0][: 2] == '#!':
        lines.pop(0)
    return '\n'.join(lines)


def main(argv = None):
    import argparse

    parser = argparse.ArgumentParser(description = '><> interpreter',
    usage = '%(prog)s [-h] [<script> | -c <code>] [<options>]')
    code_group = parser.add_argument_group('code')
    code_group_mutex = code_group.add_mutually_exclusive_group(required = True)
    code_group_mutex.add_argument('script',
                            type = argparse.FileType('r'),
                            nargs = '?',
                            metavar = '<script>',
                            help = '.fish source file to execute')
    code_group_mutex.add_argument('-c', '--code',
                            metavar = '<code>',
                            help = 'string of ><> instructions to execute')
    options_group = parser.add_argument_group('options')
    options_group.add_argument('-i', '--input',
                               default = None,
                               metavar = '<text>',
                               help = """characters read by the 'i' instruction;
                                         defaults to standard input when it is not a terminal""")
    options_group.add_argument('-s', '--stack',
                               nargs = '*',
                               type = float,
                               default = [],
                               dest = 'stack',
                               metavar = '<val>',
                               help = 'fill the stack before the execution starts')
    options_group.add_argument('-d', '--debug',
                               action = 'store_true',
                               help = 'trace every executed instruction on standard error')
    options_group.add_argument('-t', '--tick',
                               type = float,
                               default = None,
                               metavar = '<tick>',
                               help = """wait at least <tick> seconds between instructions;
                                         if <tick> is a negative number, then wait for the user
                                         to press <Enter> before executing the next instruction""")
    options_group.add_argument('-l', '--limit',
                               type = int,
                               default = None,
                               metavar = '<steps>',
                               help = 'stop after executing <steps> instructions')
    options_group.add_argument('--seed',
                               type = int,
                               default = None,
                               metavar = '<seed>',
                               help = "seed for the 'x' instruction")
    args = parser.parse_args(argv)
    if args.tick is not None and args.tick < 0 and not sys.stdin.isatty():
        parser.error('a negative <tick> waits for <Enter> and needs standard input to be a terminal')

    if args.script:
        codestr = read_code(args.script.read())
        args.script.close()
    else:
        codestr = args.code
    if args.input is not None:
        input_text = args.input
    elif not sys.stdin.isatty():
        input_text = sys.stdin.read()
    else:
        input_text = ''

    def output(s):
        sys.stdout.write(s)
        sys.stdout.flush()

    machine = Machine(codestr, input_text, stack = args.stack,
                      rng = random.Random(args.seed), output = output,
                      trace = sys.stderr if args.debug else None)
    steps = 0
    try:
        while machine.running and (args.limit is None or steps < args.limit):
            if args.tick is None:
                machine.step()
            else:
                begin_time = time.perf_counter()
                machine.step()
                if args.tick >= 0:
                    if time.perf_counter() - begin_time < args.tick:
                        time.sleep(args.tick - (time.perf_counter() - begin_time))
                else:
                    input()
            steps += 1
    except KeyboardInterrupt:
        return 130
    if machine.is_failed():
        print()
        print('something smells fishy... ' + str(machine.error), file = sys.stderr)
        return 1
    print()
    return 0


if __name__ == '__main__':
    sys.exit(main())
