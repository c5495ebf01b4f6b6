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

from .errors import InvalidValue


class Code:
    """The program surface.

    Rows are kept as independent lists of characters so that they can be
    grown one at a time by `set`.  Reads outside the current bounds yield
    a space; the surface never shrinks.
    """

    def __init__(self, string):
        # only \n breaks rows, other control characters are program cells
        lines = [line[: -1] if line.endswith('\r') else line for line in string.split('\n')]
        self.rows = [list(line) for line in lines]
        self.width = max([1] + [len(line) for line in lines])
        self.height = len(self.rows)

    @property
    def size(self):
        return (self.width, self.height)

    def get(self, x, y):
        if 0 <= y < len(self.rows) and 0 <= x < len(self.rows[y]):
            return self.rows[y][x]
        return ' '

    def set(self, x, y, v):
        if x < 0 or y < 0:
            raise InvalidValue('Cannot write to negative position ({}, {})'.format(x, y))
        if y >= len(self.rows):
            self.rows.extend([] for i in range(y + 1 - len(self.rows)))
            self.height = y + 1
        row = self.rows[y]
        if x >= len(row):
            row.extend(' ' * (x + 1 - len(row)))
            if x + 1 > self.width:
                self.width = x + 1
        row[x] = v

    def snapshot(self):
        return [''.join(row) for row in self.rows]


class Cursor:

    def __init__(self, code, x = 0, y = 0, direction = (1, 0)):
        self.code = code
        self.x, self.y = x, y
        self.direction = direction

    @property
    def position(self):
        return (self.x, self.y)

    def move(self):
        # bounds are re-read on every move, `p` may have grown the surface
        width, height = self.code.size
        self.x = (self.x + self.direction[0]) % width
        self.y = (self.y + self.direction[1]) % height

    def skip(self):
        self.move()

    def teleport(self, x, y):
        self.x, self.y = x, y

    def current(self):
        return self.code.get(self.x, self.y)
