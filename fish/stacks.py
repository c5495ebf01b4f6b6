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

from collections import deque, namedtuple

from .errors import BaseFrameRemoval, StackUnderflow


FrameView = namedtuple('FrameView', ['stack', 'register'])


class Frame:

    def __init__(self, stack = ()):
        self.stack = deque(float(v) for v in stack)
        self.register = None

    def view(self):
        return FrameView(tuple(self.stack), self.register)


class Stacks:
    """Stack of stacks.

    All operations act on the last frame.  There is always at least one
    frame; every operation checks the depth it needs before touching the
    stack, so a failing operation leaves the frames as they were.
    """

    def __init__(self, stack = ()):
        self.frames = [Frame(stack)]

    @property
    def active(self):
        return self.frames[-1]

    def _need(self, cnt):
        if len(self.active.stack) < cnt:
            raise StackUnderflow()

    def push(self, v):
        self.active.stack.append(float(v))

    def pop(self):
        self._need(1)
        return self.active.stack.pop()

    def popn(self, cnt):
        """Pop `cnt` values, topmost first."""
        self._need(cnt)
        return [self.active.stack.pop() for i in range(cnt)]

    def peek(self, cnt):
        """Return the top `cnt` values, topmost first, without popping."""
        self._need(cnt)
        stack = self.active.stack
        return [stack[-1 - i] for i in range(cnt)]

    def duplicate(self):
        self._need(1)
        self.push(self.active.stack[-1])

    def discard(self):
        self.pop()

    def swap(self):
        a, b = self.popn(2)
        self.push(a)
        self.push(b)

    def rotate_right(self):
        self._need(1)
        self.active.stack.rotate(1)

    def rotate_left(self):
        self._need(1)
        self.active.stack.rotate(-1)

    def rotate_three(self):
        # [.., a, b, c] -> [.., c, a, b]
        c, b, a = self.popn(3)
        self.push(c)
        self.push(a)
        self.push(b)

    def reverse(self):
        self.active.stack.reverse()

    def length(self):
        self.push(len(self.active.stack))

    def register_transfer(self):
        frame = self.active
        if frame.register is not None:
            self.push(frame.register)
            frame.register = None
        else:
            frame.register = self.pop()

    def split(self):
        self._need(1)
        # a count below one moves nothing
        n = max(0, int(self.active.stack[-1]))
        self._need(n + 1)
        self.active.stack.pop()
        new_frame = Frame()
        for i in range(n):
            new_frame.stack.appendleft(self.active.stack.pop())
        self.frames.append(new_frame)

    def merge(self):
        if len(self.frames) == 1:
            raise BaseFrameRemoval()
        old_frame = self.frames.pop()
        self.active.stack.extend(old_frame.stack)

    def snapshot(self):
        return [frame.view() for frame in self.frames]
