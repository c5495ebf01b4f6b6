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


class FishError(Exception):
    pass


class StackUnderflow(FishError):

    def __init__(self, msg = 'Tried to pop from empty stack'):
        super().__init__(msg)


class BaseFrameRemoval(FishError):

    def __init__(self, msg = 'Cannot remove base stack'):
        super().__init__(msg)


class InvalidValue(FishError):
    pass
