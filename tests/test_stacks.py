import pytest

from fish.errors import BaseFrameRemoval, StackUnderflow
from fish.stacks import FrameView, Stacks


def top(stacks):
    return list(stacks.active.stack)


def test_pop_empty_stack():
    stacks = Stacks()
    with pytest.raises(StackUnderflow):
        stacks.pop()


def test_push_pop_are_floats():
    stacks = Stacks()
    stacks.push(3)
    stacks.push(4)
    v = stacks.pop()
    assert v == 4.0
    assert isinstance(v, float)
    assert top(stacks) == [3.0]


def test_duplicate_and_discard():
    stacks = Stacks([1, 2])
    stacks.duplicate()
    assert top(stacks) == [1, 2, 2]
    stacks.discard()
    stacks.discard()
    assert top(stacks) == [1]


def test_swap():
    stacks = Stacks([1, 2, 3])
    stacks.swap()
    assert top(stacks) == [1, 3, 2]


def test_swap_underflow_leaves_stack():
    stacks = Stacks([1])
    with pytest.raises(StackUnderflow):
        stacks.swap()
    assert top(stacks) == [1]


def test_rotations():
    stacks = Stacks([1, 2, 3])
    stacks.rotate_right()
    assert top(stacks) == [3, 1, 2]
    stacks = Stacks([1, 2, 3])
    stacks.rotate_left()
    assert top(stacks) == [2, 3, 1]
    stacks = Stacks([1, 2, 3, 4])
    stacks.rotate_three()
    assert top(stacks) == [1, 4, 2, 3]


def test_rotations_underflow():
    with pytest.raises(StackUnderflow):
        Stacks().rotate_left()
    with pytest.raises(StackUnderflow):
        Stacks().rotate_right()
    stacks = Stacks([1, 2])
    with pytest.raises(StackUnderflow):
        stacks.rotate_three()
    assert top(stacks) == [1, 2]


def test_reverse_and_length():
    stacks = Stacks([1, 2, 3])
    stacks.reverse()
    assert top(stacks) == [3, 2, 1]
    stacks.length()
    assert top(stacks) == [3, 2, 1, 3]


def test_register_transfer():
    stacks = Stacks([7])
    stacks.register_transfer()
    assert top(stacks) == []
    assert stacks.active.register == 7
    stacks.register_transfer()
    assert top(stacks) == [7]
    assert stacks.active.register is None


def test_register_transfer_underflow():
    with pytest.raises(StackUnderflow):
        Stacks().register_transfer()


def test_split_moves_values_to_new_frame():
    stacks = Stacks([1, 2, 3, 4, 2])
    stacks.split()
    assert len(stacks.frames) == 2
    assert top(stacks) == [3, 4]
    assert list(stacks.frames[0].stack) == [1, 2]


def test_split_merge_round_trip():
    for n in range(4):
        stacks = Stacks([5, 6, 7, n])
        stacks.split()
        stacks.merge()
        assert len(stacks.frames) == 1
        assert top(stacks) == [5, 6, 7]


def test_split_underflow_leaves_stack():
    stacks = Stacks([1, 3])
    with pytest.raises(StackUnderflow):
        stacks.split()
    assert top(stacks) == [1, 3]
    assert len(stacks.frames) == 1


def test_split_count_below_one():
    for n in [0, -1, -7]:
        stacks = Stacks([5, n])
        stacks.split()
        assert len(stacks.frames) == 2
        assert top(stacks) == []
        assert list(stacks.frames[0].stack) == [5]


def test_frames_have_own_registers():
    stacks = Stacks([4, 0])
    stacks.split()
    stacks.push(9)
    stacks.register_transfer()
    assert stacks.frames[0].register is None
    assert stacks.active.register == 9


def test_merge_base_frame():
    stacks = Stacks([1])
    with pytest.raises(BaseFrameRemoval):
        stacks.merge()
    assert top(stacks) == [1]


def test_snapshot():
    stacks = Stacks([1, 2, 1])
    stacks.split()
    stacks.register_transfer()
    snap = stacks.snapshot()
    assert snap == [FrameView((1.0,), None), FrameView((), 2.0)]
    stacks.push(5)
    assert snap[1].stack == ()
