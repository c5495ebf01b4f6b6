from .errors import BaseFrameRemoval, FishError, InvalidValue, StackUnderflow
from .fish import Machine, State
