from lightsoff.algebra import BitGauss, TooManyFreeVariablesError
from lightsoff.bitmat import BitMatrix
from lightsoff.bitvec import WORD_BITS, BitVector
from lightsoff.board import BoardState
from lightsoff.solver import LightsSolver, build_system, neighbors
