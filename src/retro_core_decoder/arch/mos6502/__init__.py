"""
MOS 6502 Architecture Package
"""
from .decoder import InstructionDecoder, decode
from .instructions.base import AddressingMode, OperationType, DecodedInstruction, DecodeFailure
