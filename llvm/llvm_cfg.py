#!/usr/bin/env python3

"""Build the ControlFlowGraph of an llvmlite function: every llvmlite block
becomes a BasicBlock, loads become reads and stores become writes of the
storage their pointer operand refers to"""

from llvmlite import ir

from cfg.cfg import BasicBlock, ControlFlowGraph, Read, Write, Other
from llvm.llvm_helpers import VariableTable, get_successors


def classify_instruction(instruction, variables):
    match instruction:
        case ir.LoadInstr() | ir.LoadAtomicInstr():
            return Read(variables.get(instruction.operands[0]))
        case ir.StoreInstr() | ir.StoreAtomicInstr():
            return Write(variables.get(instruction.operands[1]))
        case _:
            return Other(getattr(instruction, 'opname', None))


def build_control_flow_graph(function, variables=None):
    if variables is None:
        variables = VariableTable()

    bbs = {}
    blocks = []
    for block in function.blocks:
        instrs = [classify_instruction(i, variables) for i in block.instructions]
        bb = BasicBlock(name=block.name if block.name else None, instrs=instrs)
        bbs[id(block)] = bb
        blocks.append(bb)

    for block in function.blocks:
        for successor in get_successors(block):
            if id(successor) not in bbs:
                raise RuntimeError(f"Block {block.name} of function {function.name} branches to block {successor.name}, which belongs to another function")
            bbs[id(block)].add_successor(bbs[id(successor)])

    return ControlFlowGraph(blocks, name=function.name)
