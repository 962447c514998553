#!/usr/bin/env python3

"""Helper functions used to extract the ControlFlowGraph of a routine from
an llvmlite module"""

from llvmlite import ir

from cfg.cfg import Variable


class VariableTable():
    """Interns llvmlite storage handles (allocas, globals, pointer arguments,
    ...) so that every access to the same handle yields the same Variable"""

    def __init__(self):
        self.variables = {}

    def get(self, handle):
        # llvmlite constants compare structurally, keys are the identity of the handle
        key = id(handle)
        if key not in self.variables:
            name = getattr(handle, 'name', None)
            self.variables[key] = Variable(name if name else None, handle)
        return self.variables[key]

    def __len__(self):
        return len(self.variables)

    def __iter__(self):
        return iter(self.variables.values())


# Return the defined function called name
# raises a RuntimeError if it can't be found or if it has no body
def find_function(module, name):
    try:
        function = module.get_global(name)
    except KeyError:
        raise RuntimeError(f"Can't find function {name} in module {module.name}")

    if not isinstance(function, ir.Function):
        raise RuntimeError(f"Global {name} of module {module.name} is not a function")

    if len(function.blocks) == 0:
        raise RuntimeError(f"Function {name} is only declared in module {module.name}, there is nothing to analyze")

    return function


# Return the functions of the module that have a body
def defined_functions(module):
    return [f for f in module.functions if len(f.blocks) > 0]


# Return the blocks reachable from the terminator of block, in order of first
# appearance and without duplicates
def get_successors(block):
    terminator = block.terminator

    match terminator:
        case None:
            targets = []
        case ir.InvokeInstr():
            targets = [terminator.normal_to, terminator.unwind_to]
        case ir.SwitchInstr():
            targets = [terminator.default] + [case_block for _, case_block in terminator.cases]
        case ir.IndirectBranch():
            targets = list(terminator.destinations)
        case ir.Branch() | ir.ConditionalBranch():
            targets = [op for op in terminator.operands if isinstance(op, ir.Block)]
        case _:  # ret, resume, unreachable
            targets = []

    successors = []
    for target in targets:
        if not any(target is s for s in successors):
            successors.append(target)

    return successors
