#!/usr/bin/env python3

"""The ControlFlowGraph of a single routine: an ordered list of BasicBlocks
connected by successor edges. Every instruction in a BasicBlock is already
classified as a Read or a Write of a Variable, or as Other, so that the
analyses never have to look at the instruction set of the host IR"""

from logger import ii, di, remove_formatting, yellow, blue, cyan, magenta


class Variable():
    """A storage location that can be read or written.
    Two Variables are the same only if they are the same object: no structural
    equality is ever used, so the host must intern its storage handles"""

    def __init__(self, name=None, handle=None):
        self.name = name
        self.handle = handle

    def display_name(self):
        return self.name if self.name else "<unnamed>"

    def __repr__(self):
        return self.display_name()


class Instruction():
    def used_variables(self):
        return []

    def killed_variables(self):
        return []


class Read(Instruction):
    def __init__(self, var):
        self.var = var

    def used_variables(self):
        return [self.var]

    def __repr__(self):
        return f"{cyan('read')} {self.var}"


class Write(Instruction):
    def __init__(self, var):
        self.var = var

    def killed_variables(self):
        return [self.var]

    def __repr__(self):
        return f"{magenta('write')} {self.var}"


class Other(Instruction):
    """Any instruction that neither reads nor writes a Variable; the
    description is only used in debug traces"""

    def __init__(self, description=None):
        self.description = description

    def __repr__(self):
        if self.description:
            return f"other ({self.description})"
        return "other"


class BasicBlock():
    def __init__(self, name=None, instrs=None, succ=None):
        """Structure:
        A list of classified instructions and any number of successors.
        The index and the predecessors are assigned by the ControlFlowGraph
        the block is added to"""
        self.name = name

        if instrs:
            self.instrs = list(instrs)
        else:
            self.instrs = []

        if succ:
            self.successors = list(succ)
        else:
            self.successors = []

        self.predecessors = ()
        self.index = None

    def add_successor(self, bb):
        if self.index is not None:
            raise RuntimeError(f"Basic Block {self.display_name()} is already part of a ControlFlowGraph and can't be modified")
        self.successors.append(bb)

    def succ(self):
        return self.successors

    def pred(self):
        return self.predecessors

    def display_name(self):
        if self.name:
            return self.name
        if self.index is not None:
            return f"bb{self.index}"
        return f"bb@{id(self)}"

    def __repr__(self):
        res = f"{yellow('Basic Block')} {self.display_name()} " + "{\n"
        res += ii(f"{blue('Successors:')} {[s.display_name() for s in self.successors]},\n")
        res += ii(f"{blue('Predecessors:')} {[p.display_name() for p in self.predecessors]},\n")
        res += ii(f"{blue('Instructions:')}\n")
        for i in self.instrs:
            res += di(f"{i}\n")

        res += "}\n"

        return res

    def graphviz_repr(self):
        """Print in graphviz dot format"""
        instrs = '\\n'.join([repr(i) for i in self.instrs])
        res = f'{id(self)} [label="{self.display_name()}' + '\\n' + f'{instrs}"];\n'
        for s in self.successors:
            res += f'{id(self)} -> {id(s)};\n'
        return res


class ControlFlowGraph(list):
    """Control Flow Graph representation of one routine, entry block first.
    Built once and never modified by the analyses"""

    def __init__(self, blocks, name=None):
        super().__init__(blocks)
        self.name = name

        positions = {}
        for index, bb in enumerate(self):
            if id(bb) in positions:
                raise RuntimeError(f"Basic Block {bb.display_name()} appears more than once in routine {self.display_name()}")
            positions[id(bb)] = index

        for bb in self:
            for s in bb.successors:
                if id(s) not in positions:
                    raise RuntimeError(f"Successor {s.display_name()} of Basic Block {bb.display_name()} is not part of routine {self.display_name()}")

        predecessors = [[] for _ in self]
        for index, bb in enumerate(self):
            bb.index = index

            # multiple edges to the same block (e.g. both sides of a branch) are a single edge
            unique = []
            for s in bb.successors:
                if s not in unique:
                    unique.append(s)
            bb.successors = tuple(unique)

            for s in bb.successors:
                predecessors[positions[id(s)]].append(bb)

        for bb, preds in zip(self, predecessors):
            bb.predecessors = tuple(preds)

    def display_name(self):
        return self.name if self.name else "<anonymous>"

    def entry(self):
        if len(self) == 0:
            return None
        return self[0]

    def tails(self):
        """Return a list of all the basic block that do not have successors"""
        return [bb for bb in self if len(bb.successors) == 0]

    def find_block(self, name):
        for bb in self:
            if bb.display_name() == name:
                return bb
        raise RuntimeError(f"Basic Block {name} not found in routine {self.display_name()}")

    def variables(self):
        """Every Variable accessed in the routine, in order of first access"""
        seen = set()
        res = []
        for bb in self:
            for i in bb.instrs:
                for var in i.used_variables() + i.killed_variables():
                    if var not in seen:
                        seen.add(var)
                        res.append(var)
        return res

    def cfg_to_dot(self):
        """Get the CFG in graphviz dot"""
        dot = f'digraph "{self.display_name()}" {{\n'
        for n in self:
            dot += n.graphviz_repr()
        dot += "}\n"
        return remove_formatting(dot)
