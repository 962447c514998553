from random import Random

from llvmlite import ir

from cfg.cfg import BasicBlock, ControlFlowGraph, Variable, Read, Write, Other


i32 = ir.IntType(32)


# Build a ControlFlowGraph from {block name: instructions} and
# {block name: successor names}; blocks keep the order of the first dictionary
def build_cfg(blocks, edges=None, name="test"):
    bbs = {bb_name: BasicBlock(name=bb_name, instrs=instrs) for bb_name, instrs in blocks.items()}

    for source, targets in (edges or {}).items():
        for target in targets:
            bbs[source].add_successor(bbs[target])

    return ControlFlowGraph(list(bbs.values()), name=name)


def variables(*names):
    return [Variable(name) for name in names]


# The block indexes of cfg in the order described by kind
def sweep_order_for(cfg, kind):
    order = list(range(len(cfg)))

    match kind:
        case "forward":
            return order
        case "reverse":
            return list(reversed(order))
        case "shuffled":
            Random(len(cfg)).shuffle(order)
            return order
        case _:
            raise ValueError(f"Unknown sweep order {kind}")


def names_of(result, getter, block_name):
    return result.names(getter(result.cfg.find_block(block_name)))


# A loop with a conditional body and an unreachable block:
#   B0 -> B1, B1 -> B2 | B4, B2 -> B3, B3 -> B1, B5 -> B4
def loop_cfg():
    i, s, z = variables("i", "s", "z")
    blocks = {
        "B0": [Write(i), Write(s), Other("jump")],
        "B1": [Read(i), Other("compare")],
        "B2": [Read(s), Read(i), Other("add"), Write(s)],
        "B3": [Read(i), Other("add"), Write(i)],
        "B4": [Read(s), Other("return")],
        "B5": [Read(z), Write(s)],
    }
    edges = {
        "B0": ["B1"],
        "B1": ["B2", "B4"],
        "B2": ["B3"],
        "B3": ["B1"],
        "B5": ["B4"],
    }
    return build_cfg(blocks, edges)


def new_function(name="test", module=None):
    if module is None:
        module = ir.Module(name="liveness_test")
    function = ir.Function(module, ir.FunctionType(ir.VoidType(), ()), name=name)
    return module, function


# entry: store x; br loop
# loop:  load y; br cond, loop, done
# done:  load x; ret
def loop_function(name="test", module=None):
    module, function = new_function(name, module)

    entry = function.append_basic_block("entry")
    loop = function.append_basic_block("loop")
    done = function.append_basic_block("done")

    builder = ir.IRBuilder(entry)
    x = builder.alloca(i32, name="x")
    y = builder.alloca(i32, name="y")
    builder.store(ir.Constant(i32, 0), x)
    builder.branch(loop)

    builder.position_at_end(loop)
    value = builder.load(y, name="value")
    cond = builder.icmp_signed("<", value, ir.Constant(i32, 10))
    builder.cbranch(cond, loop, done)

    builder.position_at_end(done)
    builder.load(x, name="result")
    builder.ret_void()

    return module, function
