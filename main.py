"""The analysis driver: extract the ControlFlowGraph of a routine from an
llvmlite module and compute its liveness sets"""

from cfg.control_flow_graph_analyses import perform_control_flow_graph_analyses
from llvm.llvm_cfg import build_control_flow_graph
from llvm.llvm_helpers import find_function, defined_functions

from logger import h1, h2, green, bold


# The routine analyzed when no other name is given
DEFAULT_FUNCTION_NAME = "test"


def analyze_function(function, order=None, snapshot=False, quiet=True):
    if not quiet:
        print(h1(f"LIVENESS OF {function.name}"))
        print(h2("CONTROL FLOW GRAPH"))

    cfg = build_control_flow_graph(function)

    if not quiet:
        for bb in cfg:
            print(bb)
        print(f"{green('Variables:')} {cfg.variables()}")

    return perform_control_flow_graph_analyses(cfg, order=order, snapshot=snapshot, quiet=quiet)


def analyze_module(module, function_name=DEFAULT_FUNCTION_NAME, order=None, snapshot=False, quiet=True):
    function = find_function(module, function_name)
    return analyze_function(function, order=order, snapshot=snapshot, quiet=quiet)


# Every routine is analyzed on its own, they do not share any state
def analyze_all_functions(module, quiet=True):
    results = {}
    for function in defined_functions(module):
        results[function.name] = analyze_function(function, quiet=quiet)

    if not quiet:
        print(green(bold(f"\nAnalyzed {len(results)} functions of module {module.name}")))

    return results
