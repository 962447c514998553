#!/usr/bin/env python3

"""Control Flow Graph Analysis: analyze the CFG of a routine and compute,
for each BasicBlock, the variables that are live at its exit"""

from cfg.control_flow_graph_analyses.liveness_analysis import perform_liveness_analysis
from logger import h2, indented


def perform_control_flow_graph_analyses(cfg, order=None, snapshot=False, quiet=True):
    if not quiet:
        print(h2("LIVENESS ANALYSIS"))

    result = indented(perform_liveness_analysis, cfg, order=order, snapshot=snapshot, quiet=quiet)

    if not quiet:
        print(result)

    return result
