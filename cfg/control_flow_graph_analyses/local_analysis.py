#!/usr/bin/env python3

"""Compute the gen (upward exposed uses) and kill sets of each BasicBlock,
looking at the block as if it was a black box"""


def compute_local_sets(bb):
    """Single forward scan of the instructions of a BasicBlock
    Returns: (uevar, varkill) as frozensets"""
    uevar = set()  # use before assign
    varkill = set()  # assigned

    for i in bb.instrs:
        # a use is upward exposed only if no earlier instruction of the block
        # killed it; a later kill does not remove it
        for var in i.used_variables():
            if var not in varkill:
                uevar.add(var)

        varkill.update(i.killed_variables())

    return frozenset(uevar), frozenset(varkill)


def perform_local_analysis(cfg):
    """Returns two lists, indexed by BasicBlock index, with the uevar and
    varkill sets of every block of the cfg"""
    uevar = []
    varkill = []

    for bb in cfg:
        gen, kill = compute_local_sets(bb)
        uevar.append(gen)
        varkill.append(kill)

    return uevar, varkill
