#!/usr/bin/env python3

"""Compute variable liveness at the exit of each BasicBlock: a variable is
live out of a block if it may be read along some path starting at the end of
the block before being overwritten

The live out sets are computed by round-robin iteration: every sweep visits
all the blocks and unions the live in set of their successors into their live
out set, until a sweep does not change anything"""

from cfg.control_flow_graph_analyses.local_analysis import perform_local_analysis
from logger import ii, log_indentation, yellow, blue, green, cyan


class LivenessResult():
    """Per block uevar, varkill and live out sets of a routine, together with
    the number of sweeps the solver needed"""

    def __init__(self, cfg, uevar, varkill, live_out, sweeps):
        self.cfg = cfg
        self.sweeps = sweeps
        self._uevar = uevar
        self._varkill = varkill
        self._live_out = [frozenset(out) for out in live_out]

    def _index_of(self, bb):
        if bb.index is None or bb.index >= len(self.cfg) or self.cfg[bb.index] is not bb:
            raise RuntimeError(f"Basic Block {bb.display_name()} is not part of routine {self.cfg.display_name()}")
        return bb.index

    def uevar_of(self, bb):
        return self._uevar[self._index_of(bb)]

    def varkill_of(self, bb):
        return self._varkill[self._index_of(bb)]

    def live_out_of(self, bb):
        return self._live_out[self._index_of(bb)]

    def live_in_of(self, bb):
        return frozenset(live_in(self._index_of(bb), self._uevar, self._varkill, self._live_out))

    @property
    def uevar(self):
        return {bb: self._uevar[bb.index] for bb in self.cfg}

    @property
    def varkill(self):
        return {bb: self._varkill[bb.index] for bb in self.cfg}

    @property
    def live_out(self):
        return {bb: self._live_out[bb.index] for bb in self.cfg}

    def live_out_list(self):
        return list(self._live_out)

    def __iter__(self):
        for bb in self.cfg:
            yield bb, self._uevar[bb.index], self._varkill[bb.index], self._live_out[bb.index]

    @staticmethod
    def names(variables):
        return sorted(var.display_name() for var in variables)

    def is_fixpoint(self):
        """Check that every live out set is exactly the union of the live in
        sets of the successors"""
        for bb in self.cfg:
            expected = set()
            for s in bb.successors:
                expected |= live_in(s.index, self._uevar, self._varkill, self._live_out)
            if expected != self._live_out[bb.index]:
                return False
        return True

    def __repr__(self):
        res = f"{yellow('Liveness of routine')} {self.cfg.display_name()}, {self.sweeps} sweeps\n"

        for bb, uevar, varkill, live_out in self:
            res += f"{yellow('Basic Block')} {bb.display_name()} " + "{\n"
            res += ii(f"{blue('UEVar set:')} {self.names(uevar)},\n")
            res += ii(f"{blue('VarKill set:')} {self.names(varkill)},\n")
            res += ii(f"{blue('Live out set:')} {self.names(live_out)}\n")
            res += "}\n"

        return res


def live_in(index, uevar, varkill, live_out):
    return uevar[index] | (live_out[index] - varkill[index])


def liveness_iteration(bb, uevar, varkill, live_out, current):
    """Union the live in set of every successor, computed from the current
    live out sets, into the live out set of bb
    Returns: True if the live out set of bb grew"""
    out = live_out[bb.index]
    lout = len(out)

    for s in bb.successors:
        out |= live_in(s.index, uevar, varkill, current)

    # live out sets never shrink, so a change is always a change in size
    return lout != len(out)


def check_sweep_order(cfg, order):
    if order is None:
        return list(range(len(cfg)))

    order = list(order)
    if sorted(order) != list(range(len(cfg))):
        raise ValueError(f"Sweep order {order} is not a permutation of the {len(cfg)} block indexes of routine {cfg.display_name()}")
    return order


def solve_live_out(cfg, uevar, varkill, live_out=None, order=None, snapshot=False, observer=None, quiet=True):
    """Iterate until no live out set changes

    order: block indexes in the order they are visited by each sweep
    snapshot: read the live out sets of the successors as they were at the
        start of the sweep instead of their current value
    observer: called after every sweep with the sweep number and a copy of
        all the live out sets
    Returns: (live_out, sweeps)"""
    if live_out is None:
        live_out = [set() for _ in cfg]
    else:
        live_out = [set(out) for out in live_out]

    if len(live_out) != len(cfg):
        raise ValueError(f"Expected {len(cfg)} live out sets, got {len(live_out)}")

    order = check_sweep_order(cfg, order)

    sweeps = 0
    changed = True
    while changed:
        changed = False
        sweeps += 1

        if snapshot:
            current = [frozenset(out) for out in live_out]
        else:
            current = live_out

        for index in order:
            changed |= liveness_iteration(cfg[index], uevar, varkill, live_out, current)

        if not quiet:
            log_indentation(f"{cyan('Sweep')} {sweeps}: {green('changed') if changed else 'no changes'}")

        if observer is not None:
            observer(sweeps, [frozenset(out) for out in live_out])

    return live_out, sweeps


def perform_liveness_analysis(cfg, order=None, snapshot=False, observer=None, live_out=None, quiet=True):
    uevar, varkill = perform_local_analysis(cfg)
    live_out, sweeps = solve_live_out(cfg, uevar, varkill, live_out=live_out, order=order, snapshot=snapshot, observer=observer, quiet=quiet)
    return LivenessResult(cfg, uevar, varkill, live_out, sweeps)
