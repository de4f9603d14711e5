"""
Explorer — Repeated stepping on top of MachineSpec.

The engine only takes single steps. This module owns the repetition:
running forward until a machine halts, and growing a tree of
predecessors breadth-first without adding the same configuration twice.
"""

from __future__ import annotations

import logging
from typing import List, NamedTuple, Optional

from config import MAX_DEPTH, MAX_STEPS
from machine import Configuration, MachineSpec

logger = logging.getLogger("tminvert.explorer")


class RunResult(NamedTuple):
    final: Configuration
    steps: int
    halted: bool


class Node(NamedTuple):
    id: int
    config: Configuration
    parent: Optional[int]
    depth: int


def run(spec: MachineSpec, config: Configuration, max_steps: Optional[int] = None) -> RunResult:
    """Step forward until halted or `max_steps` steps have been taken."""
    limit = max_steps if max_steps is not None else MAX_STEPS
    if limit < 0:
        raise ValueError("max_steps must be non-negative")

    steps = 0
    while not config.halted and steps < limit:
        config = spec.step(config)
        # Reaching the halted marker is not a machine step
        if not config.halted:
            steps += 1

    if config.halted:
        logger.info(f"Halted after {steps} steps in state '{config.state}'")
    else:
        logger.info(f"Step limit {limit} reached in state '{config.state}'")
    return RunResult(config, steps, config.halted)


def predecessors(spec: MachineSpec, config: Configuration) -> List[Configuration]:
    """invert() with structural duplicates removed, first occurrence kept."""
    seen = set()
    unique: List[Configuration] = []
    for prev in spec.invert(config):
        if prev not in seen:
            seen.add(prev)
            unique.append(prev)
    return unique


def expand(spec: MachineSpec, config: Configuration, depth: Optional[int] = None) -> List[Node]:
    """
    Breadth-first predecessor tree rooted at `config`, `depth` levels deep.
    Node ids are sequential from 0 (the root). A configuration already in
    the tree is never added a second time.
    """
    max_depth = depth if depth is not None else MAX_DEPTH
    if max_depth < 0:
        raise ValueError("depth must be non-negative")

    nodes: List[Node] = [Node(0, config, None, 0)]
    seen = {config}
    frontier = [nodes[0]]

    for level in range(1, max_depth + 1):
        next_frontier: List[Node] = []
        for node in frontier:
            for prev in predecessors(spec, node.config):
                if prev in seen:
                    continue
                seen.add(prev)
                child = Node(len(nodes), prev, node.id, level)
                nodes.append(child)
                next_frontier.append(child)
        logger.debug(f"Level {level}: {len(next_frontier)} new predecessors")
        if not next_frontier:
            break
        frontier = next_frontier

    return nodes
