"""
simulation.py - Force-directed layout over a LayoutGraph

Velocity-Verlet style relaxation with four forces applied every tick, in
order: many-body repulsion, centering, collision and link springs. The
cooling schedule follows the usual force-simulation defaults (alpha decays
from 1 to 0.001 in 300 ticks, velocity decay 0.4).

State is two (n, 2) arrays, positions and velocities, indexed like
``graph.nodes``. Each tick builds new arrays and emits an immutable Frame.
"""

import asyncio
import math
from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Tuple

import numpy as np

from insightgraph.core.layout.graph import LayoutGraph
from insightgraph.utils.logging_helper import get_logger

log = get_logger()

CHARGE_STRENGTH = -240.0
LINK_STRENGTH = 0.22
ALPHA_MIN = 0.001
ALPHA_DECAY = 1 - ALPHA_MIN ** (1 / 300)
VELOCITY_DECAY = 0.4
INITIAL_RADIUS = 10.0
INITIAL_ANGLE = math.pi * (3 - math.sqrt(5))


@dataclass(frozen=True)
class Frame:
    """Positions of every node and link after one tick."""
    tick: int
    alpha: float
    node_ids: Tuple[str, ...]
    positions: np.ndarray
    segments: np.ndarray

    def position_of(self, node_id: str) -> Tuple[float, float]:
        x, y = self.positions[self.node_ids.index(node_id)]
        return float(x), float(y)


def initial_positions(n: int, center: np.ndarray) -> np.ndarray:
    """Phyllotaxis spiral around *center*; deterministic and overlap-free."""
    i = np.arange(n, dtype=float)
    radius = INITIAL_RADIUS * np.sqrt(0.5 + i)
    angle = i * INITIAL_ANGLE
    return np.column_stack((center[0] + radius * np.cos(angle),
                            center[1] + radius * np.sin(angle)))


def _readonly(a: np.ndarray) -> np.ndarray:
    a = a.copy()
    a.flags.writeable = False
    return a


class ForceSimulation:
    """Iterative layout of one LayoutGraph inside a width x height viewport."""

    def __init__(self, graph: LayoutGraph, width: float = 700.0, height: float = 520.0,
                 seed: int = 0):
        self.graph = graph
        self.width = width
        self.height = height
        self.center = np.array([width / 2, height / 2], dtype=float)

        n = len(graph.nodes)
        self.radii = np.array([node.radius for node in graph.nodes], dtype=float)
        self._sources = np.array([l.source for l in graph.links], dtype=int)
        self._targets = np.array([l.target for l in graph.links], dtype=int)
        self._distances = np.array([l.distance for l in graph.links], dtype=float)

        # links pull harder on the endpoint with fewer connections
        counts = np.bincount(np.concatenate((self._sources, self._targets)), minlength=n)
        if len(graph.links):
            self._bias = counts[self._sources] / (counts[self._sources] + counts[self._targets])
        else:
            self._bias = np.zeros(0)

        self.positions = initial_positions(n, self.center)
        self.velocities = np.zeros((n, 2))
        self.alpha = 1.0
        self.alpha_target = 0.0
        self.tick_count = 0
        self.rejected_frames = 0
        self._stopped = False
        self._rng = np.random.default_rng(seed)

    # ── lifecycle ────────────────────────────────────────────────────────
    @property
    def converged(self) -> bool:
        return self.alpha < ALPHA_MIN

    @property
    def stopped(self) -> bool:
        return self._stopped

    def stop(self) -> None:
        self._stopped = True

    def reheat(self, alpha: float = 1.0) -> None:
        """Restart cooling, e.g. after the viewport was resized."""
        self.alpha = alpha
        self._stopped = False

    def resize(self, width: float, height: float) -> None:
        self.width, self.height = width, height
        self.center = np.array([width / 2, height / 2], dtype=float)

    # ── forces ───────────────────────────────────────────────────────────
    def _jiggle(self, *shape) -> np.ndarray:
        return (self._rng.random(shape) - 0.5) * 1e-6

    def _apply_charge(self, pos: np.ndarray, vel: np.ndarray) -> None:
        diff = pos[np.newaxis, :, :] - pos[:, np.newaxis, :]   # diff[i, j] = pos[j] - pos[i]
        dist2 = np.einsum("ijk,ijk->ij", diff, diff)
        np.fill_diagonal(dist2, np.inf)

        coincident = dist2 == 0
        if coincident.any():
            diff[coincident] = self._jiggle(int(coincident.sum()), 2)
            dist2[coincident] = np.einsum("ij,ij->i", diff[coincident], diff[coincident])

        dist2 = np.where(dist2 < 1, np.sqrt(dist2), dist2)
        vel += (diff * (CHARGE_STRENGTH * self.alpha / dist2)[:, :, np.newaxis]).sum(axis=1)

    def _apply_center(self, pos: np.ndarray) -> np.ndarray:
        return pos - (pos.mean(axis=0) - self.center)

    def _apply_collide(self, pos: np.ndarray, vel: np.ndarray) -> None:
        r = self.radii
        n = len(r)
        for i in range(n - 1):
            xi = pos[i] + vel[i]
            delta = xi - (pos[i + 1:] + vel[i + 1:])
            reach = r[i] + r[i + 1:]
            dist2 = np.einsum("ij,ij->i", delta, delta)
            hit = dist2 < reach * reach
            if not hit.any():
                continue

            delta = delta[hit]
            dist2 = dist2[hit]
            zero = dist2 == 0
            if zero.any():
                delta[zero] = self._jiggle(int(zero.sum()), 2)
                dist2[zero] = np.einsum("ij,ij->i", delta[zero], delta[zero])

            dist = np.sqrt(dist2)
            push = delta * ((reach[hit] - dist) / dist)[:, np.newaxis]
            rj2 = r[i + 1:][hit] ** 2
            share = rj2 / (r[i] ** 2 + rj2)

            vel[i] += (push * share[:, np.newaxis]).sum(axis=0)
            vel[np.nonzero(hit)[0] + i + 1] -= push * (1 - share)[:, np.newaxis]

    def _apply_links(self, pos: np.ndarray, vel: np.ndarray) -> None:
        for k in range(len(self._sources)):
            s, t = self._sources[k], self._targets[k]
            d = pos[t] + vel[t] - pos[s] - vel[s]
            length = math.hypot(d[0], d[1])
            if length == 0:
                d = self._jiggle(2)
                length = math.hypot(d[0], d[1])
            d = d * ((length - self._distances[k]) / length * self.alpha * LINK_STRENGTH)
            vel[t] -= d * self._bias[k]
            vel[s] += d * (1 - self._bias[k])

    # ── stepping ─────────────────────────────────────────────────────────
    def _commit(self, new_pos: np.ndarray, vel: np.ndarray) -> None:
        finite = np.isfinite(new_pos).all(axis=1) & np.isfinite(vel).all(axis=1)
        if not finite.all():
            bad = [self.graph.nodes[i].id for i in np.nonzero(~finite)[0]]
            self.rejected_frames += 1
            log.warning(f"tick {self.tick_count}: rejected non-finite position for {bad}")
            new_pos[~finite] = self.positions[~finite]
            vel[~finite] = 0.0
            # a node that was never valid restarts from the centre
            lost = ~np.isfinite(new_pos).all(axis=1)
            new_pos[lost] = self.center
        self.positions = new_pos
        self.velocities = vel

    def tick(self) -> Frame:
        """Advance one step and return the resulting frame."""
        self.alpha += (self.alpha_target - self.alpha) * ALPHA_DECAY

        if len(self.graph.nodes):
            pos = self.positions.copy()
            vel = self.velocities.copy()
            self._apply_charge(pos, vel)
            pos = self._apply_center(pos)
            self._apply_collide(pos, vel)
            self._apply_links(pos, vel)
            vel *= 1 - VELOCITY_DECAY
            self._commit(pos + vel, vel)

        self.tick_count += 1
        return self.frame()

    def frame(self) -> Frame:
        pos = self.positions
        if len(self._sources):
            segments = np.hstack((pos[self._sources], pos[self._targets]))
        else:
            segments = np.zeros((0, 4))
        return Frame(
            tick=self.tick_count,
            alpha=self.alpha,
            node_ids=tuple(node.id for node in self.graph.nodes),
            positions=_readonly(pos),
            segments=_readonly(segments),
        )

    def iter_frames(self, max_ticks: Optional[int] = None) -> Iterator[Frame]:
        """Yield frames until convergence, ``stop()`` or *max_ticks*."""
        ticks = 0
        while not self._stopped and not self.converged:
            if max_ticks is not None and ticks >= max_ticks:
                return
            yield self.tick()
            ticks += 1

    def run(self, max_ticks: Optional[int] = None) -> Frame:
        """Tick to convergence (or *max_ticks*) and return the last frame."""
        for _ in self.iter_frames(max_ticks):
            pass
        return self.frame()

    async def run_async(self, on_tick: Callable[[Frame], None], interval: float = 1 / 60,
                        max_ticks: Optional[int] = None) -> Frame:
        """Timer-driven loop for interactive hosts.

        Sleeps *interval* seconds between ticks so the host stays responsive.
        The loop ends on convergence, *max_ticks* or ``stop()``; callers must
        stop it when the edge set changes or the view goes away.
        """
        for frame in self.iter_frames(max_ticks):
            on_tick(frame)
            await asyncio.sleep(interval)
        log.debug(f"layout loop finished after {self.tick_count} ticks (alpha={self.alpha:.4f})")
        return self.frame()
