import logging
import math
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, List

from pdf_lines.config import LayoutConfig


# Layout module goal: turn loose text fragments into top-to-bottom lines with one y each

log = logging.getLogger(__name__)


class Region(str, Enum):
    all = "all"
    left = "left"
    right = "right"


@dataclass(frozen=True)
class Fragment:
    """A positioned run of text. Origin bottom-left, y grows upward."""
    text: str
    x: float
    y: float
    width: float
    height: float
    # Off-diagonal (b, c) terms of the text matrix; zero for upright text
    shear: tuple[float, float] = (0.0, 0.0)

    @property
    def top(self) -> float:
        return self.y + self.height


@dataclass(frozen=True)
class Line:
    """Fragments judged to sit on one visual line."""
    fragments: tuple[Fragment, ...]

    @property
    def top(self) -> float:
        return max(f.top for f in self.fragments)

    @property
    def text(self) -> str:
        return "".join(f.text for f in sorted(self.fragments, key=lambda f: f.x))

    @property
    def is_blank(self) -> bool:
        # Byte order marks count as blank too
        return not "".join(f.text for f in self.fragments).replace("\ufeff", "").strip()


def reconstruct_lines(
        fragments: Iterable[Fragment],
        page_width: float,
        region: Region = Region.all,
        config: LayoutConfig | None = None,
) -> List[Line]:
    """Filter, de-noise, cluster and order one page's fragments into lines."""
    config = config or LayoutConfig()
    kept = filter_fragments(fragments, page_width, region, config.horizontal_epsilon)
    clean = suppress_noise(kept, config.noise_width_ratio)
    lines = order_lines(cluster_lines(clean))
    log.debug(
        "region=%s kept=%d noise=%d lines=%d",
        region.value, len(kept), len(kept) - len(clean), len(lines),
    )
    return lines


def overlaps(a: Fragment, b: Fragment) -> bool:
    """Vertical intervals [y, y + height] touch or intersect."""
    return a.y <= b.y + b.height and b.y <= a.y + a.height


# ---------- FILTER ----------

def filter_fragments(
        fragments: Iterable[Fragment],
        page_width: float,
        region: Region = Region.all,
        epsilon: float = 0.01,
) -> List[Fragment]:
    """Keep horizontal fragments with a usable height that fall in the region."""
    midpoint = page_width / 2
    return [
        f for f in fragments
        if f.height > 0 and _is_horizontal(f, epsilon) and _in_region(f, region, midpoint)
    ]


def _is_horizontal(fragment: Fragment, epsilon: float) -> bool:
    b, c = fragment.shear
    return abs(b) < epsilon and abs(c) < epsilon


def _in_region(fragment: Fragment, region: Region, midpoint: float) -> bool:
    # A fragment crossing the midpoint belongs to both halves
    if region == Region.left:
        return fragment.x < midpoint
    if region == Region.right:
        return fragment.x + fragment.width > midpoint
    return True


# ---------- NOISE ----------

def suppress_noise(fragments: List[Fragment], ratio: float = 10.0) -> List[Fragment]:
    """Drop fragments dwarfed by a much wider fragment on the same line.

    Every overlapping pair is judged once against the input set; removals
    do not cascade into a second pass.
    """
    discard: set[int] = set()
    for i, j in _overlapping_pairs(fragments):
        for first, second in ((i, j), (j, i)):
            width_ratio = _width_ratio(fragments[first], fragments[second])
            if width_ratio is None:
                continue
            if width_ratio > ratio:
                discard.add(second)
            elif width_ratio < 1 / ratio:
                discard.add(first)
    return [f for index, f in enumerate(fragments) if index not in discard]


def _width_ratio(a: Fragment, b: Fragment) -> float | None:
    """a.width / b.width; infinite over a zero width, undecided when both are zero."""
    if b.width:
        return a.width / b.width
    return math.inf if a.width > 0 else None


# ---------- CLUSTERS ----------

def cluster_lines(fragments: List[Fragment]) -> List[Line]:
    """Split fragments into connected components of the overlap graph."""
    adjacency: List[List[int]] = [[] for _ in fragments]
    for i, j in _overlapping_pairs(fragments):
        adjacency[i].append(j)
        adjacency[j].append(i)

    visited = [False] * len(fragments)
    lines: List[Line] = []
    for start in range(len(fragments)):
        if visited[start]:
            continue
        visited[start] = True
        queue = deque([start])
        members: List[Fragment] = []
        while queue:
            u = queue.popleft()
            members.append(fragments[u])
            for v in adjacency[u]:
                if not visited[v]:
                    visited[v] = True
                    queue.append(v)
        lines.append(Line(tuple(members)))
    return lines


def _overlapping_pairs(fragments: List[Fragment]) -> Iterator[tuple[int, int]]:
    """Yield each unordered pair (i, j) of indices whose intervals overlap.

    Sweeps fragments by bottom edge so only candidates starting below the
    current top are compared; the pairs are the same as an all-pairs scan.
    """
    order = sorted(range(len(fragments)), key=lambda k: fragments[k].y)
    for pos, i in enumerate(order):
        top = fragments[i].top
        for j in order[pos + 1:]:
            if fragments[j].y > top:
                break
            yield (i, j) if i < j else (j, i)


# ---------- ORDER ----------

def order_lines(lines: List[Line]) -> List[Line]:
    """Sort lines top to bottom by their highest extent."""
    return sorted(lines, key=lambda line: line.top, reverse=True)


# ---------- BASELINE ----------

def estimate_baseline(line: Line) -> float:
    """Width-weighted median y-origin of the line's fragments."""
    by_height = sorted(line.fragments, key=lambda f: f.y, reverse=True)
    half = sum(f.width for f in by_height) / 2
    accumulated = 0.0
    for fragment in by_height:
        accumulated += fragment.width
        if accumulated >= half:
            return fragment.y
    return by_height[0].y


def iter_baselines(lines: Iterable[Line]) -> Iterator[tuple[Line, float]]:
    """Yield (line, baseline) for every line that has visible text."""
    for line in lines:
        if line.is_blank:
            continue
        yield line, estimate_baseline(line)
