"""
PCBCase - Vector and bounding box helpers shared by every geometry module.

Vectors are plain tuples. Boxes are axis aligned and described by their
minimum corner and a non-negative size.
"""
from dataclasses import dataclass
from typing import Iterable, Optional

# Overlap used wherever two solids would otherwise share a face. Coincident
# faces make boolean kernels leave zero-thickness skins, so cutters reach
# EPSILON past the faces they open and fused parts sink EPSILON into each other.
EPSILON = 0.01

AXES = {"x": 0, "y": 1, "z": 2}


def vadd(a, b) -> tuple:
    """Component-wise a + b. A scalar b is added to every component."""
    if isinstance(b, (int, float)):
        return tuple(x + b for x in a)
    return tuple(x + y for x, y in zip(a, b))


def vsub(a, b) -> tuple:
    if isinstance(b, (int, float)):
        return tuple(x - b for x in a)
    return tuple(x - y for x, y in zip(a, b))


def vscale(a, k: float) -> tuple:
    return tuple(x * k for x in a)


def vneg(a) -> tuple:
    return tuple(-x for x in a)


def replace_components(vector, overrides: dict) -> tuple:
    """Copy of *vector* with the components at the given indices replaced."""
    return tuple(overrides.get(i, x) for i, x in enumerate(vector))


def _axis_index(axis) -> int:
    return AXES[axis] if isinstance(axis, str) else int(axis)


@dataclass(frozen=True)
class BoundingBox:
    origin: tuple
    size: tuple

    @classmethod
    def from_corners(cls, a, b) -> "BoundingBox":
        lo = tuple(min(x, y) for x, y in zip(a, b))
        hi = tuple(max(x, y) for x, y in zip(a, b))
        return cls(lo, vsub(hi, lo))

    @property
    def max(self) -> tuple:
        return vadd(self.origin, self.size)

    @property
    def center(self) -> tuple:
        return vadd(self.origin, vscale(self.size, 0.5))

    def translated(self, offset) -> "BoundingBox":
        return BoundingBox(vadd(self.origin, offset), self.size)

    def contains(self, other: "BoundingBox", tol: float = 1e-9) -> bool:
        return all(
            lo - tol <= olo and ohi <= hi + tol
            for lo, hi, olo, ohi in zip(self.origin, self.max, other.origin, other.max)
        )

    def clip_axis(self, axis, low: float, high: float) -> Optional["BoundingBox"]:
        """Restrict the box to [low, high] along *axis*; None if nothing is left."""
        i = _axis_index(axis)
        lo = max(self.origin[i], low)
        hi = min(self.max[i], high)
        if hi <= lo:
            return None
        return BoundingBox(
            replace_components(self.origin, {i: lo}),
            replace_components(self.size, {i: hi - lo}),
        )


def bounding_box_of(points: Iterable) -> BoundingBox:
    """Smallest box containing *points*.

    An empty input yields a degenerate zero-size box at the origin.
    """
    points = [tuple(p) for p in points]
    if not points:
        return BoundingBox((0.0, 0.0, 0.0), (0.0, 0.0, 0.0))
    lo = tuple(min(c) for c in zip(*points))
    hi = tuple(max(c) for c in zip(*points))
    return BoundingBox(lo, vsub(hi, lo))


def merge_boxes(boxes: Iterable[BoundingBox]) -> BoundingBox:
    """Union bounding box of *boxes*."""
    boxes = list(boxes)
    if not boxes:
        return bounding_box_of([])
    lo = tuple(min(c) for c in zip(*(b.origin for b in boxes)))
    hi = tuple(max(c) for c in zip(*(b.max for b in boxes)))
    return BoundingBox(lo, vsub(hi, lo))


class BoxBuilder:
    """Build a box axis by axis from reference boxes and explicit bounds.

    Axes named in ``from_axes`` start from the min/max of the reference
    boxes; the other axes start collapsed at 0. Overrides replace a bound,
    deltas are added to the final bound. This is how a 2-D rectangle on a
    wall is promoted to a 3-D box: two axes come from the rectangle, the
    third one is given explicitly.
    """

    def __init__(self, low, high):
        self._low = list(low)
        self._high = list(high)
        self._delta_low = [0.0] * len(self._low)
        self._delta_high = [0.0] * len(self._high)

    @classmethod
    def from_axes(cls, reference_boxes: Iterable[BoundingBox], axes="xyz") -> "BoxBuilder":
        ref = merge_boxes(reference_boxes)
        mask = {_axis_index(a) for a in axes}
        low = [ref.origin[i] if i in mask else 0.0 for i in range(3)]
        high = [ref.max[i] if i in mask else 0.0 for i in range(3)]
        return cls(low, high)

    def override_low(self, axis, value: float) -> "BoxBuilder":
        self._low[_axis_index(axis)] = value
        return self

    def override_high(self, axis, value: float) -> "BoxBuilder":
        self._high[_axis_index(axis)] = value
        return self

    def delta_low(self, axis, delta: float) -> "BoxBuilder":
        self._delta_low[_axis_index(axis)] += delta
        return self

    def delta_high(self, axis, delta: float) -> "BoxBuilder":
        self._delta_high[_axis_index(axis)] += delta
        return self

    def build(self) -> BoundingBox:
        low = vadd(self._low, self._delta_low)
        high = vadd(self._high, self._delta_high)
        return BoundingBox.from_corners(low, high)


def axis_masked_box(
    reference_boxes: Iterable[BoundingBox],
    axes="xyz",
    overrides: Optional[dict] = None,
    deltas: Optional[dict] = None,
) -> BoundingBox:
    """
    Functional form of BoxBuilder.

    overrides: {axis: (low, high)}, either bound may be None to keep the
               reference value.
    deltas:    {axis: (delta_low, delta_high)} added after overrides.
    """
    builder = BoxBuilder.from_axes(reference_boxes, axes)
    for axis, (low, high) in (overrides or {}).items():
        if low is not None:
            builder.override_low(axis, low)
        if high is not None:
            builder.override_high(axis, high)
    for axis, (d_low, d_high) in (deltas or {}).items():
        builder.delta_low(axis, d_low).delta_high(axis, d_high)
    return builder.build()
