from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from .geometry import RGBA, Rect, Vec2
from .text import FontSpec, text_size


@dataclass(eq=False)
class Node:
    """Retained-mode scene node.

    A node has at most one parent. Children are drawn after their parent, in
    ascending `z_order` and then insertion order. Nodes compare by identity.
    """

    z_order: int = 0
    _parent: Node | None = field(default=None, init=False, repr=False)
    _children: list[Node] = field(default_factory=list, init=False, repr=False)

    @property
    def parent(self) -> Node | None:
        return self._parent

    @property
    def children(self) -> tuple[Node, ...]:
        return tuple(self._children)

    def add_child(self, child: Node) -> None:
        if child is self:
            raise ValueError("node cannot be its own child")
        if child._parent is not None:
            raise ValueError("node already has a parent")
        ancestor = self._parent
        while ancestor is not None:
            if ancestor is child:
                raise ValueError("adding child would create a cycle")
            ancestor = ancestor._parent
        self._children.append(child)
        child._parent = self

    def remove_child(self, child: Node) -> bool:
        if child._parent is not self:
            return False
        self._children.remove(child)
        child._parent = None
        return True

    def iter_tree(self) -> Iterator[Node]:
        """Depth-first, pre-order walk including this node."""
        yield self
        for child in self._children:
            yield from child.iter_tree()

    def contains(self, node: Node) -> bool:
        return any(n is node for n in self.iter_tree())


@dataclass(eq=False)
class RectangleNode(Node):
    """Filled rectangle. Its position is the origin of its children's local space."""

    position: Vec2 = (0.0, 0.0)
    size: Vec2 = (0.0, 0.0)
    color: RGBA = (255, 255, 255, 255)

    def bounds(self) -> Rect:
        return Rect(self.position[0], self.position[1], self.size[0], self.size[1])


@dataclass(eq=False)
class LineNode(Node):
    """Straight segment primitive between two endpoints."""

    point1: Vec2 = (0.0, 0.0)
    point2: Vec2 = (0.0, 0.0)
    color: RGBA = (255, 255, 255, 255)
    thickness: float = 1.0

    @property
    def is_degenerate(self) -> bool:
        return self.point1 == self.point2


@dataclass(eq=False)
class TextNode(Node):
    """Text primitive.

    `size` is only refreshed by `adjust_size()`; callers mutate `text` or `font`
    and then re-measure. `pivot` is the fraction of the measured size that sits
    on `position`; `angle` is a counter-clockwise quarter-turn rotation.
    """

    text: str = ""
    position: Vec2 = (0.0, 0.0)
    color: RGBA = (255, 255, 255, 255)
    font: FontSpec = field(default_factory=FontSpec)
    pivot: Vec2 = (0.0, 0.0)
    angle: int = 0
    size: Vec2 = (0.0, 0.0)

    def adjust_size(self) -> Vec2:
        w, h = text_size(self.text, self.font, rotate_deg=self.angle)
        self.size = (float(w), float(h))
        return self.size

    def bounds(self) -> Rect:
        w, h = self.size
        return Rect(self.position[0] - w * self.pivot[0], self.position[1] - h * self.pivot[1], w, h)
