"""Room connectivity sets.

A union-find over room indices decides set membership; each room additionally
keeps the list of rooms it is directly joined to, which is what the connection
loop consults when looking for a partner.
"""
from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING, Dict, List

if TYPE_CHECKING:
    from .rooms import Room


class ConnectivityTracker:
    def __init__(self):
        self._parent: List[int] = []
        self._size: List[int] = []
        self.rooms: List["Room"] = []
        self.sets = 0

    def add(self, room: "Room") -> int:
        """Give ``room`` its own set and return its index (creation order)."""
        index = len(self._parent)
        self._parent.append(index)
        self._size.append(1)
        self.rooms.append(room)
        self.sets += 1
        return index

    def find(self, a: int) -> int:
        parent = self._parent
        while parent[a] != a:
            parent[a] = parent[parent[a]]
            a = parent[a]
        return a

    def _union(self, a: int, b: int) -> bool:
        ra, rb = self.find(a), self.find(b)
        if ra == rb:
            return False
        if self._size[ra] < self._size[rb]:
            ra, rb = rb, ra
        self._parent[rb] = ra
        self._size[ra] += self._size[rb]
        return True

    def set_id(self, room: "Room") -> int:
        return self.find(room.index)

    def same_set(self, a: "Room", b: "Room") -> bool:
        return self.find(a.index) == self.find(b.index)

    def connect(self, a: "Room", b: "Room") -> bool:
        """Record a direct connection between ``a`` and ``b``.

        Returns True when two previously separate sets were merged.
        """
        if a is b or b in a.connected:
            return False
        merged = self._union(a.index, b.index)
        if merged:
            self.sets -= 1
        a.connected.append(b)
        b.connected.append(a)
        return merged

    def reachable(self, start: "Room") -> List["Room"]:
        """Rooms reachable from ``start`` over direct connections (BFS order)."""
        seen = {id(start)}
        order = [start]
        q = deque([start])
        while q:
            room = q.popleft()
            for other in room.connected:
                if id(other) not in seen:
                    seen.add(id(other))
                    order.append(other)
                    q.append(other)
        return order

    def groups(self) -> Dict[int, List["Room"]]:
        out: Dict[int, List["Room"]] = {}
        for room in self.rooms:
            out.setdefault(self.find(room.index), []).append(room)
        return out


__all__ = ["ConnectivityTracker"]
