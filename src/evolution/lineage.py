"""Family tree arena: parent and child links addressed by creature id.

Creatures do not hold references to each other. Every kinship link lives in
a LineageNode keyed by creature id, so pruning is a matter of clearing ids
and unreachable ancestors can be swept out of the arena.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from src.errors import InvariantViolationError

if TYPE_CHECKING:
    from src.evolution.creature import Creature

logger = logging.getLogger(__name__)


@dataclass
class LineageNode:
    """A node in the family tree.

    Represents one creature and its links to parents and children.
    """

    creature_id: int
    species_id: int
    mother_id: int | None = None
    father_id: int | None = None
    children: list[int] = field(default_factory=list)
    birth_epoch: int = 0

    def add_child(self, child_id: int) -> None:
        """Record a child creature."""
        self.children.append(child_id)

    @property
    def parent_ids(self) -> tuple[int, ...]:
        return tuple(pid for pid in (self.mother_id, self.father_id) if pid is not None)


class FamilyTree:
    """Arena of creatures and their kinship links.

    Children lists are append-only and insertion-ordered; they only shrink
    when an ancestor is detached.
    """

    def __init__(self):
        self._nodes: dict[int, LineageNode] = {}
        self._creatures: dict[int, Creature] = {}
        self._ids = itertools.count()

    def new_id(self) -> int:
        """Allocate the next creature id."""
        return next(self._ids)

    def register(
        self,
        creature: Creature,
        mother: Creature | None = None,
        father: Creature | None = None,
        birth_epoch: int = 0,
    ) -> LineageNode:
        """Add a creature, linking it to both parents for sexual births.

        Args:
            creature: Newly constructed creature
            mother: Mother (None for founders)
            father: Father (None for founders)
            birth_epoch: Epoch of birth

        Returns:
            The creature's new LineageNode
        """
        if creature.creature_id in self._nodes:
            raise InvariantViolationError(f"Creature {creature.creature_id} already registered")
        if (mother is None) != (father is None):
            raise InvariantViolationError("Offspring need both a mother and a father")

        parents = [p for p in (mother, father) if p is not None]
        for parent in parents:
            if parent.creature_id not in self._nodes:
                raise InvariantViolationError(
                    f"Parent {parent.creature_id} is not in this family tree"
                )

        node = LineageNode(
            creature_id=creature.creature_id,
            species_id=creature.species_id,
            mother_id=mother.creature_id if mother is not None else None,
            father_id=father.creature_id if father is not None else None,
            birth_epoch=birth_epoch,
        )
        self._nodes[creature.creature_id] = node
        self._creatures[creature.creature_id] = creature

        for parent in parents:
            self._nodes[parent.creature_id].add_child(creature.creature_id)

        return node

    def get(self, creature_id: int | None) -> Creature | None:
        """Look up a creature by id."""
        if creature_id is None:
            return None
        return self._creatures.get(creature_id)

    def node(self, creature_id: int) -> LineageNode:
        return self._nodes[creature_id]

    def mother_of(self, creature_id: int) -> Creature | None:
        return self.get(self._nodes[creature_id].mother_id)

    def father_of(self, creature_id: int) -> Creature | None:
        return self.get(self._nodes[creature_id].father_id)

    def children_of(self, creature_id: int) -> list[Creature]:
        """Children of a creature, in birth order."""
        return [self._creatures[cid] for cid in self._nodes[creature_id].children]

    def child_count(self, creature_id: int) -> int:
        return len(self._nodes[creature_id].children)

    def clear_children(self, creature_id: int | None) -> None:
        """Forget a creature's children. A missing or unknown id is a no-op."""
        if creature_id is None:
            return
        node = self._nodes.get(creature_id)
        if node is not None:
            node.children.clear()

    def unlink_parents(self, creature_id: int | None) -> None:
        """Null a creature's parent links, keeping its children."""
        if creature_id is None:
            return
        node = self._nodes.get(creature_id)
        if node is None:
            return
        node.mother_id = None
        node.father_id = None

    def ancestors(self, creature_id: int, depth: int) -> list[int]:
        """Recorded ancestor ids up to depth generations, nearest first."""
        result: list[int] = []
        frontier = [creature_id]
        for _ in range(depth):
            parents = []
            for cid in frontier:
                node = self._nodes.get(cid)
                if node is not None:
                    parents.extend(node.parent_ids)
            if not parents:
                break
            result.extend(parents)
            frontier = parents
        return result

    def collect(self, living_ids: Iterable[int]) -> int:
        """Drop every node not connected to a living creature.

        Connectivity follows both parent and child links, so relatives the
        strength formula can still reach are kept.

        Args:
            living_ids: Ids of creatures currently in the population

        Returns:
            Number of nodes removed
        """
        reachable: set[int] = set()
        stack = [cid for cid in living_ids if cid in self._nodes]
        while stack:
            cid = stack.pop()
            if cid in reachable:
                continue
            reachable.add(cid)
            node = self._nodes[cid]
            for linked in (*node.parent_ids, *node.children):
                if linked not in reachable and linked in self._nodes:
                    stack.append(linked)

        dropped = [cid for cid in self._nodes if cid not in reachable]
        for cid in dropped:
            del self._nodes[cid]
            del self._creatures[cid]

        if dropped:
            logger.debug(f"Collected {len(dropped)} detached creatures, {len(self._nodes)} remain")
        return len(dropped)

    def __contains__(self, creature_id: object) -> bool:
        return creature_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)
