"""
editor.py - pedigree editing operations
Copy-on-write: every operation returns a new list of individuals and the id
of the individual it created or changed; the input list is never touched.
"""

import logging
import re
from dataclasses import replace
from typing import List, Optional, Tuple

from .models import Individual, Pedigree, Gender, Status

logger = logging.getLogger(__name__)

_ID_PATTERN = re.compile(r"^p(\d+)$")

# fields a caller may change directly
EDITABLE_FIELDS = ('name', 'gender', 'status', 'is_deceased', 'is_proband', 'x', 'y')


class EditError(ValueError):
    """Raised when an editing precondition does not hold"""


def _coerce_enum(enum_cls, raw, field_name: str):
    if isinstance(raw, enum_cls):
        return raw
    if isinstance(raw, str):
        try:
            return enum_cls(raw.lower())
        except ValueError:
            pass
    raise EditError(f"Invalid {field_name}: {raw!r}")


class PlacementConfig:
    """Where new individuals are placed relative to existing ones"""

    def __init__(
        self,
        node_width: float = 50.0,
        generation_gap: float = 180.0,   # vertical distance parent -> child
        partner_gap: float = 60.0,       # extra space between partners
        sibling_gap: float = 20.0,       # extra space between siblings
        parent_offset: float = 30.0      # horizontal offset of new parents
    ):
        self.node_width = node_width
        self.generation_gap = generation_gap
        self.partner_gap = partner_gap
        self.sibling_gap = sibling_gap
        self.parent_offset = parent_offset


EditResult = Tuple[List[Individual], str]


def next_free_number(individuals: List[Individual]) -> int:
    """1 + highest numeric part of 'p<N>' ids (non-matching ids count as 0)"""
    highest = 0
    for person in individuals:
        match = _ID_PATTERN.match(person.id)
        if match:
            highest = max(highest, int(match.group(1)))
    return highest + 1


class PedigreeEditor:
    """
    Graph-editing operations with fresh 'p<N>' ids

    The id counter only ever grows; call `resume_from` after loading a
    snapshot so new ids never collide with existing ones.
    """

    def __init__(self, individuals: Optional[List[Individual]] = None,
                 config: Optional[PlacementConfig] = None):
        self.config = config or PlacementConfig()
        self._next = next_free_number(individuals or [])

    def resume_from(self, individuals: List[Individual]):
        self._next = max(self._next, next_free_number(individuals))

    def new_id(self) -> str:
        new_id = f"p{self._next}"
        self._next += 1
        return new_id

    @staticmethod
    def _require(individuals: List[Individual], person_id: str) -> Individual:
        for person in individuals:
            if person.id == person_id:
                return person
        raise EditError(f"Unknown individual: {person_id}")

    @staticmethod
    def _swap(individuals: List[Individual], updated: Individual) -> List[Individual]:
        return [updated if p.id == updated.id else p for p in individuals]

    # --------------------------------------------------------
    # Creation
    # --------------------------------------------------------
    def add_unrelated(self, individuals: List[Individual],
                      x: float = 0.0, y: float = 0.0) -> EditResult:
        new_id = self.new_id()
        person = Individual(
            id=new_id,
            name=f"Person {new_id[1:]}",
            gender=Gender.UNKNOWN,
            status=Status.UNAFFECTED,
            x=x, y=y
        )
        return list(individuals) + [person], new_id

    def add_parents(self, individuals: List[Individual], child_id: str) -> EditResult:
        """New father + mother above the child, partnered to each other"""
        cfg = self.config
        child = self._require(individuals, child_id)
        if child.parents:
            raise EditError(f"{child.name} already has parents.")

        father_id = self.new_id()
        mother_id = self.new_id()
        parent_y = child.y - cfg.generation_gap
        half = cfg.node_width / 2

        father = Individual(
            id=father_id, name=f"Father {father_id[1:]}",
            gender=Gender.MALE, status=Status.UNAFFECTED,
            x=child.x - half - cfg.parent_offset, y=parent_y,
            partners=[mother_id]
        )
        mother = Individual(
            id=mother_id, name=f"Mother {mother_id[1:]}",
            gender=Gender.FEMALE, status=Status.UNAFFECTED,
            x=child.x + half + cfg.parent_offset, y=parent_y,
            partners=[father_id]
        )

        updated = self._swap(individuals, replace(child, parents=[father_id, mother_id]))
        logger.debug("added parents %s, %s to %s", father_id, mother_id, child_id)
        return updated + [father, mother], father_id

    def add_partner(self, individuals: List[Individual], person_id: str) -> EditResult:
        """New opposite-gender partner to the right of existing partners"""
        cfg = self.config
        person = self._require(individuals, person_id)
        partner_id = self.new_id()

        existing = [p for p in individuals if p.id in person.partners]
        anchor_x = max(p.x for p in existing) if existing else person.x

        partner = Individual(
            id=partner_id, name=f"Partner {partner_id[1:]}",
            gender=Gender.FEMALE if person.gender == Gender.MALE else Gender.MALE,
            status=Status.UNAFFECTED,
            x=anchor_x + cfg.node_width + cfg.partner_gap, y=person.y,
            partners=[person.id]
        )

        updated = self._swap(individuals, replace(person, partners=person.partners + [partner_id]))
        return updated + [partner], partner_id

    def add_sibling(self, individuals: List[Individual], person_id: str) -> EditResult:
        """New full sibling to the right of the existing sibship"""
        cfg = self.config
        person = self._require(individuals, person_id)
        if len(person.parents) < 2:
            raise EditError(f"{person.name} needs two parents to add a sibling.")

        siblings = Pedigree(individuals).get_siblings(person_id)
        last_x = max([s.x for s in siblings] + [person.x])

        sibling_id = self.new_id()
        sibling = Individual(
            id=sibling_id, name=f"Sibling {sibling_id[1:]}",
            gender=Gender.UNKNOWN, status=Status.UNAFFECTED,
            x=last_x + cfg.node_width + cfg.sibling_gap, y=person.y,
            parents=list(person.parents)
        )
        return list(individuals) + [sibling], sibling_id

    def add_child(self, individuals: List[Individual], person_id: str) -> EditResult:
        """
        New child of the individual and its first partner

        Without a partner one is created first. An unknown-gender parent
        becomes female so the couple has explicit roles.
        """
        cfg = self.config
        person = self._require(individuals, person_id)
        if person.gender == Gender.UNKNOWN:
            person = replace(person, gender=Gender.FEMALE)

        pedigree = Pedigree(individuals)
        partner = None
        if person.partners:
            partner = pedigree.get(person.partners[0])
        if partner is None:
            partner = next((p for p in individuals if person.id in p.partners), None)

        new_nodes = []
        if partner is None:
            partner_id = self.new_id()
            partner = Individual(
                id=partner_id, name=f"Partner {partner_id[1:]}",
                gender=Gender.FEMALE if person.gender == Gender.MALE else Gender.MALE,
                status=Status.UNAFFECTED,
                x=person.x + cfg.node_width + cfg.partner_gap, y=person.y,
                partners=[person.id]
            )
            new_nodes.append(partner)
            person = replace(person, partners=person.partners + [partner_id])

        siblings = [
            p for p in individuals
            if person.id in p.parents and partner.id in p.parents
        ]
        if siblings:
            child_x = max(s.x for s in siblings) + cfg.node_width + cfg.sibling_gap
        else:
            child_x = (person.x + partner.x) / 2

        child_id = self.new_id()
        child = Individual(
            id=child_id, name=f"Child {child_id[1:]}",
            gender=Gender.UNKNOWN, status=Status.UNAFFECTED,
            x=child_x, y=person.y + cfg.generation_gap,
            parents=[person.id, partner.id]
        )
        new_nodes.append(child)

        return self._swap(individuals, person) + new_nodes, child_id

    # --------------------------------------------------------
    # Modification
    # --------------------------------------------------------
    def update(self, individuals: List[Individual], person_id: str, **changes) -> EditResult:
        """Direct field update (name, gender, status, flags, position)"""
        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise EditError(f"Fields cannot be edited directly: {', '.join(sorted(unknown))}")

        person = self._require(individuals, person_id)
        for name, enum_cls in (('gender', Gender), ('status', Status)):
            if name in changes:
                changes[name] = _coerce_enum(enum_cls, changes[name], name)
        return self._swap(individuals, replace(person, **changes)), person_id

    def move(self, individuals: List[Individual], person_id: str,
             x: float, y: float) -> EditResult:
        return self.update(individuals, person_id, x=x, y=y)

    def remove(self, individuals: List[Individual], person_id: str) -> EditResult:
        """Delete the individual and scrub it from every parents/partners list"""
        self._require(individuals, person_id)
        remaining = []
        for person in individuals:
            if person.id == person_id:
                continue
            if person_id in person.parents or person_id in person.partners:
                person = replace(
                    person,
                    parents=[pid for pid in person.parents if pid != person_id],
                    partners=[pid for pid in person.partners if pid != person_id]
                )
            remaining.append(person)

        logger.debug("removed %s", person_id)
        return remaining, person_id
