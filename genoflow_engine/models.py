"""
models.py - core data model
Gender, Status, InheritanceMode, Individual and the Pedigree graph
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Dict, Tuple, Set, Union


class Gender(Enum):
    """Gender of an individual (drives shape and role assignment)"""
    MALE = "male"
    FEMALE = "female"
    UNKNOWN = "unknown"


class Status(Enum):
    """Affectation status"""
    UNAFFECTED = "unaffected"
    AFFECTED = "affected"
    CARRIER = "carrier"      # meaningful for AR / XL, representable everywhere
    UNKNOWN = "unknown"


class Severity(Enum):
    """Issue severity"""
    ERROR = "error"      # contradicts the transmission law of the mode
    WARNING = "warning"  # improbable under the common assumption


class InheritanceMode(Enum):
    """Inheritance mode selected for validation"""
    AUTOSOMAL_RECESSIVE = "AR"
    AUTOSOMAL_DOMINANT = "AD"
    X_LINKED = "XL"
    Y_LINKED = "YL"

    @classmethod
    def parse(cls, value: Union[str, 'InheritanceMode']) -> 'InheritanceMode':
        """Mode code ('AR', 'ad', ...) or enum member -> InheritanceMode"""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            code = value.strip().upper()
            for mode in cls:
                if mode.value == code:
                    return mode
        raise ValueError(
            f"Unknown inheritance mode {value!r} "
            f"(expected one of {', '.join(m.value for m in cls)})"
        )

    @property
    def label(self) -> str:
        return _MODE_LABELS[self]


_MODE_LABELS = {
    InheritanceMode.AUTOSOMAL_RECESSIVE: "Autosomal Recessive",
    InheritanceMode.AUTOSOMAL_DOMINANT: "Autosomal Dominant",
    InheritanceMode.X_LINKED: "X-Linked",
    InheritanceMode.Y_LINKED: "Y-Linked",
}


@dataclass
class Individual:
    """
    A node of the pedigree graph
    - id: stable unique identifier, used as join key everywhere
    - parents: 0, 1 or 2 parent ids (order carries no meaning)
    - partners: partner ids (symmetry is NOT guaranteed)
    - x, y: canvas position, only used for layout and the parent-below check
    """
    id: str
    name: str = ""
    gender: Gender = Gender.UNKNOWN
    status: Status = Status.UNAFFECTED
    is_deceased: bool = False
    is_proband: bool = False
    x: float = 0.0
    y: float = 0.0
    parents: List[str] = field(default_factory=list)
    partners: List[str] = field(default_factory=list)

    @property
    def is_affected(self) -> bool:
        return self.status == Status.AFFECTED

    @property
    def is_unaffected(self) -> bool:
        return self.status == Status.UNAFFECTED

    def __repr__(self):
        return (f"Individual({self.id}, {self.gender.name}, {self.status.name}, "
                f"parents={self.parents}, partners={self.partners})")


@dataclass
class ParentRoles:
    """Father/mother pair; both None when roles cannot be determined"""
    father: Optional[Individual] = None
    mother: Optional[Individual] = None

    @property
    def resolved(self) -> bool:
        return self.father is not None and self.mother is not None


def couple_key(id1: str, id2: str) -> Tuple[str, str]:
    """Canonical, order-insensitive key of a pair of ids"""
    return (id1, id2) if id1 <= id2 else (id2, id1)


class Pedigree:
    """
    Read-only view over a snapshot of individuals

    The id index is built once per instance; the individual list itself is
    never modified, so a Pedigree is valid for exactly one snapshot.
    """

    def __init__(self, individuals: List[Individual]):
        self._individuals = list(individuals)
        self._by_id: Dict[str, Individual] = {p.id: p for p in self._individuals}

    @property
    def individuals(self) -> List[Individual]:
        """All individuals, in input order"""
        return list(self._individuals)

    def __len__(self):
        return len(self._individuals)

    def __iter__(self):
        return iter(self._individuals)

    def __contains__(self, person_id: str) -> bool:
        return person_id in self._by_id

    def get(self, person_id: Optional[str]) -> Optional[Individual]:
        """ID lookup; dangling or missing ids resolve to None"""
        if person_id is None:
            return None
        return self._by_id.get(person_id)

    # --------------------------------------------------------
    # Parents / children
    # --------------------------------------------------------
    def resolved_parents(self, person: Individual) -> List[Individual]:
        """Listed parents that resolve to an existing individual"""
        return [p for p in (self.get(pid) for pid in person.parents) if p]

    def parent_pair(self, person: Individual) -> Optional[Tuple[Individual, Individual]]:
        """Both parents, only when exactly two are listed and both resolve"""
        if len(person.parents) != 2:
            return None
        p1 = self.get(person.parents[0])
        p2 = self.get(person.parents[1])
        if not p1 or not p2:
            return None
        return p1, p2

    def get_parents(self, person: Individual) -> ParentRoles:
        """
        Father/mother roles, inferred from gender (never from position)

        Returns an empty ParentRoles for same-sex or unknown-gender pairs so
        role-dependent rules can be skipped.
        """
        pair = self.parent_pair(person)
        if pair is None:
            return ParentRoles()

        p1, p2 = pair
        if p1.gender == Gender.MALE and p2.gender == Gender.FEMALE:
            return ParentRoles(father=p1, mother=p2)
        if p1.gender == Gender.FEMALE and p2.gender == Gender.MALE:
            return ParentRoles(father=p2, mother=p1)
        return ParentRoles()

    def get_children(self, person_id: str) -> List[Individual]:
        """Everyone listing person_id as a parent"""
        return [p for p in self._individuals if person_id in p.parents]

    # --------------------------------------------------------
    # Partners
    # --------------------------------------------------------
    def partners_of(self, person_id: str) -> List[Individual]:
        """
        Forward partners union reverse partners

        Tolerates asymmetric and duplicated partner lists. Result is in
        discovery order: own list first, then reverse references.
        """
        person = self.get(person_id)
        if person is None:
            return []

        seen: Set[str] = set()
        result = []

        def _add(candidate: Optional[Individual]):
            if candidate is None or candidate.id == person_id or candidate.id in seen:
                return
            seen.add(candidate.id)
            result.append(candidate)

        for pid in person.partners:
            _add(self.get(pid))
        for other in self._individuals:
            if person_id in other.partners:
                _add(other)
        return result

    def are_partners(self, id1: str, id2: str) -> bool:
        return any(p.id == id2 for p in self.partners_of(id1))

    # --------------------------------------------------------
    # Siblings
    # --------------------------------------------------------
    def sibling_groups(self) -> Dict[Tuple[str, str], List[Individual]]:
        """Full-sibling sets keyed by the canonical pair of parent ids"""
        groups: Dict[Tuple[str, str], List[Individual]] = {}
        for person in self._individuals:
            if len(person.parents) != 2:
                continue
            key = couple_key(person.parents[0], person.parents[1])
            groups.setdefault(key, []).append(person)
        return groups

    def get_siblings(self, person_id: str) -> List[Individual]:
        """Full siblings (same two parent ids, order-insensitive), self excluded"""
        person = self.get(person_id)
        if not person or len(person.parents) != 2:
            return []

        parent_set = set(person.parents)
        return [
            p for p in self._individuals
            if p.id != person_id and len(p.parents) == 2 and set(p.parents) == parent_set
        ]

    # --------------------------------------------------------
    # Misc
    # --------------------------------------------------------
    @property
    def probands(self) -> List[Individual]:
        """Zero, one or several probands are all tolerated"""
        return [p for p in self._individuals if p.is_proband]

    @property
    def proband(self) -> Optional[Individual]:
        """First proband in input order"""
        probands = self.probands
        return probands[0] if probands else None

    def __repr__(self):
        return f"Pedigree(individuals={len(self._individuals)})"
