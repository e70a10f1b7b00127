"""
layout.py - connector routing for the pedigree diagram
Partnership lines, descent lines and sibship brackets derived from
node positions and relationships only
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Dict, Optional, Tuple, Union

from .models import Individual, Pedigree, couple_key

logger = logging.getLogger(__name__)


# ============================================================
# Settings (shared with the renderer)
# ============================================================
@dataclass
class LayoutConfig:
    node_width: float = 50.0
    node_height: float = 50.0
    sibship_offset: float = 90.0    # sibship line distance below the marriage line


class ConnectorKind(Enum):
    PARTNERSHIP = "partnership"
    DESCENT = "descent"
    SIBSHIP = "sibship"
    CHILD_DROP = "child-drop"


@dataclass
class Connector:
    """Straight segment (x1, y1) -> (x2, y2)"""
    kind: ConnectorKind
    x1: float
    y1: float
    x2: float
    y2: float
    key: str = ""    # stable identifier for the rendering layer

    @property
    def is_horizontal(self) -> bool:
        return self.y1 == self.y2

    @property
    def is_vertical(self) -> bool:
        return self.x1 == self.x2

    def to_dict(self) -> Dict:
        return {
            'kind': self.kind.value,
            'key': self.key,
            'x1': self.x1,
            'y1': self.y1,
            'x2': self.x2,
            'y2': self.y2
        }


@dataclass
class CoupleGroup:
    """Two parents and the children listing exactly both of them"""
    key: Tuple[str, str]
    parent1: Individual
    parent2: Individual
    children: List[Individual] = field(default_factory=list)

    @property
    def key_str(self) -> str:
        return f"{self.key[0]}-{self.key[1]}"


def _as_pedigree(individuals: Union[Pedigree, List[Individual]]) -> Pedigree:
    return individuals if isinstance(individuals, Pedigree) else Pedigree(individuals)


def _facing_edges(p1: Individual, p2: Individual, cfg: LayoutConfig) -> Tuple[float, float]:
    """Right edge of the left node, left edge of the right node"""
    left, right = (p1, p2) if p1.x < p2.x else (p2, p1)
    return left.x + cfg.node_width / 2, right.x - cfg.node_width / 2


# --------------------------------------------------------
# [1] Partnership lines
# --------------------------------------------------------
def partnership_connectors(
    individuals: Union[Pedigree, List[Individual]],
    config: Optional[LayoutConfig] = None
) -> List[Connector]:
    """One horizontal line per couple, whichever side lists the partnership"""
    cfg = config or LayoutConfig()
    pedigree = _as_pedigree(individuals)
    drawn = set()
    links = []

    for person in pedigree:
        for partner_id in person.partners:
            partner = pedigree.get(partner_id)
            if partner is None or partner.id == person.id:
                continue

            key = couple_key(person.id, partner.id)
            if key in drawn:
                continue
            drawn.add(key)

            x1, x2 = _facing_edges(person, partner, cfg)
            y = (person.y + partner.y) / 2
            links.append(Connector(ConnectorKind.PARTNERSHIP, x1, y, x2, y,
                                   key=f"mar-{key[0]}-{key[1]}"))
    return links


# --------------------------------------------------------
# [2] Couple -> children grouping
# --------------------------------------------------------
def group_couples(individuals: Union[Pedigree, List[Individual]]) -> List[CoupleGroup]:
    """
    Group individuals with two listed parents by their parent pair

    Groups come out in order of their first child. A group whose parents do
    not both resolve is dropped.
    """
    pedigree = _as_pedigree(individuals)
    groups: Dict[Tuple[str, str], CoupleGroup] = {}
    dropped = set()

    for person in pedigree:
        if len(person.parents) != 2:
            continue
        key = couple_key(person.parents[0], person.parents[1])
        if key in dropped:
            continue

        if key not in groups:
            p1 = pedigree.get(key[0])
            p2 = pedigree.get(key[1])
            if not p1 or not p2:
                dropped.add(key)
                continue
            groups[key] = CoupleGroup(key=key, parent1=p1, parent2=p2)
        groups[key].children.append(person)

    if dropped:
        logger.debug("dropped %d couple group(s) with unresolved parents", len(dropped))
    return list(groups.values())


# --------------------------------------------------------
# [3] Descent / sibship geometry
# --------------------------------------------------------
def descent_connectors(group: CoupleGroup, config: Optional[LayoutConfig] = None) -> List[Connector]:
    """Descent line plus either an L connector or a sibship bracket"""
    cfg = config or LayoutConfig()
    p1, p2 = group.parent1, group.parent2
    children = group.children
    if not children:
        return []

    edge1, edge2 = _facing_edges(p1, p2, cfg)
    mid_x = (edge1 + edge2) / 2
    marriage_y = (p1.y + p2.y) / 2
    links = []

    if len(children) == 1:
        # only child: L connector, no sibship bracket
        child = children[0]
        child_top = child.y - cfg.node_height / 2
        links.append(Connector(ConnectorKind.DESCENT, mid_x, marriage_y, mid_x, child_top,
                               key=f"des-{group.key_str}"))
        links.append(Connector(ConnectorKind.DESCENT, mid_x, child_top, child.x, child_top,
                               key=f"h-con-{child.id}"))
        return links

    sibship_y = marriage_y + cfg.sibship_offset
    links.append(Connector(ConnectorKind.DESCENT, mid_x, marriage_y, mid_x, sibship_y,
                           key=f"des-{group.key_str}"))

    ordered = sorted(children, key=lambda c: c.x)
    # bracket always reaches the central descent line
    xs = [mid_x] + [c.x for c in ordered]
    links.append(Connector(ConnectorKind.SIBSHIP, min(xs), sibship_y, max(xs), sibship_y,
                           key=f"sib-{group.key_str}"))

    for child in ordered:
        links.append(Connector(ConnectorKind.CHILD_DROP, child.x, sibship_y,
                               child.x, child.y - cfg.node_height / 2,
                               key=f"child-{child.id}"))
    return links


def compute_links(
    individuals: Union[Pedigree, List[Individual]],
    config: Optional[LayoutConfig] = None
) -> List[Connector]:
    """
    Full connector list: partnership lines first, then per-couple descent
    geometry. Pure function of the snapshot; inputs are never modified.
    """
    cfg = config or LayoutConfig()
    pedigree = _as_pedigree(individuals)

    links = partnership_connectors(pedigree, cfg)
    for group in group_couples(pedigree):
        links.extend(descent_connectors(group, cfg))

    logger.debug("computed %d connectors for %d individuals", len(links), len(pedigree))
    return links
