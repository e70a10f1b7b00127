"""
statistics.py - derived pedigree statistics
Affected count, obligate carriers, ancestral risk and phenotype inventory
"""

import math
from typing import List, Dict, Optional, Any, Union
from dataclasses import dataclass, field

from .models import Individual, Pedigree, Gender, Status, InheritanceMode
from .ancestry import ancestor_individuals


@dataclass
class InventoryRow:
    """One line of the phenotype inventory"""
    person_id: str
    name: str
    label: str
    status: str    # upper-case status code, e.g. 'AFFECTED'


@dataclass
class AnalysisReport:
    """Aggregate statistics for one snapshot under one mode"""
    mode: InheritanceMode
    proband_id: Optional[str]
    risk_percentage: int
    total_members: int
    affected_count: int
    obligate_carriers: int
    ancestor_count: int = 0
    affected_ancestor_count: int = 0
    inventory: List[InventoryRow] = field(default_factory=list)

    @property
    def risk_summary(self) -> str:
        if self.proband_id is None:
            return "No proband selected."
        if self.total_members <= 1:
            return "Add ancestors to begin genetic mapping."
        return (f"Based on the current pedigree, the patient has a "
                f"{self.risk_percentage}% risk factor.")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'mode': self.mode.value,
            'proband_id': self.proband_id,
            'risk_percentage': self.risk_percentage,
            'risk_summary': self.risk_summary,
            'total_members': self.total_members,
            'affected_count': self.affected_count,
            'obligate_carriers': self.obligate_carriers,
            'ancestor_count': self.ancestor_count,
            'affected_ancestor_count': self.affected_ancestor_count,
            'inventory': [
                {
                    'id': row.person_id,
                    'name': row.name,
                    'label': row.label,
                    'status': row.status
                }
                for row in self.inventory
            ]
        }

    def to_markdown(self) -> str:
        """Inventory as a markdown table"""
        if not self.inventory:
            return ""

        lines = ["| Individual | Status |", "|---|---|"]
        for row in self.inventory:
            lines.append(f"| {row.label} | {row.status} |")
        return "\n".join(lines)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def affected_count(pedigree: Pedigree) -> int:
    return sum(1 for p in pedigree if p.status == Status.AFFECTED)


def obligate_carrier_count(pedigree: Pedigree, mode: InheritanceMode) -> int:
    """
    Unaffected individuals that must carry the allele

    AR: unaffected parent of an affected child.
    XL: unaffected mother of an affected son.
    AD and YL have no obligate carriers.
    """
    if mode in (InheritanceMode.AUTOSOMAL_DOMINANT, InheritanceMode.Y_LINKED):
        return 0

    count = 0
    for person in pedigree:
        if person.status != Status.UNAFFECTED:
            continue
        children = pedigree.get_children(person.id)

        if mode == InheritanceMode.AUTOSOMAL_RECESSIVE:
            if any(c.status == Status.AFFECTED for c in children):
                count += 1
        elif mode == InheritanceMode.X_LINKED:
            if person.gender != Gender.FEMALE:
                continue
            if any(c.gender == Gender.MALE and c.status == Status.AFFECTED for c in children):
                count += 1
        else:
            raise ValueError(f"Unhandled inheritance mode: {mode}")
    return count


def ancestral_risk(pedigree: Pedigree, person_id: Optional[str]) -> int:
    """affected ancestors / ancestors * 100, rounded; 0 without ancestors"""
    if person_id is None:
        return 0
    ancestors = ancestor_individuals(pedigree, person_id)
    if not ancestors:
        return 0
    affected = sum(1 for p in ancestors if p.status == Status.AFFECTED)
    return round_half_up(affected / len(ancestors) * 100)


def phenotype_inventory(pedigree: Pedigree) -> List[InventoryRow]:
    """Probands first, otherwise input order"""
    ordered = sorted(pedigree, key=lambda p: 0 if p.is_proband else 1)
    return [
        InventoryRow(
            person_id=p.id,
            name=p.name,
            label=f"{p.name} (proband)" if p.is_proband else p.name,
            status=p.status.value.upper()
        )
        for p in ordered
    ]


class PedigreeAnalyzer:
    """Builds an AnalysisReport on demand"""

    def analyze(
        self,
        pedigree: Union[Pedigree, List[Individual]],
        mode: Union[InheritanceMode, str]
    ) -> AnalysisReport:
        if not isinstance(pedigree, Pedigree):
            pedigree = Pedigree(pedigree)
        mode = InheritanceMode.parse(mode)

        proband = pedigree.proband
        ancestors = ancestor_individuals(pedigree, proband.id) if proband else []

        return AnalysisReport(
            mode=mode,
            proband_id=proband.id if proband else None,
            risk_percentage=ancestral_risk(pedigree, proband.id if proband else None),
            total_members=len(pedigree),
            affected_count=affected_count(pedigree),
            obligate_carriers=obligate_carrier_count(pedigree, mode),
            ancestor_count=len(ancestors),
            affected_ancestor_count=sum(1 for p in ancestors if p.status == Status.AFFECTED),
            inventory=phenotype_inventory(pedigree)
        )


def analyze_pedigree(
    pedigree: Union[Pedigree, List[Individual]],
    mode: Union[InheritanceMode, str]
) -> AnalysisReport:
    """Convenience function"""
    return PedigreeAnalyzer().analyze(pedigree, mode)
