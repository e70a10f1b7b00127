"""
validator.py - pedigree consistency validation
Structural integrity checks plus the rules of the selected inheritance mode
"""

import logging
from typing import List, Dict, Union
from dataclasses import dataclass, field

from .models import Individual, Pedigree, Gender, Severity, InheritanceMode
from .genetics import InheritanceRule

logger = logging.getLogger(__name__)


@dataclass
class ValidationIssue:
    """A single advisory issue attached to an individual"""
    target_id: str
    severity: Severity
    message: str

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR

    def to_dict(self) -> Dict:
        return {
            'id': self.target_id,
            'type': self.severity.value,
            'message': self.message
        }

    def __str__(self):
        return f"[{self.severity.value.upper()}] {self.message}"


@dataclass
class ValidationReport:
    """All issues of one validation run"""
    mode: InheritanceMode
    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """No errors (warnings are allowed)"""
        return self.error_count == 0

    @property
    def error_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == Severity.WARNING)

    def add_issue(self, issue: ValidationIssue):
        self.issues.append(issue)

    def get_errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.ERROR]

    def get_warnings(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.WARNING]

    def issues_for(self, person_id: str) -> List[ValidationIssue]:
        return [i for i in self.issues if i.target_id == person_id]

    def to_dict(self) -> Dict:
        return {
            'mode': self.mode.value,
            'is_valid': self.is_valid,
            'error_count': self.error_count,
            'warning_count': self.warning_count,
            'issues': [i.to_dict() for i in self.issues]
        }

    def __str__(self):
        lines = [
            f"=== Validation report ({self.mode.label}) ===",
            f"Result: {'valid' if self.is_valid else 'INVALID'}",
            f"Errors: {self.error_count}, warnings: {self.warning_count}",
        ]
        if self.issues:
            lines.append("")
            for issue in self.issues:
                lines.append(f"  {issue} ({issue.target_id})")
        return "\n".join(lines)


class LogicValidator:
    """
    Pedigree validator

    Checks, per individual and in input order:
    1. single listed parent
    2. same-sex parent pair
    3. parent drawn below the child
    4. rules of the selected inheritance mode (see InheritanceRule)

    Validation is advisory: nothing here rejects a graph, it only reports.
    """

    def validate_logic(
        self,
        pedigree: Union[Pedigree, List[Individual]],
        mode: Union[InheritanceMode, str]
    ) -> ValidationReport:
        """
        Run every check once per individual

        Args:
            pedigree: Pedigree or plain list of individuals
            mode: selected inheritance mode (enum or code such as 'AR')

        Returns:
            ValidationReport
        """
        if not isinstance(pedigree, Pedigree):
            pedigree = Pedigree(pedigree)
        mode = InheritanceMode.parse(mode)

        report = ValidationReport(mode=mode)
        for person in pedigree:
            for issue in self._validate_structure(pedigree, person):
                report.add_issue(issue)
            for issue in self._validate_inheritance(pedigree, person, mode):
                report.add_issue(issue)

        logger.debug("validated %d individuals under %s: %d errors, %d warnings",
                     len(pedigree), mode.value, report.error_count, report.warning_count)
        return report

    def _validate_structure(self, pedigree: Pedigree, person: Individual) -> List[ValidationIssue]:
        """Mode-independent integrity checks"""
        results = []

        if len(person.parents) == 1:
            results.append(ValidationIssue(
                person.id, Severity.ERROR,
                f"{person.name}: Has only one parent listed. Biological individuals require two."
            ))

        pair = pedigree.parent_pair(person)
        if pair is not None:
            p1, p2 = pair
            if p1.gender != Gender.UNKNOWN and p1.gender == p2.gender:
                results.append(ValidationIssue(
                    person.id, Severity.ERROR,
                    f"{person.name}: Parents {p1.name} and {p2.name} are both of the same sex."
                ))

        # y grows downward on the canvas
        roles = pedigree.get_parents(person)
        for parent in (roles.father, roles.mother):
            if parent is not None and parent.y > person.y:
                results.append(ValidationIssue(
                    parent.id, Severity.WARNING,
                    f"Structural warning: {parent.name} (parent) is positioned "
                    f"below {person.name} (child)."
                ))

        return results

    def _validate_inheritance(
        self,
        pedigree: Pedigree,
        person: Individual,
        mode: InheritanceMode
    ) -> List[ValidationIssue]:
        roles = pedigree.get_parents(person)
        return [
            ValidationIssue(target_id, severity, message)
            for target_id, severity, message in InheritanceRule.check(person, roles, mode)
        ]


def validate_pedigree(
    pedigree: Union[Pedigree, List[Individual]],
    mode: Union[InheritanceMode, str]
) -> ValidationReport:
    """Convenience function: full validation report"""
    return LogicValidator().validate_logic(pedigree, mode)


def validate(
    individuals: Union[Pedigree, List[Individual]],
    mode: Union[InheritanceMode, str]
) -> List[ValidationIssue]:
    """Issue list only, in individual input order"""
    return validate_pedigree(individuals, mode).issues
