"""
genetics.py - transmission rules per inheritance mode
Affectation-status consistency between a child and its parents
"""

from typing import List, Tuple

from .models import Individual, ParentRoles, Gender, Status, Severity, InheritanceMode


# (target id, severity, message)
Violation = Tuple[str, Severity, str]


class InheritanceRule:
    """
    Mode-specific genetic consistency rules

    Exactly one mode is evaluated per call. Rules that need a father and a
    mother are skipped when the roles are ambiguous: that ambiguity is
    already reported as a structural issue.
    """

    @classmethod
    def check(
        cls,
        person: Individual,
        roles: ParentRoles,
        mode: InheritanceMode
    ) -> List[Violation]:
        """All violations of `mode` for one individual"""
        violations: List[Violation] = []

        if mode == InheritanceMode.X_LINKED:
            violations.extend(cls._x_linked_hemizygous(person))

        if mode == InheritanceMode.Y_LINKED:
            # Y-linked ends the evaluation for this individual
            violations.extend(cls._y_linked(person, roles))
            return violations

        if not roles.resolved:
            return violations

        if mode == InheritanceMode.AUTOSOMAL_RECESSIVE:
            violations.extend(cls._autosomal_recessive(person, roles))
        elif mode == InheritanceMode.AUTOSOMAL_DOMINANT:
            violations.extend(cls._autosomal_dominant(person, roles))
        elif mode == InheritanceMode.X_LINKED:
            violations.extend(cls._x_linked(person, roles))
        else:
            raise ValueError(f"Unhandled inheritance mode: {mode}")

        return violations

    # --------------------------------------------------------
    # X-linked
    # --------------------------------------------------------
    @staticmethod
    def _x_linked_hemizygous(person: Individual) -> List[Violation]:
        """Males carry a single X, so they cannot be carriers"""
        if person.gender == Gender.MALE and person.status == Status.CARRIER:
            return [(person.id, Severity.ERROR,
                     f"{person.name}: Males cannot be carriers for X-linked traits.")]
        return []

    @staticmethod
    def _x_linked(person: Individual, roles: ParentRoles) -> List[Violation]:
        # X-linked dominant and recessive are deliberately folded into one mode
        father = roles.father
        result = []

        # no father-to-son X transmission
        if father.is_affected and person.gender == Gender.MALE and person.is_affected:
            result.append((person.id, Severity.ERROR,
                           f"Affected son {person.name} cannot inherit an X-linked "
                           f"trait from an affected father."))

        # dominant: an affected father affects every daughter
        if father.is_affected and person.gender == Gender.FEMALE and person.is_unaffected:
            result.append((person.id, Severity.WARNING,
                           f"Unaffected daughter {person.name} from an affected father "
                           f"is impossible for X-Dominant inheritance."))

        # recessive: an affected daughter needs an affected father
        if person.gender == Gender.FEMALE and person.is_affected and father.is_unaffected:
            result.append((person.id, Severity.WARNING,
                           f"Affected daughter {person.name} with an unaffected father "
                           f"is impossible for X-Recessive inheritance."))
        return result

    # --------------------------------------------------------
    # Y-linked
    # --------------------------------------------------------
    @staticmethod
    def _y_linked(person: Individual, roles: ParentRoles) -> List[Violation]:
        result = []

        if person.gender == Gender.FEMALE and person.is_affected:
            result.append((person.id, Severity.ERROR,
                           f"{person.name}: Females cannot be affected by Y-linked traits."))
        if person.gender == Gender.MALE and person.status == Status.CARRIER:
            result.append((person.id, Severity.ERROR,
                           f"{person.name}: Males cannot be carriers for Y-linked traits."))

        father = roles.father
        if person.gender == Gender.MALE and father is not None:
            if person.is_affected and father.is_unaffected:
                result.append((person.id, Severity.ERROR,
                               f"Affected son {person.name} has an unaffected father. "
                               f"Impossible for Y-linked."))
            if person.is_unaffected and father.is_affected:
                result.append((person.id, Severity.ERROR,
                               f"Unaffected son {person.name} has an affected father. "
                               f"Impossible for Y-linked."))
        return result

    # --------------------------------------------------------
    # Autosomal
    # --------------------------------------------------------
    @staticmethod
    def _autosomal_recessive(person: Individual, roles: ParentRoles) -> List[Violation]:
        father, mother = roles.father, roles.mother
        result = []

        # unaffected parents are read as non-carriers
        if person.is_affected and father.is_unaffected and mother.is_unaffected:
            result.append((person.id, Severity.ERROR,
                           f"{person.name} is affected, but parents are unaffected "
                           f"non-carriers. Impossible for AR."))
        if father.is_affected and mother.is_affected and not person.is_affected:
            result.append((person.id, Severity.ERROR,
                           f"Unaffected child {person.name} from two affected parents. "
                           f"Impossible for AR."))
        return result

    @staticmethod
    def _autosomal_dominant(person: Individual, roles: ParentRoles) -> List[Violation]:
        father, mother = roles.father, roles.mother
        if person.is_affected and father.is_unaffected and mother.is_unaffected:
            return [(person.id, Severity.ERROR,
                     f"Affected child {person.name} from two unaffected parents. "
                     f"Impossible for AD.")]
        return []
