import pytest

from genoflow_engine import Individual, Gender, Status


def person(pid, gender=Gender.UNKNOWN, status=Status.UNAFFECTED, parents=None,
           partners=None, x=0.0, y=0.0, name=None, proband=False):
    return Individual(
        id=pid,
        name=name or pid.upper(),
        gender=gender,
        status=status,
        is_proband=proband,
        x=x, y=y,
        parents=list(parents or []),
        partners=list(partners or [])
    )


@pytest.fixture
def make_person():
    return person


@pytest.fixture
def make_trio():
    """father, mother and one child with the given statuses / child gender"""

    def _trio(father=Status.UNAFFECTED, mother=Status.UNAFFECTED,
              child=Status.UNAFFECTED, child_gender=Gender.FEMALE):
        return [
            person('f', Gender.MALE, father, partners=['m'], x=100, y=100),
            person('m', Gender.FEMALE, mother, partners=['f'], x=160, y=100),
            person('c', child_gender, child, parents=['f', 'm'], x=130, y=280),
        ]

    return _trio
