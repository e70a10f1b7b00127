import pytest

from genoflow_engine import Pedigree, Gender, Status, InheritanceMode
from genoflow_engine.models import couple_key


def test_inheritance_mode_parse():
    assert InheritanceMode.parse("AR") is InheritanceMode.AUTOSOMAL_RECESSIVE
    assert InheritanceMode.parse(" xl ") is InheritanceMode.X_LINKED
    assert InheritanceMode.parse(InheritanceMode.Y_LINKED) is InheritanceMode.Y_LINKED
    with pytest.raises(ValueError):
        InheritanceMode.parse("XLD")


def test_lookup_treats_dangling_ids_as_absent(make_person):
    ped = Pedigree([make_person('a', parents=['ghost', 'b']), make_person('b')])
    assert ped.get('a').id == 'a'
    assert ped.get('ghost') is None
    assert ped.get(None) is None
    assert [p.id for p in ped.resolved_parents(ped.get('a'))] == ['b']
    assert ped.parent_pair(ped.get('a')) is None


def test_parent_roles_from_gender_not_position(make_person):
    ped = Pedigree([
        make_person('mom', Gender.FEMALE),
        make_person('dad', Gender.MALE),
        make_person('kid', parents=['mom', 'dad']),
    ])
    roles = ped.get_parents(ped.get('kid'))
    assert roles.resolved
    assert roles.father.id == 'dad'
    assert roles.mother.id == 'mom'


@pytest.mark.parametrize("g1, g2", [
    (Gender.MALE, Gender.MALE),
    (Gender.FEMALE, Gender.FEMALE),
    (Gender.MALE, Gender.UNKNOWN),
    (Gender.UNKNOWN, Gender.UNKNOWN),
])
def test_parent_roles_undetermined(make_person, g1, g2):
    ped = Pedigree([
        make_person('a', g1),
        make_person('b', g2),
        make_person('kid', parents=['a', 'b']),
    ])
    roles = ped.get_parents(ped.get('kid'))
    assert not roles.resolved
    assert roles.father is None and roles.mother is None


def test_single_parent_has_no_roles(make_person):
    ped = Pedigree([make_person('a', Gender.MALE), make_person('kid', parents=['a'])])
    assert not ped.get_parents(ped.get('kid')).resolved


def test_partners_union_of_both_directions(make_person):
    ped = Pedigree([
        make_person('a', partners=['b', 'b']),
        make_person('b'),
        make_person('c', partners=['a']),
        make_person('d', partners=['missing']),
    ])
    assert [p.id for p in ped.partners_of('a')] == ['b', 'c']
    assert [p.id for p in ped.partners_of('b')] == ['a']
    assert ped.partners_of('d') == []
    assert ped.are_partners('c', 'a')
    assert not ped.are_partners('b', 'c')


def test_siblings_ignore_parent_order(make_person):
    ped = Pedigree([
        make_person('f'), make_person('m'),
        make_person('s1', parents=['f', 'm']),
        make_person('s2', parents=['m', 'f']),
        make_person('half', parents=['f', 'x']),
    ])
    assert [p.id for p in ped.get_siblings('s1')] == ['s2']
    groups = ped.sibling_groups()
    assert [p.id for p in groups[couple_key('f', 'm')]] == ['s1', 's2']
    assert [p.id for p in groups[couple_key('f', 'x')]] == ['half']


def test_children_and_probands(make_person):
    ped = Pedigree([
        make_person('f'),
        make_person('c1', parents=['f', 'm'], proband=True),
        make_person('c2', parents=['f', 'm'], proband=True),
    ])
    assert [p.id for p in ped.get_children('f')] == ['c1', 'c2']
    assert [p.id for p in ped.probands] == ['c1', 'c2']
    assert ped.proband.id == 'c1'
    assert Pedigree([]).proband is None


def test_individual_status_helpers(make_person):
    assert make_person('a', status=Status.AFFECTED).is_affected
    carrier = make_person('b', status=Status.CARRIER)
    assert not carrier.is_affected and not carrier.is_unaffected
