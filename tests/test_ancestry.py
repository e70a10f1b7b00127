from genoflow_engine import Pedigree, ancestors_of, ancestor_individuals


def test_ancestors_of_three_generations(make_person):
    #  gf  gm
    #    \/
    #    dad  mom
    #      \ /
    #      kid
    people = [
        make_person('gf'), make_person('gm'),
        make_person('dad', parents=['gf', 'gm']),
        make_person('mom'),
        make_person('kid', parents=['dad', 'mom']),
    ]
    assert ancestors_of(people, 'kid') == {'dad', 'mom', 'gf', 'gm'}
    assert ancestors_of(people, 'dad') == {'gf', 'gm'}
    assert ancestors_of(people, 'gf') == set()


def test_unknown_start_and_dangling_parents(make_person):
    people = [make_person('kid', parents=['ghost', 'dad']), make_person('dad')]
    assert ancestors_of(people, 'nobody') == set()
    assert ancestors_of(people, 'kid') == {'dad'}


def test_parent_cycle_terminates(make_person):
    people = [
        make_person('a', parents=['b']),
        make_person('b', parents=['c']),
        make_person('c', parents=['a']),
    ]
    assert ancestors_of(people, 'a') == {'b', 'c'}


def test_self_parent_excluded(make_person):
    assert ancestors_of([make_person('a', parents=['a', 'a'])], 'a') == set()


def test_ancestor_individuals_input_order(make_person):
    ped = Pedigree([
        make_person('mom'), make_person('kid', parents=['dad', 'mom']), make_person('dad'),
    ])
    assert [p.id for p in ancestor_individuals(ped, 'kid')] == ['mom', 'dad']


def test_deep_chain_does_not_recurse(make_person):
    people = [make_person('p0')]
    for i in range(1, 5000):
        people.append(make_person(f'p{i}', parents=[f'p{i - 1}']))
    assert len(ancestors_of(people, 'p4999')) == 4999
