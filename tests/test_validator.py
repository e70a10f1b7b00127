import pytest

from genoflow_engine import (
    Gender, Status, Severity, InheritanceMode,
    LogicValidator, validate, validate_pedigree
)

ALL_MODES = list(InheritanceMode)
AR = InheritanceMode.AUTOSOMAL_RECESSIVE
AD = InheritanceMode.AUTOSOMAL_DOMINANT
XL = InheritanceMode.X_LINKED
YL = InheritanceMode.Y_LINKED


def _summary(issues):
    return [(i.target_id, i.severity) for i in issues]


# --------------------------------------------------------
# Structural checks
# --------------------------------------------------------
@pytest.mark.parametrize("mode", ALL_MODES)
def test_single_parent_is_one_error_in_every_mode(make_person, mode):
    people = [
        make_person('dad', Gender.MALE, y=0),
        make_person('kid', Gender.FEMALE, parents=['dad'], y=200),
    ]
    issues = validate(people, mode)
    assert _summary(issues) == [('kid', Severity.ERROR)]
    assert "only one parent" in issues[0].message


@pytest.mark.parametrize("mode", ALL_MODES)
@pytest.mark.parametrize("gender", [Gender.MALE, Gender.FEMALE])
def test_same_sex_parents_skip_role_rules(make_person, mode, gender):
    people = [
        make_person('a', gender, Status.UNAFFECTED, y=0),
        make_person('b', gender, Status.UNAFFECTED, y=0),
        make_person('kid', Gender.MALE, Status.AFFECTED, parents=['a', 'b'], y=200),
    ]
    issues = validate(people, mode)
    assert _summary(issues) == [('kid', Severity.ERROR)]
    assert "same sex" in issues[0].message


def test_unknown_gender_parents_are_not_same_sex(make_person):
    people = [
        make_person('a', Gender.UNKNOWN, y=0),
        make_person('b', Gender.UNKNOWN, y=0),
        make_person('kid', Gender.MALE, Status.AFFECTED, parents=['a', 'b'], y=200),
    ]
    assert validate(people, AR) == []


def test_dangling_parent_pair_is_tolerated(make_person):
    people = [
        make_person('a', Gender.MALE, y=0),
        make_person('kid', Gender.MALE, Status.AFFECTED, parents=['a', 'ghost'], y=200),
    ]
    assert validate(people, AD) == []


def test_parent_below_child_warns_on_the_parent(make_trio):
    people = make_trio()
    people[1].y = 400
    issues = validate(people, AD)
    assert _summary(issues) == [('m', Severity.WARNING)]
    assert "positioned below" in issues[0].message


def test_both_parents_below_child(make_trio):
    people = make_trio()
    people[0].y = people[1].y = 500
    assert _summary(validate(people, AR)) == [('f', Severity.WARNING), ('m', Severity.WARNING)]


# --------------------------------------------------------
# Autosomal
# --------------------------------------------------------
@pytest.mark.parametrize("mode", [AR, AD])
def test_affected_child_of_unaffected_parents(make_trio, mode):
    issues = validate(make_trio(child=Status.AFFECTED), mode)
    assert _summary(issues) == [('c', Severity.ERROR)]
    assert mode.value in issues[0].message


@pytest.mark.parametrize("child", [Status.UNAFFECTED, Status.CARRIER, Status.UNKNOWN])
def test_ar_two_affected_parents_need_affected_child(make_trio, child):
    issues = validate(make_trio(Status.AFFECTED, Status.AFFECTED, child), AR)
    assert _summary(issues) == [('c', Severity.ERROR)]


def test_ar_consistent_trios(make_trio):
    assert validate(make_trio(Status.AFFECTED, Status.AFFECTED, Status.AFFECTED), AR) == []
    assert validate(make_trio(Status.CARRIER, Status.CARRIER, Status.AFFECTED), AR) == []
    assert validate(make_trio(Status.AFFECTED, Status.UNAFFECTED, Status.AFFECTED), AR) == []


def test_ad_allows_unaffected_child_of_affected_parents(make_trio):
    assert validate(make_trio(Status.AFFECTED, Status.AFFECTED, Status.UNAFFECTED), AD) == []


# --------------------------------------------------------
# X-linked
# --------------------------------------------------------
def test_xl_male_carrier_without_parents(make_person):
    issues = validate([make_person('x', Gender.MALE, Status.CARRIER)], XL)
    assert _summary(issues) == [('x', Severity.ERROR)]
    assert "Males cannot be carriers for X-linked" in issues[0].message


def test_xl_male_carrier_with_parents(make_trio):
    issues = validate(make_trio(child=Status.CARRIER, child_gender=Gender.MALE), XL)
    assert _summary(issues) == [('c', Severity.ERROR)]


@pytest.mark.parametrize("mode", [AR, AD])
def test_male_carrier_only_flagged_under_xl(make_person, mode):
    assert validate([make_person('x', Gender.MALE, Status.CARRIER)], mode) == []


def test_xl_no_father_to_son_transmission(make_trio):
    issues = validate(make_trio(father=Status.AFFECTED, child=Status.AFFECTED,
                                child_gender=Gender.MALE), XL)
    assert _summary(issues) == [('c', Severity.ERROR)]


def test_xl_unaffected_daughter_of_affected_father_warns(make_trio):
    issues = validate(make_trio(father=Status.AFFECTED, child=Status.UNAFFECTED), XL)
    assert _summary(issues) == [('c', Severity.WARNING)]
    assert "X-Dominant" in issues[0].message


def test_xl_affected_daughter_of_unaffected_father_warns(make_trio):
    issues = validate(make_trio(child=Status.AFFECTED), XL)
    assert _summary(issues) == [('c', Severity.WARNING)]
    assert "X-Recessive" in issues[0].message


def test_xl_affected_son_of_carrier_mother(make_trio):
    assert validate(make_trio(mother=Status.CARRIER, child=Status.AFFECTED,
                              child_gender=Gender.MALE), XL) == []


# --------------------------------------------------------
# Y-linked
# --------------------------------------------------------
def test_yl_affected_female(make_person):
    issues = validate([make_person('w', Gender.FEMALE, Status.AFFECTED)], YL)
    assert _summary(issues) == [('w', Severity.ERROR)]


def test_yl_male_carrier(make_person):
    issues = validate([make_person('m', Gender.MALE, Status.CARRIER)], YL)
    assert _summary(issues) == [('m', Severity.ERROR)]
    assert "Y-linked" in issues[0].message


def test_yl_son_must_match_father(make_trio):
    affected_son = make_trio(child=Status.AFFECTED, child_gender=Gender.MALE)
    assert _summary(validate(affected_son, YL)) == [('c', Severity.ERROR)]

    unaffected_son = make_trio(father=Status.AFFECTED, child_gender=Gender.MALE)
    assert _summary(validate(unaffected_son, YL)) == [('c', Severity.ERROR)]

    both = make_trio(father=Status.AFFECTED, child=Status.AFFECTED, child_gender=Gender.MALE)
    assert validate(both, YL) == []


def test_yl_skips_autosomal_rules(make_trio):
    # affected daughter of unaffected parents: only the Y-linked female rule fires
    issues = validate(make_trio(child=Status.AFFECTED), YL)
    assert len(issues) == 1
    assert "Females cannot be affected" in issues[0].message


# --------------------------------------------------------
# Report / determinism
# --------------------------------------------------------
def test_validation_is_deterministic(make_trio):
    people = make_trio(father=Status.AFFECTED, child=Status.AFFECTED, child_gender=Gender.MALE)
    first = [i.to_dict() for i in validate(people, XL)]
    second = [i.to_dict() for i in validate(people, XL)]
    assert first == second


def test_mode_switch_leaves_no_residue(make_trio):
    validator = LogicValidator()
    people = make_trio(child=Status.AFFECTED)
    assert validator.validate_logic(people, "XL").warning_count == 1
    assert validator.validate_logic(people, "AD").warning_count == 0
    assert validator.validate_logic(people, "XL").warning_count == 1


def test_validate_does_not_mutate_input(make_trio):
    people = make_trio(child=Status.AFFECTED)
    before = [(p.id, list(p.parents), list(p.partners), p.status) for p in people]
    validate(people, AR)
    assert [(p.id, list(p.parents), list(p.partners), p.status) for p in people] == before


def test_issues_follow_input_order(make_person):
    people = [
        make_person('b', Gender.MALE, Status.CARRIER),
        make_person('a', Gender.MALE, Status.CARRIER),
    ]
    assert [i.target_id for i in validate(people, XL)] == ['b', 'a']


def test_report_summary(make_trio):
    people = make_trio(child=Status.AFFECTED)
    people[0].y = 400
    report = validate_pedigree(people, AR)

    assert not report.is_valid
    assert report.error_count == 1
    assert report.warning_count == 1
    assert [i.target_id for i in report.get_warnings()] == ['f']
    assert [i.target_id for i in report.issues_for('c')] == ['c']

    data = report.to_dict()
    assert data['mode'] == 'AR'
    assert data['issues'][0] == {
        'id': 'f',
        'type': 'warning',
        'message': "Structural warning: F (parent) is positioned below C (child)."
    }
    assert "Errors: 1, warnings: 1" in str(report)


def test_invalid_mode_code_rejected(make_trio):
    with pytest.raises(ValueError):
        validate(make_trio(), "MT")
