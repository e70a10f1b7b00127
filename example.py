"""
GenoFlow Engine - usage examples
Validation, layout and analysis scenarios
"""

from genoflow_engine import (
    Individual, Gender, Status, InheritanceMode,
    PedigreeEditor, validate_pedigree, compute_links,
    analyze_pedigree, sample_pedigree
)


def example_1_autosomal_recessive():
    """
    Example 1: unaffected parents, affected child
    - impossible under AR (parents read as non-carriers) and AD
    """
    print("\n" + "="*60)
    print("Example 1: affected child of unaffected parents")
    print("="*60)

    family = [
        Individual('f', 'Father', Gender.MALE, Status.UNAFFECTED, x=100, y=100, partners=['m']),
        Individual('m', 'Mother', Gender.FEMALE, Status.UNAFFECTED, x=160, y=100, partners=['f']),
        Individual('c', 'Child', Gender.FEMALE, Status.AFFECTED, x=130, y=280, parents=['f', 'm']),
    ]

    for mode in (InheritanceMode.AUTOSOMAL_RECESSIVE, InheritanceMode.AUTOSOMAL_DOMINANT):
        print()
        print(validate_pedigree(family, mode))


def example_2_editing_and_layout():
    """
    Example 2: build a pedigree with the editor and route its connectors
    """
    print("\n" + "="*60)
    print("Example 2: editing + connector layout")
    print("="*60)

    editor = PedigreeEditor()
    family, proband_id = editor.add_unrelated([], x=0, y=300)
    family, _ = editor.update(family, proband_id, gender=Gender.MALE, is_proband=True)
    family, father_id = editor.add_parents(family, proband_id)
    family, _ = editor.add_sibling(family, proband_id)
    family, _ = editor.add_parents(family, father_id)

    for link in compute_links(family):
        print(f"  {link.kind.value:12s} ({link.x1:6.1f}, {link.y1:6.1f}) -> "
              f"({link.x2:6.1f}, {link.y2:6.1f})")


def example_3_analysis():
    """
    Example 3: statistics on the bundled sample with an affected son
    """
    print("\n" + "="*60)
    print("Example 3: analysis")
    print("="*60)

    editor = PedigreeEditor(sample_pedigree())
    family = sample_pedigree()
    family, _ = editor.update(family, 'p3', status=Status.AFFECTED, is_proband=True)

    report = analyze_pedigree(family, InheritanceMode.X_LINKED)
    print(f"Affected: {report.affected_count}")
    print(f"Obligate carriers: {report.obligate_carriers}")
    print(report.risk_summary)
    print(report.to_markdown())


if __name__ == "__main__":
    example_1_autosomal_recessive()
    example_2_editing_and_layout()
    example_3_analysis()
