import base64

from genoflow_engine import (
    Gender, Status, PedigreeVisualizer, GridConfig, sample_pedigree, validate
)

PNG_MAGIC = b'\x89PNG'


def test_draw_returns_png(make_person):
    people = sample_pedigree()
    people[2].status = Status.AFFECTED
    people[3].status = Status.CARRIER
    people[4].status = Status.UNKNOWN
    people[4].is_deceased = True
    people[2].is_proband = True
    people.append(make_person('p9', Gender.UNKNOWN, x=600, y=280))

    img = PedigreeVisualizer().draw(people, issues=validate(people, "AR"), title="Sample")
    assert base64.b64decode(img)[:4] == PNG_MAGIC


def test_save_to_file(tmp_path):
    path = tmp_path / "pedigree.png"
    PedigreeVisualizer(GridConfig(fig_width=4, fig_height=3, dpi=50)).save_to_file(
        sample_pedigree(), str(path))
    assert path.read_bytes()[:4] == PNG_MAGIC


def test_empty_pedigree():
    img = PedigreeVisualizer(GridConfig(dpi=40)).get_base64_image([])
    assert base64.b64decode(img)[:4] == PNG_MAGIC


def test_issue_colors_prefer_errors(make_trio):
    viz = PedigreeVisualizer()
    people = make_trio(child=Status.AFFECTED)
    people[0].y = 500
    colors = viz._issue_colors(validate(people, "AR"))
    assert colors == {'f': viz.config.warning_color, 'c': viz.config.error_color}
