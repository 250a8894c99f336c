import pytest

from models.enums import ComponentType
from services.grading.bands import band_issues, resolve_grade_band, validate_grade_bands
from services.grading.errors import BandNotFoundError, ConfigurationError
from services.grading.records import BandRecord, ComponentRecord
from services.grading.validation import validate_course_configuration


def band(lo, hi, value, letter=None):
    return BandRecord(min_score=lo, max_score=hi, grade_value=value, grade_letter=letter)


BANDS = [band(0, 59, 0), band(60, 69, 1), band(70, 100, 2)]


@pytest.mark.parametrize(
    "final, expected",
    [(0, 0), (59, 0), (60, 1), (69, 1), (70, 2), (76, 2), (100, 2)],
)
def test_resolve_example_bands(final, expected):
    assert resolve_grade_band(final, BANDS).grade_value == expected


def test_shared_edge_resolves_to_lower_band():
    bands = [band(0, 60, 0), band(60, 80, 1), band(80, 100, 2)]

    assert resolve_grade_band(60, bands).grade_value == 0
    assert resolve_grade_band(60.01, bands).grade_value == 1
    assert resolve_grade_band(80, bands).grade_value == 1
    assert resolve_grade_band(0, bands).grade_value == 0


def test_band_order_does_not_matter():
    shuffled = [BANDS[2], BANDS[0], BANDS[1]]

    assert resolve_grade_band(65, shuffled).grade_value == 1


def test_overlapping_bands_are_a_configuration_error():
    with pytest.raises(ConfigurationError) as exc:
        resolve_grade_band(65, [band(0, 70, 0), band(60, 100, 1)])
    assert "overlap" in exc.value.message


def test_inverted_band_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        validate_grade_bands([band(50, 40, 0)])


def test_no_bands_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        resolve_grade_band(50, [])


def test_gap_between_bands_is_not_found():
    with pytest.raises(BandNotFoundError) as exc:
        resolve_grade_band(59.5, BANDS)
    assert exc.value.details["final_percentage"] == 59.5


def test_band_issues_lists_every_problem():
    issues = band_issues([band(0, 70, 0), band(60, 120, 1)])

    assert len(issues) == 2


def test_course_configuration_report():
    components = [
        ComponentRecord(name="Labs", type=ComponentType.LAB, weight=40),
        ComponentRecord(name="Final", type=ComponentType.EXAM, weight=40),
        ComponentRecord(name="Retake", type=ComponentType.EXAM, weight=19),
    ]

    issues = validate_course_configuration(components, [band(0, 70, 0), band(60, 100, 1)])

    assert any("sum to 99" in i for i in issues)
    assert any("More than one" in i for i in issues)
    assert any("overlap" in i for i in issues)


def test_out_of_range_weights_are_reported():
    components = [
        ComponentRecord(name="Homework", type=ComponentType.ASSIGNMENT, weight=110),
        ComponentRecord(name="Final", type=ComponentType.EXAM, weight=-10),
    ]

    issues = validate_course_configuration(components, BANDS)

    assert len(issues) == 2
    assert "'Homework' weight 110 is outside 0 to 100" in issues[0]
    assert "'Final' weight -10 is outside 0 to 100" in issues[1]


def test_valid_course_configuration_has_no_issues():
    components = [
        ComponentRecord(name="Assignments", type=ComponentType.ASSIGNMENT, weight=60),
        ComponentRecord(name="Final", type=ComponentType.EXAM, weight=40, is_mandatory=True),
    ]

    assert validate_course_configuration(components, BANDS) == []
