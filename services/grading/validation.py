from typing import Iterable, List

from services.grading.aggregator import WEIGHT_TOLERANCE, WEIGHT_TOTAL, weight_in_range
from services.grading.bands import band_issues
from services.grading.records import BandRecord, ComponentRecord


def validate_course_configuration(
    components: Iterable[ComponentRecord],
    bands: Iterable[BandRecord],
    tolerance: float = WEIGHT_TOLERANCE,
) -> List[str]:
    """
    과목 성적 설정 전체 점검 (교수 화면용)
    - 예외를 던지지 않고 문제 목록을 반환, 빈 리스트면 정상
    """
    components = list(components)
    bands = list(bands)
    issues = []

    total = sum(c.weight for c in components)
    if abs(total - WEIGHT_TOTAL) > tolerance:
        issues.append(f"Grade component weights sum to {total:g}, expected {WEIGHT_TOTAL:g}")

    seen = set()
    for component in components:
        if not weight_in_range(component):
            issues.append(f"Component '{component.name}' weight {component.weight:g} is outside 0 to {WEIGHT_TOTAL:g}")
        if component.total_points <= 0:
            issues.append(f"Component '{component.name}' must have positive total_points")
        if component.type in seen:
            issues.append(f"More than one grade component of type {component.type.value}")
        seen.add(component.type)

    if not bands:
        issues.append("No grade bands configured for this course")
    issues.extend(band_issues(bands))
    return issues
