"""
services/grading/aggregator.py

한 학생의 과목 최종 성적 계산 (순수 함수, DB/HTTP 의존 없음)

처리 순서
1) 구성요소 가중치 검증 (각각 0~100, 합 100 ± tolerance, 아니면 ConfigurationError)
2) 채점 완료(is_graded) 성적만 과제 유형 → 구성요소로 묶기
3) 성적별 0~100 정규화: 성적 max_score → 과제 max_score → 구성요소 total_points 순으로 만점 결정
4) 구성요소 내 단순 평균
5) 필수 구성요소에 채점 항목이 없으면 IncompleteGradingError
   (필수가 아닌 구성요소는 0점으로 반영)
6) 평균 * 가중치 / 100 을 모두 더해 최종 점수 (0~100)
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from models.enums import COMPONENT_ASSIGNMENT_TYPES, PassingStatus
from services.grading.bands import resolve_grade_band
from services.grading.errors import (
    ConfigurationError,
    IncompleteGradingError,
    ScoreOutOfRangeError,
)
from services.grading.records import (
    AssignmentRecord,
    BandRecord,
    ComponentRecord,
    ComponentScore,
    CourseGradeResult,
    FinalScore,
    GradeRecord,
    ScoreWarning,
)

logger = logging.getLogger(__name__)

WEIGHT_TOTAL = 100.0
WEIGHT_TOLERANCE = 0.01
AT_RISK_RATIO = 0.8


# ==========================================================
# [1단계] 설정 검증
# ==========================================================

def weight_in_range(component: ComponentRecord) -> bool:
    return 0.0 <= component.weight <= WEIGHT_TOTAL


def check_component_weights(components: Iterable[ComponentRecord], tolerance: float = WEIGHT_TOLERANCE) -> float:
    components = list(components)
    # 합이 100이어도 개별 가중치가 0~100을 벗어나면 최종 점수가 범위를 넘음
    for component in components:
        if not weight_in_range(component):
            raise ConfigurationError(
                f"Component '{component.name}' has weight {component.weight:g}, expected 0 to {WEIGHT_TOTAL:g}",
                details={"component": component.name, "weight": component.weight},
            )

    total = sum(c.weight for c in components)
    if abs(total - WEIGHT_TOTAL) > tolerance:
        raise ConfigurationError(
            f"Grade component weights sum to {total:g}, expected {WEIGHT_TOTAL:g}",
            details={"weight_sum": total},
        )
    return total


def index_components_by_assignment_type(components: Iterable[ComponentRecord]) -> Dict:
    """과제 유형 → 구성요소. 같은 분류의 구성요소가 둘이면 성적을 하나로 매핑할 수 없으므로 오류."""
    index = {}
    for component in components:
        assignment_type = COMPONENT_ASSIGNMENT_TYPES[component.type]
        if assignment_type in index:
            raise ConfigurationError(
                f"More than one grade component of type {component.type.value}",
                details={"type": component.type.value},
            )
        index[assignment_type] = component
    return index


# ==========================================================
# [2단계] 점수 정규화
# ==========================================================

def effective_max(grade: GradeRecord, assignment: AssignmentRecord, component: ComponentRecord) -> float:
    for candidate in (grade.max_score, assignment.max_score, component.total_points):
        if candidate is not None and candidate > 0:
            return candidate
    raise ConfigurationError(
        f"No positive maximum score for assignment {assignment.id}",
        details={"assignment_id": assignment.id},
    )


def normalize_score(
    grade: GradeRecord, assignment: AssignmentRecord, component: ComponentRecord
) -> Tuple[float, Optional[ScoreOutOfRangeError]]:
    """0~100 정규화 점수와 (범위를 벗어났다면) 경고용 예외를 함께 반환"""
    max_score = effective_max(grade, assignment, component)
    percentage = 100.0 * grade.score / max_score

    if 0.0 <= percentage <= 100.0:
        return percentage, None

    clamped = min(max(percentage, 0.0), 100.0)
    error = ScoreOutOfRangeError(
        f"Score {grade.score:g} is outside 0-{max_score:g} for assignment {assignment.id}",
        details={
            "grade_id": grade.id,
            "assignment_id": assignment.id,
            "score": grade.score,
            "effective_max": max_score,
            "clamped_percentage": clamped,
        },
    )
    return clamped, error


def _to_warning(error: ScoreOutOfRangeError) -> ScoreWarning:
    return ScoreWarning(code=error.error_code, message=error.message, **error.details)


# ==========================================================
# [3단계] 최종 점수 계산
# ==========================================================

def compute_final_score(
    student_id: Optional[int],
    course_id: Optional[int],
    grades: Iterable[GradeRecord],
    components: Iterable[ComponentRecord],
    assignments: Iterable[AssignmentRecord],
    strict: bool = False,
    tolerance: float = WEIGHT_TOLERANCE,
) -> FinalScore:
    """
    학생 한 명의 과목 최종 점수(0~100) 계산

    - strict=True 이면 범위를 벗어난 점수에서 ScoreOutOfRangeError를 그대로 발생
    - 다른 학생/다른 과목 성적은 무시 (id가 주어진 경우에만 비교)
    """
    components = list(components)
    check_component_weights(components, tolerance)
    by_type = index_components_by_assignment_type(components)

    course_assignments = [a for a in assignments if course_id is None or a.course_id in (None, course_id)]
    assignments_by_id = {a.id: a for a in course_assignments}

    percentages: Dict[int, List[float]] = {i: [] for i in range(len(components))}
    position = {id(c): i for i, c in enumerate(components)}
    warnings: List[ScoreWarning] = []

    for grade in grades:
        if not grade.is_graded:
            continue
        if student_id is not None and grade.student_id not in (None, student_id):
            continue
        if course_id is not None and grade.course_id not in (None, course_id):
            continue

        assignment = assignments_by_id.get(grade.assignment_id)
        if assignment is None:
            raise ConfigurationError(
                f"Grade references unknown assignment {grade.assignment_id}",
                details={"assignment_id": grade.assignment_id},
            )
        component = by_type.get(assignment.type)
        if component is None:
            raise ConfigurationError(
                f"No grade component for assignment type {assignment.type.value}",
                details={"assignment_id": assignment.id, "assignment_type": assignment.type.value},
            )

        percentage, error = normalize_score(grade, assignment, component)
        if error is not None:
            if strict:
                raise error
            logger.warning(f"점수 범위 초과(보정): {error.message}")
            warnings.append(_to_warning(error))
        percentages[position[id(component)]].append(percentage)

    missing = [c.name for i, c in enumerate(components) if c.is_mandatory and not percentages[i]]
    if missing:
        raise IncompleteGradingError(
            f"Mandatory components without a graded submission: {', '.join(missing)}",
            details={"components": missing},
        )

    breakdown = []
    total = 0.0
    for i, component in enumerate(components):
        items = percentages[i]
        # 채점 항목이 없는 선택 구성요소는 0점 반영
        average = sum(items) / len(items) if items else 0.0
        weighted = average * component.weight / WEIGHT_TOTAL
        total += weighted

        assignment_type = COMPONENT_ASSIGNMENT_TYPES[component.type]
        breakdown.append(
            ComponentScore(
                component_id=component.id,
                name=component.name,
                type=component.type,
                weight=component.weight,
                average=average,
                weighted=weighted,
                graded_items=len(items),
                total_assignments=sum(1 for a in course_assignments if a.type == assignment_type),
                is_mandatory=component.is_mandatory,
                below_minimum=bool(items) and average < component.minimum_score,
            )
        )

    final_percentage = min(max(total, 0.0), 100.0)
    return FinalScore(
        student_id=student_id,
        course_id=course_id,
        final_percentage=final_percentage,
        components=breakdown,
        warnings=warnings,
    )


# ==========================================================
# [4단계] 통과 여부 / 등급 포함 최종 결과
# ==========================================================

def passing_status(
    final_percentage: float, passing_grade: Optional[float], at_risk_ratio: float = AT_RISK_RATIO
) -> PassingStatus:
    """
    통과 상태 판정
    - passing: 최종 점수 >= 통과 기준
    - failing: 최종 점수 < 통과 기준 * at_risk_ratio
    - 그 사이는 at-risk
    """
    if passing_grade is None:
        return PassingStatus.UNKNOWN
    if final_percentage >= passing_grade:
        return PassingStatus.PASSING
    if final_percentage < passing_grade * at_risk_ratio:
        return PassingStatus.FAILING
    return PassingStatus.AT_RISK


def aggregate_course_grade(
    student_id: Optional[int],
    course_id: Optional[int],
    grades: Iterable[GradeRecord],
    components: Iterable[ComponentRecord],
    assignments: Iterable[AssignmentRecord],
    bands: Iterable[BandRecord],
    passing_grade: Optional[float] = None,
    strict: bool = False,
    tolerance: float = WEIGHT_TOLERANCE,
    at_risk_ratio: float = AT_RISK_RATIO,
) -> CourseGradeResult:
    """최종 점수 계산 → 소수 둘째 자리 반올림 → 등급 구간 결정 → 통과 여부"""
    score = compute_final_score(student_id, course_id, grades, components, assignments, strict, tolerance)
    final_percentage = round(score.final_percentage, 2)
    band = resolve_grade_band(final_percentage, bands)

    logger.info(
        f"최종 성적 계산 완료: student_id={student_id}, course_id={course_id}, "
        f"final={final_percentage}, grade_value={band.grade_value}"
    )
    return CourseGradeResult(
        student_id=student_id,
        course_id=course_id,
        final_percentage=final_percentage,
        components=score.components,
        warnings=score.warnings,
        grade_value=band.grade_value,
        band=band,
        passing_status=passing_status(final_percentage, passing_grade, at_risk_ratio),
    )
