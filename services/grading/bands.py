import logging
from typing import Iterable, List

from services.grading.errors import BandNotFoundError, ConfigurationError
from services.grading.records import BandRecord

logger = logging.getLogger(__name__)

SCALE_MIN = 0.0
SCALE_MAX = 100.0


def sort_bands(bands: Iterable[BandRecord]) -> List[BandRecord]:
    return sorted(bands, key=lambda b: (b.min_score, b.max_score))


def band_issues(bands: Iterable[BandRecord]) -> List[str]:
    """
    등급 구간 설정 점검
    - 구간별: min_score <= max_score, 0~100 범위
    - 구간 간: 정렬 후 다음 구간의 min이 이전 구간의 max보다 작으면 중복
      (경계값이 같은 경우는 허용 → 낮은 구간이 우선)
    """
    issues = []
    ordered = sort_bands(bands)

    for band in ordered:
        if band.min_score > band.max_score:
            issues.append(f"Band {band.min_score}-{band.max_score} has min_score greater than max_score")
        if band.min_score < SCALE_MIN or band.max_score > SCALE_MAX:
            issues.append(f"Band {band.min_score}-{band.max_score} is outside the 0-100 scale")

    for prev, nxt in zip(ordered, ordered[1:]):
        if nxt.min_score < prev.max_score:
            issues.append(
                f"Bands {prev.min_score}-{prev.max_score} and {nxt.min_score}-{nxt.max_score} overlap"
            )
    return issues


def validate_grade_bands(bands: Iterable[BandRecord]) -> List[BandRecord]:
    """구간 설정이 잘못되면 ConfigurationError, 정상이면 오름차순 정렬된 구간 반환"""
    ordered = sort_bands(bands)
    if not ordered:
        raise ConfigurationError("No grade bands configured for this course")

    issues = band_issues(ordered)
    if issues:
        raise ConfigurationError("; ".join(issues), details={"issues": issues})
    return ordered


def resolve_grade_band(final_percentage: float, bands: Iterable[BandRecord]) -> BandRecord:
    """
    최종 점수가 속한 등급 구간 찾기
    - 오름차순으로 훑으며 min <= 점수 <= max 인 첫 구간 반환
    - 두 구간이 경계를 공유하면 아래 구간(max == 점수)이 먼저 걸림
    - 어느 구간에도 속하지 않으면(설정상 빈틈) BandNotFoundError
    """
    ordered = validate_grade_bands(bands)

    for band in ordered:
        if band.min_score <= final_percentage <= band.max_score:
            return band

    logger.warning(f"등급 구간 없음: final_percentage={final_percentage}")
    raise BandNotFoundError(
        f"No grade band contains {final_percentage}",
        details={
            "final_percentage": final_percentage,
            "bands": [[b.min_score, b.max_score] for b in ordered],
        },
    )
