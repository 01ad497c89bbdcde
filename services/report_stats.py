"""
services/report_stats.py

- 성취도 리포트에서 쓰는 순수 통계 함수 모음 (DB 접근 없음)
- 구간 경계 {0,3,5,7,9,10}은 0~10 척도 기준이지만 0~100 백분율 값에 그대로 적용된다.
  10을 넘는 값은 어떤 구간에도 포함되지 않는다.
"""

from typing import List, Sequence, Tuple

# (라벨, 하한, 상한, 상한 포함 여부)
GRADE_BANDS: Tuple[Tuple[str, float, float, bool], ...] = (
    ("0-3", 0, 3, False),
    ("3-5", 3, 5, False),
    ("5-7", 5, 7, False),
    ("7-9", 7, 9, False),
    ("9-10", 9, 10, True),
)

# (등급명, 구간 라벨, 하한, 상한, 상한 포함 여부)
PERFORMANCE_CATEGORIES: Tuple[Tuple[str, str, float, float, bool], ...] = (
    ("미흡", "0-5", 0, 5, False),
    ("보통", "5-7", 5, 7, False),
    ("양호", "7-9", 7, 9, False),
    ("우수", "9-10", 9, 10, True),
)


def _in_band(value: float, low: float, high: float, inclusive: bool) -> bool:
    if inclusive:
        return low <= value <= high
    return low <= value < high


def mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def median(values: Sequence[float]) -> float:
    """정렬 후 가운데 값. 짝수 개면 가운데 두 값의 평균, 비어 있으면 0"""
    if not values:
        return 0.0
    ordered = sorted(values)
    mid = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[mid - 1] + ordered[mid]) / 2
    return ordered[mid]


def histogram(values: Sequence[float]) -> List[Tuple[str, int]]:
    return [
        (label, sum(1 for v in values if _in_band(v, low, high, inclusive)))
        for label, low, high, inclusive in GRADE_BANDS
    ]


def classify(values: Sequence[float]) -> List[Tuple[str, str, int, float]]:
    """(등급명, 구간, 인원, 비율%) 목록. 비율은 소수 첫째 자리 반올림"""
    total = len(values)
    result = []
    for category, band, low, high, inclusive in PERFORMANCE_CATEGORIES:
        count = sum(1 for v in values if _in_band(v, low, high, inclusive))
        percentage = round(count / total * 100, 1) if total > 0 else 0.0
        result.append((category, band, count, percentage))
    return result


def describe_level(average: float) -> str:
    if average >= 7:
        return "만족스러운"
    if average >= 5:
        return "보통"
    return "미흡한"


def build_observation(average: float, below_count: int) -> str:
    return (
        f"학급 전체 평균은 {average:.1f}로 {describe_level(average)} 수준의 성취를 보이고 있습니다. "
        f"다만 {below_count}명의 학생이 평균 미만으로 추가적인 관심이 필요할 수 있습니다."
    )


def build_recommendation(below_count: int) -> str:
    if below_count > 0:
        return (
            "5.0 미만의 성취를 보인 학생들을 대상으로 보충 활동과 개별 지도를 포함한 "
            "교수적 개입을 고려하세요."
        )
    return (
        "학급 전체가 좋은 성취를 보이고 있습니다. 현재의 참여 수준을 유지하면서 "
        "우수 학생을 위한 심화 활동을 고려하세요."
    )
