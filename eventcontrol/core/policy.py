"""
Rule evaluation functions for EventControl.

This module contains pure functions that decide whether an event
occurrence is cancelled, walking the tiers in SCOPE_PRIORITY order
(REGION > WORLD > GLOBAL) over the rules registered for one event.
"""

from typing import Callable, Optional, Sequence

from .models import SCOPE_PRIORITY, Decision, EventRule, Location, Scope

# 영역 이름과 위치를 받아 포함 여부를 돌려주는 함수
RegionMatcher = Callable[[str, Location], bool]

def _first_match(rules: Sequence[EventRule], predicate) -> Optional[EventRule]:
    for rule in rules:
        if rule.enabled and predicate(rule):
            return rule
    return None

def _in_scope(scope: Scope, predicate) -> Callable[[EventRule], bool]:
    return lambda r: r.scope == scope and predicate(r)

def evaluate(
    rules: Sequence[EventRule],
    *,
    world_name: Optional[str] = None,
    location: Optional[Location] = None,
    region_matcher: Optional[RegionMatcher] = None,
) -> Decision:
    """
    이벤트 규칙들을 평가하여 취소 여부를 결정합니다.

    상위 단계에서 일치하는 규칙이 있으면 하위 단계는 확인하지 않습니다.
    비활성화된 규칙은 어느 단계에서도 일치하지 않습니다.

    Args:
        rules: 한 이벤트에 등록된 규칙들 (삽입 순서)
        world_name: 이벤트가 발생한 월드 이름
        location: 이벤트 발생 위치
        region_matcher: 영역 포함 여부 판단 함수

    Returns:
        정책 평가 결과
    """
    if not rules:
        return Decision(trigger=False, reason="no_rules")

    # 단계별 (적용 가능 여부, 규칙 조건, 사유 문자열)
    tiers = {
        "REGION": (
            location is not None and region_matcher is not None,
            lambda r: r.region_name is not None and region_matcher(r.region_name, location),
            lambda r: f"region({r.region_name})",
        ),
        "WORLD": (
            world_name is not None,
            lambda r: r.world_name == world_name,
            lambda r: f"world({world_name})",
        ),
        "GLOBAL": (
            True,
            lambda r: True,
            lambda r: "global",
        ),
    }

    for scope in SCOPE_PRIORITY:
        applicable, matches, reason = tiers[scope]
        if not applicable:
            continue
        rule = _first_match(rules, _in_scope(scope, matches))
        if rule is not None:
            return Decision(trigger=True, reason=reason(rule), scope=scope, rule=rule)

    return Decision(trigger=False, reason="no_match")
