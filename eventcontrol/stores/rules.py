"""
Rule store for EventControl.

Holds cancellation rules grouped by event name and answers the
cancellation query. Grouping by event name keeps the hot path
proportional to the rules of one event rather than all rules.
"""

import time
from threading import Lock
from typing import Callable, Dict, Iterable, List, Optional

from eventcontrol.core.models import Decision, EventRule, Location, Scope
from eventcontrol.core.policy import evaluate
from eventcontrol.observability.logging_setup import get_logger
from eventcontrol.observability.metrics import (
    decision_seconds,
    decisions_total,
    evaluation_errors_total,
    rule_mutations_total,
)
from .regions import RegionStore

log = get_logger("eventcontrol.rules")

class RuleStore:
    """
    이벤트 이름별로 묶인 취소 규칙 저장소.

    Attributes:
        on_change: 변경 후 호출되는 저장 콜백
        debug: 켜져 있으면 취소 결정을 INFO 로그로 남김
    """

    def __init__(self, regions: RegionStore, on_change: Optional[Callable[[], object]] = None):
        self._groups: Dict[str, List[EventRule]] = {}
        self._lock = Lock()
        self._regions = regions
        self.on_change = on_change
        self.debug = False

    def __len__(self) -> int:
        with self._lock:
            return sum(len(group) for group in self._groups.values())

    # ---- 변경 연산 ----

    def add_rule(self, rule: EventRule) -> None:
        """
        규칙을 추가합니다. 같은 식별 키의 규칙이 있으면 교체합니다.

        Args:
            rule: 추가할 규칙
        """
        with self._lock:
            group = self._groups.setdefault(rule.event_name, [])
            group[:] = [existing for existing in group if existing.key != rule.key]
            group.append(rule)

        rule_mutations_total.labels(op="add").inc()
        log.info(f"규칙 추가: {rule.describe()} (enabled={rule.enabled})")
        self._notify()

    def remove_rule(
        self,
        event_name: str,
        scope: Scope,
        world_name: Optional[str] = None,
        region_name: Optional[str] = None,
    ) -> int:
        """
        네 필드가 모두 일치하는 규칙을 삭제합니다.

        Args:
            event_name: 이벤트 이름
            scope: 규칙 스코프
            world_name: 월드 이름 (WORLD 규칙)
            region_name: 영역 이름 (REGION 규칙)

        Returns:
            삭제된 규칙 수
        """
        key = (event_name, scope, world_name, region_name)
        removed = 0
        with self._lock:
            group = self._groups.get(event_name)
            if group is not None:
                kept = [rule for rule in group if rule.key != key]
                removed = len(group) - len(kept)
                if kept:
                    self._groups[event_name] = kept
                else:
                    del self._groups[event_name]

        rule_mutations_total.labels(op="remove").inc()
        if removed:
            log.info(f"규칙 삭제: {event_name} {scope} world={world_name} region={region_name}")
        self._notify()
        return removed

    def set_rule_enabled(
        self,
        event_name: str,
        scope: Scope,
        world_name: Optional[str] = None,
        region_name: Optional[str] = None,
        enabled: bool = True,
    ) -> bool:
        """
        식별 키가 일치하는 규칙의 활성화 여부를 바꿉니다.

        규칙의 그룹 내 위치는 유지됩니다.

        Returns:
            규칙이 없으면 False (저장 없음), 바뀌면 True
        """
        key = (event_name, scope, world_name, region_name)
        with self._lock:
            group = self._groups.get(event_name, [])
            for index, rule in enumerate(group):
                if rule.key == key:
                    group[index] = rule.model_copy(update={"enabled": enabled})
                    break
            else:
                return False

        rule_mutations_total.labels(op="enable" if enabled else "disable").inc()
        log.info(f"규칙 {'활성화' if enabled else '비활성화'}: {event_name} {scope}")
        self._notify()
        return True

    def purge_region(self, region_name: str) -> int:
        """
        영역을 참조하는 규칙을 모두 삭제합니다 (저장 콜백 없음).

        영역 삭제 시 RegionStore가 호출합니다. 스코프와 무관하게
        region_name이 같은 규칙은 모두 삭제합니다.

        Returns:
            삭제된 규칙 수
        """
        removed = 0
        with self._lock:
            for event_name in list(self._groups):
                group = self._groups[event_name]
                kept = [rule for rule in group if rule.region_name != region_name]
                removed += len(group) - len(kept)
                if kept:
                    self._groups[event_name] = kept
                else:
                    del self._groups[event_name]
        return removed

    def replace_all(self, rules: Iterable[EventRule]) -> None:
        """저장소 내용을 통째로 교체합니다 (저장 콜백 없음)."""
        fresh: Dict[str, List[EventRule]] = {}
        for rule in rules:
            fresh.setdefault(rule.event_name, []).append(rule)
        with self._lock:
            self._groups = fresh

    # ---- 조회 연산 ----

    def get_rules_for(self, event_name: str) -> List[EventRule]:
        with self._lock:
            return list(self._groups.get(event_name, ()))

    def get_all_rules(self) -> List[EventRule]:
        with self._lock:
            return [rule for group in self._groups.values() for rule in group]

    def rules_by_scope(self) -> Dict[Scope, List[EventRule]]:
        """스코프별로 묶은 규칙 스냅샷 (GLOBAL, WORLD, REGION 순)"""
        grouped: Dict[Scope, List[EventRule]] = {"GLOBAL": [], "WORLD": [], "REGION": []}
        for rule in self.get_all_rules():
            grouped[rule.scope].append(rule)
        return grouped

    def should_cancel(
        self,
        event_name: str,
        world_name: Optional[str] = None,
        location: Optional[Location] = None,
    ) -> bool:
        """이벤트를 취소해야 하는지 반환합니다. 예외를 던지지 않습니다."""
        return self.evaluate(event_name, world_name, location).trigger

    def evaluate(
        self,
        event_name: str,
        world_name: Optional[str] = None,
        location: Optional[Location] = None,
    ) -> Decision:
        """
        이벤트 발생에 대한 취소 결정을 계산합니다.

        평가 중 오류가 나면 취소하지 않는 쪽으로 결정합니다.
        로드나 영역 삭제가 진행 중이면 끝난 뒤의 상태로 평가합니다.

        Args:
            event_name: 이벤트 이름
            world_name: 이벤트가 발생한 월드 이름
            location: 이벤트 발생 위치

        Returns:
            정책 평가 결과
        """
        started = time.perf_counter()
        try:
            # 영역 잠금 아래에서 규칙 스냅샷과 영역 판정을 같은 시점의 상태로 수행
            with self._regions.lock:
                decision = evaluate(
                    self.get_rules_for(event_name),
                    world_name=world_name,
                    location=location,
                    region_matcher=self._region_matcher,
                )
        except Exception as e:
            evaluation_errors_total.inc()
            log.warning(f"규칙 평가 오류, 취소하지 않음: {event_name} ({e})")
            return Decision(trigger=False, reason="evaluation_error")
        finally:
            decision_seconds.observe(time.perf_counter() - started)

        decisions_total.labels(result=(decision.scope or "none").lower()).inc()
        if decision.trigger and self.debug:
            where = (f"({location.x:.0f}, {location.y:.0f}, {location.z:.0f})"
                     if location is not None else "unknown")
            log.info(f"이벤트 취소: {event_name} world={world_name} location={where} by {decision.reason}")
        return decision

    def _region_matcher(self, region_name: str, location: Location) -> bool:
        return self._regions.contains(region_name, location.world_name, location)

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change()
