"""
RuleStore 단위 테스트

이 모듈은 규칙 추가/교체/삭제와 취소 판정을 테스트합니다.
"""

import pytest
from unittest.mock import Mock

from eventcontrol.core.models import EventRule, Location
from eventcontrol.stores.regions import RegionStore
from eventcontrol.stores.rules import RuleStore

EVENT = "BlockBreakEvent"


class TestRuleStoreMutations:
    """규칙 변경 연산 테스트"""

    @pytest.fixture
    def on_change(self):
        return Mock()

    @pytest.fixture
    def store(self, on_change):
        return RuleStore(RegionStore(), on_change=on_change)

    def test_add_rule(self, store, on_change):
        rule = EventRule(event_name=EVENT, scope="GLOBAL")

        store.add_rule(rule)

        assert store.get_rules_for(EVENT) == [rule]
        on_change.assert_called_once()

    def test_add_rule_replaces_same_key(self, store):
        """같은 식별 키는 교체되어 하나만 남음"""
        store.add_rule(EventRule(event_name=EVENT, scope="WORLD", world_name="world"))
        store.add_rule(EventRule(event_name=EVENT, scope="WORLD", world_name="world", enabled=False))

        rules = store.get_rules_for(EVENT)
        assert len(rules) == 1
        assert rules[0].enabled is False

    def test_add_rule_distinct_keys(self, store):
        """키가 다르면 모두 유지"""
        store.add_rule(EventRule(event_name=EVENT, scope="WORLD", world_name="world"))
        store.add_rule(EventRule(event_name=EVENT, scope="WORLD", world_name="world_nether"))
        store.add_rule(EventRule(event_name=EVENT, scope="GLOBAL"))

        assert len(store.get_rules_for(EVENT)) == 3
        assert len(store) == 3

    def test_remove_rule_exact_match(self, store, on_change):
        """네 필드가 모두 일치해야 삭제"""
        store.add_rule(EventRule(event_name=EVENT, scope="WORLD", world_name="world"))
        store.add_rule(EventRule(event_name=EVENT, scope="GLOBAL"))

        assert store.remove_rule(EVENT, "WORLD", "world_nether") == 0
        assert store.remove_rule(EVENT, "WORLD", "world") == 1

        assert store.get_rules_for(EVENT) == [EventRule(event_name=EVENT, scope="GLOBAL")]
        assert on_change.call_count == 4

    def test_remove_last_rule_drops_group(self, store):
        store.add_rule(EventRule(event_name=EVENT, scope="GLOBAL"))

        store.remove_rule(EVENT, "GLOBAL")

        assert store.get_rules_for(EVENT) == []
        assert store.get_all_rules() == []

    def test_set_rule_enabled_keeps_position(self, store, on_change):
        """활성화 토글은 그룹 내 위치를 유지"""
        first = EventRule(event_name=EVENT, scope="GLOBAL")
        second = EventRule(event_name=EVENT, scope="WORLD", world_name="world")
        store.add_rule(first)
        store.add_rule(second)

        assert store.set_rule_enabled(EVENT, "GLOBAL", enabled=False) is True

        rules = store.get_rules_for(EVENT)
        assert rules[0].scope == "GLOBAL" and rules[0].enabled is False
        assert rules[1] == second
        assert on_change.call_count == 3

    def test_set_rule_enabled_missing(self, store, on_change):
        """없는 규칙은 False, 저장하지 않음"""
        assert store.set_rule_enabled(EVENT, "GLOBAL", enabled=False) is False
        on_change.assert_not_called()

    def test_purge_region(self, store, on_change):
        """영역 참조 규칙 일괄 삭제 (저장 없음)"""
        store.add_rule(EventRule(event_name=EVENT, scope="REGION", region_name="spawn"))
        store.add_rule(EventRule(event_name="PlayerInteractEvent", scope="REGION", region_name="spawn"))
        store.add_rule(EventRule(event_name=EVENT, scope="REGION", region_name="arena"))
        on_change.reset_mock()

        assert store.purge_region("spawn") == 2

        assert [r.region_name for r in store.get_all_rules()] == ["arena"]
        assert store.get_rules_for("PlayerInteractEvent") == []
        on_change.assert_not_called()

    def test_purge_region_ignores_scope(self, store):
        """region_name이 남아 있는 WORLD/GLOBAL 규칙도 함께 삭제"""
        store.add_rule(EventRule(event_name=EVENT, scope="WORLD", world_name="world", region_name="spawn"))
        store.add_rule(EventRule(event_name=EVENT, scope="GLOBAL", region_name="spawn"))
        store.add_rule(EventRule(event_name=EVENT, scope="WORLD", world_name="world"))

        assert store.purge_region("spawn") == 2

        assert [(r.scope, r.region_name) for r in store.get_all_rules()] == [("WORLD", None)]

    def test_get_rules_for_returns_snapshot(self, store):
        """반환된 목록을 수정해도 저장소는 그대로"""
        store.add_rule(EventRule(event_name=EVENT, scope="GLOBAL"))

        store.get_rules_for(EVENT).clear()

        assert len(store.get_rules_for(EVENT)) == 1

    def test_rules_by_scope(self, store):
        store.add_rule(EventRule(event_name=EVENT, scope="GLOBAL"))
        store.add_rule(EventRule(event_name=EVENT, scope="REGION", region_name="spawn"))

        grouped = store.rules_by_scope()

        assert list(grouped) == ["GLOBAL", "WORLD", "REGION"]
        assert [len(v) for v in grouped.values()] == [1, 0, 1]


class TestRuleStoreDecisions:
    """취소 판정 테스트"""

    @pytest.fixture
    def regions(self, spawn_region):
        regions = RegionStore()
        regions.add_region(spawn_region)
        return regions

    @pytest.fixture
    def store(self, regions):
        return RuleStore(regions)

    def test_unknown_event(self, store, inside_spawn):
        assert store.should_cancel("UnknownEvent", "world", inside_spawn) is False

    def test_region_rule(self, store, inside_spawn):
        store.add_rule(EventRule(event_name=EVENT, scope="REGION", region_name="spawn"))

        assert store.should_cancel(EVENT, "world", inside_spawn) is True
        assert store.should_cancel(EVENT, "world", Location(world_name="world", x=0, y=70, z=0)) is False

    def test_region_rule_for_missing_region(self, store, inside_spawn):
        """없는 영역을 참조하는 규칙은 일치하지 않음"""
        store.add_rule(EventRule(event_name=EVENT, scope="REGION", region_name="ghost"))

        assert store.should_cancel(EVENT, "world", inside_spawn) is False

    def test_evaluate_reports_scope(self, store, inside_spawn):
        store.add_rule(EventRule(event_name=EVENT, scope="WORLD", world_name="world"))

        decision = store.evaluate(EVENT, "world", inside_spawn)

        assert decision.trigger is True
        assert decision.scope == "WORLD"
        assert decision.reason == "world(world)"

    def test_evaluation_error_fails_open(self, store, regions, inside_spawn, log_messages):
        """평가 중 예외는 취소하지 않음으로 처리"""
        store.add_rule(EventRule(event_name=EVENT, scope="REGION", region_name="spawn"))
        store.add_rule(EventRule(event_name=EVENT, scope="GLOBAL"))
        regions.contains = Mock(side_effect=RuntimeError("boom"))

        decision = store.evaluate(EVENT, "world", inside_spawn)

        assert decision.trigger is False
        assert decision.reason == "evaluation_error"
        assert store.should_cancel(EVENT, "world", inside_spawn) is False
        assert any("boom" in m for m in log_messages)

    def test_debug_logs_cancellation(self, store, inside_spawn, log_messages):
        """디버그 모드에서는 취소 결정을 기록"""
        store.add_rule(EventRule(event_name=EVENT, scope="GLOBAL"))

        store.should_cancel(EVENT, "world", inside_spawn)
        assert not any("이벤트 취소" in m for m in log_messages)

        store.debug = True
        store.should_cancel(EVENT, "world", inside_spawn)
        assert any("이벤트 취소" in m and "(150, 70, 150)" in m for m in log_messages)
