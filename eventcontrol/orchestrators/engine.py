"""
EventControl engine orchestrator.

Wires the region store, the rule store and configuration
persistence together and exposes the operations host adapters
call: rule and region editing for the command surface, and the
cancellation query for the event interception hook.
"""

from typing import Any, Dict, List, Mapping, Optional, Union

from eventcontrol.adapters.storage.json_store import JsonConfigStore
from eventcontrol.core.models import CatalogEntry, Decision, EventRule, Location, Region, Scope
from eventcontrol.observability.logging_setup import get_logger
from eventcontrol.persistence import ConfigurationPersistence
from eventcontrol.ports.config_store import ConfigStorePort
from eventcontrol.settings import Settings
from eventcontrol.stores.regions import RegionStore
from eventcontrol.stores.rules import RuleStore

log = get_logger("eventcontrol.engine")

class EventControlEngine:
    """
    규칙 해석 엔진 오케스트레이터.

    모든 변경 연산은 반환 전에 설정을 저장합니다.
    """

    def __init__(self, store: ConfigStorePort, *, prune_orphan_rules: bool = False):
        """
        초기화합니다.

        Args:
            store: 설정 저장소 어댑터
            prune_orphan_rules: 로드 시 없는 영역을 참조하는 규칙 제거 여부
        """
        self.regions = RegionStore()
        self.rules = RuleStore(self.regions)
        self.persistence = ConfigurationPersistence(
            store, self.rules, self.regions, prune_orphan_rules=prune_orphan_rules
        )

        self.regions.on_change = self.persistence.save
        self.regions.on_remove = self.rules.purge_region
        self.rules.on_change = self.persistence.save

    @classmethod
    def from_settings(cls, settings: Settings) -> "EventControlEngine":
        """설정으로부터 JSON 파일 저장소를 쓰는 엔진을 만듭니다."""
        store = JsonConfigStore(settings.storage.config_path, settings.storage.catalog_path)
        log.info(f"설정 파일 경로: {store.path}")
        return cls(store, prune_orphan_rules=settings.storage.prune_orphan_rules)

    # ---- 영속성 ----

    def load(self) -> bool:
        return self.persistence.load()

    def save(self) -> bool:
        return self.persistence.save()

    def save_catalog(self, catalog: Mapping[str, Union[CatalogEntry, Mapping[str, Any]]]) -> bool:
        return self.persistence.save_catalog(catalog)

    def clear_all(self) -> bool:
        return self.persistence.clear_all()

    @property
    def loaded(self) -> bool:
        return self.persistence.loaded

    @property
    def debug_enabled(self) -> bool:
        return self.rules.debug

    def set_debug(self, enabled: bool) -> bool:
        """디버그 플래그를 바꾸고 저장합니다."""
        self.rules.debug = enabled
        log.info(f"디버그 모드: {'ENABLED' if enabled else 'DISABLED'}")
        return self.persistence.save()

    # ---- 규칙 ----

    def add_rule(self, rule: EventRule) -> None:
        self.rules.add_rule(rule)

    def remove_rule(
        self,
        event_name: str,
        scope: Scope,
        world_name: Optional[str] = None,
        region_name: Optional[str] = None,
    ) -> int:
        return self.rules.remove_rule(event_name, scope, world_name, region_name)

    def set_rule_enabled(
        self,
        event_name: str,
        scope: Scope,
        world_name: Optional[str] = None,
        region_name: Optional[str] = None,
        enabled: bool = True,
    ) -> bool:
        return self.rules.set_rule_enabled(event_name, scope, world_name, region_name, enabled)

    def get_rules_for(self, event_name: str) -> List[EventRule]:
        return self.rules.get_rules_for(event_name)

    def get_all_rules(self) -> List[EventRule]:
        return self.rules.get_all_rules()

    def should_cancel(
        self,
        event_name: str,
        world_name: Optional[str] = None,
        location: Optional[Location] = None,
    ) -> bool:
        return self.rules.should_cancel(event_name, world_name, location)

    def evaluate(
        self,
        event_name: str,
        world_name: Optional[str] = None,
        location: Optional[Location] = None,
    ) -> Decision:
        return self.rules.evaluate(event_name, world_name, location)

    # ---- 영역 ----

    def add_region(self, region: Region) -> bool:
        return self.regions.add_region(region)

    def remove_region(self, name: str) -> bool:
        return self.regions.remove_region(name)

    def get_region(self, name: str) -> Optional[Region]:
        return self.regions.get_region(name)

    def list_regions(self) -> List[Region]:
        return self.regions.list_regions()

    def list_regions_for_world(self, world_name: str) -> List[Region]:
        return self.regions.list_regions_for_world(world_name)

    def contains(self, region_name: str, world_name: Optional[str], point) -> bool:
        return self.regions.contains(region_name, world_name, point)

    def stats(self) -> Dict[str, Any]:
        """현재 상태 요약"""
        by_scope = self.rules.rules_by_scope()
        return {
            "loaded": self.loaded,
            "debug": self.debug_enabled,
            "rules": sum(len(rules) for rules in by_scope.values()),
            "rules_by_scope": {scope: len(rules) for scope, rules in by_scope.items()},
            "regions": len(self.regions),
        }
