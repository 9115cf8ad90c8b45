"""
Configuration persistence for EventControl.

This module moves the live rule and region stores to and from the
durable configuration document. It owns no live state: load()
rebuilds both stores from a validated, reconciled document and
save() flattens them back. Failures are logged and counted, never
raised, and a failed load leaves the previous state in place.
"""

from threading import Lock
from typing import Any, Dict, List, Mapping, Tuple, Union

from pydantic import ValidationError

from eventcontrol.core.errors import ConfigLoadError, ConfigSaveError
from eventcontrol.core.models import CatalogEntry, Configuration, EventRule, Region
from eventcontrol.observability.logging_setup import get_logger
from eventcontrol.observability.metrics import (
    config_loads_total,
    config_saves_total,
    regions_loaded,
    rules_loaded,
)
from eventcontrol.ports.config_store import ConfigStorePort
from eventcontrol.stores.regions import RegionStore
from eventcontrol.stores.rules import RuleStore

log = get_logger("eventcontrol.persistence")

def reconcile_configuration(
    config: Configuration,
    *,
    prune_orphan_rules: bool = False,
) -> Tuple[Configuration, List[str]]:
    """
    로드한 설정의 참조 무결성을 맞춥니다.

    - 같은 이름의 영역은 처음 것만 유지
    - 같은 식별 키의 규칙은 마지막 것만 유지 (add_rule 재실행과 동일)
    - 없는 영역을 참조하는 규칙은 경고, prune_orphan_rules이면 제거

    Args:
        config: 검증된 설정
        prune_orphan_rules: 고아 규칙 제거 여부

    Returns:
        (정리된 설정, 경고 메시지 목록)
    """
    warnings: List[str] = []

    regions: Dict[str, Region] = {}
    for region in config.regions:
        if region.name in regions:
            warnings.append(f"중복 영역 무시: {region.name}")
            continue
        regions[region.name] = region

    rules: Dict[tuple, EventRule] = {}
    for rule in config.events:
        if rule.key in rules:
            warnings.append(f"중복 규칙 교체: {rule.describe()}")
            # 삽입 순서를 add_rule과 같게 맞춤
            del rules[rule.key]
        rules[rule.key] = rule

    # 스코프와 무관하게 region_name으로 판정 (영역 삭제 연쇄와 같은 기준)
    kept: List[EventRule] = []
    for rule in rules.values():
        if rule.region_name is not None and rule.region_name not in regions:
            if prune_orphan_rules:
                warnings.append(f"없는 영역 참조 규칙 제거: {rule.describe()}")
                continue
            warnings.append(f"없는 영역을 참조하는 규칙: {rule.describe()}")
        kept.append(rule)

    reconciled = Configuration(events=kept, regions=list(regions.values()), debug=config.debug)
    return reconciled, warnings

def decode_configuration(document: Mapping[str, Any]) -> Configuration:
    """문서를 설정 모델로 검증합니다. 실패 시 ConfigLoadError."""
    try:
        return Configuration.model_validate(document)
    except ValidationError as e:
        raise ConfigLoadError(f"설정 문서 검증 실패: {e.error_count()}개 오류\n{e}") from e

def encode_configuration(config: Configuration) -> Dict[str, Any]:
    return config.model_dump(mode="json", by_alias=True)

class ConfigurationPersistence:
    """규칙/영역 저장소와 영속 문서 사이의 변환기"""

    def __init__(
        self,
        store: ConfigStorePort,
        rules: RuleStore,
        regions: RegionStore,
        *,
        prune_orphan_rules: bool = False,
    ):
        """
        초기화합니다.

        Args:
            store: 설정 저장소 어댑터
            rules: 규칙 저장소
            regions: 영역 저장소
            prune_orphan_rules: 로드 시 없는 영역을 참조하는 규칙 제거 여부
        """
        self._store = store
        self._rules = rules
        self._regions = regions
        self._lock = Lock()
        self.prune_orphan_rules = prune_orphan_rules
        self.loaded = False

    def load(self) -> bool:
        """
        저장된 설정을 읽어 두 저장소를 다시 구성합니다.

        문서가 없으면 빈 기본 설정을 만들어 즉시 저장합니다.
        실패하면 기존 메모리 상태를 그대로 둡니다.

        Returns:
            로드 성공 여부
        """
        with self._lock:
            try:
                document = self._store.read()
                if document is None:
                    log.info("설정 파일 없음, 기본 설정 생성")
                    self._apply(Configuration())
                    config_loads_total.labels(result="created").inc()
                    self.loaded = True
                    return self._write()

                decoded = decode_configuration(document)
                config, warnings = reconcile_configuration(
                    decoded,
                    prune_orphan_rules=self.prune_orphan_rules,
                )
            except ConfigLoadError as e:
                config_loads_total.labels(result="error").inc()
                log.error(f"설정 로드 실패, 기존 상태 유지: {e}")
                return False

            for message in warnings:
                log.warning(message)

            self._apply(config)
            config_loads_total.labels(result="ok").inc()
            self.loaded = True

            if config.debug:
                log.info(f"설정 로드 완료: 규칙 {len(config.events)}개, 영역 {len(config.regions)}개")
                log.info("디버그 모드: ENABLED")

            # 정리 과정에서 바뀐 내용이 있으면 다시 저장
            if config != decoded:
                return self._write()
            return True

    def save(self) -> bool:
        """
        현재 저장소 상태를 문서로 저장합니다.

        Returns:
            저장 성공 여부 (실패해도 메모리 상태는 유효)
        """
        with self._lock:
            return self._write()

    def clear_all(self) -> bool:
        """모든 규칙과 영역을 지우고 저장합니다."""
        with self._lock:
            with self._regions.lock:
                self._regions.replace_all([])
                self._rules.replace_all([])
            log.info("모든 규칙과 영역 삭제")
            return self._write()

    def snapshot(self) -> Configuration:
        """두 저장소의 같은 시점 상태 (영역 잠금 -> 규칙 잠금 순서)"""
        with self._regions.lock:
            return Configuration(
                events=self._rules.get_all_rules(),
                regions=self._regions.list_regions(),
                debug=self._rules.debug,
            )

    def save_catalog(self, catalog: Mapping[str, Union[CatalogEntry, Mapping[str, Any]]]) -> bool:
        """
        외부 카탈로그의 이벤트 목록을 진단용 파일로 저장합니다.

        이 파일은 다시 읽지 않습니다. 잘못된 항목은 경고 후 건너뜁니다.

        Args:
            catalog: 이벤트 이름 -> 메타데이터

        Returns:
            저장 성공 여부
        """
        document: Dict[str, Any] = {}
        for name in sorted(catalog):
            info = catalog[name]
            try:
                entry = info if isinstance(info, CatalogEntry) else CatalogEntry.model_validate({"name": name, **info})
            except (ValidationError, TypeError) as e:
                log.warning(f"카탈로그 항목 무시: {name} ({e})")
                continue
            document[name] = entry.model_dump(mode="json", by_alias=True)

        try:
            self._store.write_catalog(document)
        except ConfigSaveError as e:
            log.error(f"카탈로그 저장 실패: {e}")
            return False

        log.info(f"카탈로그 이벤트 {len(document)}개 저장")
        return True

    def _apply(self, config: Configuration) -> None:
        # 평가/스냅샷은 교체 전 또는 교체 후 상태만 봄
        with self._regions.lock:
            self._regions.replace_all(config.regions)
            self._rules.replace_all(config.events)
            self._rules.debug = config.debug
        rules_loaded.set(len(config.events))
        regions_loaded.set(len(config.regions))

    def _write(self) -> bool:
        config = self.snapshot()
        rules_loaded.set(len(config.events))
        regions_loaded.set(len(config.regions))

        try:
            self._store.write(encode_configuration(config))
        except ConfigSaveError as e:
            config_saves_total.labels(result="error").inc()
            log.error(f"설정 저장 실패, 메모리 상태 유지: {e}")
            return False

        config_saves_total.labels(result="ok").inc()
        if config.debug:
            log.info("설정 저장 완료")
        return True
