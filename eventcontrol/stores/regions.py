"""
Region store for EventControl.

Holds named axis-aligned regions keyed by name and answers
point containment queries. Region counts stay in the dozens, so
every query is a plain dictionary lookup or linear scan.
"""

from threading import RLock
from typing import Callable, Dict, Iterable, List, Optional

from eventcontrol.core.models import Region
from eventcontrol.common.geo import validate_coordinates
from eventcontrol.observability.logging_setup import get_logger
from eventcontrol.observability.metrics import region_mutations_total

log = get_logger("eventcontrol.regions")

class RegionStore:
    """
    이름으로 식별되는 영역 저장소.

    Attributes:
        on_change: 변경 후 호출되는 저장 콜백
        on_remove: 영역 삭제 시 참조 규칙을 정리하는 콜백 (영역 이름 -> 삭제된 규칙 수)
        lock: 영역 맵 잠금. 규칙 저장소 잠금보다 먼저 잡아야 하며, 두 저장소에 걸친
            교체/스냅샷/평가를 한 시점의 상태로 묶을 때 사용
    """

    def __init__(
        self,
        on_change: Optional[Callable[[], object]] = None,
        on_remove: Optional[Callable[[str], int]] = None,
    ):
        self._regions: Dict[str, Region] = {}
        # 재진입 가능: 영속성 계층과 규칙 평가가 이 잠금 아래에서 조회를 다시 호출함
        self.lock = RLock()
        self.on_change = on_change
        self.on_remove = on_remove

    def __len__(self) -> int:
        return len(self._regions)

    def add_region(self, region: Region) -> bool:
        """
        영역을 추가합니다.

        Args:
            region: 추가할 영역

        Returns:
            같은 이름의 영역이 이미 있으면 False (변경 없음), 추가되면 True
        """
        with self.lock:
            if region.name in self._regions:
                return False
            self._regions[region.name] = region

        region_mutations_total.labels(op="add").inc()
        log.info(f"영역 추가: {region.display()}")
        self._notify()
        return True

    def remove_region(self, name: str) -> bool:
        """
        영역을 삭제하고 이 영역을 참조하는 규칙을 함께 삭제합니다.

        Args:
            name: 삭제할 영역 이름

        Returns:
            영역이 없으면 False, 삭제되면 True
        """
        removed_rules = 0
        with self.lock:
            if self._regions.pop(name, None) is None:
                return False
            if self.on_remove is not None:
                removed_rules = self.on_remove(name)

        region_mutations_total.labels(op="remove").inc()
        log.info(f"영역 삭제: {name} (연관 규칙 {removed_rules}개 삭제)")
        self._notify()
        return True

    def get_region(self, name: str) -> Optional[Region]:
        with self.lock:
            return self._regions.get(name)

    def list_regions(self) -> List[Region]:
        with self.lock:
            return list(self._regions.values())

    def list_regions_for_world(self, world_name: str) -> List[Region]:
        with self.lock:
            return [r for r in self._regions.values() if r.world_name == world_name]

    def contains(self, region_name: str, world_name: Optional[str], point) -> bool:
        """
        점이 이름으로 지정한 영역 안에 있는지 확인합니다.

        Args:
            region_name: 영역 이름
            world_name: 점이 속한 월드 이름
            point: x, y, z 속성을 가진 점 (Point3D 또는 Location)

        Returns:
            영역이 없거나 다른 월드이면 False, 그 외에는 닫힌 상자 판정 결과
        """
        region = self.get_region(region_name)
        if region is None:
            return False
        if not validate_coordinates(point.x, point.y, point.z):
            return False
        return region.contains(world_name, point.x, point.y, point.z)

    def replace_all(self, regions: Iterable[Region]) -> None:
        """저장소 내용을 통째로 교체합니다 (저장 콜백 없음)."""
        fresh = {region.name: region for region in regions}
        with self.lock:
            self._regions = fresh

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change()
