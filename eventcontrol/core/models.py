"""
Core domain models for EventControl.

This module defines the rule, region and configuration models
using Pydantic v2. Models are immutable and serialize with the
camelCase field names of the persisted configuration document.
"""

from typing import List, Literal, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from eventcontrol.common.geo import block_volume, point_in_box

# 스코프 타입 정의
Scope = Literal["GLOBAL", "WORLD", "REGION"]

# 스코프 우선순위 (높음 -> 낮음)
SCOPE_PRIORITY: Tuple[Scope, ...] = ("REGION", "WORLD", "GLOBAL")

# (event_name, scope, world_name, region_name)
RuleKey = Tuple[str, str, Optional[str], Optional[str]]

class DocumentModel(BaseModel):
    """저장 문서 형식을 따르는 공통 베이스 모델"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

class Point3D(DocumentModel):
    """3차원 좌표 모델"""
    model_config = ConfigDict(allow_inf_nan=False)

    x: float
    y: float
    z: float

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def display(self) -> str:
        return f"({int(self.x)}, {int(self.y)}, {int(self.z)})"

class Location(DocumentModel):
    """이벤트 발생 위치 모델 (조회용)"""
    world_name: str
    x: float
    y: float
    z: float

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

class EventRule(DocumentModel):
    """이벤트 취소 규칙 모델"""
    event_name: str
    scope: Scope
    enabled: bool = True
    world_name: Optional[str] = None
    region_name: Optional[str] = None

    @property
    def key(self) -> RuleKey:
        """중복 판정에 쓰이는 식별 키"""
        return (self.event_name, self.scope, self.world_name, self.region_name)

    def describe(self) -> str:
        if self.scope == "WORLD":
            return f"{self.event_name} in world {self.world_name}"
        if self.scope == "REGION":
            return f"{self.event_name} in region {self.region_name}"
        return f"{self.event_name} globally"

class Region(DocumentModel):
    """이름이 있는 축 정렬 상자 영역 모델"""
    name: str
    world_name: str
    pos1: Point3D
    pos2: Point3D
    description: Optional[str] = None

    def contains(self, world_name: Optional[str], x: float, y: float, z: float) -> bool:
        """
        점이 영역 안에 있는지 확인합니다.

        Args:
            world_name: 점이 속한 월드 이름
            x: X 좌표
            y: Y 좌표
            z: Z 좌표

        Returns:
            같은 월드이고 닫힌 상자 안이면 True
        """
        if world_name != self.world_name:
            return False
        return point_in_box((x, y, z), self.pos1.as_tuple(), self.pos2.as_tuple())

    def volume(self) -> int:
        """블록 단위 부피"""
        return block_volume(self.pos1.as_tuple(), self.pos2.as_tuple())

    def display(self) -> str:
        return f"{self.name} in {self.world_name}: {self.pos1.display()} to {self.pos2.display()}"

class Configuration(DocumentModel):
    """저장되는 전체 설정 모델"""
    events: List[EventRule] = Field(default_factory=list)
    regions: List[Region] = Field(default_factory=list)
    debug: bool = False

class CatalogEntry(DocumentModel):
    """외부 카탈로그가 제공하는 이벤트 메타데이터 모델"""
    name: str
    class_name: str
    cancellable: bool
    origin_package: str = ""

class Decision(BaseModel):
    """규칙 평가 결과 모델"""
    trigger: bool
    reason: str
    scope: Optional[Scope] = None
    rule: Optional[EventRule] = None
