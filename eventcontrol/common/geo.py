"""
Spatial utilities for EventControl.

This module provides axis-aligned box calculations used for
region containment: bounding boxes from two arbitrary corners,
closed-box point tests and block volumes.
"""

import math
from typing import Tuple

Vector3 = Tuple[float, float, float]
Box = Tuple[float, float, float, float, float, float]

def calculate_bounding_box(pos1: Vector3, pos2: Vector3) -> Box:
    """
    두 꼭짓점으로부터 정규화된 경계 상자를 계산합니다.

    꼭짓점 순서는 상관없으며 축마다 최소/최대를 취합니다.

    Args:
        pos1: 첫 번째 꼭짓점 (x, y, z)
        pos2: 두 번째 꼭짓점 (x, y, z)

    Returns:
        (min_x, min_y, min_z, max_x, max_y, max_z)
    """
    x1, y1, z1 = pos1
    x2, y2, z2 = pos2

    return (min(x1, x2), min(y1, y2), min(z1, z2),
            max(x1, x2), max(y1, y2), max(z1, z2))

def point_in_box(point: Vector3, pos1: Vector3, pos2: Vector3) -> bool:
    """
    점이 두 꼭짓점으로 정의된 상자 안에 있는지 확인합니다.

    경계면 위의 점도 내부로 취급합니다 (닫힌 구간).

    Args:
        point: 확인할 점 (x, y, z)
        pos1: 첫 번째 꼭짓점
        pos2: 두 번째 꼭짓점

    Returns:
        세 축 모두 [min, max] 범위 안이면 True
    """
    min_x, min_y, min_z, max_x, max_y, max_z = calculate_bounding_box(pos1, pos2)
    x, y, z = point

    return (min_x <= x <= max_x and
            min_y <= y <= max_y and
            min_z <= z <= max_z)

def block_volume(pos1: Vector3, pos2: Vector3) -> int:
    """
    상자가 차지하는 블록 수를 계산합니다.

    각 축의 차이를 정수로 자른 뒤 양 끝 블록을 포함하도록 1을 더합니다.

    Args:
        pos1: 첫 번째 꼭짓점
        pos2: 두 번째 꼭짓점

    Returns:
        블록 단위 부피
    """
    dx = int(abs(pos1[0] - pos2[0])) + 1
    dy = int(abs(pos1[1] - pos2[1])) + 1
    dz = int(abs(pos1[2] - pos2[2])) + 1

    return dx * dy * dz

def validate_coordinates(x: float, y: float, z: float) -> bool:
    """
    좌표가 유효한지 확인합니다.

    Args:
        x: X 좌표
        y: Y 좌표
        z: Z 좌표

    Returns:
        세 좌표가 모두 유한한 값이면 True
    """
    return math.isfinite(x) and math.isfinite(y) and math.isfinite(z)
