import math
from typing import Tuple


def stable_hash(value: str) -> int:
    # sum of UTF-16 code units (what a JS charCodeAt loop sees);
    # identical across processes, unlike hash()
    data = str(value).encode("utf-16-le")
    return sum(int.from_bytes(data[i:i + 2], "little") for i in range(0, len(data), 2))


def radar_position(
    identifier: str,
    distance: float,
    max_distance: float,
    radius: float,
) -> Tuple[float, float]:
    """
    Place a user on a radar of ``radius`` display units.

    The angle comes from the identifier alone, so a user's dot keeps its
    bearing across renders; only the distance moves it along that ray.
    Distances beyond ``max_distance`` sit on the rim.
    """
    angle = (stable_hash(identifier) % 360) * (math.pi / 180)

    if max_distance > 0:
        clamped = min(distance / max_distance, 1)
    else:
        clamped = 1 if distance > 0 else 0

    r = clamped * radius
    return (math.cos(angle) * r, math.sin(angle) * r)
