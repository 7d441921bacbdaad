"""Static table of CWA township forecast datasets per administrative area."""
from __future__ import annotations

from types import MappingProxyType
from typing import List, Mapping, Optional

from .errors import UnsupportedArea


TOWNSHIP_DATASETS: Mapping[str, str] = MappingProxyType(
    {
        "基隆市": "F-D0047-049",
        "臺北市": "F-D0047-061",
        "新北市": "F-D0047-069",
        "桃園市": "F-D0047-005",
        "新竹市": "F-D0047-053",
        "新竹縣": "F-D0047-009",
        "苗栗縣": "F-D0047-013",
        "臺中市": "F-D0047-073",
        "彰化縣": "F-D0047-017",
        "南投縣": "F-D0047-021",
        "雲林縣": "F-D0047-025",
        "嘉義市": "F-D0047-057",
        "嘉義縣": "F-D0047-029",
        "臺南市": "F-D0047-077",
        "高雄市": "F-D0047-065",
        "屏東縣": "F-D0047-033",
        "宜蘭縣": "F-D0047-001",
        "花蓮縣": "F-D0047-041",
        "臺東縣": "F-D0047-037",
        "澎湖縣": "F-D0047-045",
        "金門縣": "F-D0047-085",
        "連江縣": "F-D0047-081",
    }
)

POPULAR_AREAS = (
    "臺北市",
    "新北市",
    "臺中市",
    "臺南市",
    "高雄市",
    "基隆市",
    "新竹市",
    "桃園市",
    "苗栗縣",
    "彰化縣",
)


class DatasetRegistry:
    """Read-only lookup of township dataset ids."""

    def __init__(self, datasets: Optional[Mapping[str, str]] = None) -> None:
        self._datasets = MappingProxyType(dict(datasets if datasets is not None else TOWNSHIP_DATASETS))

    def dataset_for(self, area_name: str) -> str:
        try:
            return self._datasets[area_name]
        except KeyError:
            raise UnsupportedArea(f"no township dataset for {area_name!r}") from None

    def __contains__(self, area_name: object) -> bool:
        return area_name in self._datasets

    def __len__(self) -> int:
        return len(self._datasets)

    def supported_areas(self) -> List[str]:
        return sorted(self._datasets)

    def popular_areas(self) -> List[str]:
        return [area for area in POPULAR_AREAS if area in self._datasets]


__all__ = ["DatasetRegistry", "TOWNSHIP_DATASETS", "POPULAR_AREAS"]
