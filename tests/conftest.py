from __future__ import annotations

import pytest

from payloads import township_location, township_payload


@pytest.fixture
def taipei_township():
    return township_payload(
        township_location("中正區", temperature="24", pop="20", weather="多雲"),
        township_location("大安區", temperature="26", pop="10", weather="晴"),
        township_location("信義區", temperature="25", pop="80", weather="短暫陣雨"),
    )
