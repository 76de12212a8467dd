"""요청 로깅 미들웨어 헬퍼 단위 테스트.

Unit tests for the request logging helpers: sensitive field masking,
truncation and entity id extraction from path params.
"""

import uuid

from app.middleware.axiom_logging import _entity_ids, _mask_dict, _truncate


class TestMaskDict:

    def test_masks_sensitive_keys(self):
        masked = _mask_dict({"api_key": "abc", "value": "7.5", "nested": {"Authorization": "Bearer x"}})
        assert masked == {"api_key": "***", "value": "7.5", "nested": {"Authorization": "***"}}

    def test_lists_are_capped(self):
        masked = _mask_dict([{"token": i} for i in range(30)])
        assert len(masked) == 20
        assert masked[0] == {"token": "***"}

    def test_depth_limit(self):
        data: dict = {}
        node = data
        for _ in range(10):
            node["child"] = {}
            node = node["child"]
        masked = _mask_dict(data)
        for _ in range(6):
            masked = masked["child"]
        assert masked == "..."


class TestTruncate:

    def test_long_string(self):
        assert _truncate("x" * 10, max_len=4) == "xxxx...(truncated)"

    def test_other_values_untouched(self):
        assert _truncate(12345, max_len=2) == 12345


class TestEntityIds:

    def test_keeps_only_id_params(self):
        day_id = uuid.uuid4()
        ids = _entity_ids({"day_id": day_id, "link_id": "abc", "slug": "x"})
        assert ids == {"day_id": str(day_id), "link_id": "abc"}
