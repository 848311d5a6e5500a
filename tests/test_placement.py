from pdf_overlay.services.normalize import RGB
from pdf_overlay.services.placement import DEFAULTS, AllPages, SinglePage, build_instruction


class TestBuildInstruction:
    def test_text_defaults(self):
        ins = build_instruction({"text": "Hi"}, kind="text", page_selector=SinglePage(0))
        assert ins is not None
        assert (ins.x, ins.y) == (50.0, 750.0)
        assert ins.font_size == 12.0
        assert ins.color == RGB(0.0, 0.0, 0.0)
        assert ins.opacity == 1.0
        assert ins.rotation_degrees == 0.0
        assert not ins.is_rotated
        assert ins.kind == "text"

    def test_watermark_defaults(self):
        ins = build_instruction(
            {"text": "DRAFT"},
            kind="watermark",
            page_selector=SinglePage(0),
            anchor=lambda text, size: (1.0, 2.0),
        )
        assert (ins.x, ins.y) == (1.0, 2.0)
        assert ins.font_size == 48.0
        assert ins.color == RGB(0.5, 0.5, 0.5)
        assert ins.opacity == 0.15
        assert ins.rotation_degrees == 45.0
        assert ins.is_rotated

    def test_anchor_sees_resolved_text_and_size(self):
        seen = []

        def anchor(text, size):
            seen.append((text, size))
            return 0.0, 0.0

        build_instruction({"text": 123, "fontSize": "30"}, kind="watermark", page_selector=SinglePage(0), anchor=anchor)
        assert seen == [("123", 30.0)]

    def test_anchor_overrides_request_xy(self):
        ins = build_instruction(
            {"text": "W", "x": 5, "y": 5},
            kind="watermark",
            page_selector=SinglePage(0),
            anchor=lambda text, size: (300.0, 400.0),
        )
        assert (ins.x, ins.y) == (300.0, 400.0)

    def test_empty_text_dropped(self):
        for raw in ({}, {"text": ""}, {"text": None}, {"text": False}, {"text": 0}, {"text": []}):
            assert build_instruction(raw, kind="text", page_selector=SinglePage(0)) is None

    def test_values_coerced(self):
        ins = build_instruction(
            {
                "text": "X",
                "x": "100",
                "y": "junk",
                "fontSize": 20,
                "color": {"r": 5, "g": "bad", "b": 0.5},
                "opacity": 3,
                "rotate": "90",
            },
            kind="text",
            page_selector=AllPages(),
        )
        assert ins.x == 100.0
        assert ins.y == 750.0
        assert ins.font_size == 20.0
        assert ins.color == RGB(1.0, 0.0, 0.5)
        assert ins.opacity == 1.0
        assert ins.rotation_degrees == 90.0
        assert ins.page_selector == AllPages()

    def test_non_positive_font_size_uses_default(self):
        for size in (0, -4, "0"):
            ins = build_instruction({"text": "X", "fontSize": size}, kind="text", page_selector=SinglePage(0))
            assert ins.font_size == DEFAULTS["text"].font_size

    def test_explicit_zero_rotation_not_rotated(self):
        ins = build_instruction({"text": "X", "rotate": 0}, kind="watermark", page_selector=SinglePage(0),
                                anchor=lambda t, s: (0.0, 0.0))
        assert ins.rotation_degrees == 0.0
        assert not ins.is_rotated

    def test_truthy_non_string_text_is_stringified(self):
        ins = build_instruction({"text": True}, kind="text", page_selector=SinglePage(0))
        assert ins.text == "true"
        ins = build_instruction({"text": 7}, kind="text", page_selector=SinglePage(0))
        assert ins.text == "7"

    def test_absent_field_keeps_default_explicit_null_is_zero(self):
        ins = build_instruction({"text": "X", "y": None, "opacity": None}, kind="text", page_selector=SinglePage(0))
        assert ins.x == 50.0
        assert ins.y == 0.0
        assert ins.opacity == 0.0

    def test_null_font_size_uses_default(self):
        ins = build_instruction({"text": "X", "fontSize": None}, kind="watermark", page_selector=SinglePage(0),
                                anchor=lambda t, s: (0.0, 0.0))
        assert ins.font_size == 48.0
