"""Tests for brace isolation."""

from shadenorm.braces import isolate_braces


class TestIsolateBraces:
    def test_trailing_brace_split(self):
        assert isolate_braces("half4 frag() : SV_Target {") == ["half4 frag() : SV_Target", "{"]

    def test_no_space_before_brace(self):
        assert isolate_braces("Pass{") == ["Pass", "{"]

    def test_lone_brace(self):
        assert isolate_braces("{") == ["{"]

    def test_no_trailing_brace(self):
        assert isolate_braces("float x;") == ["float x;"]

    def test_empty_block_untouched(self):
        assert isolate_braces('_MainTex ("Albedo", 2D) = "white" {}') == [
            '_MainTex ("Albedo", 2D) = "white" {}'
        ]

    def test_closing_brace_untouched(self):
        assert isolate_braces("}") == ["}"]
