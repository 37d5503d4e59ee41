"""Shared fixtures for shadenorm tests."""

from __future__ import annotations

from pathlib import Path

import pytest

SAMPLE_SHADER = """\
Shader "Custom/Sample" {
    Properties {
        // main texture
        [NoScaleOffset] _MainTex ("Albedo", 2D) = "white" {}
        [HideInInspector] _Foo ("Foo", Float) = 1
        _Bar ("Bar", Color) = (1,1,1,1)
    }
    SubShader {
        Pass {
            CGPROGRAM
            #pragma vertex vert
            #pragma fragment frag
            #include "UnityCG.cginc"
            #include "lib/common.cginc"
            /* multi
               line */
            half4 frag() : SV_Target {
                return _Bar; // tint
            }
            ENDCG
        }
    }
}
"""

COMMON_CGINC = """\
#ifndef COMMON_INCLUDED
#define COMMON_INCLUDED
float4 _Tint; /* shared */
#endif
"""


@pytest.fixture
def write_files(tmp_path):
    """Write a mapping of relative path -> text under tmp_path and return tmp_path."""

    def _write(files: dict[str, str]) -> Path:
        for rel, text in files.items():
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        return tmp_path

    return _write


@pytest.fixture
def sample_shader(write_files) -> Path:
    root = write_files({"Sample.shader": SAMPLE_SHADER, "lib/common.cginc": COMMON_CGINC})
    return root / "Sample.shader"
