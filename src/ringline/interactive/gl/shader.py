# どこで: `src/ringline/interactive/gl/shader.py`。
# 何を: 太さ付きライン描画用の GLSL（vertex / geometry / fragment）と program 生成を提供する。
# なぜ: GL_LINE_STRIP の各線分をジオメトリシェーダで四角形に張り、ドライバ依存の線幅制限を避けるため。

from __future__ import annotations

from typing import Any

VERTEX_SHADER = """
#version 410
in vec3 in_vert;
uniform mat4 projection;
void main() {
    gl_Position = projection * vec4(in_vert, 1.0);
}
"""

# line_thickness は NDC 上の線幅。
GEOMETRY_SHADER = """
#version 410
layout(lines) in;
layout(triangle_strip, max_vertices = 4) out;
uniform float line_thickness;
void main() {
    vec2 p0 = gl_in[0].gl_Position.xy;
    vec2 p1 = gl_in[1].gl_Position.xy;
    vec2 dir = p1 - p0;
    float len = length(dir);
    if (len <= 0.0) {
        return;
    }
    vec2 normal = vec2(-dir.y, dir.x) / len * (line_thickness * 0.5);

    gl_Position = vec4(p0 + normal, 0.0, 1.0);
    EmitVertex();
    gl_Position = vec4(p0 - normal, 0.0, 1.0);
    EmitVertex();
    gl_Position = vec4(p1 + normal, 0.0, 1.0);
    EmitVertex();
    gl_Position = vec4(p1 - normal, 0.0, 1.0);
    EmitVertex();
    EndPrimitive();
}
"""

FRAGMENT_SHADER = """
#version 410
uniform vec4 color;
out vec4 frag_color;
void main() {
    frag_color = color;
}
"""


class Shader:
    """ライン描画用シェーダープログラムのファクトリ。"""

    @staticmethod
    def create_shader(ctx: Any) -> Any:
        """moderngl.Context 上にライン描画用 program を作成して返す。"""
        return ctx.program(
            vertex_shader=VERTEX_SHADER,
            geometry_shader=GEOMETRY_SHADER,
            fragment_shader=FRAGMENT_SHADER,
        )
