import html
from typing import Iterable

SVG_NS = "http://www.w3.org/2000/svg"

# &apos; rather than html.escape's &#x27; so every reserved char has a named entity
_XML_ESCAPE = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&apos;",
}


def escape_char(ch: str) -> str:
    return "".join(_XML_ESCAPE.get(c, c) for c in ch)


def _fmt_size(v) -> str:
    return f"{v:g}"


def render_svg(glyphs: Iterable, width: int, height: int, font_size=8, color: str = "#d4d4d4") -> str:
    """
    Serialize positioned glyphs into a standalone SVG document.

    Each glyph becomes one <text> element anchored at (x, y), y being the
    baseline. A single style rule carries the font and fill for all of them.
    """
    out = [
        f'<svg xmlns="{SVG_NS}" width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}">\n',
        "  <style>text { font-family: monospace; "
        f"font-size: {_fmt_size(font_size)}px; fill: {html.escape(color, quote=False)}; }}</style>\n",
    ]
    for g in glyphs:
        out.append(f'  <text x="{g.x}" y="{g.y}">{escape_char(g.char)}</text>\n')
    out.append("</svg>")
    return "".join(out)
