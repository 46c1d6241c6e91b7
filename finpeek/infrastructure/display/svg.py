"""
DrawingInstructions → standalone SVG document.
"""

from finpeek.domain.entities.view_model import DrawingInstructions


def render_svg(instructions: DrawingInstructions, background: str = "#0a0a0a") -> str:
    color = instructions.color
    gradient_id = f"gradient-{color.lstrip('#')}"
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{instructions.width:g}" '
        f'height="{instructions.height:g}" '
        f'viewBox="0 0 {instructions.width:g} {instructions.height:g}" '
        f'style="background: {background};">\n'
        f"  <defs>\n"
        f'    <linearGradient id="{gradient_id}" x1="0%" y1="0%" x2="0%" y2="100%">\n'
        f'      <stop offset="0%" style="stop-color:{color};stop-opacity:0.3" />\n'
        f'      <stop offset="100%" style="stop-color:{color};stop-opacity:0" />\n'
        f"    </linearGradient>\n"
        f"  </defs>\n"
        f'  <path d="{instructions.line_path}" stroke="{color}" stroke-width="2" '
        f'fill="none" opacity="0.8" />\n'
        f'  <path d="{instructions.area_path}" fill="url(#{gradient_id})" opacity="0.1" />\n'
        f"</svg>\n"
    )
