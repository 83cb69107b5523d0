from caravan.models import GridCell
from caravan.models import Marker
from caravan.render.animation import AttributeAnimation
from caravan.render.animation import LoopingAnimation
from caravan.render.animation import MotionAnimation
from caravan.render.palettes import Palette
from caravan.render.scene import Scene
from caravan.services.trail import path_data

MOTION_PATH_ID = "motionPath"
FONT_FAMILY = "ui-sans-serif, system-ui, -apple-system, Segoe UI, Roboto, Arial"

_XML_ENTITIES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&apos;",
}


def escape_xml(value: object) -> str:
    """Escape text for use in SVG element content and attribute values."""

    return "".join(_XML_ENTITIES.get(char, char) for char in str(value))


def _repeat(animation: LoopingAnimation) -> str:
    return "indefinite" if animation.loop else "1"


def _duration(animation: LoopingAnimation) -> str:
    return f"{animation.duration_seconds:g}s"


def render_animation(animation: LoopingAnimation) -> str:
    """Translate a looping animation into SMIL markup."""

    if isinstance(animation, AttributeAnimation):
        values = "; ".join(escape_xml(value) for value in animation.values)
        return (
            f'<animate attributeName="{escape_xml(animation.attribute)}" '
            f'values="{values}" dur="{_duration(animation)}" '
            f'repeatCount="{_repeat(animation)}"/>'
        )
    if isinstance(animation, MotionAnimation):
        return (
            f'<animateMotion dur="{_duration(animation)}" '
            f'repeatCount="{_repeat(animation)}" rotate="{escape_xml(animation.rotate)}">'
            f'<mpath href="#{escape_xml(animation.path_id)}"/>'
            "</animateMotion>"
        )
    raise TypeError(f"unsupported animation: {type(animation).__name__}")


def _cell(cell: GridCell, scene: Scene, palette: Palette) -> str:
    size = scene.cell_size
    rect = (
        f'<rect class="cell" x="{cell.x:g}" y="{cell.y:g}" width="{size}" '
        f'height="{size}" rx="3" ry="3" fill="{palette.fill_for(cell.level)}"'
    )
    if cell.day is None:
        return rect + "></rect>"
    label = (
        f"{escape_xml(cell.day.date)} • "
        f"{escape_xml(cell.day.contribution_count)} contributions"
    )
    return f"{rect}>\n  <title>{label}</title>\n</rect>"


def _campfire(marker: Marker, scene: Scene, palette: Palette) -> str:
    return f"""<g class="campfire" transform="translate({marker.x:g},{marker.y:g})">
      <rect x="-5" y="2.5" width="10" height="2" rx="1" fill="{palette.fire_log}" transform="rotate(-18)"/>
      <rect x="-5" y="2.5" width="10" height="2" rx="1" fill="{palette.fire_log}" transform="rotate(18)"/>
      <path d="M0 -6 C3 -2 4 1 0 3.2 C-4 1 -3 -2 0 -6 Z" fill="{palette.fire_flame}">
        {render_animation(scene.fire)}
      </path>
      <path d="M0 -2.5 C1.5 -0.5 1.8 1 0 2.4 C-1.8 1 -1.5 -0.5 0 -2.5 Z" fill="{palette.fire_core}"/>
    </g>"""


def _tent(marker: Marker, palette: Palette) -> str:
    return f"""<g class="tent" transform="translate({marker.x:g},{marker.y:g})">
      <path d="M-8 5 L0 -7 L8 5 Z" fill="{palette.tent_body}" stroke="{palette.van_stroke}" stroke-width="0.6" stroke-linejoin="round"/>
      <path d="M-2.4 5 L0 0.5 L2.4 5 Z" fill="{palette.tent_door}" opacity="0.9"/>
    </g>"""


def _camper_van(palette: Palette) -> str:
    return f"""<g id="camper-van" transform="translate(-11,-9)">
      <path d="M3 12.2c0-2 1.6-3.6 3.6-3.6h9.2c1.5 0 2.8.9 3.4 2.3l1.1 2.4h2.7c1.5 0 2.8 1.2 2.8 2.8v2.8c0 1.2-1 2.2-2.2 2.2H24.8"
            fill="{palette.van_body}" opacity="0.92" stroke="{palette.van_stroke}" stroke-width="0.6" stroke-linejoin="round"/>
      <path d="M7.2 7.6h7.4c1.1 0 2 .9 2 2v1.1H5.2V9.6c0-1.1.9-2 2-2z"
            fill="{palette.van_accent}" opacity="0.92" stroke="{palette.van_stroke}" stroke-width="0.6" stroke-linejoin="round"/>
      <path d="M7.0 11.0h7.6c.6 0 1.1.5 1.1 1.1v2.1H5.9v-2.1c0-.6.5-1.1 1.1-1.1z"
            fill="{palette.van_window}" opacity="0.90"/>
      <path d="M13.3 11.0v6.2" stroke="{palette.van_stroke}" stroke-width="0.7" opacity="0.55"/>
      <circle cx="9.0" cy="20.4" r="2.4" fill="{palette.bg}" opacity="0.96"/>
      <circle cx="9.0" cy="20.4" r="1.5" fill="{palette.van_body}" opacity="0.92"/>
      <circle cx="19.2" cy="20.4" r="2.4" fill="{palette.bg}" opacity="0.96"/>
      <circle cx="19.2" cy="20.4" r="1.5" fill="{palette.van_body}" opacity="0.92"/>
      <circle cx="24.8" cy="17.4" r="0.9" fill="{palette.van_light}" opacity="0.9"/>
    </g>"""


class SvgBackend:
    """Renders a scene as a standalone animated SVG document."""

    def render(self, scene: Scene, palette: Palette) -> str:
        d = escape_xml(path_data(scene.trail))
        cells = "\n".join(_cell(cell, scene, palette) for cell in scene.cells)
        campfires = "\n".join(
            _campfire(marker, scene, palette) for marker in scene.campfires
        )
        width = scene.width
        height = scene.height

        return f"""<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}"
     viewBox="0 0 {width} {height}" role="img" aria-label="Camping camper van activity trail">
  <defs>
    <filter id="softGlow">
      <feGaussianBlur stdDeviation="1.6" result="b"/>
      <feMerge>
        <feMergeNode in="b"/>
        <feMergeNode in="SourceGraphic"/>
      </feMerge>
    </filter>
    {_camper_van(palette)}
  </defs>

  <rect width="100%" height="100%" fill="{palette.bg}" rx="12"/>

  <g class="grid">
{cells}
  </g>

  <g class="campfires">
    {campfires}
  </g>

  <path d="{d}" fill="none" stroke="{palette.trail}" stroke-width="1.6" stroke-linecap="round"/>

  <path class="trail-dash" d="{d}" fill="none" stroke="{palette.dash}" stroke-width="2.6" stroke-linecap="round"
        stroke-dasharray="16 120" filter="url(#softGlow)">
    {render_animation(scene.dash)}
  </path>

  {_tent(scene.tent, palette)}

  <path id="{MOTION_PATH_ID}" d="{d}" fill="none" stroke="none"/>

  <use href="#camper-van">
    {render_animation(scene.motion)}
  </use>

  <text x="{scene.pad}" y="{height - 8}" font-family="{FONT_FAMILY}"
        font-size="12" fill="{palette.text}" opacity="0.85">🏕️ {escape_xml(scene.login)} • camping trail</text>
</svg>
"""
