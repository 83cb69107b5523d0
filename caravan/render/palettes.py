from enum import Enum

from pydantic import BaseModel
from pydantic import ConfigDict


class Theme(str, Enum):
    DARK = "dark"
    LIGHT = "light"


class Palette(BaseModel):
    """Colours for one theme; `ramp` holds the five intensity fills."""

    model_config = ConfigDict(frozen=True)

    bg: str
    ramp: tuple[str, str, str, str, str]
    text: str
    trail: str
    dash: str
    van_body: str
    van_stroke: str
    van_accent: str
    van_window: str
    van_light: str
    fire_flame: str
    fire_core: str
    fire_log: str
    tent_body: str
    tent_door: str

    def fill_for(self, level: int) -> str:
        return self.ramp[level]


PALETTES: dict[Theme, Palette] = {
    Theme.DARK: Palette(
        bg="#0d1117",
        ramp=("#161b22", "#0e4429", "#006d32", "#26a641", "#39d353"),
        text="#c9d1d9",
        trail="rgba(255,255,255,0.12)",
        dash="rgba(57,211,83,0.55)",
        van_body="#c9d1d9",
        van_stroke="rgba(0,0,0,0.30)",
        van_accent="#1f6feb",
        van_window="rgba(13,17,23,0.85)",
        van_light="rgba(255, 224, 128, 0.85)",
        fire_flame="#f78166",
        fire_core="#ffd33d",
        fire_log="#8b5a2b",
        tent_body="#d29922",
        tent_door="#0d1117",
    ),
    Theme.LIGHT: Palette(
        bg="#ffffff",
        ramp=("#ebedf0", "#9be9a8", "#40c463", "#30a14e", "#216e39"),
        text="#24292f",
        trail="rgba(0,0,0,0.10)",
        dash="rgba(48,161,78,0.55)",
        van_body="#24292f",
        van_stroke="rgba(0,0,0,0.28)",
        van_accent="#0969da",
        van_window="rgba(255,255,255,0.80)",
        van_light="rgba(255, 224, 128, 0.70)",
        fire_flame="#e16f24",
        fire_core="#f2cc60",
        fire_log="#6f4e37",
        tent_body="#bf8700",
        tent_door="#ffffff",
    ),
}


def palette_for(theme: Theme | str) -> Palette:
    return PALETTES[Theme(theme)]
