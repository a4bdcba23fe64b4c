"""Theme palette model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Theme(BaseModel):
    """An immutable colour palette for the workbench UI."""

    model_config = ConfigDict(frozen=True)

    name: str
    primary: str
    bg_light: str
    bg_dark: str
    text_light: str
    text_dark: str

    def background(self, dark_mode: bool = False) -> str:
        """CSS gradient for the page background in light or dark mode."""
        if dark_mode:
            return f"linear-gradient(135deg, {self.bg_dark} 0%, #1a1a1a 100%)"
        return f"linear-gradient(135deg, {self.bg_light} 0%, white 100%)"

    def text_color(self, dark_mode: bool = False) -> str:
        return self.text_dark if dark_mode else self.text_light
