"""
Defines the named color palette used by the usage chart.
"""
from typing import Final

class ColorConstants:
    """Defines the default series colors."""
    STROKE_COLOR: Final[str] = "#1976D2"
    FILL_COLOR: Final[str] = "#64B5F6"
    FILL_COLOR_SECONDARY: Final[str] = "#BBDEFB"
    ESTIMATE_COLOR: Final[str] = "#90A4AE"

    def __init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        for attr_name in dir(self):
            if not attr_name.startswith('_') and attr_name.isupper():
                value = getattr(self, attr_name)
                if not (isinstance(value, str) and value.startswith("#") and len(value) == 7):
                    raise ValueError(f"Color '{attr_name}' must be a 7-character hex string.")

# Singleton instance for easy access
color = ColorConstants()
