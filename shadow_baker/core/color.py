"""
Shadow color - straight RGBA floats, nominally 0-1
"""

from dataclasses import dataclass
from typing import Any, Tuple


ColorF = Tuple[float, float, float, float]  # RGBA 0-1


@dataclass(frozen=True)
class ShadowColor:
    """RGBA color of the shadow. Values are not range-checked."""
    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    a: float = 1.0

    def as_tuple(self) -> ColorF:
        return (self.r, self.g, self.b, self.a)

    def to_hex(self) -> str:
        """Format as #RRGGBBAA (components clamped to 0-1)"""
        parts = (min(max(c, 0.0), 1.0) for c in self.as_tuple())
        return '#' + ''.join(f"{int(c * 255 + 0.5):02X}" for c in parts)

    @classmethod
    def from_hex(cls, text: str) -> 'ShadowColor':
        """Parse #RGB, #RGBA, #RRGGBB or #RRGGBBAA"""
        digits = text.strip().lstrip('#')
        if len(digits) in (3, 4):
            digits = ''.join(c * 2 for c in digits)
        if len(digits) == 6:
            digits += 'FF'
        if len(digits) != 8:
            raise ValueError(f"Invalid hex color: {text!r}")

        try:
            values = [int(digits[i:i + 2], 16) / 255.0 for i in range(0, 8, 2)]
        except ValueError:
            raise ValueError(f"Invalid hex color: {text!r}") from None
        return cls(*values)

    @classmethod
    def parse(cls, value: Any) -> 'ShadowColor':
        """
        Build a color from config or command line input.

        Accepts a ShadowColor, a hex string, a comma separated "r,g,b[,a]"
        string of floats, a 3/4 element sequence, or a mapping with r/g/b/a keys.
        """
        if isinstance(value, ShadowColor):
            return value

        if isinstance(value, str):
            if ',' in value:
                return cls.parse([float(c) for c in value.split(',')])
            return cls.from_hex(value)

        if isinstance(value, dict):
            return cls(
                r=float(value.get('r', 0.0)),
                g=float(value.get('g', 0.0)),
                b=float(value.get('b', 0.0)),
                a=float(value.get('a', 1.0)),
            )

        components = [float(c) for c in value]
        if len(components) == 3:
            components.append(1.0)
        if len(components) != 4:
            raise ValueError(f"Color needs 3 or 4 components, got {len(components)}")
        return cls(*components)


BLACK = ShadowColor(0.0, 0.0, 0.0, 1.0)
