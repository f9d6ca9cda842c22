"""
Prompt composition for thumbnail generation.

Style and color-scheme descriptions live in read-only tables keyed by enum,
so an unknown key is rejected up front instead of leaking ``None`` into the
prompt text.
"""

from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

from thumbnail_api.errors import InvalidAspectRatio, InvalidColorScheme, InvalidStyle


class ThumbnailStyle(str, Enum):
    BOLD_GRAPHIC = "Bold & Graphic"
    TECH_FUTURISTIC = "Tech/Futuristic"
    MINIMALIST = "Minimalist"
    PHOTOREALISTIC = "Photorealistic"
    ILLUSTRATED = "Illustrated"


class ColorScheme(str, Enum):
    VIBRANT = "vibrant"
    SUNSET = "sunset"
    FOREST = "forest"
    NEON = "neon"
    PURPLE = "purple"
    MONOCHROME = "monochrome"
    OCEAN = "ocean"
    PASTEL = "pastel"


class AspectRatio(str, Enum):
    LANDSCAPE = "16:9"
    SQUARE = "1:1"
    PORTRAIT = "9:16"


STYLE_DESCRIPTIONS: Mapping[ThumbnailStyle, str] = MappingProxyType({
    ThumbnailStyle.BOLD_GRAPHIC: (
        "eye catching thumbnail, bold typography, vibrant colors, expressive facial reaction, "
        "dramatic lighting, high contrast, click-worthy composition, professional style"
    ),
    ThumbnailStyle.TECH_FUTURISTIC: (
        "futuristic thumbnail, sleek modern design, digital UI elements, glowing accents, "
        "holographic effects, cyber-tech aesthetic, sharp lighting, high-tech atmosphere"
    ),
    ThumbnailStyle.MINIMALIST: (
        "minimalist thumbnail, clean layout, simple shapes, limited color palette, "
        "plenty of negative space, modern flat design, clear focal point"
    ),
    ThumbnailStyle.PHOTOREALISTIC: (
        "photorealistic thumbnail, ultra-realistic lighting, natural skin tones, candid moment, "
        "DSLR-style photography, lifestyle realism, shallow depth of field"
    ),
    ThumbnailStyle.ILLUSTRATED: (
        "illustrated thumbnail, custom digital illustration, stylized characters, bold outlines, "
        "vibrant colors, creative cartoon or vector art style"
    ),
})

COLOR_SCHEME_DESCRIPTIONS: Mapping[ColorScheme, str] = MappingProxyType({
    ColorScheme.VIBRANT: "vibrant and energetic colors, high saturation, bold contrasts, eye-catching palette",
    ColorScheme.SUNSET: "warm sunset tones, orange pink and purple hues, soft gradients, cinematic glow",
    ColorScheme.FOREST: "natural green tones, earthy colors, calm and organic palette, fresh atmosphere",
    ColorScheme.NEON: "neon glow effects, electric blues and pinks, cyberpunk lighting, high contrast glow",
    ColorScheme.PURPLE: "purple-dominant color palette, magenta and violet tones, modern and stylish mood",
    ColorScheme.MONOCHROME: "black and white color scheme, high contrast, dramatic lighting, timeless aesthetic",
    ColorScheme.OCEAN: "cool blue and teal tones, aquatic color palette, fresh and clean atmosphere",
    ColorScheme.PASTEL: "soft pastel colors, low saturation, gentle tones, calm and friendly aesthetic",
})

QUALITY_DIRECTIVE = "Make it bold, professional, high contrast, and designed to maximize click-through rate."


def parse_style(value) -> ThumbnailStyle:
    try:
        return ThumbnailStyle(value)
    except ValueError:
        raise InvalidStyle(value) from None


def parse_color_scheme(value) -> Optional[ColorScheme]:
    if not value:
        return None
    try:
        return ColorScheme(value)
    except ValueError:
        raise InvalidColorScheme(value) from None


def parse_aspect_ratio(value) -> AspectRatio:
    try:
        return AspectRatio(value)
    except ValueError:
        raise InvalidAspectRatio(value) from None


def compose_prompt(
    title: str,
    style,
    aspect_ratio,
    color_scheme=None,
    user_prompt: Optional[str] = None,
    styles: Mapping[ThumbnailStyle, str] = STYLE_DESCRIPTIONS,
    color_schemes: Mapping[ColorScheme, str] = COLOR_SCHEME_DESCRIPTIONS,
) -> str:
    """
    Build the natural-language generation prompt.

    Raises InvalidStyle, InvalidColorScheme or InvalidAspectRatio when a key is
    not one of the known values or has no entry in the lookup tables.
    """
    style_key = parse_style(style)
    color_key = parse_color_scheme(color_scheme)
    ratio = parse_aspect_ratio(aspect_ratio)

    if style_key not in styles:
        raise InvalidStyle(style)
    prompt = f'Create a {styles[style_key]} thumbnail for "{title}". '

    if color_key is not None:
        if color_key not in color_schemes:
            raise InvalidColorScheme(color_scheme)
        prompt += f"Use a {color_schemes[color_key]} color scheme. "

    if user_prompt and user_prompt.strip():
        prompt += f"Additional details: {user_prompt.strip()}. "

    prompt += f"Aspect ratio {ratio.value}. {QUALITY_DIRECTIVE}"
    return prompt
