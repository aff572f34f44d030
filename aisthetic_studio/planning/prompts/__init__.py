# aisthetic_studio/planning/prompts/__init__.py
"""Prompt loading and prompt builders for planning and synthesis calls."""

from functools import lru_cache
from pathlib import Path

from aisthetic_studio.config.schema import BrandIdentity

IMAGE_STYLE_SUFFIX = (
    "elegant, cinematic, professional product photography, dramatic lighting, 8k, photorealistic"
)


@lru_cache(maxsize=None)
def _read_prompt(name: str) -> str:
    prompt_path = Path(__file__).parent / f"{name}.txt"
    if not prompt_path.exists():
        raise FileNotFoundError(f"Prompt not found: {prompt_path}")
    return prompt_path.read_text(encoding="utf-8").strip()


def load_prompt(name: str, **fields: object) -> str:
    """Load a system instruction by name and fill its {placeholders}.

    Args:
        name: Prompt filename without .txt extension (e.g. 'product_shots')
        **fields: Values for placeholders such as count or language

    Returns:
        Prompt content as string

    Raises:
        FileNotFoundError: If prompt file doesn't exist
    """
    template = _read_prompt(name)
    return template.format(**fields) if fields else template


def brand_context(brand: BrandIdentity | None) -> str:
    """Render brand settings as a prompt fragment ('' when nothing is configured)."""
    if brand is None or not brand.is_configured():
        return ""
    lines = ["Brand identity:"]
    if brand.voice:
        lines.append(f"- Tone of voice: {brand.voice}")
    lines.append(f"- Colors: primary {brand.primary_color}, secondary {brand.secondary_color}")
    fonts = ", ".join(font for font in (brand.primary_font, brand.secondary_font) if font)
    if fonts:
        lines.append(f"- Fonts: {fonts}")
    return "\n".join(lines)


def product_shot_prompt(prompt: str) -> str:
    return f"{prompt}, {IMAGE_STYLE_SUFFIX}"


def ad_creative_prompt(prompt: str, headline: str, description: str) -> str:
    return (
        f"{prompt}. The headline text to add is: \"{headline}\". "
        f"A key phrase from the description to add is: \"{description}\". "
        "Ensure the text is clearly visible and beautifully integrated."
    )


def upscale_prompt(original_prompt: str) -> str:
    """Instruction for an in-place fidelity upgrade of an existing result."""
    return (
        "Upscale this image to high definition. Increase resolution, sharpness and fine detail "
        "while preserving the exact composition, subject, colors, lighting and any text. "
        "Do not add, remove or move anything. "
        f"Original creative direction for context: {original_prompt}"
    )


def virtual_try_on_prompt() -> str:
    return (
        "Using the provided product photo and model photo, create a new photorealistic image "
        "in which the model is wearing or using the product. Make it high quality and make it "
        "look like a professional photo shoot. Preserve the model's appearance and the product's details."
    )


def fashion_pose_prompt(pose: str) -> str:
    return (
        "Based on the provided model image, generate a new image of the model performing the "
        f"following fashion pose: '{pose}'. Do not change the clothing, background or any props. "
        "Only change the model's pose."
    )


def background_change_prompt(background: str) -> str:
    return (
        "Carefully analyze the provided image to identify the main subject. Do not change the "
        "subject. Replace the original background with a new one based on this description: "
        f"'{background}'. The final image should be photorealistic and seamlessly blended."
    )


__all__ = [
    "load_prompt",
    "brand_context",
    "product_shot_prompt",
    "ad_creative_prompt",
    "upscale_prompt",
    "virtual_try_on_prompt",
    "fashion_pose_prompt",
    "background_change_prompt",
    "IMAGE_STYLE_SUFFIX",
]
