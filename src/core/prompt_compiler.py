"""Compile generation options into the natural-language face swap prompt."""

from __future__ import annotations

from core.prompts.prompt_templates import (
    ADDITIONAL_INSTRUCTION_PREFIX,
    FACE_SWAP_PROMPT,
    LIGHTING_COOL,
    LIGHTING_HIGH_CONTRAST,
    LIGHTING_NATURAL,
    LIGHTING_WARM,
    SCALE_DEFAULT,
    SCALE_LARGER,
    SCALE_SMALLER,
    TONE_DARKER,
    TONE_LIGHTER,
    TONE_MATCH_TARGET,
    TONE_PRESERVE_SOURCE,
)
from core.schemas import FaceScale, GenerationOptions, LightingMode, SkinTone

SCALE_INSTRUCTIONS = {
    FaceScale.DEFAULT: SCALE_DEFAULT,
    FaceScale.SMALLER: SCALE_SMALLER,
    FaceScale.LARGER: SCALE_LARGER,
}

TONE_INSTRUCTIONS = {
    SkinTone.MATCH_TARGET: TONE_MATCH_TARGET,
    SkinTone.PRESERVE_SOURCE: TONE_PRESERVE_SOURCE,
    SkinTone.LIGHTER: TONE_LIGHTER,
    SkinTone.DARKER: TONE_DARKER,
}

LIGHTING_INSTRUCTIONS = {
    LightingMode.NATURAL: LIGHTING_NATURAL,
    LightingMode.WARM: LIGHTING_WARM,
    LightingMode.COOL: LIGHTING_COOL,
    LightingMode.HIGH_CONTRAST: LIGHTING_HIGH_CONTRAST,
}

# Alternate spellings of the high-contrast lighting mode.
LIGHTING_ALIASES = {
    "high_contrast": LightingMode.HIGH_CONTRAST,
    "high-contrast": LightingMode.HIGH_CONTRAST,
}


def scale_instruction(mode: str) -> str:
    try:
        scale = FaceScale(mode)
    except ValueError:
        scale = FaceScale.DEFAULT
    return SCALE_INSTRUCTIONS[scale]


def tone_instruction(mode: str) -> str:
    try:
        tone = SkinTone(mode)
    except ValueError:
        tone = SkinTone.MATCH_TARGET
    return TONE_INSTRUCTIONS[tone]


def lighting_instruction(mode: str) -> str:
    try:
        lighting = LightingMode(mode)
    except ValueError:
        lighting = LIGHTING_ALIASES.get(mode, LightingMode.NATURAL)
    return LIGHTING_INSTRUCTIONS[lighting]


def compile_prompt(options: GenerationOptions) -> str:
    """Build the instruction block sent alongside the two images.

    Each modal option selects exactly one clause by exact match; unknown values
    select that family's default clause. The free-text instruction is appended
    verbatim as the last clause when it is not blank.

    Args:
        options: The user's generation options

    Returns:
        The complete prompt text
    """
    prompt = FACE_SWAP_PROMPT.format(
        scale_instruction=scale_instruction(options.face_scale),
        tone_instruction=tone_instruction(options.skin_tone),
        lighting_instruction=lighting_instruction(options.lighting_mode),
    )

    if options.instructions.strip():
        prompt += "\n\n" + ADDITIONAL_INSTRUCTION_PREFIX + options.instructions

    return prompt
