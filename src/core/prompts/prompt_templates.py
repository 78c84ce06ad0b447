"""Prompt templates for the face swap request.

The main template uses {placeholder} syntax for string formatting.
"""

# =============================================================================
# Face Swap Template
# =============================================================================

FACE_SWAP_PROMPT = """\
Perform a high-quality, realistic face swap.

Inputs:
1. Source Face: The face to be used (features, eyes, nose, mouth, skin texture).
2. Target Body: The recipient body/head (head shape, hair, pose, lighting, background).

Instructions:
- Replace the face in the Target Body image with the face from Source Face.
- {scale_instruction}
- {tone_instruction}
- {lighting_instruction}
- Preserve the expression of the Source Face if possible, adapted to the Target's angle.
- Output a photorealistic image.\
"""

ADDITIONAL_INSTRUCTION_PREFIX = "Additional User Instruction: "

# =============================================================================
# Face Scale Clauses
# =============================================================================

SCALE_DEFAULT = (
    "Ensure perfect anatomical proportions. "
    "The size of the face features must match the skull size of the Target Body."
)
SCALE_SMALLER = (
    "Reduce the scale of the facial features (eyes, nose, mouth) slightly "
    "(approx 90%) relative to the head size. "
    "Ensure the face does not look too large for the skull."
)
SCALE_LARGER = (
    "Increase the scale of the facial features slightly (approx 110%) "
    "to fill the face area more fully. Ensure the face does not look too small."
)

# =============================================================================
# Skin Tone Clauses
# =============================================================================

TONE_MATCH_TARGET = (
    "Critically important: Maintain the lighting, shadows, and skin tone "
    "of the Target Body to ensure a seamless blend."
)
TONE_PRESERVE_SOURCE = (
    "Preserve the original skin tone and texture of the Source Face as much as "
    "possible, while blending the edges naturally into the Target Body."
)
TONE_LIGHTER = (
    "Adjust the generated face skin tone to be lighter/brighter than the target, "
    "giving it a high-key look."
)
TONE_DARKER = (
    "Adjust the generated face skin tone to be darker/richer than the target, "
    "giving it a deep tone."
)

# =============================================================================
# Lighting Clauses
# =============================================================================

LIGHTING_NATURAL = (
    "Ensure the lighting direction on the face matches the Target Body exactly."
)
LIGHTING_WARM = (
    "Apply a warm, golden color temperature to the face, "
    "simulating sunset or indoor warm lighting."
)
LIGHTING_COOL = (
    "Apply a cool, bluish color temperature to the face, "
    "simulating fluorescent or night lighting."
)
LIGHTING_HIGH_CONTRAST = (
    "Increase the contrast on the face for a dramatic, cinematic look."
)
