#!/usr/bin/env python3
"""Command-line face swap for Face Swap Studio."""

import argparse
import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

from backend.image_handler import ImageValidationError, image_handler
from core.config import DEFAULT_OUTPUT_DIR, configure_logging, get_api_key_env_var
from core.exceptions import GenerationError, MissingCredentialError, describe_fault
from core.generator import FaceSwapGenerator
from core.images import decode_data_uri, download_filename
from core.schemas import (
    AspectRatio,
    FaceScale,
    GenerationOptions,
    ImageSize,
    LightingMode,
    SkinTone,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Swap the face from one photo onto the body in another using Gemini"
    )
    parser.add_argument("source", type=str, help="Image supplying the face")
    parser.add_argument("target", type=str, help="Image supplying the body and scene")
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default=None,
        help="Output path for the PNG (default: output/gemini-faceswap-<timestamp>.png)",
    )
    parser.add_argument(
        "--aspect-ratio",
        choices=[r.value for r in AspectRatio],
        default=AspectRatio.SQUARE.value,
    )
    parser.add_argument(
        "--image-size",
        choices=[s.value for s in ImageSize],
        default=ImageSize.SIZE_2K.value,
    )
    parser.add_argument(
        "--skin-tone",
        choices=[t.value for t in SkinTone],
        default=SkinTone.MATCH_TARGET.value,
    )
    parser.add_argument(
        "--lighting",
        choices=[m.value for m in LightingMode],
        default=LightingMode.NATURAL.value,
    )
    parser.add_argument(
        "--face-scale",
        choices=[s.value for s in FaceScale],
        default=FaceScale.DEFAULT.value,
    )
    parser.add_argument(
        "--prompt", "-p", type=str, default="", help="Additional instruction for the model"
    )
    parser.add_argument(
        "--api-key",
        type=str,
        default=None,
        help="Gemini API key (default: GEMINI_API_KEY from the environment)",
    )
    return parser


def main():
    """Main entry point for face swap generation."""
    load_dotenv()
    configure_logging()

    args = build_parser().parse_args()

    options = GenerationOptions(
        aspect_ratio=args.aspect_ratio,
        image_size=args.image_size,
        skin_tone=args.skin_tone,
        lighting_mode=args.lighting,
        face_scale=args.face_scale,
        instructions=args.prompt,
    )

    print(f"Swapping face from {args.source} onto {args.target}")
    print()

    try:
        source, target = asyncio.run(image_handler.load_pair(args.source, args.target))
    except (OSError, ImageValidationError) as e:
        print(f"Error reading images: {e}", file=sys.stderr)
        sys.exit(1)

    print("Generating face swap...")
    try:
        image_url = FaceSwapGenerator().generate(source, target, options, args.api_key)
    except MissingCredentialError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(f"Pass --api-key or set {get_api_key_env_var()}.", file=sys.stderr)
        sys.exit(1)
    except GenerationError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        message, needs_credential = describe_fault(e)
        print(f"Error: {message}", file=sys.stderr)
        if needs_credential:
            print(f"Original error: {e}", file=sys.stderr)
        sys.exit(1)

    output_path = Path(args.output) if args.output else DEFAULT_OUTPUT_DIR / download_filename()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    image_bytes, _ = decode_data_uri(image_url)
    output_path.write_bytes(image_bytes)

    print()
    print(f"Success! Image saved to: {output_path.resolve()}")


if __name__ == "__main__":
    main()
