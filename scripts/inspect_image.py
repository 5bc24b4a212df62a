#!/usr/bin/env python
"""Print the header dimensions of an image and the sample size used to preview it."""
from __future__ import annotations

import argparse
from pathlib import Path

from wheatscan.models import content_type_for
from wheatscan.services.image_scaler import (
    DEFAULT_MAX_DIM,
    ImageDecodeError,
    calculate_in_sample_size,
    probe_dimensions,
)


def main() -> None:
    parser = argparse.ArgumentParser(description="Inspect an image the way the client would")
    parser.add_argument("path", type=Path)
    parser.add_argument("--max-dim", type=int, default=DEFAULT_MAX_DIM)
    args = parser.parse_args()

    try:
        width, height = probe_dimensions(args.path)
    except ImageDecodeError as exc:
        parser.exit(1, f"{exc}\n")

    sample = calculate_in_sample_size(width, height, args.max_dim, args.max_dim)
    print(f"File:         {args.path}")
    print(f"Content type: {content_type_for(args.path)}")
    print(f"Dimensions:   {width}x{height}")
    print(f"Sample size:  {sample} -> {-(-width // sample)}x{-(-height // sample)}")


if __name__ == "__main__":
    main()
