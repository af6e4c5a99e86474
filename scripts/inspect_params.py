#!/usr/bin/env python3
"""Show how crunner would classify and encode parameters, without touching a chain."""

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from crunner.core.params import ParamType, encode_param
from crunner.exceptions import EncodingError


def main() -> None:
    """Print the inferred type and the encoded value of each argument."""
    params = sys.argv[1:]
    if not params:
        print("⚠️  No parameters given; pass them exactly as you would to --params")
        return

    failures = 0
    for raw in params:
        try:
            encoded = encode_param(raw)
        except EncodingError as exc:
            failures += 1
            print(f"❌ {raw!r}: {exc}")
            continue

        if encoded.param_type is ParamType.ADDRESS:
            shown = encoded.as_abi_arg()
        elif encoded.is_integer:
            shown = f"{encoded.value} (0x{encoded.value:x})"
        else:
            shown = repr(encoded.value)
        print(f"✅ {raw!r}: {encoded.param_type.value} -> {shown}")

    if failures:
        sys.exit(1)


if __name__ == "__main__":
    main()
