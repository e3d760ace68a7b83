#!/usr/bin/env python3
"""Stand-in for a chatty dev server. Try it from this directory:

    ldx python noisy_build.py
"""

import sys
import time

OUTPUT = [
    "DEBUG loading plugins",
    "webpack 5.90.0 compiling...",
    "warning: unused variable 'x'",
    "Compiled successfully in 1532ms",
    "Listening on localhost:3000",
]


def main() -> int:
    for line in OUTPUT:
        print(line)
        time.sleep(0.2)
    return 1 if "--fail" in sys.argv else 0


if __name__ == "__main__":
    sys.exit(main())
