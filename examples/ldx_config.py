"""Example ldx_config.py. Copy it to the root of your project and edit RULES.

Rules are checked top to bottom and the first pattern contained in a line
wins. Lines that match no rule are hidden.
"""

import re

_PORT = re.compile(r"localhost:(\d+)")


def _server_url(line):
    match = _PORT.search(line)
    if match is None:
        raise ValueError(f"no port in {line!r}")
    return f"🚀 Dev server on http://localhost:{match.group(1)}"


RULES = {
    "Compiled successfully": "✅ Compiled",
    "Failed to compile": "❌ Build failed",
    "localhost:": _server_url,
    "warning": lambda line: f"⚠️  {line.strip()}",
    "DEBUG": "",  # matched and suppressed
}
