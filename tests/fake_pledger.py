"""Stand-in for the pledger binary used by the collector tests.

Invoked as `fake_pledger.py --json --date PERIOD DIRECTORY`; prints the
contents of DIRECTORY/PERIOD, which the tests fill with ready-made JSON.
A file starting with "FAIL" makes it exit 1 like pledger does.
"""
import sys
from pathlib import Path


def main(argv):
    if len(argv) != 4 or argv[0] != "--json" or argv[1] != "--date":
        print(f"Fatal: unexpected arguments: {argv}", file=sys.stderr)
        return 2

    period, directory = argv[2], argv[3]
    content = (Path(directory) / period).read_text(encoding="utf-8")
    if content.startswith("FAIL"):
        print(f"Fatal: {content[4:].strip()}", file=sys.stderr)
        return 1

    sys.stdout.write(content)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
