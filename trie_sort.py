#!/usr/bin/env python3
"""Sort the lines of a file (or stdin) by inserting them into a ByteTrie.

Lines are handled as raw bytes, so any encoding sorts byte-for-byte.
Duplicate lines collapse to one; with --count each key is prefixed by the
number of times it occurred.
"""

import argparse
import logging
import sys

from tries import ByteTrie

logger = logging.getLogger("trie-sort")


def load_lines(trie, stream, count=False):
    """Insert every line of the binary `stream` into `trie`; return lines read."""
    n = 0
    for line in stream:
        key = line.rstrip(b"\n")
        if key.endswith(b"\r"):
            key = key[:-1]
        if count:
            seen, found = trie.find(key)
            trie.insert(key, seen + 1 if found else 1)
        else:
            trie.insert(key)
        n += 1
    return n


def write_sorted(trie, out, count=False):
    """Write the trie's keys to the binary stream `out`, one per line."""
    n = 0
    while trie.scan():
        if count:
            key, seen = trie.current_pair()
            out.write(b"%d\t%s\n" % (seen, key))
        else:
            out.write(trie.current_key() + b"\n")
        n += 1
    return n


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument('input', nargs='?', default=None,
                        help='file to sort (default or "-": stdin)')
    parser.add_argument('-c', '--count', action='store_true',
                        help='prefix each line with its number of occurrences')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='turn on debug logging')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(asctime)s [%(levelname)s] %(message)s")

    trie = ByteTrie()
    try:
        if args.input in (None, '-'):
            read = load_lines(trie, sys.stdin.buffer, count=args.count)
        else:
            with open(args.input, 'rb') as f:
                read = load_lines(trie, f, count=args.count)
        logger.info("read %d lines, %d distinct", read, len(trie))
        written = write_sorted(trie, sys.stdout.buffer, count=args.count)
        sys.stdout.buffer.flush()
    except OSError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    logger.debug("wrote %d lines", written)
    return 0


if __name__ == '__main__':
    sys.exit(main())
