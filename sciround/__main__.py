# coding: utf-8

"""
Command line interface, e.g.

.. code-block:: bash

    > python -m sciround 27.432 2.134 0.125 -t
    27.4 ± 2.1 ± 0.1

    > python -m sciround 27.462 +0.3134 -0.292 0.0124 -c -X -L "(stat),(theo)"
    27.46 \\,^{+0.31} _{-0.29} \\text{(stat)} \\pm 0.01 \\text{(theo)}
"""

from __future__ import annotations

import sys
import argparse
import warnings

import sciround as sr


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sciround",
        description="round and format a central value with uncertainties",
    )

    parser.add_argument(
        "values",
        nargs="+",
        help="central value followed by uncertainties, a leading '+' or '-' marks the upper or "
        "lower half of an asymmetric pair",
    )

    # flags that map to options, stored in order of appearance
    flag_help = [
        ("c", "two digit rounding with the precision of the total error"),
        ("e", "use the precision of the total error"),
        ("l", "use the precision of the larger error"),
        ("w", "alias for -l"),
        ("p", "PDG rounding"),
        ("s", "symmetrize near-equal asymmetric errors"),
        ("t", "two digit rounding"),
        ("D", "use the alternate multiplication symbol"),
        ("F", "factorize powers of ten"),
        ("G", "gnuplot output"),
        ("T", "typst output"),
        ("U", "do not use utf-8 symbols"),
        ("X", "tex output"),
    ]
    for flag, descr in flag_help:
        parser.add_argument(
            "-" + flag,
            dest="flags",
            action="append_const",
            const="l" if flag == "w" else flag,
            help=descr,
        )

    parser.add_argument(
        "-L",
        dest="labels",
        metavar="LABELS",
        help="comma-separated labels, one per symmetric error or asymmetric pair",
    )
    parser.add_argument(
        "-N",
        dest="no_newline",
        action="store_true",
        help="do not print a trailing newline",
    )

    return parser


def parse_labels(labels: str | None) -> list[str] | None:
    if labels is None:
        return None
    return [label.strip() for label in labels.split(",") if label.strip()]


def main(argv: list[str] | None = None) -> int:
    parser = create_parser()
    args, unknown = parser.parse_known_intermixed_args(argv)

    for arg in unknown:
        warnings.warn(f"unknown flag '{arg}'", sr.RoundingWarning)

    try:
        options = sr.FormatOptions.from_flags(
            "".join(args.flags or []),
            labels=parse_labels(args.labels),
        )
        text = sr.format(args.values[0], args.values[1:], options)
    except sr.RoundingError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(text, end="" if args.no_newline else "\n")

    return 0


if __name__ == "__main__":
    sys.exit(main())
