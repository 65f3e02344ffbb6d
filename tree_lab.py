"""Command line harness for the Tree Lab exercises.

Running the script without arguments prints every laboratory problem stage by
stage: a header, the level-order ASCII rendering produced by
``treelab.tree_node.render_tree`` and the in-order traversal. Custom sequences
can be explored with ``--values`` (optionally ``--balanced`` and ``--delete``).
"""

from __future__ import annotations

import argparse
import logging
from typing import Iterable, Iterator, List, Optional, Sequence

from treelab import (
    PROBLEMS,
    TreeStep,
    build_balanced,
    build_bst,
    compute_steps,
    delete_value,
    get_problem,
    in_order,
    render_tree,
)

logger = logging.getLogger(__name__)


def _parse_ints(raw: str) -> List[int]:
    try:
        return [int(item) for item in raw.split(",") if item.strip()]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected comma separated integers: {raw!r}") from exc


def _format_step(title: str, step: TreeStep) -> List[str]:
    """Return formatted output lines for *step*."""

    traversal = ", ".join(str(value) for value in in_order(step.root))
    return [
        f"{title} - {step.label}",
        render_tree(step.root),
        f"In-order: [{traversal}]",
    ]


def _custom_steps(
    values: Sequence[int], deletions: Iterable[int], balanced: bool
) -> Iterator[TreeStep]:
    """Yield each stage of a custom build.

    Deletions mutate the tree in place, so every step must be consumed before
    the generator is resumed.
    """

    if balanced:
        root = build_balanced(values)
        yield TreeStep("Balanced Tree", root)
    else:
        root = build_bst(values)
        yield TreeStep("Initial BST", root)
    for value in deletions:
        root = delete_value(root, value)
        yield TreeStep(f"After deleting {value}", root)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Print the requested tree stages."""

    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--problem",
        choices=[problem.id for problem in PROBLEMS],
        default=None,
        help="Only print the selected laboratory problem.",
    )
    parser.add_argument(
        "--values",
        type=_parse_ints,
        default=None,
        help="Comma separated integers to build a custom tree from.",
    )
    parser.add_argument(
        "--delete",
        type=_parse_ints,
        default=[],
        help="Comma separated values to delete from the custom tree in order.",
    )
    parser.add_argument(
        "--balanced",
        action="store_true",
        help="Build the custom tree with the balanced builder instead of BST insertion.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        help="Logging verbosity for diagnostic output.",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    if args.values is not None and args.problem is not None:
        parser.error("--values cannot be combined with --problem")
    if args.delete and args.values is None:
        parser.error("--delete requires --values")

    if args.values is not None:
        sections = [("Custom", _custom_steps(args.values, args.delete, args.balanced))]
    else:
        problems = [get_problem(args.problem)] if args.problem else list(PROBLEMS)
        sections = [(problem.title, compute_steps(problem)) for problem in problems]

    for title, steps in sections:
        for step in steps:
            for line in _format_step(title, step):
                print(line)
            print()  # Spacer between stages
    logger.info("Printed %d section(s)", len(sections))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
