"""``gendiv sample`` — how often one identity flips across context seeds."""
from __future__ import annotations

from gender_diversity.core.decision import decide
from gender_diversity.core.seeding import generate_seed
from gendiv.commands.common import (
    add_decision_options,
    descriptor_from_args,
    rules_from_args,
    settings_from_args,
)


def register(subparsers) -> None:
    p = subparsers.add_parser("sample", help="Verdict spread across context seeds 1..N")
    add_decision_options(p)
    p.add_argument("--count", type=int, default=100, help="Number of context seeds to try")
    p.set_defaults(func=run)


def run(args) -> int:
    if args.count <= 0:
        print("ERROR: --count must be positive")
        return 1
    try:
        settings = settings_from_args(args)
    except ValueError as e:
        print(f"ERROR: {e}")
        return 1
    rules = rules_from_args(args)
    if rules is None:
        return 1

    descriptor = descriptor_from_args(args)
    female = sum(
        1
        for context in range(1, args.count + 1)
        if decide(descriptor, generate_seed(descriptor.identity, context), settings, rules)
    )
    share = 100.0 * female / args.count
    print(f"{descriptor.identity}: {female}/{args.count} female ({share:.1f}%, "
          f"configured {settings.female_percentage}%)")
    return 0
