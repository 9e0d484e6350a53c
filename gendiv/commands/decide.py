"""``gendiv decide`` — verdict for one troop identity."""
from __future__ import annotations

from gender_diversity.core.decision import classify, decide
from gender_diversity.core.seeding import generate_seed
from gendiv.commands.common import (
    add_decision_options,
    descriptor_from_args,
    rules_from_args,
    settings_from_args,
)


def register(subparsers) -> None:
    p = subparsers.add_parser("decide", help="Show whether a troop would display as female")
    add_decision_options(p)
    p.add_argument("--seed", type=int, default=None, help="Explicit seed (skips identity mixing)")
    p.add_argument("--context", type=int, default=0, help="Context value mixed into the seed")
    p.set_defaults(func=run)


def run(args) -> int:
    try:
        settings = settings_from_args(args)
    except ValueError as e:
        print(f"ERROR: {e}")
        return 1
    rules = rules_from_args(args)
    if rules is None:
        return 1

    descriptor = descriptor_from_args(args)
    seed = args.seed if args.seed is not None else generate_seed(descriptor.identity, args.context)
    verdict = decide(descriptor, seed, settings, rules)

    print(f"identity:   {descriptor.identity}")
    print(f"category:   {classify(descriptor.identity, rules).value}")
    print(f"seed:       {seed}")
    print(f"settings:   enabled={settings.enabled} lore_friendly={settings.lore_friendly} "
          f"female_percentage={settings.female_percentage}")
    print(f"verdict:    {'female' if verdict else 'unchanged'}")
    return 0
