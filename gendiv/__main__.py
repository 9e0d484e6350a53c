"""Entry point for ``python -m gendiv <command>``.

Commands:
    decide   – verdict for one troop identity
    sample   – verdict spread for one identity across context seeds
    config   – show effective settings and exclusion rules
"""
from gendiv.cli import main

if __name__ == "__main__":
    main()
