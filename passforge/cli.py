"""passforge command-line interface.

Usage examples:
    python -m passforge generate -n 20 -c 5
    python -m passforge generate --pattern 2u3l2n1s
    python -m passforge check mypassword -f passwords.txt
    python -m passforge vault save "Mail" 'S3cure!Passw0rd' --category personal
"""

import argparse
import json
import logging
import sys

from passforge.analyzer import analyze, check_compromised
from passforge.config import PassforgeConfig
from passforge.errors import MalformedPatternError, RangeError, ValidationError
from passforge.generator import (
    GenerationOptions,
    generate,
    generate_memorable,
    generate_pattern,
    generate_pin,
    generate_with_custom_set,
    generate_with_separators,
)
from passforge.log import setup_logging
from passforge.vault import Vault

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="passforge",
        description="Generate passwords and analyse their strength.",
    )
    parser.add_argument("--config", help="Path to a TOML configuration file")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging",
    )
    sub = parser.add_subparsers(dest="command")

    # ── generate ───────────────────────────────────────────────────────
    gen_p = sub.add_parser("generate", help="Generate passwords")
    gen_p.add_argument(
        "-n", "--length", type=int, default=None,
        help="Password length (default: from config, 12)",
    )
    gen_p.add_argument("--no-uppercase", action="store_true")
    gen_p.add_argument("--no-lowercase", action="store_true")
    gen_p.add_argument("--no-numbers", action="store_true")
    gen_p.add_argument("--no-symbols", action="store_true")
    gen_p.add_argument(
        "-c", "--count", type=int, default=1,
        help="Number of passwords to generate (default: 1)",
    )
    mode = gen_p.add_mutually_exclusive_group()
    mode.add_argument("--pattern", help="Pattern such as 2u3l2n1s")
    mode.add_argument("--pin", action="store_true", help="Numeric PIN of --length digits")
    mode.add_argument("--charset", help="Draw only from these characters")
    mode.add_argument("--memorable", action="store_true", help="Pronounceable password")
    mode.add_argument("--separator", help="Split into groups of four joined by this")

    # ── check ──────────────────────────────────────────────────────────
    check_p = sub.add_parser("check", help="Analyse password strength")
    check_p.add_argument("passwords", nargs="*", help="Passwords to analyse")
    check_p.add_argument(
        "-f", "--file",
        help="Read passwords from a file (one per line)",
    )

    # ── vault ──────────────────────────────────────────────────────────
    vault_p = sub.add_parser("vault", help="Manage saved passwords")
    vault_sub = vault_p.add_subparsers(dest="vault_command")

    save_p = vault_sub.add_parser("save", help="Save a password")
    save_p.add_argument("name")
    save_p.add_argument("password")
    save_p.add_argument("--category")
    save_p.add_argument("--notes")

    list_p = vault_sub.add_parser("list", help="List saved passwords")
    list_p.add_argument("--category")
    list_p.add_argument("--search")
    list_p.add_argument("--show", action="store_true", help="Print passwords unmasked")

    delete_p = vault_sub.add_parser("delete", help="Delete a saved password")
    delete_p.add_argument("id")

    export_p = vault_sub.add_parser("export", help="Export the vault as JSON")
    export_p.add_argument("file")

    import_p = vault_sub.add_parser("import", help="Replace the vault from a JSON export")
    import_p.add_argument("file")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        config = PassforgeConfig.load(args.config)
    except (FileNotFoundError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    setup_logging("DEBUG" if args.verbose else config.log_level)

    try:
        if args.command == "generate":
            return _cmd_generate(args, config)
        if args.command == "check":
            return _cmd_check(args, config)
        if args.command == "vault" and args.vault_command:
            return _cmd_vault(args, config)
    except (ValidationError, MalformedPatternError, RangeError, json.JSONDecodeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    parser.print_help()
    return 0


def _cmd_generate(args: argparse.Namespace, config: PassforgeConfig) -> int:
    gen = config.generation
    length = args.length if args.length is not None else gen.default_length
    options = GenerationOptions(
        length=length,
        include_uppercase=not args.no_uppercase,
        include_lowercase=not args.no_lowercase,
        include_numbers=not args.no_numbers,
        include_symbols=not args.no_symbols,
    )

    for _ in range(args.count):
        if args.pattern:
            pwd = generate_pattern(args.pattern, gen)
        elif args.pin:
            pwd = generate_pin(length)
        elif args.charset:
            pwd = generate_with_custom_set(length, args.charset)
        elif args.memorable:
            pwd = generate_memorable(length, gen)
        elif args.separator:
            pwd = generate_with_separators(options, args.separator, gen)
        else:
            pwd = generate(options, gen)
        report = analyze(pwd, config.analysis)
        print(f"  {pwd}  ({report.tier.label}, {report.entropy_bits} bits)")

    return 0


def _cmd_check(args: argparse.Namespace, config: PassforgeConfig) -> int:
    passwords = list(args.passwords)

    if args.file:
        with open(args.file) as f:
            passwords.extend(line.strip() for line in f if line.strip())

    if not passwords:
        print("Error: provide passwords as arguments or via --file", file=sys.stderr)
        return 1

    compromised = False
    for pwd in passwords:
        report = analyze(pwd, config.analysis)
        filled = report.score // 20
        bar = "#" * filled + "-" * (5 - filled)
        print(f"  '{pwd}'")
        print(f"            Strength: [{bar}] {report.tier.label} ({report.score}/100)")
        print(f"            Entropy:  {report.entropy_bits} bits, cracked in {report.crack_time}")
        if check_compromised(pwd)["compromised"]:
            print("            COMMON    this password is on the common-password list")
            compromised = True
        for rec in report.recommendations:
            print(f"            ! {rec}")

    return 1 if compromised else 0


def _cmd_vault(args: argparse.Namespace, config: PassforgeConfig) -> int:
    vault = Vault(config.vault, config.generation)
    logger.debug("Using vault at %s", vault.path)

    if args.vault_command == "save":
        entry = vault.save_password(
            args.name, args.password, category=args.category, notes=args.notes,
        )
        print(f"  Saved '{entry.name}' ({entry.id})")
        return 0

    if args.vault_command == "list":
        entries = vault.list_passwords(category=args.category, query=args.search)
        if not entries:
            print("  No saved passwords")
        for entry in entries:
            shown = entry.password if args.show else "*" * len(entry.password)
            category = f" [{entry.category}]" if entry.category else ""
            print(f"  {entry.id}  {entry.name}{category}  {shown}")
        return 0

    if args.vault_command == "delete":
        try:
            vault.delete_password(args.id)
        except KeyError as exc:
            print(f"Error: {exc.args[0]}", file=sys.stderr)
            return 1
        print(f"  Deleted {args.id}")
        return 0

    if args.vault_command == "export":
        with open(args.file, "w", encoding="utf-8") as f:
            json.dump(vault.export_data(), f, indent=2, ensure_ascii=False)
        print(f"  Exported to {args.file}")
        return 0

    if args.vault_command == "import":
        with open(args.file, encoding="utf-8") as f:
            vault.import_data(json.load(f))
        print(f"  Imported {len(vault.list_passwords())} password(s) from {args.file}")
        return 0

    return 0


if __name__ == "__main__":
    sys.exit(main())
