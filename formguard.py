#!/usr/bin/env python3
"""
formguard.py — CLI narzędzie FormGuard.

Działa całkowicie lokalnie, bez serwera API. Schemat i wartości czytane są
z plików JSON; locale z katalogu locales/ (FORM_GUARD_LOCALE_DIR).

Podkomendy:
    validate — waliduj wartości względem schematu
    locales  — listuj zarejestrowane locale
    messages — pokaż szablony komunikatów locale
    rules    — listuj wbudowane reguły

Użycie:
    python formguard.py validate --schema schema.json --values values.json
    python formguard.py validate --schema schema.json --values values.json --locale pl --sync
    python formguard.py validate --schema schema.json --values values.json --files files.json
    python formguard.py locales
    python formguard.py messages --locale de
    python formguard.py rules

Kod wyjścia validate: 0 = poprawne, 1 = błędy walidacji, 2 = błąd konfiguracji.
"""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

from rich import box
from rich.console import Console
from rich.table import Table


# -- helpers ---------------------------------------------------------------

_CONSOLE: Console | None = None


def _console() -> Console:
    global _CONSOLE
    if _CONSOLE is None:
        _CONSOLE = Console(highlight=False)
    return _CONSOLE


def _safe_terminal_text(value: Any) -> str:
    s = str(value)
    encoding = sys.stdout.encoding or "utf-8"
    try:
        s.encode(encoding)
        return s
    except UnicodeEncodeError:
        return s.encode(encoding, errors="replace").decode(encoding, errors="replace")


def _short(value: Any, limit: int = 64) -> str:
    s = _safe_terminal_text(value).replace("\n", " ").strip()
    if len(s) <= limit:
        return s
    return s[: limit - 3] + "..."


def _read_json(path: str, what: str) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, json.JSONDecodeError) as exc:
        print(f"Błąd odczytu pliku ({what}): {exc}", file=sys.stderr)
        sys.exit(2)
    if not isinstance(data, dict):
        print(f"Błąd: plik {path} ({what}) musi zawierać obiekt JSON.", file=sys.stderr)
        sys.exit(2)
    return data


def _print_errors_table(result: Any) -> None:
    table = Table(
        title=f"Errors [{sum(len(v) for v in result.errors.values())}]",
        box=box.ASCII,
        show_lines=False,
    )
    table.add_column("Field", no_wrap=True, style="bold cyan")
    table.add_column("Rule", no_wrap=True)
    table.add_column("Message")
    for field_name, entries in result.errors.items():
        for entry in entries:
            table.add_row(
                _safe_terminal_text(field_name),
                _safe_terminal_text(entry.rule),
                _short(entry.message, 96),
            )
    _console().print(table)


def _print_messages_table(key: str, messages: dict[str, str]) -> None:
    table = Table(title=f"Messages ({key}) [{len(messages)}]", box=box.ASCII, show_header=False)
    table.add_column("Rule", no_wrap=True, style="bold cyan")
    table.add_column("Template")
    for rule, template in messages.items():
        table.add_row(_safe_terminal_text(rule), _short(template, 96))
    _console().print(table)


def _registry(locale_dir: str | None):
    from adapters.locale_registry.in_memory_registry import get_locale_registry
    from adapters.locale_registry.json_locale_loader import load_locale_dir
    from config import Settings
    from errors import ConfigurationError

    registry = get_locale_registry()
    try:
        load_locale_dir(registry, locale_dir or Settings().locale_dir)
    except ConfigurationError as exc:
        print(f"Błąd konfiguracji: {exc}", file=sys.stderr)
        sys.exit(2)
    return registry


# -- podkomendy ------------------------------------------------------------

async def _validate(args: argparse.Namespace) -> None:
    from adapters.validator.form_guard import FormGuard
    from config import Settings
    from contracts import FileList, FileRef
    from errors import ConfigurationError

    settings = Settings()
    registry = _registry(args.locale_dir)
    schema = _read_json(args.schema, "schema")
    values = _read_json(args.values, "values")
    if args.files:
        for field_name, files in _read_json(args.files, "files").items():
            values[field_name] = FileList(FileRef.model_validate(f) for f in files)

    try:
        guard = FormGuard(messages=settings.messages, registry=registry)
        guard.set_locale(args.locale or settings.default_locale)
        if args.sync:
            result = guard.validate(schema, values)
        else:
            result = await guard.validate_async(schema, values)
    except ConfigurationError as exc:
        print(f"Błąd konfiguracji: {exc}", file=sys.stderr)
        sys.exit(2)

    if args.json:
        print(result.model_dump_json(indent=2))
    elif result.valid:
        _console().print(f"[green]OK[/green]: {len(schema)} pól poprawnych.")
    else:
        _print_errors_table(result)

    if not result.valid:
        sys.exit(1)


def _locales(args: argparse.Namespace) -> None:
    registry = _registry(args.locale_dir)
    table = Table(title="Locales", box=box.ASCII)
    table.add_column("Key", no_wrap=True, style="bold cyan")
    table.add_column("Messages", justify="right", no_wrap=True)
    table.add_column("Default", justify="center", no_wrap=True)
    for key in registry.get_locales():
        table.add_row(
            _safe_terminal_text(key),
            str(len(registry.get_messages(key))),
            "yes" if key == registry.default_locale else "",
        )
    _console().print(table)


def _messages(args: argparse.Namespace) -> None:
    from errors import LocaleNotRegisteredError

    registry = _registry(args.locale_dir)
    try:
        messages = registry.get_messages(args.locale)
    except LocaleNotRegisteredError as exc:
        print(f"Błąd: {exc}", file=sys.stderr)
        sys.exit(2)
    _print_messages_table(args.locale, messages)


def _rules(args: argparse.Namespace) -> None:
    from adapters.rule_library.builtin_rules import BUILTIN_RULES

    table = Table(title=f"Built-in rules [{len(BUILTIN_RULES)}]", box=box.ASCII)
    table.add_column("#", justify="right", no_wrap=True)
    table.add_column("Rule", style="bold cyan", no_wrap=True)
    for idx, name in enumerate(BUILTIN_RULES, 1):
        table.add_row(str(idx), name)
    _console().print(table)


# -- main ------------------------------------------------------------------

def main() -> None:
    parser = argparse.ArgumentParser(
        prog="formguard",
        description="FormGuard — CLI (lokalny, bez serwera API)",
    )
    parser.add_argument("--locale-dir", help="Katalog z plikami <locale>.json")
    parser.add_argument("--log-level", default=None, help="DEBUG|INFO|WARNING|ERROR")
    sub = parser.add_subparsers(dest="command", required=True)

    # validate
    p = sub.add_parser("validate", help="Waliduj wartości względem schematu")
    p.add_argument("--schema", "-s", required=True, help="Plik JSON: pole -> reguły")
    p.add_argument("--values", "-v", required=True, help="Plik JSON: pole -> wartość")
    p.add_argument("--files", help="Plik JSON: pole -> lista {name, size, content_type}")
    p.add_argument("--locale", "-l", help="Klucz locale (domyślnie z konfiguracji)")
    p.add_argument("--sync", action="store_true",
                   help="Tylko przebieg synchroniczny (reguły async pomijane)")
    p.add_argument("--json", action="store_true", help="Wynik jako JSON")

    # locales
    sub.add_parser("locales", help="Listuj zarejestrowane locale")

    # messages
    p = sub.add_parser("messages", help="Pokaż szablony komunikatów locale")
    p.add_argument("--locale", "-l", default="en")

    # rules
    sub.add_parser("rules", help="Listuj wbudowane reguły")

    args = parser.parse_args()

    from config import Settings
    logging.basicConfig(level=(args.log_level or Settings().log_level).upper())

    if args.command == "validate":
        asyncio.run(_validate(args))
    elif args.command == "locales":
        _locales(args)
    elif args.command == "messages":
        _messages(args)
    elif args.command == "rules":
        _rules(args)


if __name__ == "__main__":
    main()
