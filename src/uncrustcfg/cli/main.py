#!/usr/bin/env python3
"""
UNCRUSTCFG CLI
--------------
Terminal front-end for browsing, filtering and editing Uncrustify
configuration files. Edits are tracked with the `# Edited: YES` marker
and written back atomically with a backup of the previous file.

Author: UncrustCfg Team
Date: 2026-10-17
"""

import sys
import logging
import argparse
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel

from uncrustcfg.cli.formatter import ConfigFormatter
from uncrustcfg.cli.settings import DEFAULT_SETTINGS_PATH, SettingsStore, to_filter_state
from uncrustcfg.core.engine import ConfigWorkspace
from uncrustcfg.core.errors import ConfigError
from uncrustcfg.snippets.store import ExampleStore
from uncrustcfg.view.choices import value_choices
from uncrustcfg.view.filters import EditedFilter, Language

# Global console for consistent styling across the application
console = Console()

VERSION = "uncrustcfg v1.0.0"


def _on_off(text: str) -> bool:
    if text.lower() in ("on", "true", "yes", "1"):
        return True
    if text.lower() in ("off", "false", "no", "0"):
        return False
    raise argparse.ArgumentTypeError(f"expected on/off, got '{text}'")


class UncrustCfgCLI:
    """
    CLI wrapper that translates user commands into workspace actions.
    """

    def __init__(self, console: Console = console):
        self.console = console
        self.formatter = ConfigFormatter(console)
        self.parser = argparse.ArgumentParser(
            prog="uncrustcfg",
            description="uncrustcfg - Browse and edit Uncrustify configuration files",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        self._setup_args()

    def _setup_args(self):
        """Configures the command-line flags and subcommands."""
        self.parser.add_argument("-V", "--version", action="version", version=VERSION)
        self.parser.add_argument("-v", "--verbose", action="store_true", help="Enable INFO logging")
        self.parser.add_argument("--settings", default=str(DEFAULT_SETTINGS_PATH), help="Settings file path")
        subparsers = self.parser.add_subparsers(dest="command", metavar="Command")

        # 'show' subcommand - Filtered listing
        show_parser = subparsers.add_parser("show", help="List options matching the filters")
        show_parser.add_argument("path", help="Path to a configuration file")
        show_parser.add_argument("--search", default="", help="Space-separated words to match")
        show_parser.add_argument("--tag", help="Only names starting with this tag (e.g. 'align_')")
        show_parser.add_argument("--language", choices=["c", "cpp", "oc"], help="Only language-specific options")
        edited = show_parser.add_mutually_exclusive_group()
        edited.add_argument("--edited", action="store_true", help="Only edited options")
        edited.add_argument("--unedited", action="store_true", help="Only options never edited")
        sort = show_parser.add_mutually_exclusive_group()
        sort.add_argument("--sort", dest="sort", action="store_true", default=None, help="Sort by name")
        sort.add_argument("--no-sort", dest="sort", action="store_false", help="Keep document order")
        show_parser.set_defaults(sort=None)
        show_parser.add_argument("--examples", help="Directory of <name>.txt example snippets")
        show_parser.add_argument("--comments", action="store_true", help="Show option descriptions")
        show_parser.add_argument("--include-sentinel", action="store_true", default=None,
                                 help="Match the edit marker when searching")

        # 'tags' subcommand
        tags_parser = subparsers.add_parser("tags", help="List available tags")
        tags_parser.add_argument("path", help="Path to a configuration file")

        # 'set' subcommand - The editing mode
        set_parser = subparsers.add_parser("set", help="Change an option value")
        set_parser.add_argument("path", help="Path to a configuration file")
        set_parser.add_argument("name", help="Option name")
        set_parser.add_argument("value", help="New value")
        set_parser.add_argument("--dry-run", action="store_true", help="Preview without writing")
        set_parser.add_argument("--diff", action="store_true", help="Display the resulting diff")
        set_parser.add_argument("--no-backup", action="store_true", help="Do not keep a .bak copy")

        # 'reset' subcommand - Clears the edit marker
        reset_parser = subparsers.add_parser("reset", help="Clear the edited marker of an option")
        reset_parser.add_argument("path", help="Path to a configuration file")
        reset_parser.add_argument("name", help="Option name")
        reset_parser.add_argument("--dry-run", action="store_true", help="Preview without writing")
        reset_parser.add_argument("--no-backup", action="store_true", help="Do not keep a .bak copy")

        # 'export' subcommand - Normalized output
        export_parser = subparsers.add_parser("export", help="Write the normalized configuration")
        export_parser.add_argument("path", help="Path to a configuration file")
        export_parser.add_argument("-o", "--output", help="Destination file (default: stdout)")

        # 'settings' subcommand - Persisted preferences
        settings_parser = subparsers.add_parser("settings", help="Show or update saved preferences")
        settings_parser.add_argument("--sort", type=_on_off, help="on/off")
        settings_parser.add_argument("--language", choices=["c", "cpp", "oc", "none"])
        settings_parser.add_argument("--examples", help="Example snippet directory ('none' to clear)")
        settings_parser.add_argument("--search-sentinel", type=_on_off, help="on/off")

    def _workspace(self, args: argparse.Namespace, **overrides) -> ConfigWorkspace:
        settings = SettingsStore(args.settings).load()
        examples_dir = getattr(args, "examples", None) or settings.examples_dir
        include_sentinel = getattr(args, "include_sentinel", None)
        if include_sentinel is None:
            include_sentinel = settings.search_sentinel

        workspace = ConfigWorkspace(
            example_store=ExampleStore(examples_dir) if examples_dir else None,
            state=to_filter_state(settings, **overrides),
            include_sentinel=include_sentinel,
        )
        workspace.load(args.path)
        return workspace

    def _cmd_show(self, args: argparse.Namespace) -> int:
        overrides = {"search_text": args.search, "tag": args.tag}
        if args.language:
            overrides["language"] = Language.parse(args.language)
        if args.edited:
            overrides["edited_filter"] = EditedFilter.ONLY_EDITED
        elif args.unedited:
            overrides["edited_filter"] = EditedFilter.ONLY_UNEDITED
        if args.sort is not None:
            overrides["sort_enabled"] = args.sort

        workspace = self._workspace(args, **overrides)
        values = workspace.filtered()
        self.formatter.print_values(
            values,
            title=f"{Path(args.path).name}: {len(values)} of {len(workspace.document.values())} options",
            show_comments=args.comments,
            include_sentinel=workspace.view.engine.include_sentinel,
        )
        if workspace.loader is not None:
            for value in values:
                self.formatter.print_example(value)
        return 0

    def _cmd_tags(self, args: argparse.Namespace) -> int:
        workspace = self._workspace(args)
        self.formatter.print_tags(workspace.document.tags())
        return 0

    def _persist(self, workspace: ConfigWorkspace, args: argparse.Namespace, before: str):
        if getattr(args, "diff", False) or args.dry_run:
            self.formatter.display_diff(before, workspace.export(), args.path)
        if args.dry_run:
            self.console.print("[yellow]Dry run: nothing written.[/yellow]")
            return
        backup = workspace.save(backup=not args.no_backup)
        if backup:
            self.console.print(f"[dim]Backup: {backup}[/dim]")
        self.console.print(f"[bold green]Saved {args.path}[/bold green]")

    def _cmd_set(self, args: argparse.Namespace) -> int:
        workspace = self._workspace(args)
        before = workspace.export()
        try:
            entry = workspace.set_value(args.name, args.value)
        except KeyError:
            self.console.print(f"[bold red]Error:[/bold red] Unknown option '{args.name}'.")
            return 1

        choices = value_choices(entry)
        if entry.hint and '/' in entry.hint and not choices:
            self.console.print(f"[yellow]⚠️  '{args.value}' is not one of: {entry.hint}[/yellow]")

        self._persist(workspace, args, before)
        return 0

    def _cmd_reset(self, args: argparse.Namespace) -> int:
        workspace = self._workspace(args)
        before = workspace.export()
        try:
            workspace.set_edited(args.name, False)
        except KeyError:
            self.console.print(f"[bold red]Error:[/bold red] Unknown option '{args.name}'.")
            return 1

        if not workspace.is_modified():
            self.console.print(f"[dim]ℹ '{args.name}' is not marked as edited.[/dim]")
            return 0
        self._persist(workspace, args, before)
        return 0

    def _cmd_export(self, args: argparse.Namespace) -> int:
        workspace = self._workspace(args)
        text = workspace.export()
        if args.output:
            workspace.save(args.output, backup=False)
            self.console.print(f"[bold green]Exported to {args.output}[/bold green]")
        else:
            sys.stdout.write(text)
        return 0

    def _cmd_settings(self, args: argparse.Namespace) -> int:
        store = SettingsStore(args.settings)
        settings = store.load()
        changed = False

        if args.sort is not None:
            settings.sort_enabled, changed = args.sort, True
        if args.language is not None:
            settings.language, changed = (None if args.language == "none" else args.language), True
        if args.examples is not None:
            settings.examples_dir, changed = (None if args.examples == "none" else args.examples), True
        if args.search_sentinel is not None:
            settings.search_sentinel, changed = args.search_sentinel, True

        if changed:
            store.save(settings)

        self.console.print(Panel(
            f"Sort by name:     {'on' if settings.sort_enabled else 'off'}\n"
            f"Language:         {settings.language or 'all'}\n"
            f"Examples:         {settings.examples_dir or '-'}\n"
            f"Search sentinel:  {'on' if settings.search_sentinel else 'off'}",
            title=f"[bold white]Settings[/bold white] [dim]{store.path}[/dim]",
            border_style="cyan"
        ))
        return 0

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Primary routing entry point."""
        args = self.parser.parse_args(argv)
        logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

        handlers = {
            "show": self._cmd_show,
            "tags": self._cmd_tags,
            "set": self._cmd_set,
            "reset": self._cmd_reset,
            "export": self._cmd_export,
            "settings": self._cmd_settings,
        }
        handler = handlers.get(args.command)
        if handler is None:
            self.parser.print_help()
            return 0

        try:
            return handler(args)
        except ConfigError as e:
            self.console.print(f"[bold red]Error:[/bold red] {e}")
            return 1


def main():
    """Application entry point with interrupt handling."""
    try:
        sys.exit(UncrustCfgCLI().run())
    except KeyboardInterrupt:
        console.print("\n[bold red]Terminated by user.[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
