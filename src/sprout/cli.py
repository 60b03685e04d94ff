"""Command line interface for the sprout scaffolder."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from .config import ScaffoldSettings, TemplateProfile, activate_command, load_settings
from .engine import ScaffoldEngine, ScaffoldReport
from .errors import ExternalToolFailure, SproutError
from .provision import PROVISIONERS
from .schema import NodeKind


def _configure_logging(verbose: int, quiet: bool) -> None:
    if quiet:
        level = logging.ERROR
    elif verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-p",
        "--profile",
        choices=[profile.value for profile in TemplateProfile],
        default=TemplateProfile.MINIMAL.value,
        help="Project layout to generate",
    )
    parser.add_argument(
        "-d",
        "--directory",
        type=Path,
        help="Directory in which the project directory is created (defaults to the current directory)",
    )
    parser.add_argument("--config", type=Path, help="TOML file with sprout settings")
    parser.add_argument("--venv-dir", help="Name of the virtual environment directory")
    parser.add_argument("--env-info-file", help="Name of the environment information file")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Scaffold new Python projects")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase logging output")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
    subparsers = parser.add_subparsers(dest="command", required=True)

    new_parser = subparsers.add_parser("new", help="create a new project")
    new_parser.add_argument(
        "name",
        nargs="?",
        help="Name of the project directory. Prompted for when omitted",
    )
    _add_common_arguments(new_parser)
    new_parser.add_argument(
        "-i",
        "--installer",
        choices=sorted(PROVISIONERS),
        help="Tool used to create the environment and install dependencies",
    )
    new_parser.add_argument("--python", help="Interpreter used by the 'venv' installer")
    new_parser.add_argument(
        "--libs",
        nargs="+",
        metavar="LIB",
        help="Libraries to install instead of the defaults",
    )
    new_parser.add_argument("-m", "--commit-message", help="Message of the initial git commit")
    new_parser.add_argument("--no-git", action="store_true", help="Do not initialise a git repository")
    new_parser.add_argument("--no-install", action="store_true", help="Create the environment but install nothing")
    new_parser.add_argument(
        "--check-tools",
        action="store_true",
        help="Fail before creating anything when a required tool is missing",
    )

    plan_parser = subparsers.add_parser("plan", help="show the files a project would get, without creating them")
    plan_parser.add_argument("name", help="Name of the project directory")
    _add_common_arguments(plan_parser)
    plan_parser.add_argument("--show-content", action="store_true", help="Print file contents as well")

    return parser


def _settings_from_args(args: argparse.Namespace) -> ScaffoldSettings:
    settings = load_settings(args.config)
    overrides = {
        "venv_dir": args.venv_dir,
        "env_info_file": args.env_info_file,
        "installer": getattr(args, "installer", None),
        "python": getattr(args, "python", None),
        "commit_message": getattr(args, "commit_message", None),
    }
    libs = getattr(args, "libs", None)
    if libs:
        overrides["default_libraries"] = tuple(libs)
    if getattr(args, "no_git", False):
        overrides["init_git"] = False
    if getattr(args, "no_install", False):
        overrides["install"] = False
    return settings.merged(**overrides)


def _prompt_for_name() -> str:
    try:
        return input("Enter the project name: ")
    except EOFError:
        return ""


def _print_summary(report: ScaffoldReport, settings: ScaffoldSettings) -> None:
    spec = report.spec
    print(f"Project '{spec.name}' created at {spec.root}")
    if report.environment is not None:
        print(f"   Python interpreter: {report.environment.interpreter}")
        print(f"   Dependencies pinned in: {report.environment.lock_file}")
    print("")
    print("Next steps:")
    print(f'  cd "{spec.root}"')
    print(f"  {activate_command(Path(), settings.venv_dir)}")
    if spec.profile is TemplateProfile.MINIMAL:
        print("  streamlit run src/app.py")
    else:
        print("  pytest")
        print(f"  python -m {spec.package_name}.main")
    print("  jupyter lab")
    if report.committed:
        print("")
        print("To publish the repository:")
        print(f"  git remote add origin git@github.com:YOUR_USERNAME/{spec.name}.git")
        print("  git branch -M main")
        print("  git push -u origin main")


def _handle_new(args: argparse.Namespace) -> int:
    settings = _settings_from_args(args)
    engine = ScaffoldEngine(settings, cwd=args.directory)
    name = args.name if args.name is not None else _prompt_for_name()
    if args.check_tools:
        engine.check_tools()
    report = engine.run(name, args.profile)
    _print_summary(report, settings)
    return 0


def _handle_plan(args: argparse.Namespace) -> int:
    settings = _settings_from_args(args)
    engine = ScaffoldEngine(settings, cwd=args.directory)
    spec, plan = engine.prepare(args.name, args.profile)
    print(f"# {spec.root} ({spec.profile.value})")
    for node in plan.nodes:
        suffix = "/" if node.kind is NodeKind.DIRECTORY else ""
        print(f"{node.relative_path}{suffix}")
        if args.show_content and node.content:
            for line in node.content.splitlines():
                print(f"    {line}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose, args.quiet)
    try:
        if args.command == "new":
            return _handle_new(args)
        if args.command == "plan":
            return _handle_plan(args)
    except ExternalToolFailure as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        if exc.result is not None:
            print(f"Project files were left in {exc.result.root}", file=sys.stderr)
        return exc.exit_code
    except SproutError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        return exc.exit_code
    except KeyboardInterrupt:
        print("Interrupted", file=sys.stderr)
        return 130
    return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
