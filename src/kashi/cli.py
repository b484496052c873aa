from __future__ import annotations

import argparse
import json
import os
import sys
from importlib import metadata
from pathlib import Path

import tomllib
import uvicorn
from rich.console import Console
from rich.table import Table

from .core import (
    CONVERSION_MODES,
    ConverterConfig,
    Line,
    convert_lyrics,
    format_export,
    line_payload,
)
from .kana_table import GOJUON_ROWS
from .logging_utils import build_uvicorn_log_config, configure_logging
from .nlp import Analyzer, AnalyzerError, FuriganaAnalyzer
from .tools import (
    DEFAULT_UNIDIC_URL,
    UNIDIC_DIR_ENV,
    UniDicInstallError,
    ensure_unidic_installed,
    get_unidic_dicdir,
    resolve_managed_unidic,
)
from .web import WebConfig, create_app


def _read_local_version() -> str | None:
    pyproject_path = Path(__file__).resolve().parents[2] / "pyproject.toml"
    try:
        with pyproject_path.open("rb") as fh:
            data = tomllib.load(fh)
    except (FileNotFoundError, tomllib.TOMLDecodeError):
        return None
    return data.get("project", {}).get("version")


try:
    __version__ = metadata.version("kashi")
except metadata.PackageNotFoundError:
    __version__ = _read_local_version() or "0.0.0+unknown"


def _add_common_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"kashi {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable verbose debug logging on stderr.",
    )


def _add_mode_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-m",
        "--mode",
        choices=list(CONVERSION_MODES),
        default=None,
        help=(
            "Conversion strategy: 'analyzer' requires MeCab/UniDic, 'fallback' uses the "
            "built-in dictionary, 'auto' (default, or $KASHI_MODE) tries the analyzer first."
        ),
    )
    parser.add_argument(
        "-j",
        "--jobs",
        type=int,
        default=None,
        help="Worker threads used to convert lines (default: 4, or $KASHI_JOBS).",
    )
    parser.add_argument(
        "--no-overrides",
        action="store_true",
        help="Skip the built-in lyric reading overrides before analysis.",
    )


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="kashi",
        description=(
            "Japanese lyrics → hiragana + romaji. Subcommands: convert, file, chart, web, tools."
        ),
    )
    _add_common_flags(ap)
    return ap


def build_convert_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="kashi convert",
        description="Convert lyric text given on the command line.",
    )
    _add_common_flags(ap)
    _add_mode_flags(ap)
    ap.add_argument(
        "text",
        nargs="+",
        help="Japanese text to convert. Wrap the phrase in quotes if it contains spaces.",
    )
    ap.add_argument(
        "--moras",
        action="store_true",
        help="Show a per-mora table for each line (analyzer results only).",
    )
    ap.add_argument(
        "--json",
        action="store_true",
        help="Print the conversion as JSON.",
    )
    return ap


def build_file_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="kashi file",
        description="Convert a UTF-8 lyrics file, one lyric line per line.",
    )
    _add_common_flags(ap)
    _add_mode_flags(ap)
    ap.add_argument("input_path", help="Path to a UTF-8 text file.")
    ap.add_argument(
        "-o",
        "--output",
        help="Write the original/hiragana/romaji export here instead of stdout.",
    )
    return ap


def build_chart_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="kashi chart", description="Print the gojūon chart.")
    _add_common_flags(ap)
    ap.add_argument("--katakana", action="store_true", help="Show katakana instead of hiragana.")
    return ap


def build_web_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="kashi web", description="Serve the conversion HTTP API.")
    _add_common_flags(ap)
    _add_mode_flags(ap)
    ap.add_argument("--host", default="127.0.0.1", help="Bind address (default: %(default)s).")
    ap.add_argument("--port", type=int, default=8000, help="Port (default: %(default)s).")
    return ap


def build_tools_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="kashi tools", description="kashi helper utilities")
    _add_common_flags(ap)
    subparsers = ap.add_subparsers(dest="tool_cmd")

    install = subparsers.add_parser(
        "install-unidic",
        help="Download and register UniDic 3.1.1 inside the current virtualenv.",
    )
    install.add_argument(
        "--zip",
        help="Path to a previously downloaded unidic-cwj-3.1.1 zip archive.",
    )
    install.add_argument(
        "--url",
        default=DEFAULT_UNIDIC_URL,
        help="Download URL for the UniDic archive (default: %(default)s).",
    )
    install.add_argument(
        "--force",
        action="store_true",
        help="Reinstall even if the requested version already exists.",
    )

    subparsers.add_parser(
        "unidic-status",
        help="Show the currently detected UniDic dictionary path.",
    )
    return ap


def _converter_config(args: argparse.Namespace) -> ConverterConfig:
    try:
        env_config = ConverterConfig.from_env()
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc
    jobs = args.jobs if args.jobs and args.jobs > 0 else env_config.jobs
    return ConverterConfig(
        mode=args.mode or env_config.mode,
        jobs=jobs,
        apply_overrides=not args.no_overrides,
    )


def _load_analyzer(config: ConverterConfig) -> Analyzer | None:
    if config.mode == "fallback":
        return None
    try:
        return FuriganaAnalyzer()
    except AnalyzerError as exc:
        if config.mode == "analyzer":
            raise SystemExit(str(exc)) from exc
        return None


def _convert_text(text: str, config: ConverterConfig) -> list:
    analyzer = _load_analyzer(config)
    try:
        return convert_lyrics(text, analyzer, config)
    except AnalyzerError as exc:
        raise SystemExit(str(exc)) from exc


def _mora_table(line: Line) -> Table:
    table = Table(title=line.original, show_lines=False)
    table.add_column("surface")
    table.add_column("kana")
    table.add_column("romaji")
    table.add_column("category")
    for word in line.words:
        for idx, mora in enumerate(word.moras):
            table.add_row(word.surface if idx == 0 else "", mora.kana, mora.romaji, mora.category)
    return table


def _run_convert(args: argparse.Namespace) -> int:
    text = " ".join(args.text).strip()
    if not text:
        raise SystemExit("No text provided for conversion.")
    lines = _convert_text(text, _converter_config(args))
    console = Console()
    if args.json:
        print(json.dumps([line_payload(line) for line in lines], ensure_ascii=False, indent=2))
        return 0
    for line in lines:
        if args.moras and isinstance(line, Line):
            console.print(_mora_table(line))
    print(format_export(lines))
    return 0


def _run_file(args: argparse.Namespace) -> int:
    input_path = Path(args.input_path)
    if not input_path.is_file():
        raise SystemExit(f"Input file not found: {input_path}")
    text = input_path.read_text(encoding="utf-8")
    lines = _convert_text(text, _converter_config(args))
    rendered = format_export(lines)
    if args.output:
        Path(args.output).write_text(rendered + "\n", encoding="utf-8")
        print(f"Wrote {len(lines)} line(s) to {args.output}")
    else:
        print(rendered)
    return 0


def _run_chart(args: argparse.Namespace) -> int:
    table = Table(title="五十音図", show_header=False)
    for _ in range(5):
        table.add_column(justify="center")
    for row in GOJUON_ROWS:
        cells = []
        for cell in row:
            if cell is None:
                cells.append("")
            else:
                kana = cell.kata if args.katakana else cell.hira
                cells.append(f"{kana}\n[dim]{cell.romaji}[/dim]")
        table.add_row(*cells)
    Console().print(table)
    return 0


def _run_web(args: argparse.Namespace) -> int:
    converter_config = _converter_config(args)
    app = create_app(
        WebConfig(
            mode=converter_config.mode,
            jobs=converter_config.jobs,
            apply_overrides=converter_config.apply_overrides,
        )
    )
    print(f"Serving kashi API on http://{args.host}:{args.port}/")
    print("Press Ctrl+C to stop.\n")
    uvicorn.run(
        app,
        host=args.host,
        port=args.port,
        log_level="debug" if args.debug else "info",
        log_config=build_uvicorn_log_config(debug=args.debug),
    )
    return 0


def _run_tools(args: argparse.Namespace) -> int:
    if not args.tool_cmd:
        raise SystemExit("A tools subcommand is required. Use --help for options.")

    if args.tool_cmd == "install-unidic":
        try:
            status = ensure_unidic_installed(url=args.url, zip_path=args.zip, force=args.force)
        except UniDicInstallError as exc:
            raise SystemExit(str(exc)) from exc
        print(f"UniDic {status.version} installed at {status.path}")
        print(f"Set {UNIDIC_DIR_ENV} to override or rerun 'kashi tools install-unidic' to reinstall.")
        return 0

    if args.tool_cmd == "unidic-status":
        managed = resolve_managed_unidic()
        if managed.usable:
            print(f"Managed UniDic {managed.version or 'unknown'}: {managed.path}")
        elif managed.managed:
            print("The managed UniDic install is missing its files. Rerun 'kashi tools install-unidic --force'.")
        else:
            print("No managed UniDic installation detected. Use 'kashi tools install-unidic'.")
        env_dir = os.environ.get(UNIDIC_DIR_ENV)
        if env_dir:
            print(f"{UNIDIC_DIR_ENV} is set to: {env_dir}")
        active = get_unidic_dicdir()
        print(f"Analyzer dictionary: {active or 'default MeCab dictionary'}")
        return 0

    raise SystemExit(f"Unknown tools subcommand: {args.tool_cmd}")


_COMMANDS = {
    "convert": (build_convert_parser, _run_convert),
    "file": (build_file_parser, _run_file),
    "chart": (build_chart_parser, _run_chart),
    "web": (build_web_parser, _run_web),
    "tools": (build_tools_parser, _run_tools),
}


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    if argv and argv[0] in _COMMANDS:
        build, run = _COMMANDS[argv[0]]
        args = build().parse_args(argv[1:])
        configure_logging(debug=args.debug)
        return run(args)

    parser = build_parser()
    if not argv:
        parser.print_help()
        return 0
    parser.parse_args(argv)
    parser.print_help()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
